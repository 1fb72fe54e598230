from __future__ import annotations

from typing import Iterable, List, TypeVar

from locationcode.models.airports import Airport, Candidate, sort_key, unique_airports
from locationcode.utils.geo import great_circle_km

C = TypeVar("C", bound=Candidate)


def filter_coded(candidates: Iterable[C]) -> List[C]:
    """Candidates without an IATA code can't form a location code."""
    return [c for c in candidates if (c.iata or "").strip()]


def rank_airports(
    candidates: Iterable[Candidate],
    latitude: float,
    longitude: float,
    max_results: int,
) -> List[Airport]:
    """
    Filter, annotate with distance from (latitude, longitude), then order by
    (type rank, distance) and keep the first max_results.

    Distances are always recomputed here; the directory only promises radius
    membership.
    """
    out: List[Airport] = []
    for c in filter_coded(candidates):
        d = great_circle_km(latitude, longitude, c.lat, c.lon)
        out.append(Airport.from_candidate(c, distance=d))

    out.sort(key=sort_key)
    # overlapping directory hits keep their best-ranked entry
    return unique_airports(out)[: max(0, max_results)]
