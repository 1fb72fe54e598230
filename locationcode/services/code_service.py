from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from locationcode.core.config import RankingPolicy
from locationcode.models.airports import Airport, Candidate
from locationcode.services.ranking import filter_coded, rank_airports

logger = logging.getLogger(__name__)


class AirportFinder(Protocol):
    def find_nearest_by_country(
        self,
        country_code: str,
        latitude: float,
        longitude: float,
        radius_m: float,
        max_results: int,
        types: Optional[Iterable[str]] = None,
    ) -> Sequence[Candidate]:
        ...


def normalize_radius(radius_km: Optional[float], policy: RankingPolicy) -> float:
    """
    Small (or missing) radii are raised to the floor; anything else is widened
    by the multiplier so the directory over-fetches near the boundary.
    """
    radius_km = radius_km or 0.0
    if radius_km < policy.min_radius_km:
        return policy.min_radius_km
    return radius_km * policy.radius_multiplier


class LocationCodeService:
    def __init__(self, directory: AirportFinder, policy: Optional[RankingPolicy] = None):
        self.directory = directory
        self.policy = policy or RankingPolicy()

    def resolve(
        self,
        country_code: str,
        radius_km: Optional[float],
        latitude: float,
        longitude: float,
    ) -> List[Airport]:
        cc = (country_code or "").strip().upper()
        radius_km = normalize_radius(radius_km, self.policy)

        raw = self.directory.find_nearest_by_country(
            cc,
            latitude,
            longitude,
            radius_km * 1000.0,
            self.policy.max_candidates,
            types=None,  # filtered at load time
        )
        raw = list(raw or [])
        coded = filter_coded(raw)
        airports = rank_airports(coded, latitude, longitude, self.policy.max_results)

        logger.info(
            "resolve cc=%s radius_km=%.2f lat=%.4f lng=%.4f count=%d filtered=%d returning=%d",
            cc,
            radius_km,
            latitude,
            longitude,
            len(raw),
            len(coded),
            len(airports),
        )
        return airports
