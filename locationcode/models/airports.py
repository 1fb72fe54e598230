from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Iterable, List, Optional, Protocol, Tuple


class Candidate(Protocol):
    """What the ranking side needs from a raw directory record."""

    name: str
    iata: str
    country: str
    lat: float
    lon: float
    type: str


# OurAirports classification, most useful first
AIRPORT_TYPE_RANK: Dict[str, int] = {
    "large_airport": 0,
    "medium_airport": 1,
    "small_airport": 2,
    "seaplane_base": 3,
    "heliport": 4,
    "balloonport": 5,
    "closed": 6,
}


def type_rank(airport_type: str) -> int:
    return AIRPORT_TYPE_RANK.get(airport_type, len(AIRPORT_TYPE_RANK))


class Airport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    code: str = Field(alias="Code")
    distance: Optional[float] = Field(default=None, alias="Distance", ge=0)
    type: str = Field(default="", alias="Type")

    @classmethod
    def from_candidate(cls, candidate: Candidate, distance: Optional[float] = None) -> "Airport":
        return cls(
            name=candidate.name,
            code=(candidate.country + candidate.iata).lower(),
            distance=distance,
            type=candidate.type,
        )

    def __str__(self) -> str:
        return self.name


def sort_key(airport: Airport) -> Tuple[int, str, float]:
    # unknown tags share one rank, so the tag itself breaks ties between them
    tag = airport.type if type_rank(airport.type) == len(AIRPORT_TYPE_RANK) else ""
    distance = airport.distance if airport.distance is not None else float("inf")
    return (type_rank(airport.type), tag, distance)


def unique_airports(airports: Iterable[Airport]) -> List[Airport]:
    """Drop later records whose code was already seen, keeping first-seen order."""
    seen = set()
    out: List[Airport] = []
    for a in airports:
        if a.code in seen:
            continue
        seen.add(a.code)
        out.append(a)
    return out
