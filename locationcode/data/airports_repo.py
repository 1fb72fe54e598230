from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from shapely.strtree import STRtree
from shapely.geometry import Point, box

from locationcode.utils.geo import great_circle_km, search_boxes

logger = logging.getLogger(__name__)

AIRPORTS_FILE = "airports.csv"
COUNTRIES_FILE = "countries.csv"


@dataclass(frozen=True)
class AirportCandidate:
    ident: str
    iata: str
    name: str
    country: str
    lat: float
    lon: float
    type: str


class _CountryIndex:
    def __init__(self, airports: List[AirportCandidate]):
        self.airports = airports
        self.tree = STRtree([Point(a.lon, a.lat) for a in airports])

    def within_boxes(self, boxes) -> Iterable[AirportCandidate]:
        seen: Set[int] = set()
        for b in boxes:
            for i in self.tree.query(box(*b)):
                i = int(i)
                if i in seen:
                    continue
                seen.add(i)
                yield self.airports[i]


class AirportDirectory:
    """
    In-memory OurAirports directory partitioned by ISO country code.
    Loaded once; read-only afterwards, so concurrent lookups need no locking.
    """

    def __init__(self, data_dir: Union[str, Path], airport_types: Optional[Iterable[str]] = None):
        self.data_dir = Path(data_dir)
        self.airport_types = set(airport_types) if airport_types else None
        self._countries: Dict[str, str] = {}
        self._by_country: Dict[str, _CountryIndex] = {}
        self._count = 0
        self._loaded = False

    def load(self) -> List[str]:
        """
        Read countries and airports. Returns a list of problems (missing files,
        unparseable rows); whatever parsed is still loaded.
        """
        if self._loaded:
            return []
        errors: List[str] = []

        countries_path = self.data_dir / COUNTRIES_FILE
        if countries_path.exists():
            with countries_path.open("r", encoding="utf-8-sig", newline="") as f:
                for row in csv.DictReader(f):
                    code = (row.get("code") or "").strip().upper()
                    if code:
                        self._countries[code] = (row.get("name") or "").strip()
        else:
            errors.append(f"{countries_path}: file not found")

        grouped: Dict[str, List[AirportCandidate]] = {}
        airports_path = self.data_dir / AIRPORTS_FILE
        if airports_path.exists():
            with airports_path.open("r", encoding="utf-8-sig", newline="") as f:
                reader = csv.DictReader(f)
                for row in reader:
                    typ = (row.get("type") or "").strip()
                    if self.airport_types is not None and typ not in self.airport_types:
                        continue

                    country = (row.get("iso_country") or "").strip().upper()
                    if not country:
                        continue

                    try:
                        lat = float(row["latitude_deg"])
                        lon = float(row["longitude_deg"])
                    except (KeyError, TypeError, ValueError) as e:
                        errors.append(f"{airports_path}:{reader.line_num}: bad coordinates ({e})")
                        continue

                    rec = AirportCandidate(
                        ident=(row.get("ident") or "").strip().upper(),
                        iata=(row.get("iata_code") or "").strip().upper(),
                        name=(row.get("name") or "").strip(),
                        country=country,
                        lat=lat,
                        lon=lon,
                        type=typ,
                    )
                    grouped.setdefault(country, []).append(rec)
        else:
            errors.append(f"{airports_path}: file not found")

        for country, airports in grouped.items():
            self._by_country[country] = _CountryIndex(airports)
            self._count += len(airports)

        self._loaded = True
        logger.info(f"Loaded {self._count} airports in {len(self._by_country)} countries from {self.data_dir}")
        return errors

    def __len__(self) -> int:
        return self._count

    def countries(self) -> List[str]:
        return sorted(self._by_country)

    def country_name(self, country_code: str) -> Optional[str]:
        return self._countries.get(country_code.strip().upper())

    def find_nearest_by_country(
        self,
        country_code: str,
        latitude: float,
        longitude: float,
        radius_m: float,
        max_results: int,
        types: Optional[Iterable[str]] = None,
    ) -> List[AirportCandidate]:
        """Airports in country_code within radius_m of the point, nearest first."""
        index = self._by_country.get(country_code.strip().upper())
        if index is None or radius_m <= 0 or max_results <= 0:
            return []
        wanted = set(types) if types else None
        radius_km = radius_m / 1000.0

        hits = []
        for a in index.within_boxes(search_boxes(latitude, longitude, radius_km)):
            if wanted is not None and a.type not in wanted:
                continue
            d = great_circle_km(latitude, longitude, a.lat, a.lon)
            if d <= radius_km:
                hits.append((d, a))

        hits.sort(key=lambda x: x[0])
        return [a for _, a in hits[:max_results]]
