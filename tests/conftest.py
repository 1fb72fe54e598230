from __future__ import annotations

import csv
from pathlib import Path
from typing import List

import pytest

from locationcode.data.airports_repo import AirportCandidate, AirportDirectory

AIRPORT_FIELDS = [
    "id", "ident", "type", "name", "latitude_deg", "longitude_deg", "elevation_ft",
    "continent", "iso_country", "iso_region", "municipality", "scheduled_service",
    "gps_code", "iata_code", "local_code", "home_link", "wikipedia_link", "keywords",
]

# Query point used throughout: Palo Alto-ish
QUERY_LAT = 37.3793
QUERY_LNG = -122.12

# 0.1439 deg of latitude due north of the query point, ~16 km
SFO_ROW = {
    "ident": "KSFO", "type": "large_airport", "name": "San Francisco International",
    "latitude_deg": "37.5232", "longitude_deg": "-122.12", "iso_country": "US",
    "iso_region": "US-CA", "municipality": "San Francisco", "scheduled_service": "yes",
    "iata_code": "SFO",
}
AIRSTRIP_ROW = {
    "ident": "CA99", "type": "small_airport", "name": "Uncoded Airstrip",
    "latitude_deg": "37.40", "longitude_deg": "-122.10", "iso_country": "US",
    "iso_region": "US-CA", "municipality": "Mountain View", "scheduled_service": "no",
    "iata_code": "",
}
HELIPORT_ROW = {
    "ident": "99CA", "type": "heliport", "name": "Hospital Heliport",
    "latitude_deg": "37.38", "longitude_deg": "-122.12", "iso_country": "US",
    "iso_region": "US-CA", "iata_code": "",
}
LAX_ROW = {
    "ident": "KLAX", "type": "large_airport", "name": "Los Angeles International",
    "latitude_deg": "33.942501", "longitude_deg": "-118.407997", "iso_country": "US",
    "iso_region": "US-CA", "municipality": "Los Angeles", "scheduled_service": "yes",
    "iata_code": "LAX",
}
YVR_ROW = {
    "ident": "CYVR", "type": "large_airport", "name": "Vancouver International",
    "latitude_deg": "49.193901", "longitude_deg": "-123.183998", "iso_country": "CA",
    "iso_region": "CA-BC", "municipality": "Vancouver", "scheduled_service": "yes",
    "iata_code": "YVR",
}

COUNTRY_ROWS = [
    {"id": "302755", "code": "US", "name": "United States", "continent": "NA"},
    {"id": "302643", "code": "CA", "name": "Canada", "continent": "NA"},
]


def write_airports_csv(path: Path, rows: List[dict]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=AIRPORT_FIELDS)
        writer.writeheader()
        for i, row in enumerate(rows, start=1):
            writer.writerow({"id": str(i), **row})
    return path


def write_countries_csv(path: Path, rows: List[dict] = COUNTRY_ROWS) -> Path:
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["id", "code", "name", "continent", "wikipedia_link", "keywords"])
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def data_dir(tmp_path) -> Path:
    d = tmp_path / "data"
    d.mkdir()
    write_airports_csv(d / "airports.csv", [SFO_ROW, AIRSTRIP_ROW, HELIPORT_ROW, LAX_ROW, YVR_ROW])
    write_countries_csv(d / "countries.csv")
    return d


@pytest.fixture
def directory(data_dir) -> AirportDirectory:
    d = AirportDirectory(data_dir, airport_types=["large_airport", "medium_airport", "small_airport"])
    assert d.load() == []
    return d


def candidate(iata="", type="small_airport", lat=QUERY_LAT, lon=QUERY_LNG, country="US", name=None):
    return AirportCandidate(
        ident=f"X{iata or 'NONE'}",
        iata=iata,
        name=name or f"Airport {iata or 'uncoded'}",
        country=country,
        lat=lat,
        lon=lon,
        type=type,
    )


class RecordingDirectory:
    """Stands in for AirportDirectory; returns canned candidates and records calls."""

    def __init__(self, candidates=None):
        self.candidates = list(candidates or [])
        self.calls = []

    def find_nearest_by_country(self, country_code, latitude, longitude, radius_m, max_results, types=None):
        self.calls.append((country_code, latitude, longitude, radius_m, max_results, types))
        return list(self.candidates)

    def __len__(self):
        return len(self.candidates)


@pytest.fixture
def recording_directory():
    return RecordingDirectory()
