import logging

import pytest

from locationcode.core.config import RankingPolicy
from locationcode.services.code_service import LocationCodeService, normalize_radius

from conftest import QUERY_LAT, QUERY_LNG, RecordingDirectory, candidate


@pytest.mark.parametrize(
    "radius,expected",
    [(None, 150.0), (0, 150.0), (50, 150.0), (149.9, 150.0), (150, 225.0), (200, 300.0)],
)
def test_normalize_radius(radius, expected):
    assert normalize_radius(radius, RankingPolicy()) == pytest.approx(expected)


def test_normalize_radius_follows_policy():
    policy = RankingPolicy(min_radius_km=10, radius_multiplier=2)
    assert normalize_radius(5, policy) == 10
    assert normalize_radius(40, policy) == 80


def test_resolve_passes_normalized_query_to_directory():
    directory = RecordingDirectory()
    svc = LocationCodeService(directory)

    assert svc.resolve("us", 200, QUERY_LAT, QUERY_LNG) == []

    (call,) = directory.calls
    cc, lat, lng, radius_m, max_results, types = call
    assert cc == "US"
    assert (lat, lng) == (QUERY_LAT, QUERY_LNG)
    assert radius_m == pytest.approx(300_000.0)
    assert max_results == 500
    assert types is None


def test_resolve_ranks_and_truncates():
    cands = [candidate(iata="")] + [candidate(iata=f"B{i:02d}", lat=QUERY_LAT + i * 0.01) for i in range(10)]
    svc = LocationCodeService(RecordingDirectory(cands), RankingPolicy(max_results=3))

    result = svc.resolve("US", 0, QUERY_LAT, QUERY_LNG)

    assert [a.code for a in result] == ["usb00", "usb01", "usb02"]


def test_resolve_logs_counts(caplog):
    cands = [candidate(iata=""), candidate(iata="SFO", type="large_airport")]
    svc = LocationCodeService(RecordingDirectory(cands))

    with caplog.at_level(logging.INFO, logger="locationcode.services.code_service"):
        svc.resolve("US", 50, QUERY_LAT, QUERY_LNG)

    (record,) = [r for r in caplog.records if r.name == "locationcode.services.code_service"]
    msg = record.getMessage()
    assert "cc=US" in msg
    assert "count=2 filtered=1 returning=1" in msg


def test_resolve_against_loaded_directory(directory):
    svc = LocationCodeService(directory)

    result = svc.resolve("US", 50, QUERY_LAT, QUERY_LNG)

    assert [a.code for a in result] == ["ussfo"]
    assert result[0].name == "San Francisco International"
    assert result[0].distance == pytest.approx(16.0, abs=0.5)
