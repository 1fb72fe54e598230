import math
from typing import Optional, Tuple

from fastapi import Request

from locationcode.core.config import settings
from locationcode.core.errors import InvalidQueryError
from locationcode.services.code_service import LocationCodeService


def get_code_service(request: Request) -> LocationCodeService:
    return LocationCodeService(
        directory=request.app.state.directory,
        policy=getattr(request.app.state, "policy", settings.policy),
    )


def _parse_float(name: str, raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        raise ValueError(f"missing {name}")
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"{name} is not a finite number: {raw!r}")
    return value


def parse_lat_lng(lat: Optional[str], lng: Optional[str]) -> Tuple[float, float]:
    try:
        return _parse_float("lat", lat), _parse_float("lng", lng)
    except ValueError as e:
        raise InvalidQueryError(f"invalid lat or lng: {e}") from e


def parse_radius(radius: Optional[str]) -> float:
    if radius is None or not radius.strip():
        return 0.0
    try:
        return _parse_float("radius", radius)
    except ValueError as e:
        raise InvalidQueryError(f"invalid radius: {e}") from e


def parse_country_code(cc: Optional[str]) -> str:
    cc = (cc or "").strip().upper()
    if len(cc) != 2 or not cc.isalpha():
        raise InvalidQueryError(f"invalid cc: expected a two-letter ISO country code, got {cc!r}")
    return cc
