from __future__ import annotations

import math
from typing import List, Tuple

from pyproj import Geod

EARTH_RADIUS_KM = 6371.01

# Spherical earth; ranking distances must not depend on the ellipsoid
SPHERE_GEOD = Geod(a=EARTH_RADIUS_KM * 1000.0, f=0.0)

BBox = Tuple[float, float, float, float]  # (min_lon, min_lat, max_lon, max_lat)


def great_circle_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two points given in degrees."""
    if lat1 == lat2 and lon1 == lon2:
        return 0.0
    _, _, dist_m = SPHERE_GEOD.inv(lon1, lat1, lon2, lat2)
    return abs(dist_m) / 1000.0


def search_boxes(lat: float, lon: float, radius_km: float) -> List[BBox]:
    """
    Lon/lat boxes that together cover every point within radius_km of (lat, lon).
    Splits at the antimeridian; falls back to a full longitude band near the poles.
    """
    ang = radius_km / EARTH_RADIUS_KM
    dlat = math.degrees(ang)
    min_lat = max(-90.0, lat - dlat)
    max_lat = min(90.0, lat + dlat)

    cos_lat = math.cos(math.radians(lat))
    if min_lat <= -90.0 or max_lat >= 90.0 or ang >= math.pi / 2 or math.sin(ang) >= cos_lat:
        return [(-180.0, min_lat, 180.0, max_lat)]

    dlon = math.degrees(math.asin(math.sin(ang) / cos_lat))
    min_lon = lon - dlon
    max_lon = lon + dlon

    if min_lon < -180.0:
        return [(min_lon + 360.0, min_lat, 180.0, max_lat), (-180.0, min_lat, max_lon, max_lat)]
    if max_lon > 180.0:
        return [(min_lon, min_lat, 180.0, max_lat), (-180.0, min_lat, max_lon - 360.0, max_lat)]
    return [(min_lon, min_lat, max_lon, max_lat)]
