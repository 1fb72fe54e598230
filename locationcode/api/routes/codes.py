from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from typing import List, Optional

from locationcode.api.deps import get_code_service, parse_country_code, parse_lat_lng, parse_radius
from locationcode.models.airports import Airport
from locationcode.services.code_service import LocationCodeService

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def banner():
    return "location code service"


@router.get("/v1/code", response_model=List[Airport])
async def get_code(
    cc: Optional[str] = Query(None),
    lat: Optional[str] = Query(None),  # parsed by hand so errors stay plain text
    lng: Optional[str] = Query(None),
    radius: Optional[str] = Query(None),
    svc: LocationCodeService = Depends(get_code_service),
):
    latitude, longitude = parse_lat_lng(lat, lng)
    country_code = parse_country_code(cc)
    radius_km = parse_radius(radius)

    return svc.resolve(country_code, radius_km, latitude, longitude)
