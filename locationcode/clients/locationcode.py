from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from locationcode.core.config import Settings, settings as default_settings
from locationcode.core.errors import ConfigurationError, LocationCodeClientError
from locationcode.models.airports import Airport

logger = logging.getLogger(__name__)

CODE_PATH = "/v1/code"

_airport_list = TypeAdapter(List[Airport])


def _base_url(service: str) -> str:
    service = (service or "").strip().rstrip("/")
    if "://" not in service:
        service = f"http://{service}"
    return service


class LocationCodeClient:
    """
    Calls a location code service over HTTP and decodes the answer into the
    same Airport records the service ranks. One instance owns one connection
    pool; close it (or use it as an async context manager) when done.
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float = 5.0,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not (base_url or "").strip():
            raise ConfigurationError("location code service address not configured")
        self.base_url = _base_url(base_url)
        # httpx limits each connect/read/write; total_timeout bounds the whole call
        self.timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self.total_timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "LocationCodeClient":
        settings = settings or default_settings
        if not settings.locationcode_service:
            raise ConfigurationError("locationcode_service not configured")
        return cls(
            settings.locationcode_service,
            connect_timeout=settings.client_connect_timeout_seconds,
            timeout=settings.client_timeout_seconds,
            **kwargs,
        )

    async def get_airports(
        self,
        country_code: str,
        lat: float,
        lng: float,
        radius_km: float = 0.0,
    ) -> List[Airport]:
        params: Dict[str, Any] = {"cc": country_code}
        if radius_km > 0:
            params["radius"] = f"{radius_km:f}"
        params["lat"] = f"{lat:f}"
        params["lng"] = f"{lng:f}"
        logger.debug(f"GET {self.base_url}{CODE_PATH} {params}")

        try:
            return await asyncio.wait_for(self._fetch(params), timeout=self.total_timeout)
        except asyncio.TimeoutError as e:
            raise LocationCodeClientError(
                f"location code request exceeded {self.total_timeout:g}s"
            ) from e

    async def _fetch(self, params: Dict[str, Any]) -> List[Airport]:
        try:
            r = await self._client.get(CODE_PATH, params=params)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = e.response.text.strip()
            raise LocationCodeClientError(
                f"location code service returned {e.response.status_code}: {detail}"
            ) from e
        except httpx.HTTPError as e:
            raise LocationCodeClientError(f"location code request failed: {e}") from e

        try:
            return _airport_list.validate_json(r.content)
        except ValidationError as e:
            raise LocationCodeClientError(f"malformed location code response: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "LocationCodeClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
