from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from geo_gallery.core.models import Coordinates

logger = logging.getLogger(__name__)


@dataclass
class LocationResolverConfig:
    mode: str
    static_latitude: Optional[float]
    static_longitude: Optional[float]
    ip_url: str
    timeout: float

    @classmethod
    def from_env(cls) -> "LocationResolverConfig":
        static_lat = os.getenv("LOCATION_STATIC_LAT")
        static_lon = os.getenv("LOCATION_STATIC_LON")
        return cls(
            mode=os.getenv("LOCATION_MODE", "denied").lower(),
            static_latitude=float(static_lat) if static_lat else None,
            static_longitude=float(static_lon) if static_lon else None,
            ip_url=os.getenv("LOCATION_IP_URL", "https://ipapi.co/json/"),
            timeout=float(os.getenv("LOCATION_TIMEOUT", "5.0")),
        )


class PositioningService(Protocol):
    async def request_permission(self) -> bool: ...

    async def current_position(self) -> Coordinates: ...


class DeniedPositioningService:
    """Host that never grants location access."""

    async def request_permission(self) -> bool:
        return False

    async def current_position(self) -> Coordinates:
        raise PermissionError("location permission not granted")


class StaticPositioningService:
    """Always reports the same fixed position."""

    def __init__(self, latitude: float, longitude: float):
        self.position = Coordinates(latitude=latitude, longitude=longitude)

    async def request_permission(self) -> bool:
        return True

    async def current_position(self) -> Coordinates:
        return self.position


class IPGeolocationService:
    """Approximate position from an IP geolocation endpoint."""

    def __init__(self, config: LocationResolverConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=config.timeout)

    async def request_permission(self) -> bool:
        return bool(self.config.ip_url)

    async def current_position(self) -> Coordinates:
        response = await self.client.get(self.config.ip_url)
        response.raise_for_status()
        return _parse_position(response.json())

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


def _parse_position(data: dict[str, Any]) -> Coordinates:
    """Accept both lat/lon and latitude/longitude payload shapes."""
    lat = data.get("latitude", data.get("lat"))
    lon = data.get("longitude", data.get("lon"))
    if lat is None or lon is None:
        raise ValueError(f"position payload has no coordinates: {sorted(data)}")
    return Coordinates(latitude=float(lat), longitude=float(lon))


def build_positioning_service(config: LocationResolverConfig) -> PositioningService:
    if config.mode == "static":
        if config.static_latitude is None or config.static_longitude is None:
            raise ValueError("LOCATION_MODE=static needs LOCATION_STATIC_LAT and LOCATION_STATIC_LON")
        return StaticPositioningService(config.static_latitude, config.static_longitude)
    if config.mode == "ip":
        return IPGeolocationService(config)
    if config.mode != "denied":
        logger.warning("Unknown LOCATION_MODE %r, location disabled", config.mode)
    return DeniedPositioningService()


class LocationResolver:
    """Best-effort location snapshot. Any failure resolves to ``None``."""

    def __init__(self, service: PositioningService, *, timeout: float = 5.0):
        self.service = service
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Optional[LocationResolverConfig] = None) -> "LocationResolver":
        config = config or LocationResolverConfig.from_env()
        return cls(build_positioning_service(config), timeout=config.timeout)

    async def aclose(self) -> None:
        """Release the positioning service's resources, if it holds any."""
        close = getattr(self.service, "aclose", None)
        if close is not None:
            await close()

    async def resolve(self) -> Optional[Coordinates]:
        try:
            granted = await asyncio.wait_for(self.service.request_permission(), self.timeout)
        except Exception as exc:
            logger.warning("Location permission check failed: %s", exc)
            return None
        if not granted:
            logger.warning("Location permission not granted. Saving without location data.")
            return None

        try:
            return await asyncio.wait_for(self.service.current_position(), self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Location lookup timed out after %.1fs", self.timeout)
        except Exception as exc:
            logger.warning("Location lookup failed: %s", exc)
        return None
