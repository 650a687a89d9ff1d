"""Best-effort geolocation snapshot taken at capture time."""

from .resolver import (
    DeniedPositioningService,
    IPGeolocationService,
    LocationResolver,
    LocationResolverConfig,
    PositioningService,
    StaticPositioningService,
    build_positioning_service,
)

__all__ = [
    "DeniedPositioningService",
    "IPGeolocationService",
    "LocationResolver",
    "LocationResolverConfig",
    "PositioningService",
    "StaticPositioningService",
    "build_positioning_service",
]
