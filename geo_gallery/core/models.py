from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)


class ImageRecord(BaseModel):
    """One stored image: a uri reference plus capture time and optional location."""

    model_config = ConfigDict(frozen=True)

    id: int
    uri: str = Field(min_length=1)
    timestamp: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @model_validator(mode="after")
    def _coordinates_paired(self) -> "ImageRecord":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be both set or both empty")
        return self

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    @property
    def is_geotagged(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class GalleryItem(BaseModel):
    uri: str


class MapMarker(BaseModel):
    id: int
    uri: str
    latitude: float
    longitude: float


class ViewProjection(BaseModel):
    """Read-only projection of the store for the grid and map views."""

    gallery: list[GalleryItem] = Field(default_factory=list)
    markers: list[MapMarker] = Field(default_factory=list)
