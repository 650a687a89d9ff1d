from __future__ import annotations

import logging
from typing import Iterable

from geo_gallery.core.models import GalleryItem, ImageRecord, MapMarker, ViewProjection
from geo_gallery.index.store import RecordStore

logger = logging.getLogger(__name__)


def build_projection(records: Iterable[ImageRecord]) -> ViewProjection:
    """Partition records into the gallery list and the geotagged marker set."""
    gallery: list[GalleryItem] = []
    markers: list[MapMarker] = []
    for record in records:
        gallery.append(GalleryItem(uri=record.uri))
        if record.latitude is not None and record.longitude is not None:
            markers.append(
                MapMarker(
                    id=record.id,
                    uri=record.uri,
                    latitude=record.latitude,
                    longitude=record.longitude,
                )
            )
    return ViewProjection(gallery=gallery, markers=markers)


class ViewSynchronizer:
    """Rebuilds the in-memory projections from the store on demand."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.projection = ViewProjection()

    async def refresh(self) -> ViewProjection:
        # ReadFailed propagates and leaves the last good projection in place.
        records = await self.store.list_all()
        self.projection = build_projection(records)
        logger.debug(
            "Projection refreshed: %d images, %d markers",
            len(self.projection.gallery),
            len(self.projection.markers),
        )
        return self.projection
