from __future__ import annotations

import asyncio
import logging
from typing import Optional

from geo_gallery.core.env import database_url_from_env
from geo_gallery.core.errors import ReadFailed
from geo_gallery.core.models import ImageRecord, ViewProjection
from geo_gallery.index.store import RecordStore
from geo_gallery.ingest.pipeline import IngestionPipeline, IngestState
from geo_gallery.location.resolver import LocationResolver, LocationResolverConfig
from geo_gallery.view.synchronizer import ViewSynchronizer

logger = logging.getLogger(__name__)


class GalleryController:
    """Owns the store handle and runs one ingestion cycle per acquired image.

    Cycle: idle -> resolving_location -> persisting -> refreshing -> idle.
    Cycles run one at a time, so ``state`` always belongs to a single cycle.
    The refresh only happens after a successful write; a WriteFailed returns
    the controller to idle and propagates to the caller.
    """

    def __init__(self, store: RecordStore, resolver: LocationResolver):
        self.store = store
        self.resolver = resolver
        self.stale = False
        self._cycle_lock = asyncio.Lock()
        self.state = IngestState.IDLE
        self.transitions: list[IngestState] = []
        self.pipeline = IngestionPipeline(store, resolver, on_state=self._set_state)
        self.synchronizer = ViewSynchronizer(store)

    @classmethod
    def from_env(
        cls,
        database_url: Optional[str] = None,
        location_config: Optional[LocationResolverConfig] = None,
    ) -> "GalleryController":
        store = RecordStore(database_url or database_url_from_env())
        return cls(store, LocationResolver.from_config(location_config))

    @property
    def projection(self) -> ViewProjection:
        return self.synchronizer.projection

    def _set_state(self, state: IngestState) -> None:
        self.state = state
        self.transitions.append(state)

    async def start(self) -> ViewProjection:
        """Open the store and load what is already there."""
        await self.store.initialize()
        return await self.refresh()

    async def acquire(self, uri: str) -> ImageRecord:
        """Ingest one acquired uri and refresh the projections.

        A failed refresh after a successful write keeps the last projection
        and sets ``stale`` until the next successful refresh.
        """
        async with self._cycle_lock:
            try:
                record = await self.pipeline.ingest(uri)
                self._set_state(IngestState.REFRESHING)
                try:
                    await self.refresh()
                except ReadFailed as exc:
                    logger.warning("Refresh after ingest failed, keeping last projection: %s", exc)
                return record
            finally:
                self._set_state(IngestState.IDLE)

    async def refresh(self) -> ViewProjection:
        try:
            projection = await self.synchronizer.refresh()
        except ReadFailed:
            self.stale = True
            raise
        self.stale = False
        return projection

    async def close(self) -> None:
        await self.resolver.aclose()
        await self.store.dispose()
