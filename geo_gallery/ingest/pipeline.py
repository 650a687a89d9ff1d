from __future__ import annotations

import enum
import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from geo_gallery.core.models import ImageRecord
from geo_gallery.index.store import RecordStore
from geo_gallery.location.resolver import LocationResolver

logger = logging.getLogger(__name__)


class IngestState(str, enum.Enum):
    IDLE = "idle"
    RESOLVING_LOCATION = "resolving_location"
    PERSISTING = "persisting"
    REFRESHING = "refreshing"


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


class IngestionPipeline:
    """Turn an acquired asset uri into a persisted ImageRecord.

    Steps run strictly in order: timestamp, location, insert. A location
    failure only drops the coordinates; a failed insert raises WriteFailed
    and nothing is stored.
    """

    def __init__(
        self,
        store: RecordStore,
        resolver: LocationResolver,
        *,
        clock: Callable[[], str] = utc_now_iso,
        on_state: Optional[Callable[[IngestState], None]] = None,
    ):
        self.store = store
        self.resolver = resolver
        self.clock = clock
        self.on_state = on_state

    def _enter(self, state: IngestState) -> None:
        if self.on_state is not None:
            self.on_state(state)

    async def ingest(self, uri: str) -> ImageRecord:
        if not uri:
            raise ValueError("uri is required")
        timestamp = self.clock()

        self._enter(IngestState.RESOLVING_LOCATION)
        coords = await self.resolver.resolve()
        latitude = coords.latitude if coords else None
        longitude = coords.longitude if coords else None

        self._enter(IngestState.PERSISTING)
        record_id = await self.store.insert(uri, timestamp, latitude, longitude)
        logger.info(
            "Image added: id=%s uri=%s timestamp=%s lat=%s lon=%s",
            record_id,
            uri,
            timestamp,
            latitude,
            longitude,
        )
        return ImageRecord(
            id=record_id,
            uri=uri,
            timestamp=timestamp,
            latitude=latitude,
            longitude=longitude,
        )

    async def ingest_many(self, uris: Iterable[str]) -> list[ImageRecord]:
        """Ingest uris one after another; stops at the first WriteFailed."""
        records: list[ImageRecord] = []
        for uri in uris:
            records.append(await self.ingest(uri))
        return records
