from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from geo_gallery.core.errors import NotInitialized, ReadFailed, StorageUnavailable, WriteFailed
from geo_gallery.core.models import Coordinates, ImageRecord

from .schema import ImageRow, create_engine_from_url, init_db, session_factory

logger = logging.getLogger(__name__)


def _row_to_record(row: ImageRow) -> ImageRecord:
    return ImageRecord(
        id=row.id,
        uri=row.uri,
        timestamp=row.timestamp,
        latitude=row.latitude,
        longitude=row.longitude,
    )


class RecordStore:
    """Durable table of image records backed by one async SQLAlchemy engine.

    The engine is created lazily by the first ``initialize()`` call and reused
    for the lifetime of the store. Operations are serialized with a lock so
    that interleaved callers on the same event loop never observe each other's
    open transactions and ids stay unique and ascending.
    """

    def __init__(self, database_url: str | AsyncEngine):
        self.database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._sessions is not None

    async def initialize(self) -> None:
        async with self._lock:
            try:
                if self._engine is None:
                    if isinstance(self.database_url, AsyncEngine):
                        self._engine = self.database_url
                    else:
                        self._engine = create_engine_from_url(self.database_url)
                await init_db(self._engine)
            except (SQLAlchemyError, OSError) as exc:
                logger.error("Error initializing the database: %s", exc)
                raise StorageUnavailable(f"Could not open image store: {exc}") from exc
            if self._sessions is None:
                self._sessions = session_factory(self._engine)
                logger.info("Image store initialized")

    def _require_sessions(self) -> async_sessionmaker[AsyncSession]:
        if self._sessions is None:
            raise NotInitialized("RecordStore.initialize() must complete before use")
        return self._sessions

    async def insert(
        self,
        uri: str,
        timestamp: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> int:
        """Append one record and return its store-assigned id."""
        if not uri:
            raise ValueError("uri is required")
        if (latitude is None) != (longitude is None):
            raise ValueError("latitude and longitude must be both set or both empty")
        if latitude is not None and longitude is not None:
            try:
                coords = Coordinates(latitude=latitude, longitude=longitude)
            except ValidationError as exc:
                raise ValueError(f"invalid coordinates ({latitude}, {longitude})") from exc
            latitude, longitude = coords.latitude, coords.longitude
        sessions = self._require_sessions()
        async with self._lock:
            async with sessions() as session:
                row = ImageRow(
                    uri=uri, timestamp=timestamp, latitude=latitude, longitude=longitude
                )
                try:
                    session.add(row)
                    await session.commit()
                except SQLAlchemyError as exc:
                    await session.rollback()
                    logger.error("Error inserting image metadata for %s: %s", uri, exc)
                    raise WriteFailed(f"Image {uri} was not saved: {exc}") from exc
                return row.id

    async def list_all(self) -> list[ImageRecord]:
        """Return every record in ascending id order."""
        sessions = self._require_sessions()
        async with self._lock:
            async with sessions() as session:
                try:
                    rows = (
                        await session.scalars(select(ImageRow).order_by(ImageRow.id.asc()))
                    ).all()
                except SQLAlchemyError as exc:
                    logger.error("Error fetching images from database: %s", exc)
                    raise ReadFailed(f"Could not read images: {exc}") from exc
                return [_row_to_record(row) for row in rows]

    async def count(self) -> int:
        sessions = self._require_sessions()
        async with self._lock:
            async with sessions() as session:
                try:
                    return int(await session.scalar(select(func.count(ImageRow.id))) or 0)
                except SQLAlchemyError as exc:
                    logger.error("Error counting images: %s", exc)
                    raise ReadFailed(f"Could not count images: {exc}") from exc

    async def dispose(self) -> None:
        async with self._lock:
            if self._engine is not None:
                await self._engine.dispose()
            self._engine = None
            self._sessions = None
