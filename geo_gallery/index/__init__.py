"""Persistent record store for image metadata."""

from .schema import Base, ImageRow, create_engine_from_url, init_db, session_factory
from .store import RecordStore

__all__ = [
    "Base",
    "ImageRow",
    "RecordStore",
    "create_engine_from_url",
    "init_db",
    "session_factory",
]
