"""Ingestion pipeline for acquired image uris."""

from .pipeline import IngestionPipeline, IngestState, utc_now_iso
from .scanner import SUPPORTED_EXTENSIONS, scan_uris, to_uri

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "IngestState",
    "IngestionPipeline",
    "scan_uris",
    "to_uri",
    "utc_now_iso",
]
