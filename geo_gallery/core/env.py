from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./geo_gallery.db"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Driver loggers that flood DEBUG output with per-statement chatter.
_NOISY_LOGGERS = ("aiosqlite", "httpcore", "httpx")


def load_dotenv_if_present(path: str | Path | None = None) -> bool:
    """Load settings from GEO_GALLERY_ENV_FILE (or ./.env) without overriding the shell."""
    dotenv_path = Path(path or os.getenv("GEO_GALLERY_ENV_FILE", ".env")).expanduser()
    if not dotenv_path.is_file():
        return False
    return load_dotenv(dotenv_path=dotenv_path, override=False)


def configure_logging(default_level: str = "INFO") -> None:
    """Set the root level from LOG_LEVEL; driver loggers stay at WARNING."""
    level_name = os.getenv("LOG_LEVEL", default_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def database_url_from_env() -> str:
    return os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
