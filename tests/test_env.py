from __future__ import annotations

import logging
import os
from pathlib import Path

from geo_gallery.core.env import (
    DEFAULT_DATABASE_URL,
    configure_logging,
    database_url_from_env,
    load_dotenv_if_present,
)


def test_database_url_defaults_and_override(monkeypatch) -> None:
    assert database_url_from_env() == DEFAULT_DATABASE_URL
    monkeypatch.setenv("DATABASE_URL", "")
    assert database_url_from_env() == DEFAULT_DATABASE_URL
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    assert database_url_from_env() == "sqlite+aiosqlite:///:memory:"


def test_env_file_does_not_override_shell(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / "gallery.env"
    env_file.write_text("LOCATION_MODE=static\nLOCATION_STATIC_LAT=12.5\n")
    monkeypatch.setenv("GEO_GALLERY_ENV_FILE", str(env_file))
    monkeypatch.setenv("LOCATION_MODE", "denied")

    assert load_dotenv_if_present() is True
    assert os.environ["LOCATION_MODE"] == "denied"
    assert os.environ["LOCATION_STATIC_LAT"] == "12.5"
    monkeypatch.delenv("LOCATION_STATIC_LAT")


def test_missing_env_file_is_ignored(tmp_path: Path) -> None:
    assert load_dotenv_if_present(tmp_path / "absent.env") is False


def test_configure_logging_keeps_drivers_quiet(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    configure_logging()
    assert logging.getLogger("aiosqlite").level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING
