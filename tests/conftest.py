from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep a developer's .env or shell settings out of the tests."""
    for name in (
        "DATABASE_URL",
        "LOCATION_MODE",
        "LOCATION_STATIC_LAT",
        "LOCATION_STATIC_LON",
        "LOCATION_IP_URL",
        "LOCATION_TIMEOUT",
        "LOG_LEVEL",
        "GEO_GALLERY_ENV_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
