from __future__ import annotations

import importlib
from pathlib import Path

from fastapi.testclient import TestClient


def _setup_api(tmp_path: Path, monkeypatch, **env: str):
    db_path = tmp_path / "api.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    for name, value in env.items():
        monkeypatch.setenv(name, value)

    from geo_gallery.api import http_api

    return importlib.reload(http_api)


def test_health(tmp_path: Path, monkeypatch) -> None:
    http_api = _setup_api(tmp_path, monkeypatch)
    with TestClient(http_api.app) as client:
        resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_ingest_and_gallery_roundtrip(tmp_path: Path, monkeypatch) -> None:
    http_api = _setup_api(
        tmp_path,
        monkeypatch,
        LOCATION_MODE="static",
        LOCATION_STATIC_LAT="37.0",
        LOCATION_STATIC_LON="-122.0",
    )
    with TestClient(http_api.app) as client:
        resp = client.get("/gallery")
        assert resp.json() == {"gallery": [], "markers": [], "stale": False}

        resp = client.post("/images", json={"uri": "file://a.jpg"})
        assert resp.status_code == 201
        image = resp.json()["image"]
        assert image["id"] == 1
        assert image["uri"] == "file://a.jpg"
        assert (image["latitude"], image["longitude"]) == (37.0, -122.0)

        resp = client.get("/gallery")
        body = resp.json()
        assert body["gallery"] == [{"uri": "file://a.jpg"}]
        assert body["markers"] == [
            {"id": 1, "uri": "file://a.jpg", "latitude": 37.0, "longitude": -122.0}
        ]

        resp = client.get("/images")
        assert [row["uri"] for row in resp.json()["images"]] == ["file://a.jpg"]


def test_denied_location_and_blank_uri(tmp_path: Path, monkeypatch) -> None:
    http_api = _setup_api(tmp_path, monkeypatch, LOCATION_MODE="denied")
    with TestClient(http_api.app) as client:
        resp = client.post("/images", json={"uri": "file://b.jpg"})
        assert resp.status_code == 201
        image = resp.json()["image"]
        assert image["latitude"] is None and image["longitude"] is None

        resp = client.post("/images", json={"uri": "   "})
        assert resp.status_code == 422

        body = client.get("/gallery").json()
        assert len(body["gallery"]) == 1
        assert body["markers"] == []


def test_write_failure_is_reported(tmp_path: Path, monkeypatch) -> None:
    http_api = _setup_api(tmp_path, monkeypatch)
    from geo_gallery.core.errors import WriteFailed

    async def failing_insert(*args, **kwargs):
        raise WriteFailed("Image file://c.jpg was not saved: disk full")

    with TestClient(http_api.app) as client:
        monkeypatch.setattr(http_api.controller.store, "insert", failing_insert)
        resp = client.post("/images", json={"uri": "file://c.jpg"})
        assert resp.status_code == 503
        assert "not saved" in resp.json()["detail"]
        assert client.get("/images").json() == {"images": []}
