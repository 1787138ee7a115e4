"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dashsync.layout.models import LayoutConfig
from dashsync.web.app import app


@pytest.fixture
def media_dir(tmp_path):
    d = tmp_path / "media"
    d.mkdir()
    return d


@pytest.fixture
def client(tmp_path, media_dir, monkeypatch):
    """FastAPI test client backed by a fresh database and media directory."""
    monkeypatch.setenv("DASHSYNC_DB", str(tmp_path / "projects.db"))
    monkeypatch.setenv("DASHSYNC_MEDIA_DIR", str(media_dir))
    monkeypatch.setenv("DASHSYNC_EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("DASHSYNC_EXTRACTOR_CMD", "")
    monkeypatch.setenv("DASHSYNC_FFMPEG", "ffmpeg")
    with TestClient(app) as c:
        yield c


def layout_payload(**offsets) -> dict:
    """Default layout in wire shape, with optional sync offsets overridden."""
    d = LayoutConfig.default().to_dict()
    d["syncOffsets"].update(offsets)
    return d
