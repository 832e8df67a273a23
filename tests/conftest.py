"""Shared fixtures: a small built bundle on disk."""

from pathlib import Path

import pytest

from spaserve.app import App
from spaserve.config import ServerConfig
from spaserve.store import AssetStore

SHELL = "<!doctype html><html><body><div id=\"root\"></div></body></html>"


@pytest.fixture
def dist(tmp_path: Path) -> Path:
    """A build output directory shaped like the front-end bundler's."""
    root = tmp_path / "dist"
    root.mkdir()
    (root / "index.html").write_text(SHELL)
    (root / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    (root / "robots.txt").write_text("User-agent: *\nAllow: /\n")

    assets = root / "assets"
    assets.mkdir()
    (assets / "app.a1b2.js").write_text("console.log('turismo');")
    (assets / "style.c3d4.css").write_text("body { margin: 0; }")

    images = root / "images"
    images.mkdir()
    (images / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return root


@pytest.fixture
def store(dist: Path) -> AssetStore:
    return AssetStore(dist)


@pytest.fixture
def make_app(dist: Path):
    """Factory for apps serving the ``dist`` fixture; kwargs go to ServerConfig."""

    def _make(**overrides) -> App:
        overrides.setdefault("dist_dir", dist)
        overrides.setdefault("compression", False)
        return App(ServerConfig(**overrides))

    return _make


@pytest.fixture
def shell() -> str:
    """Contents of the ``dist`` fixture's shell document."""
    return SHELL
