from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from vite_manifest.application.assets import AssetRegistrar
from vite_manifest.application.container import AssetContainer
from vite_manifest.host.context import Host
from vite_manifest.infrastructure.config import DevServerSettings, reset_settings
from vite_manifest.infrastructure.manifest_loader import ManifestLoader

EXAMPLE_MANIFEST: dict[str, Any] = {
    "main.js": {"file": "main.abc.js", "css": ["main.abc.css"], "imports": ["chunk.js"]},
    "chunk.js": {"file": "chunk.xyz.js", "css": ["chunk.xyz.css"]},
}

DIAMOND_MANIFEST: dict[str, Any] = {
    "a.js": {"file": "a.js", "css": ["a.css"], "imports": ["b.js", "c.js"]},
    "b.js": {"file": "b.js", "css": ["b.css"], "imports": ["d.js"]},
    "c.js": {"file": "c.js", "css": ["c.css"], "imports": ["d.js"]},
    "d.js": {"file": "d.js", "css": ["d.css"]},
}

WriteManifest = Callable[..., Path]


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def write_manifest(tmp_path: Path) -> WriteManifest:
    def _write(data: Any, name: str = "dist", location: str = "manifest.json") -> Path:
        manifest_dir = tmp_path / name
        target = manifest_dir / location
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return manifest_dir

    return _write


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    dev_dir = tmp_path / "no-build"
    dev_dir.mkdir()
    return dev_dir


@pytest.fixture
def dev_settings() -> DevServerSettings:
    return DevServerSettings(origin="http://localhost", port=5173)


@pytest.fixture
def loader(dev_settings: DevServerSettings) -> ManifestLoader:
    return ManifestLoader(dev_settings)


@pytest.fixture
def host() -> Host:
    return Host()


@pytest.fixture
def registrar(host: Host, loader: ManifestLoader) -> AssetRegistrar:
    return AssetRegistrar(host, loader)


@pytest.fixture
def container(host: Host) -> AssetContainer:
    return AssetContainer(host)
