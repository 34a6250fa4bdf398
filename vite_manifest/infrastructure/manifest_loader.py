"""
Loads Vite manifests from disk, or synthesizes a dev server descriptor when no
manifest has been built.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..domain.models import DevServerConfig, Manifest
from ..domain.schemas import parse_manifest_entries
from ..host.interfaces import HookDispatcher
from .config import DevServerSettings, get_settings
from .exceptions import ManifestLoadError
from .logging import get_logger

logger = get_logger(__name__)

MANIFEST_FILE_NAMES = ("manifest.json", ".vite/manifest.json")
DEV_SERVER_FILTER = "vite_manifest/dev_server"


class ManifestLoader:
    """
    Per-process manifest cache.

    A missing manifest file is not an error: it means the assets are being
    served by the Vite dev server. Repeated loads of the same directory return
    the identical ``Manifest`` instance.

    Example:
        >>> loader = ManifestLoader()
        >>> manifest = loader.load("./dist")
        >>> manifest is loader.load("./dist")
        True
    """

    def __init__(self, dev_server: DevServerSettings | None = None):
        self._dev_server = dev_server
        self._manifests: dict[str, Manifest] = {}

    @property
    def dev_server(self) -> DevServerSettings:
        if self._dev_server is None:
            self._dev_server = get_settings().dev_server
        return self._dev_server

    def find_manifest(self, manifest_dir: str | Path) -> Path | None:
        base = Path(manifest_dir)
        for file_name in MANIFEST_FILE_NAMES:
            candidate = base / file_name
            if candidate.is_file():
                return candidate.resolve()
        return None

    def load(self, manifest_dir: str | Path, hooks: HookDispatcher | None = None) -> Manifest:
        manifest_path = self.find_manifest(manifest_dir)
        cache_key = str(manifest_path) if manifest_path else f"dev:{Path(manifest_dir).resolve()}"

        cached = self._manifests.get(cache_key)
        if cached is not None:
            return cached

        if manifest_path is not None:
            manifest = self._load_file(manifest_path, str(manifest_dir))
        else:
            manifest = self._load_dev(str(manifest_dir), hooks)

        self._manifests[cache_key] = manifest
        return manifest

    def clear(self) -> None:
        self._manifests.clear()

    def _load_file(self, manifest_path: Path, manifest_dir: str) -> Manifest:
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ManifestLoadError(str(e), str(manifest_path)) from e
        except json.JSONDecodeError as e:
            raise ManifestLoadError(
                f"invalid JSON at line {e.lineno} column {e.colno}", str(manifest_path)
            ) from e

        try:
            entries = parse_manifest_entries(data)
        except (PydanticValidationError, ValueError) as e:
            raise ManifestLoadError(str(e), str(manifest_path)) from e

        logger.info(f"Loaded manifest {manifest_path} with {len(entries)} entries")
        return Manifest.production(entries, source_dir=manifest_dir, path=str(manifest_path))

    def _load_dev(self, manifest_dir: str, hooks: HookDispatcher | None) -> Manifest:
        descriptor: dict[str, Any] = self.dev_server.to_descriptor(manifest_dir)
        if hooks is not None:
            descriptor = hooks.apply_filters(DEV_SERVER_FILTER, descriptor)

        try:
            port = int(descriptor["port"])
            dev_config = DevServerConfig(
                base=str(descriptor.get("base", "/")),
                origin=f"{str(descriptor['origin']).rstrip('/')}:{port}",
                port=port,
                plugins=tuple(descriptor.get("plugins") or ()),
                manifest_dir=str(descriptor.get("manifest_dir", manifest_dir)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ManifestLoadError(f"invalid dev server descriptor: {e}", "dev") from e

        logger.info(f"No manifest in {manifest_dir}; using dev server at {dev_config.origin}")
        return Manifest.development(dev_config, source_dir=manifest_dir)
