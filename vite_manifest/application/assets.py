"""
Asset registration facade.

Loads a manifest, picks the development or production strategy and registers
the resulting handles with the host, applying the asset pipeline's error
policy: faults are raised in debug mode and degrade to ``None`` otherwise so
a page never fails to render because of its assets.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..domain.models import ResolvedAssetSet
from ..domain.schemas import ResolutionOptions
from ..domain.services import StyleClosureCollector
from ..host.context import Host
from ..infrastructure.exceptions import MissingEntryError, ViteManifestError, log_error_details
from ..infrastructure.logging import LogContext, get_logger
from ..infrastructure.manifest_loader import ManifestLoader
from .resolver import ManifestGraphResolver

logger = get_logger(__name__)

OPTIONS_FILTER = "vite_manifest/options"

OptionsInput = ResolutionOptions | Mapping[str, Any] | None


class AssetRegistrar:
    def __init__(self, host: Host, loader: ManifestLoader, debug: bool = False):
        self.host = host
        self.loader = loader
        self.debug = debug
        self.resolver = ManifestGraphResolver(host.scripts, host.styles, host.hooks, debug=debug)
        self._collectors: dict[str, StyleClosureCollector] = {}

    def parse_options(self, options: OptionsInput = None) -> ResolutionOptions:
        """Merge ``options`` over the defaults and let hooks adjust the result."""
        if isinstance(options, ResolutionOptions):
            parsed = options.model_copy(deep=True)
        else:
            parsed = ResolutionOptions.model_validate(dict(options or {}))
        return self.host.hooks.apply_filters(OPTIONS_FILTER, parsed)

    def register_asset(
        self, manifest_dir: str | Path, entry: str, options: OptionsInput = None
    ) -> ResolvedAssetSet | None:
        """
        Register the scripts and styles needed by ``entry``.

        Args:
            manifest_dir: Directory holding ``manifest.json``, usually ``dist``
            entry: Manifest entry key, e.g. ``src/main.ts``
            options: Resolution options or a mapping of them

        Returns:
            Registered handles, or None when the assets could not be resolved

        Raises:
            ViteManifestError: Only in debug mode
        """
        with LogContext(manifest_dir=str(manifest_dir), entry=entry):
            try:
                manifest = self.loader.load(manifest_dir, self.host.hooks)
                return self.resolver.resolve(manifest, entry, self.parse_options(options))
            except ViteManifestError as e:
                if self.debug:
                    raise
                logger.error(
                    f"Skipping assets for {entry}: {e.message}",
                    extra={"error_details": log_error_details(e)},
                )
                return None

    def enqueue_asset(
        self, manifest_dir: str | Path, entry: str, options: OptionsInput = None
    ) -> bool:
        assets = self.register_asset(manifest_dir, entry, options)
        if assets is None:
            return False

        for handle in assets.scripts:
            self.host.scripts.enqueue(handle)
        for handle in assets.styles:
            self.host.styles.enqueue(handle)
        return True

    def collect_styles(
        self, manifest_dir: str | Path, entry: str, base_url: str = ""
    ) -> list[str]:
        """
        URLs of every stylesheet reachable from ``entry``, without registering anything.

        Development manifests yield nothing: the dev server injects styles itself.
        """
        try:
            manifest = self.loader.load(manifest_dir, self.host.hooks)
        except ViteManifestError as e:
            if self.debug:
                raise
            logger.error(f"Skipping styles for {entry}: {e.message}")
            return []

        if manifest.is_dev:
            return []

        if entry not in manifest:
            if self.debug:
                raise MissingEntryError(entry, manifest.source_dir)
            return []

        collector = self._collectors.get(manifest.path)
        if collector is None or collector.manifest is not manifest:
            collector = self._collectors[manifest.path] = StyleClosureCollector(manifest)

        prefix = base_url.rstrip("/")
        return [f"{prefix}/{path}" for path in collector.get_css(entry)]
