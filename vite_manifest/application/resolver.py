"""
Manifest graph resolution.

Turns one manifest entry into registered script and style handles, following
its imports depth-first. Production manifests are walked; development
manifests point every entry at the live Vite dev server instead.
"""

from __future__ import annotations

import re

from ..domain.models import Manifest, ResolvedAssetSet, dedupe
from ..domain.schemas import ResolutionOptions
from ..domain.services import handle_suffix
from ..host.interfaces import AssetRegistry, HookDispatcher
from ..infrastructure.exceptions import MissingEntryError
from ..infrastructure.logging import get_logger
from .script_tags import VITE_CLIENT_SCRIPT_HANDLE, filter_script_tag

logger = get_logger(__name__)

REACT_REFRESH_PLUGIN = "vite:react-refresh"
DEVELOPMENT_ASSETS_FILTER = "vite_manifest/development_assets"


def get_react_refresh_script_preamble(src: str) -> str:
    return "\n".join(
        [
            f'import RefreshRuntime from "{src}";',
            "RefreshRuntime.injectIntoGlobalHook(window);",
            "window.__VITE_IS_MODERN__ = true;",
            "window.$RefreshReg$ = () => {};",
            "window.$RefreshSig$ = () => (type) => type;",
            "window.__vite_plugin_react_preamble_installed__ = true;",
        ]
    )


def generate_development_asset_src(manifest: Manifest, entry: str) -> str:
    if manifest.dev_config is None:
        raise ValueError("development asset URLs need a dev server manifest")
    path = re.sub(r"/{2,}", "/", f"{manifest.dev_config.base}/{entry}").strip("/")
    return f"{manifest.dev_config.origin.rstrip('/')}/{path}"


class ManifestGraphResolver:
    def __init__(
        self,
        scripts: AssetRegistry,
        styles: AssetRegistry,
        hooks: HookDispatcher,
        debug: bool = False,
    ):
        self.scripts = scripts
        self.styles = styles
        self.hooks = hooks
        self.debug = debug

    def resolve(
        self, manifest: Manifest, entry: str, options: ResolutionOptions
    ) -> ResolvedAssetSet | None:
        if manifest.is_dev:
            return self.load_development_asset(manifest, entry, options)
        return self.load_production_asset(manifest, entry, options)

    def load_production_asset(
        self, manifest: Manifest, entry: str, options: ResolutionOptions
    ) -> ResolvedAssetSet | None:
        return self._resolve_node(manifest, entry, options, "", {})

    def _resolve_node(
        self,
        manifest: Manifest,
        entry: str,
        options: ResolutionOptions,
        suffix: str,
        resolved: dict[str, ResolvedAssetSet | None],
    ) -> ResolvedAssetSet | None:
        # A chunk shared by several importers keeps the handles of its first visit.
        if entry in resolved:
            return resolved[entry]

        item = manifest.get(entry)
        if item is None:
            if self.debug:
                raise MissingEntryError(entry, manifest.source_dir)
            logger.warning(f"Entry {entry} not found in {manifest.path}")
            return None

        handle = f"{options.handle}{suffix}"
        script_deps = list(options.dependencies)
        style_deps = list(options.css_dependencies)
        child_scripts: list[str] = []
        child_styles: list[str] = []

        for index, import_key in enumerate(item.imports):
            child = self._resolve_node(
                manifest, import_key, options, handle_suffix(suffix, index), resolved
            )
            if child is None:
                continue
            child_scripts.extend(child.scripts)
            child_styles.extend(child.styles)
            if not options.skip_js_dependencies:
                script_deps.extend(child.scripts)
            if not options.skip_css_dependencies:
                style_deps.extend(child.styles)

        scripts: list[str] = []
        if not options.css_only and item.file:
            if self._register_script(
                handle, f"{options.base_url}/{item.file}", dedupe(script_deps), "", options.in_footer
            ):
                scripts.append(handle)

        styles: list[str] = []
        for index, css_file_path in enumerate(item.css):
            style_handle = f"{handle}-{index}"
            registered = self.styles.register(
                style_handle,
                f"{options.base_url}/{css_file_path}",
                dedupe(style_deps),
                "",
                options.css_media,
            )
            if registered or self.styles.is_registered(style_handle):
                styles.append(style_handle)

        result = ResolvedAssetSet(
            scripts=dedupe(scripts + child_scripts),
            styles=dedupe(styles + style_deps + child_styles),
        )
        resolved[entry] = result
        return result

    def load_development_asset(
        self, manifest: Manifest, entry: str, options: ResolutionOptions
    ) -> ResolvedAssetSet | None:
        self.register_vite_client_script(manifest)

        src = generate_development_asset_src(manifest, entry)
        dependencies = dedupe([VITE_CLIENT_SCRIPT_HANDLE, *options.dependencies])

        # Dev server output must never be cached by the browser.
        if not self._register_script(options.handle, src, dependencies, None, options.in_footer):
            logger.warning(f"Could not register development script {options.handle}")
            return None

        assets = ResolvedAssetSet(scripts=[options.handle], styles=list(options.css_dependencies))
        return self.hooks.apply_filters(DEVELOPMENT_ASSETS_FILTER, assets, manifest, entry, options)

    def register_vite_client_script(self, manifest: Manifest) -> None:
        if self.scripts.is_registered(VITE_CLIENT_SCRIPT_HANDLE):
            return

        src = generate_development_asset_src(manifest, "@vite/client")
        self._register_script(VITE_CLIENT_SCRIPT_HANDLE, src, [], None, False)

        if manifest.dev_config is not None and manifest.dev_config.has_plugin(REACT_REFRESH_PLUGIN):
            refresh_src = generate_development_asset_src(manifest, "@react-refresh")
            self.scripts.add_inline_script(
                VITE_CLIENT_SCRIPT_HANDLE, get_react_refresh_script_preamble(refresh_src), "after"
            )

    def _register_script(
        self, handle: str, src: str, deps: list[str], version: str | None, in_footer: bool
    ) -> bool:
        """Register a module script; an existing registration under ``handle`` counts as success."""
        if self.scripts.register(handle, src, deps, version, in_footer):
            filter_script_tag(self.hooks, handle)
            return True
        return self.scripts.is_registered(handle)
