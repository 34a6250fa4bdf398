from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from fastapi import Request

from vite_manifest.application.assets import AssetRegistrar
from vite_manifest.application.binder import AssetBinder
from vite_manifest.application.container import AssetContainer
from vite_manifest.host.context import Host, RequestContext
from vite_manifest.infrastructure.config import Settings, get_settings
from vite_manifest.infrastructure.logging import LogContext
from vite_manifest.infrastructure.manifest_loader import ManifestLoader


@dataclass
class AssetPipeline:
    host: Host
    registrar: AssetRegistrar
    container: AssetContainer
    binder: AssetBinder


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = get_settings()
        request.app.state.settings = settings
    return settings


def get_manifest_loader(request: Request) -> ManifestLoader:
    loader = getattr(request.app.state, "manifest_loader", None)
    if loader is None:
        loader = ManifestLoader(get_app_settings(request).dev_server)
        request.app.state.manifest_loader = loader
    return loader


def get_asset_pipeline(request: Request) -> Iterator[AssetPipeline]:
    """Wire a fresh host, container and binder for this request."""
    settings = get_app_settings(request)
    debug = settings.app.debug

    host = Host(
        request=RequestContext.for_path(request.url.path, str(request.base_url)),
    )
    registrar = AssetRegistrar(host, get_manifest_loader(request), debug=debug)
    container = AssetContainer(host, debug=debug)
    binder = AssetBinder(
        settings.vite.containers,
        base_url=settings.vite.base_url,
        manifest_dir=settings.vite.manifest_dir,
        container=container,
        registrar=registrar,
    )
    binder.hooks()

    with LogContext(request_path=request.url.path):
        yield AssetPipeline(host=host, registrar=registrar, container=container, binder=binder)
