from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from markupsafe import escape

from vite_manifest.infrastructure.config import get_settings
from vite_manifest.infrastructure.exceptions import ViteManifestError, log_error_details
from vite_manifest.infrastructure.logging import auto_configure_logging, get_logger
from vite_manifest.infrastructure.manifest_loader import ManifestLoader
from vite_manifest.web.routes import api, pages

logger = get_logger(__name__)


def create_application() -> FastAPI:
    settings = get_settings()
    if not logging.getLogger().handlers:
        auto_configure_logging()

    app = FastAPI(
        title=settings.app.title,
        version=settings.app.version,
        debug=settings.app.debug,
    )
    app.state.settings = settings
    app.state.manifest_loader = ManifestLoader(settings.dev_server)

    app.mount(
        settings.vite.static_mount,
        StaticFiles(directory=settings.vite.manifest_dir, check_dir=False),
        name="dist",
    )

    app.include_router(api.router)
    app.include_router(pages.router)

    @app.exception_handler(ViteManifestError)
    async def asset_error_handler(request: Request, exc: ViteManifestError) -> HTMLResponse:
        # Only reachable in debug mode; otherwise asset faults degrade silently.
        logger.error(
            f"Asset pipeline failure on {request.url.path}",
            extra={"error_details": log_error_details(exc)},
        )
        return HTMLResponse(f"<h1>Asset error</h1><p>{escape(exc.message)}</p>", status_code=500)

    @app.on_event("startup")
    async def startup_event() -> None:
        app.state.manifest_loader.clear()

    return app


app = create_application()
