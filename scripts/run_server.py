from __future__ import annotations

import uvicorn

from vite_manifest.infrastructure.config import get_settings
from vite_manifest.infrastructure.manifest_loader import ManifestLoader


def describe_asset_mode() -> str:
    settings = get_settings()
    manifest = ManifestLoader(settings.dev_server).find_manifest(settings.vite.manifest_dir)
    if manifest is None:
        return (
            f"[run-server] No manifest in {settings.vite.manifest_dir}; "
            f"serving assets from the Vite dev server at {settings.dev_server.composed_origin()}"
        )
    return f"[run-server] Serving built assets from {manifest}"


def main() -> None:
    settings = get_settings()
    print(describe_asset_mode())

    uvicorn.run(
        "vite_manifest.web.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    main()
