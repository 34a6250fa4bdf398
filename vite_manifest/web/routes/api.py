from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from vite_manifest.infrastructure.exceptions import MissingEntryError, ViteManifestError
from vite_manifest.web.dependencies import (
    AssetPipeline,
    get_app_settings,
    get_asset_pipeline,
    get_manifest_loader,
)
from vite_manifest.web.schemas import AssetHandles, ContainerAssets, HealthResponse, StyleClosure

router = APIRouter(prefix="/api", tags=["assets"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    settings = get_app_settings(request)
    loader = get_manifest_loader(request)
    return HealthResponse(
        status="ok",
        environment=settings.app.environment,
        dev_mode=loader.find_manifest(settings.vite.manifest_dir) is None,
        manifest_dir=settings.vite.manifest_dir,
    )


@router.get("/assets", response_model=list[ContainerAssets])
def list_assets(pipeline: AssetPipeline = Depends(get_asset_pipeline)) -> list[ContainerAssets]:
    """Run the enqueue phase and report what each configured container resolved to."""
    pipeline.host.render_head()
    result = []
    for name in pipeline.binder.assets:
        asset = pipeline.container.assets.get(name)
        result.append(
            ContainerAssets(
                name=name,
                registered=asset is not None,
                handles=AssetHandles(**asset.handles()) if asset is not None else None,
            )
        )
    return result


@router.get("/styles/{entry:path}", response_model=StyleClosure)
def entry_styles(
    entry: str, request: Request, pipeline: AssetPipeline = Depends(get_asset_pipeline)
) -> StyleClosure:
    settings = get_app_settings(request)
    try:
        styles = pipeline.registrar.collect_styles(
            settings.vite.manifest_dir, entry, settings.vite.base_url
        )
    except MissingEntryError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.user_message) from exc
    except ViteManifestError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.user_message
        ) from exc
    return StyleClosure(entry=entry, styles=styles)
