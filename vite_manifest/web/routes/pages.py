from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from vite_manifest.web.dependencies import AssetPipeline, get_app_settings, get_asset_pipeline

router = APIRouter(tags=["pages"])

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


def _render(request: Request, pipeline: AssetPipeline, path: str = "") -> HTMLResponse:
    settings = get_app_settings(request)
    head = pipeline.host.render_head()
    context = {
        "app_title": settings.app.title,
        "head_assets": Markup(head),
        "footer_assets": Markup(pipeline.host.render_footer()),
        "is_admin": pipeline.host.request.is_admin,
        "spa_path": path,
    }
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/", response_class=HTMLResponse)
async def spa_root(
    request: Request, pipeline: AssetPipeline = Depends(get_asset_pipeline)
) -> HTMLResponse:
    return _render(request, pipeline)


@router.get("/{path:path}", response_class=HTMLResponse)
async def spa_catch_all(
    path: str, request: Request, pipeline: AssetPipeline = Depends(get_asset_pipeline)
) -> HTMLResponse:
    return _render(request, pipeline, path)
