from __future__ import annotations

from pydantic import BaseModel, Field


class AssetHandles(BaseModel):
    scripts: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)


class ContainerAssets(BaseModel):
    name: str
    registered: bool
    handles: AssetHandles | None = None


class StyleClosure(BaseModel):
    entry: str
    styles: list[str]


class HealthResponse(BaseModel):
    status: str
    environment: str
    dev_mode: bool
    manifest_dir: str
