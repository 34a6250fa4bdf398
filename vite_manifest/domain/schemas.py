"""
Pydantic schemas validating manifest data, resolution options and container
configuration before they reach the resolution engine.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .models import EntryRecord


class ManifestEntrySchema(BaseModel):
    """One value of a Vite ``manifest.json``."""

    file: str | None = None
    src: str | None = None
    css: list[str] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)
    dynamic_imports: list[str] = Field(default_factory=list, alias="dynamicImports")
    is_entry: bool = Field(default=False, alias="isEntry")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("css", "imports", "dynamic_imports", mode="before")
    def null_as_empty(cls, v):
        return [] if v is None else v

    def to_record(self, key: str) -> EntryRecord:
        return EntryRecord(
            key=key,
            file=self.file,
            css=tuple(self.css),
            imports=tuple(self.imports),
            dynamic_imports=tuple(self.dynamic_imports),
            is_entry=self.is_entry,
            src=self.src,
        )


class ResolutionOptions(BaseModel):
    """
    Options for a single register call.

    Accepts snake_case names as well as the dashed keys used by existing
    configurations (``css-dependencies``, ``in-footer``, ``base-url`` ...).

    Example:
        >>> opts = ResolutionOptions.model_validate({"handle": "app", "css-only": True})
        >>> opts.css_only, opts.css_media
        (True, 'all')
    """

    handle: str = ""
    dependencies: list[str] = Field(default_factory=list)
    css_dependencies: list[str] = Field(default_factory=list, alias="css-dependencies")
    css_only: bool = Field(default=False, alias="css-only")
    css_media: str = Field(default="all", alias="css-media")
    in_footer: bool = Field(default=False, alias="in-footer")
    base_url: str = Field(default="", alias="base-url")
    # Script imports are loaded by the browser through ES module `import`s.
    skip_js_dependencies: bool = Field(default=True, alias="skip-js-dependencies")
    skip_css_dependencies: bool = Field(default=False, alias="skip-css-dependencies")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("base_url")
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")


class ContainerSpec(BaseModel):
    """Declarative description of one asset container bound to host hooks."""

    src: str = Field(..., min_length=1, description="Manifest entry key")
    handle: str = Field(..., min_length=1, description="Base handle for generated assets")
    dependencies: list[str] = Field(default_factory=list)
    enqueue: bool = Field(default=False, description="Enqueue as soon as assets are registered")
    admin_only: bool = False
    frontend_only: bool = False

    @model_validator(mode="after")
    def validate_visibility(self):
        if self.admin_only and self.frontend_only:
            raise ValueError("A container cannot be both admin_only and frontend_only")
        return self


def parse_manifest_entries(data: Any) -> list[EntryRecord]:
    """Validate decoded manifest JSON and convert it to entry records."""
    if not isinstance(data, dict):
        raise ValueError("manifest root must be a JSON object")
    return [ManifestEntrySchema.model_validate(value).to_record(key) for key, value in data.items()]
