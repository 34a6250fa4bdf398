from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class EntryRecord:
    key: str
    file: str | None = None
    css: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    dynamic_imports: tuple[str, ...] = ()
    is_entry: bool = False
    src: str | None = None


@dataclass(frozen=True, slots=True)
class DevServerConfig:
    base: str
    origin: str  # already composed as "origin:port"
    port: int
    plugins: tuple[str, ...] = ()
    manifest_dir: str = ""

    def has_plugin(self, name: str) -> bool:
        return name in self.plugins


@dataclass(frozen=True, slots=True)
class Manifest:
    """Parsed bundler manifest, or a synthetic descriptor for a live dev server."""

    entries: Mapping[str, EntryRecord]
    is_dev: bool
    source_dir: str
    path: str
    dev_config: DevServerConfig | None = None

    @classmethod
    def production(cls, entries: Iterable[EntryRecord], source_dir: str, path: str) -> Manifest:
        return cls(
            entries=MappingProxyType({entry.key: entry for entry in entries}),
            is_dev=False,
            source_dir=source_dir,
            path=path,
        )

    @classmethod
    def development(cls, dev_config: DevServerConfig, source_dir: str) -> Manifest:
        return cls(
            entries=MappingProxyType({}),
            is_dev=True,
            source_dir=source_dir,
            path="dev",
            dev_config=dev_config,
        )

    def get(self, key: str) -> EntryRecord | None:
        return self.entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.entries


@dataclass(slots=True)
class ResolvedAssetSet:
    scripts: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)

    def handles(self) -> dict[str, list[str]]:
        return {"scripts": list(self.scripts), "styles": list(self.styles)}


def dedupe(items: Iterable[str]) -> list[str]:
    """Drop repeated values, keeping the position of the first occurrence."""
    return list(dict.fromkeys(items))
