"""
In-memory script and style registries.

Handles are registered once, enqueued by name, and printed deps-first so a
handle never appears before anything it depends on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from markupsafe import escape

from .hooks import HookRegistry
from .interfaces import SCRIPT_TAG_FILTER, InlinePosition


@dataclass(slots=True)
class Dependency:
    handle: str
    src: str
    deps: list[str] = field(default_factory=list)
    version: str | None = ""
    args: Any = None
    before: list[str] = field(default_factory=list)
    after: list[str] = field(default_factory=list)

    def url(self) -> str:
        if not self.version:
            return self.src
        separator = "&" if "?" in self.src else "?"
        return f"{self.src}{separator}{urlencode({'ver': self.version})}"


class Dependencies(ABC):
    """Shared bookkeeping for scripts and styles."""

    def __init__(self) -> None:
        self.registered: dict[str, Dependency] = {}
        self.queue: list[str] = []
        self.done: set[str] = set()

    def register(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: str | None = "",
        args: Any = None,
    ) -> bool:
        if handle in self.registered:
            return False
        self.registered[handle] = Dependency(handle, src, list(deps), version, args)
        return True

    def deregister(self, handle: str) -> None:
        self.registered.pop(handle, None)
        if handle in self.queue:
            self.queue.remove(handle)

    def get(self, handle: str) -> Dependency | None:
        return self.registered.get(handle)

    def is_registered(self, handle: str) -> bool:
        return handle in self.registered

    def is_enqueued(self, handle: str) -> bool:
        return handle in self.queue

    def enqueue(self, handle: str) -> None:
        if handle not in self.queue:
            self.queue.append(handle)

    def add_inline_script(self, handle: str, code: str, position: InlinePosition = "after") -> bool:
        item = self.registered.get(handle)
        if item is None:
            return False
        (item.before if position == "before" else item.after).append(code)
        return True

    def resolve(self, handles: Iterable[str]) -> list[str]:
        """Order ``handles`` and their registered dependencies, dependencies first."""
        ordered: list[str] = []
        seen: set[str] = set()

        def visit(handle: str) -> None:
            if handle in seen or handle not in self.registered:
                return
            seen.add(handle)
            for dep in self.registered[handle].deps:
                visit(dep)
            ordered.append(handle)

        for handle in handles:
            visit(handle)
        return ordered

    def pending(self) -> list[str]:
        return [handle for handle in self.resolve(self.queue) if handle not in self.done]

    @abstractmethod
    def render(self, item: Dependency) -> str:
        """Markup for one registered item."""

    def print_items(self, handles: Iterable[str] | None = None) -> str:
        items = self.pending() if handles is None else list(handles)
        html = []
        for handle in items:
            html.append(self.render(self.registered[handle]))
            self.done.add(handle)
        return "".join(html)


class ScriptRegistry(Dependencies):
    """Scripts; ``args`` holds the in-footer flag."""

    def __init__(self, hooks: HookRegistry) -> None:
        super().__init__()
        self.hooks = hooks

    def render(self, item: Dependency) -> str:
        parts = []
        if item.before:
            parts.append(
                f'<script id="{escape(item.handle)}-js-before">\n'
                + "\n".join(item.before)
                + "\n</script>\n"
            )
        parts.append(
            f"<script src='{escape(item.url())}' id='{escape(item.handle)}-js'></script>\n"
        )
        if item.after:
            parts.append(
                f'<script id="{escape(item.handle)}-js-after">\n'
                + "\n".join(item.after)
                + "\n</script>\n"
            )
        return self.hooks.apply_filters(SCRIPT_TAG_FILTER, "".join(parts), item.handle, item.src)

    def print_head_scripts(self) -> str:
        return self.print_items([h for h in self.pending() if not self.registered[h].args])

    def print_footer_scripts(self) -> str:
        return self.print_items()


class StyleRegistry(Dependencies):
    """Stylesheets; ``args`` holds the media attribute."""

    def register(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: str | None = "",
        args: Any = "all",
    ) -> bool:
        return super().register(handle, src, deps, version, args or "all")

    def render(self, item: Dependency) -> str:
        return (
            f"<link rel='stylesheet' id='{escape(item.handle)}-css' "
            f"href='{escape(item.url())}' media='{escape(item.args)}' />\n"
        )
