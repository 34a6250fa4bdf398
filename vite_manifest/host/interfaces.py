"""
Interfaces of the host platform the asset pipeline plugs into.

The resolution engine only talks to these protocols; ``host.hooks``,
``host.dependencies`` and ``host.context`` provide in-memory implementations.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Literal, Protocol

FRONTEND_ENQUEUE_HOOK = "enqueue_scripts"
ADMIN_ENQUEUE_HOOK = "admin_enqueue_scripts"
SCRIPT_TAG_FILTER = "script_loader_tag"

InlinePosition = Literal["before", "after"]


class HookDispatcher(Protocol):
    def add_action(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None: ...

    def do_action(self, name: str, *args: Any) -> None: ...

    def did_action(self, name: str) -> int: ...

    def add_filter(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None: ...

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any: ...


class RegisteredAsset(Protocol):
    handle: str
    src: str
    deps: list[str]
    args: Any


class AssetRegistry(Protocol):
    def register(
        self,
        handle: str,
        src: str,
        deps: Sequence[str] = (),
        version: str | None = "",
        args: Any = None,
    ) -> bool: ...

    def enqueue(self, handle: str) -> None: ...

    def is_registered(self, handle: str) -> bool: ...

    def get(self, handle: str) -> RegisteredAsset | None: ...

    def add_inline_script(self, handle: str, code: str, position: InlinePosition = "after") -> bool: ...
