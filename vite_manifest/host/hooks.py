"""In-memory action/filter dispatcher."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from itertools import count
from typing import Any

from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class _Hook:
    priority: int
    order: int
    callback: Callable[..., Any]


class HookRegistry:
    """
    Named lifecycle events and value filters.

    Callbacks run by ascending priority, then registration order. An action
    counts as fired from the moment ``do_action`` starts, so callbacks running
    inside it already observe ``did_action(name) > 0``.

    Example:
        >>> hooks = HookRegistry()
        >>> hooks.add_filter("title", lambda value: value.upper())
        >>> hooks.apply_filters("title", "home")
        'HOME'
    """

    def __init__(self) -> None:
        self._actions: defaultdict[str, list[_Hook]] = defaultdict(list)
        self._filters: defaultdict[str, list[_Hook]] = defaultdict(list)
        self._fired: Counter[str] = Counter()
        self._sequence = count()

    def add_action(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None:
        self._actions[name].append(_Hook(priority, next(self._sequence), callback))

    def add_filter(self, name: str, callback: Callable[..., Any], priority: int = 10) -> None:
        self._filters[name].append(_Hook(priority, next(self._sequence), callback))

    def has_action(self, name: str) -> bool:
        return bool(self._actions.get(name))

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def did_action(self, name: str) -> int:
        return self._fired[name]

    def do_action(self, name: str, *args: Any) -> None:
        self._fired[name] += 1
        logger.debug(f"Dispatching action {name}")
        # Callbacks added while the action runs wait for the next dispatch.
        for hook in self._sorted(self._actions.get(name, [])):
            hook.callback(*args)

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        for hook in self._sorted(self._filters.get(name, [])):
            value = hook.callback(value, *args)
        return value

    @staticmethod
    def _sorted(hooks: list[_Hook]) -> list[_Hook]:
        return sorted(hooks, key=lambda hook: (hook.priority, hook.order))
