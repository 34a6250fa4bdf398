from __future__ import annotations

from .models import Manifest, dedupe


def handle_suffix(parent_suffix: str, index: int) -> str:
    """
    Suffix for the ``index``-th import of a node whose own suffix is ``parent_suffix``.

    Suffixes are positional, so a manifest always yields the same handles and
    reordering imports renames them.

    >>> handle_suffix("", 0)
    '_0'
    >>> handle_suffix("_0", 1)
    '__01'
    """
    return f"_{parent_suffix}{index}"


class StyleClosureCollector:
    """
    Collects every stylesheet reachable from an entry, ignoring scripts.

    Each node contributes once, however many paths lead to it, which also
    makes the walk safe on cyclic input. Imported nodes are merged ahead of
    what has been collected so far, so shared base styles come before
    entry-specific ones.
    """

    def __init__(self, manifest: Manifest):
        self.manifest = manifest
        self._styles: dict[str, list[str]] = {}

    def get_css(self, entry: str) -> list[str]:
        if entry not in self._styles:
            collected: list[str] = []
            self._walk(entry, collected, set())
            self._styles[entry] = collected
        return list(self._styles[entry])

    def _walk(self, key: str, collected: list[str], visited: set[str]) -> None:
        if key in visited:
            return
        visited.add(key)

        record = self.manifest.get(key)
        if record is None:
            return

        collected[:0] = [path for path in dedupe(record.css) if path not in collected]
        for child in record.imports:
            self._walk(child, collected, visited)
