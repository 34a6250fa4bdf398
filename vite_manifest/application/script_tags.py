"""Rewrite printed ``<script>`` tags so Vite output loads as ES modules."""

from __future__ import annotations

import re

from ..host.interfaces import SCRIPT_TAG_FILTER, HookDispatcher

VITE_CLIENT_SCRIPT_HANDLE = "vite-client"

MODULE_ATTRIBUTE = 'type="module"'
SCRIPT_TYPE_RE = re.compile(r"""type=(["'])([\w/]+)(["'])""")
SCRIPT_LINE_RE = re.compile(r"<script(.+)")
CLIENT_TAG_RE = re.compile(r"(<script)(.*)")
CLOSED_TAG_RE = re.compile(r"(<script)(.*></script>)")


def set_script_type_attribute(target_handle: str, tag: str, handle: str, *_: object) -> str:
    """
    Add ``type="module"`` to the tag printed for ``target_handle``.

    Inline ``<script>`` blocks printed alongside the tag (lines without a
    ``src=``) keep their classic type so their top-level bindings stay global.
    """
    if target_handle != handle:
        return tag

    if SCRIPT_TYPE_RE.search(tag):
        tag = SCRIPT_TYPE_RE.sub(MODULE_ATTRIBUTE, tag)
    else:
        pattern = CLIENT_TAG_RE if handle == VITE_CLIENT_SCRIPT_HANDLE else CLOSED_TAG_RE
        tag = pattern.sub(rf"\1 {MODULE_ATTRIBUTE}\2", tag)

    for match in SCRIPT_LINE_RE.finditer(tag):
        line = match.group(0)
        if " src=" not in line:
            tag = tag.replace(line, line.replace(MODULE_ATTRIBUTE, ""))

    return tag


def filter_script_tag(hooks: HookDispatcher, handle: str) -> None:
    """Subscribe a ``type="module"`` rewrite for ``handle`` to the script tag filter."""
    hooks.add_filter(
        SCRIPT_TAG_FILTER,
        lambda tag, tag_handle, *args: set_script_type_attribute(handle, tag, tag_handle, *args),
    )
