"""
Named registry of resolved asset sets.

Containers are registered once per request while the enqueue phase runs and
enqueued later, directly or from a host hook, optionally with data for the
scripts to read.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from jinja2.utils import htmlsafe_json_dumps
from markupsafe import escape

from ..domain.models import ResolvedAssetSet
from ..host.context import Host
from ..host.interfaces import ADMIN_ENQUEUE_HOOK, FRONTEND_ENQUEUE_HOOK
from ..infrastructure.exceptions import UnknownAssetError
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)

REGISTER_ACTION = "vite_manifest/assets/register"
TO_ENQUEUE_FILTER = "vite_manifest/assets/to_enqueue"
INLINE_SCRIPT_FILTER = "vite_manifest/inline_script"

InlineName = str | Sequence[str] | None
InlineData = Any  # value, or a zero-argument callable producing it


class AssetContainer:
    def __init__(self, host: Host, debug: bool = False):
        self.host = host
        self.debug = debug
        self.assets: dict[str, ResolvedAssetSet | None] = {}
        self.enqueued: set[str] = set()

    def register(self, name: str, asset: ResolvedAssetSet | None) -> AssetContainer:
        self.assets[name] = asset
        return self

    def is_registered(self, name: str) -> bool:
        return name in self.assets

    def frontend_enqueue(
        self, name: str, inline_js_var_name: InlineName = None, inline_js_data: InlineData = None
    ) -> None:
        self._enqueue_on(FRONTEND_ENQUEUE_HOOK, name, inline_js_var_name, inline_js_data)

    def admin_enqueue(
        self, name: str, inline_js_var_name: InlineName = None, inline_js_data: InlineData = None
    ) -> None:
        self._enqueue_on(ADMIN_ENQUEUE_HOOK, name, inline_js_var_name, inline_js_data)

    def _enqueue_on(
        self, phase: str, name: str, inline_js_var_name: InlineName, inline_js_data: InlineData
    ) -> None:
        if self.host.hooks.did_action(phase):
            self.enqueue(name, inline_js_var_name, inline_js_data)
            return

        pending = True

        def deferred(*_: Any) -> None:
            nonlocal pending
            if not pending:
                return
            pending = False
            self.enqueue(name, inline_js_var_name, inline_js_data)

        self.host.hooks.add_action(phase, deferred)

    def enqueue(
        self, name: str, inline_js_var_name: InlineName = None, inline_js_data: InlineData = None
    ) -> AssetContainer:
        hooks = self.host.hooks
        hooks.do_action(REGISTER_ACTION, self, name)

        if name not in self.assets:
            if self.debug:
                raise UnknownAssetError(name)
            logger.warning(f"Enqueueing unknown asset container {name}")

        assets = hooks.apply_filters(
            TO_ENQUEUE_FILTER, self.assets.get(name) or ResolvedAssetSet(), self, name
        )

        for handle in assets.scripts:
            hooks.do_action(f"{REGISTER_ACTION}/{handle}", self, name)

            if inline_js_var_name:
                self.inline_script(handle, inline_js_var_name, inline_js_data)

            self.host.scripts.enqueue(handle)

        if hooks.did_action(FRONTEND_ENQUEUE_HOOK) or hooks.did_action(ADMIN_ENQUEUE_HOOK):
            for handle in assets.styles:
                style = self.host.styles.get(handle)
                if style is None or handle in self.enqueued:
                    continue

                self.enqueued.add(handle)
                self.host.echo(
                    f"<link rel='stylesheet' href='{escape(style.url())}' "
                    f"type='text/css' media='{escape(style.args)}' />"
                )
            return self

        for handle in assets.styles:
            self.host.styles.enqueue(handle)

        return self

    def inline_script(self, handle: str, object_name: InlineName, data: InlineData = None) -> None:
        """
        Expose ``data`` to ``handle`` before it runs.

        ``object_name`` is either a variable name, producing ``const name = ...``,
        or a ``(namespace, key)`` pair, producing ``window.namespace['key'] = ...``.
        Callables are evaluated only now, after the filters have run.
        """
        hooks = self.host.hooks
        data = hooks.apply_filters(INLINE_SCRIPT_FILTER, data, object_name, handle)
        data = hooks.apply_filters(f"{INLINE_SCRIPT_FILTER}/{handle}", data, object_name)

        if callable(data):
            data = data()

        # HTML-significant characters are \u-escaped so a payload cannot end the block.
        payload = str(htmlsafe_json_dumps([] if data is None else data))
        scripts = self.host.scripts

        if isinstance(object_name, str):
            scripts.add_inline_script(handle, f"const {object_name} = {payload}", "before")
            return

        namespace, key = object_name
        scripts.add_inline_script(
            handle, f"window.{namespace} = window.{namespace} || {{}}", "before"
        )
        scripts.add_inline_script(handle, f"window.{namespace}[ '{key}' ] = {payload}", "before")
