from __future__ import annotations

import pytest

from vite_manifest.application.container import AssetContainer
from vite_manifest.domain.models import ResolvedAssetSet
from vite_manifest.host.context import Host, RequestContext
from vite_manifest.host.interfaces import ADMIN_ENQUEUE_HOOK, FRONTEND_ENQUEUE_HOOK
from vite_manifest.infrastructure.exceptions import UnknownAssetError

LINK = "<link rel='stylesheet' href='/dist/app.css' type='text/css' media='all' />"


@pytest.fixture
def registered(host: Host, container: AssetContainer) -> AssetContainer:
    host.scripts.register("app", "/dist/app.js")
    host.styles.register("app-0", "/dist/app.css")
    return container.register("main", ResolvedAssetSet(scripts=["app"], styles=["app-0"]))


class TestRegister:
    def test_register_replaces(self, container):
        container.register("main", ResolvedAssetSet(scripts=["a"]))
        container.register("main", ResolvedAssetSet(styles=["b"]))

        assert container.assets["main"] == ResolvedAssetSet(scripts=[], styles=["b"])

    def test_register_failed_resolution(self, container, host):
        container.register("broken", None)

        container.enqueue("broken")

        assert container.is_registered("broken")
        assert host.scripts.queue == []


class TestEnqueue:
    def test_unknown_name_raises_in_debug(self, host):
        container = AssetContainer(host, debug=True)

        with pytest.raises(UnknownAssetError) as exc_info:
            container.enqueue("nope")

        assert exc_info.value.name == "nope"

    def test_unknown_name_is_ignored_otherwise(self, host, container):
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        assert container.enqueue("nope") is container
        assert host.output.getvalue() == ""
        assert host.scripts.queue == []

    def test_outside_enqueue_phase_uses_host_queue(self, host, registered):
        registered.enqueue("main")

        assert host.scripts.is_enqueued("app")
        assert host.styles.is_enqueued("app-0")
        assert host.output.getvalue() == ""

    def test_inside_enqueue_phase_prints_links_once(self, host, registered):
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        registered.enqueue("main")
        registered.enqueue("main")

        assert host.output.getvalue() == LINK
        assert not host.styles.is_enqueued("app-0")
        assert host.scripts.is_enqueued("app")

    def test_admin_phase_prints_links(self, host, registered):
        host.hooks.do_action(ADMIN_ENQUEUE_HOOK)

        registered.enqueue("main")

        assert host.output.getvalue() == LINK

    def test_unregistered_style_handles_are_skipped(self, host, container):
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)
        container.register("main", ResolvedAssetSet(styles=["ghost"]))

        container.enqueue("main")

        assert host.output.getvalue() == ""

    def test_register_actions_fire(self, host, registered):
        seen = []
        host.hooks.add_action(
            "vite_manifest/assets/register", lambda container, name: seen.append(("all", name))
        )
        host.hooks.add_action(
            "vite_manifest/assets/register/app", lambda container, name: seen.append(("app", name))
        )

        registered.enqueue("main")

        assert seen == [("all", "main"), ("app", "main")]

    def test_to_enqueue_filter(self, host, registered):
        host.scripts.register("extra", "/dist/extra.js")
        host.hooks.add_filter(
            "vite_manifest/assets/to_enqueue",
            lambda assets, container, name: ResolvedAssetSet(
                scripts=[*assets.scripts, "extra"], styles=assets.styles
            ),
        )

        registered.enqueue("main")

        assert host.scripts.queue == ["app", "extra"]


class TestInlineData:
    def test_variable_name(self, host, registered):
        registered.enqueue("main", "appData", {"user": 1, "tags": ["a"]})

        assert host.scripts.get("app").before == ['const appData = {"user": 1, "tags": ["a"]}']

    def test_namespace_pair(self, host, registered):
        registered.enqueue("main", ("myApp", "config"), {"debug": False})

        assert host.scripts.get("app").before == [
            "window.myApp = window.myApp || {}",
            "window.myApp[ 'config' ] = {\"debug\": false}",
        ]

    def test_default_payload_is_empty_list(self, host, registered):
        registered.enqueue("main", "appData")

        assert host.scripts.get("app").before == ["const appData = []"]

    def test_inline_filters(self, host, registered):
        host.hooks.add_filter(
            "vite_manifest/inline_script", lambda data, name, handle: {**data, "handle": handle}
        )
        host.hooks.add_filter(
            "vite_manifest/inline_script/app", lambda data, name: {**data, "name": name}
        )

        registered.enqueue("main", "appData", {"a": 1})

        assert host.scripts.get("app").before == [
            'const appData = {"a": 1, "handle": "app", "name": "appData"}'
        ]

    def test_payload_cannot_close_script_block(self, host, registered):
        registered.enqueue("main", "appData", {"title": "</script><script>alert(1)</script>"})

        html = host.render_head()

        assert html.count("</script>") == 2
        assert host.scripts.get("app").before == [
            'const appData = {"title": "\\u003c/script\\u003e\\u003cscript\\u003e'
            'alert(1)\\u003c/script\\u003e"}'
        ]

    def test_inline_data_rendered_before_script(self, host, registered):
        registered.enqueue("main", "appData", {"a": 1})

        html = host.scripts.print_items()

        assert html.index("const appData") < html.index("src='/dist/app.js'")


class TestDeferredEnqueue:
    def test_frontend_enqueue_waits_for_phase(self, host, registered):
        calls = []

        def producer():
            calls.append(True)
            return {"ready": True}

        registered.frontend_enqueue("main", "boot", producer)

        assert not host.scripts.is_enqueued("app")
        assert calls == []

        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        assert host.scripts.is_enqueued("app")
        assert calls == [True]
        assert host.scripts.get("app").before == ['const boot = {"ready": true}']

    def test_deferred_enqueue_runs_once(self, host, registered):
        registered.frontend_enqueue("main", "boot", {"a": 1})

        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        assert len(host.scripts.get("app").before) == 1

    def test_frontend_enqueue_immediate_after_phase(self, host, registered):
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        registered.frontend_enqueue("main")

        assert host.scripts.is_enqueued("app")
        assert host.output.getvalue() == LINK

    def test_admin_enqueue_ignores_frontend_phase(self, registered):
        host = registered.host
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        registered.admin_enqueue("main")

        assert not host.scripts.is_enqueued("app")

        host.hooks.do_action(ADMIN_ENQUEUE_HOOK)

        assert host.scripts.is_enqueued("app")

    def test_deferred_calls_keep_order(self):
        host = Host(request=RequestContext(is_admin=True))
        container = AssetContainer(host)
        for handle in ("first", "second"):
            host.scripts.register(handle, f"/dist/{handle}.js")
            container.register(handle, ResolvedAssetSet(scripts=[handle]))

        container.admin_enqueue("second")
        container.admin_enqueue("first")
        host.hooks.do_action(ADMIN_ENQUEUE_HOOK)

        assert host.scripts.queue == ["second", "first"]
