from __future__ import annotations

from pathlib import Path

import pytest

from vite_manifest.application.assets import AssetRegistrar
from vite_manifest.application.binder import AssetBinder
from vite_manifest.application.container import AssetContainer
from vite_manifest.domain.schemas import ContainerSpec
from vite_manifest.host.context import Host, RequestContext
from vite_manifest.host.interfaces import ADMIN_ENQUEUE_HOOK, FRONTEND_ENQUEUE_HOOK
from vite_manifest.infrastructure.exceptions import ConfigurationError

MANIFEST = {
    "src/main.ts": {"file": "main.js", "css": ["main.css"]},
    "src/admin.ts": {"file": "admin.js"},
    "src/lazy.ts": {"file": "lazy.js"},
}

CONTAINERS = {
    "main": {"src": "src/main.ts", "handle": "app", "enqueue": True, "frontend_only": True},
    "admin": {"src": "src/admin.ts", "handle": "admin", "enqueue": True, "admin_only": True},
    "lazy": ContainerSpec(src="src/lazy.ts", handle="lazy", dependencies=["vendor"]),
}


def make_binder(manifest_dir: Path, loader, is_admin: bool, containers=None) -> AssetBinder:
    host = Host(request=RequestContext(is_admin=is_admin))
    binder = AssetBinder(
        containers or CONTAINERS,
        base_url="/dist",
        manifest_dir=manifest_dir,
        container=AssetContainer(host),
        registrar=AssetRegistrar(host, loader),
    )
    binder.hooks()
    return binder


@pytest.fixture
def dist(write_manifest) -> Path:
    return write_manifest(MANIFEST)


class TestAssetBinder:
    def test_nothing_happens_before_enqueue_phase(self, dist, loader):
        binder = make_binder(dist, loader, is_admin=False)

        assert binder.container.assets == {}

    def test_frontend_request(self, dist, loader):
        binder = make_binder(dist, loader, is_admin=False)
        host = binder.host

        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        assert set(binder.container.assets) == {"main", "admin", "lazy"}
        assert host.scripts.queue == ["app"]
        assert "href='/dist/main.css'" in host.output.getvalue()
        assert host.scripts.get("lazy").deps == ["vendor"]

    def test_admin_request(self, dist, loader):
        binder = make_binder(dist, loader, is_admin=True)
        host = binder.host

        host.hooks.do_action(ADMIN_ENQUEUE_HOOK)

        assert host.scripts.queue == ["admin"]
        assert host.output.getvalue() == ""

    def test_named_actions_enqueue_on_demand(self, dist, loader):
        binder = make_binder(dist, loader, is_admin=False)
        host = binder.host
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        host.hooks.do_action("vite/lazy")

        assert host.scripts.queue == ["app", "lazy"]

    def test_scoped_actions(self, dist, loader):
        binder = make_binder(dist, loader, is_admin=False)
        host = binder.host
        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        host.hooks.do_action("vite/admin/lazy")
        assert "lazy" not in host.scripts.queue

        host.hooks.do_action("vite/frontend/lazy")
        assert "lazy" in host.scripts.queue

    def test_missing_entry_does_not_break_page(self, dist, loader):
        containers = {"ghost": {"src": "src/ghost.ts", "handle": "ghost", "enqueue": True}}
        binder = make_binder(dist, loader, is_admin=False, containers=containers)

        binder.host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        assert binder.container.assets == {"ghost": None}
        assert binder.host.scripts.queue == []

    def test_development_mode(self, empty_dir, loader):
        binder = make_binder(empty_dir, loader, is_admin=False)
        host = binder.host

        host.hooks.do_action(FRONTEND_ENQUEUE_HOOK)

        html = host.scripts.print_items()
        assert html.startswith("<script type=\"module\" src='http://localhost:5173/@vite/client'")
        assert "src='http://localhost:5173/src/main.ts'" in html

    def test_invalid_container_config(self, dist, loader):
        containers = {
            "both": {"src": "src/main.ts", "handle": "app", "admin_only": True, "frontend_only": True}
        }

        with pytest.raises(ConfigurationError) as exc_info:
            make_binder(dist, loader, is_admin=False, containers=containers)

        assert exc_info.value.config_key == "both"
        assert exc_info.value.details["errors"]
