from __future__ import annotations

import io
from dataclasses import dataclass, field

from .dependencies import ScriptRegistry, StyleRegistry
from .hooks import HookRegistry
from .interfaces import ADMIN_ENQUEUE_HOOK, FRONTEND_ENQUEUE_HOOK


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Request-phase facts the asset pipeline needs from the host."""

    is_admin: bool = False
    site_url: str = "http://localhost"
    path: str = "/"

    @classmethod
    def for_path(cls, path: str, site_url: str, admin_prefix: str = "/admin") -> RequestContext:
        is_admin = path == admin_prefix or path.startswith(f"{admin_prefix.rstrip('/')}/")
        return cls(is_admin=is_admin, site_url=site_url.rstrip("/"), path=path)


@dataclass
class Host:
    """
    One response's worth of host state: hooks, registries, request facts and
    the output buffer that directly printed tags land in.
    """

    request: RequestContext = field(default_factory=RequestContext)
    hooks: HookRegistry = field(default_factory=HookRegistry)
    output: io.StringIO = field(default_factory=io.StringIO)
    scripts: ScriptRegistry = field(init=False)
    styles: StyleRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.scripts = ScriptRegistry(self.hooks)
        self.styles = StyleRegistry()

    def echo(self, html: str) -> None:
        self.output.write(html)

    def enqueue_phase(self) -> str:
        return ADMIN_ENQUEUE_HOOK if self.request.is_admin else FRONTEND_ENQUEUE_HOOK

    def render_head(self) -> str:
        """Fire the enqueue phase and return everything destined for ``<head>``."""
        self.hooks.do_action(self.enqueue_phase())
        return self.output.getvalue() + self.styles.print_items() + self.scripts.print_head_scripts()

    def render_footer(self) -> str:
        return self.scripts.print_footer_scripts()
