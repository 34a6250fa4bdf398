"""
Declarative binding of asset containers to host lifecycle hooks.

Example:
    >>> binder = AssetBinder(
    ...     {"main": {"src": "src/main.ts", "handle": "app", "enqueue": True}},
    ...     base_url="/dist",
    ...     manifest_dir="./dist",
    ...     container=container,
    ...     registrar=registrar,
    ... )
    >>> binder.hooks()
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..domain.schemas import ContainerSpec, ResolutionOptions
from ..host.interfaces import ADMIN_ENQUEUE_HOOK, FRONTEND_ENQUEUE_HOOK
from ..infrastructure.exceptions import ConfigurationError
from ..infrastructure.logging import LogContext, get_logger, log_operation
from .assets import AssetRegistrar
from .container import AssetContainer

logger = get_logger(__name__)


class AssetBinder:
    def __init__(
        self,
        assets: Mapping[str, ContainerSpec | Mapping[str, Any]],
        base_url: str,
        manifest_dir: str | Path,
        container: AssetContainer,
        registrar: AssetRegistrar,
    ):
        self.assets = {name: self._parse_spec(name, item) for name, item in assets.items()}
        self.base_url = base_url
        self.manifest_dir = manifest_dir
        self.container = container
        self.registrar = registrar

    @staticmethod
    def _parse_spec(name: str, item: ContainerSpec | Mapping[str, Any]) -> ContainerSpec:
        if isinstance(item, ContainerSpec):
            return item
        try:
            return ContainerSpec.model_validate(item)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid asset container {name}: {e.error_count()} validation error(s)",
                config_key=name,
                details={"errors": e.errors(include_url=False)},
            ) from e

    @property
    def host(self):
        return self.container.host

    def hooks(self) -> None:
        self.host.hooks.add_action(ADMIN_ENQUEUE_HOOK, self.register_assets)
        self.host.hooks.add_action(FRONTEND_ENQUEUE_HOOK, self.register_assets)

    @log_operation("register_assets")
    def register_assets(self, *_: Any) -> None:
        hooks = self.host.hooks
        is_admin = self.host.request.is_admin

        for name, item in self.assets.items():
            with LogContext(container=name):
                self.container.register(name, self.register(item))

                hooks.add_action(f"vite/{name}", self._enqueue_callback(self.container.enqueue, name))
                hooks.add_action(
                    f"vite/frontend/{name}",
                    self._enqueue_callback(self.container.frontend_enqueue, name),
                )
                hooks.add_action(
                    f"vite/admin/{name}", self._enqueue_callback(self.container.admin_enqueue, name)
                )

                if not item.enqueue:
                    continue
                if item.frontend_only and is_admin:
                    continue
                if item.admin_only and not is_admin:
                    continue

                logger.debug(f"Enqueueing container {name}")
                self.container.enqueue(name)

    def register(self, item: ContainerSpec):
        return self.registrar.register_asset(
            self.manifest_dir,
            item.src,
            ResolutionOptions(
                handle=item.handle,
                base_url=self.base_url,
                dependencies=list(item.dependencies),
            ),
        )

    @staticmethod
    def _enqueue_callback(enqueue, name: str):
        return lambda *_: enqueue(name)
