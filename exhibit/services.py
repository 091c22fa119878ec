"""
Service locator.

Factories are configured by dotted path under ``service_manager.factories``;
each takes the manager and returns the service. Instances are shared for the
lifetime of the manager unless marked unshared under
``service_manager.shared``. Per-request values (database session, current
user) are injected with ``set_service``.
"""
from __future__ import annotations

import importlib
from typing import Any, Callable, Dict, Optional

from exhibit.config import get_config


class ServiceNotFoundError(LookupError):
    """Raised when a requested service is neither registered nor buildable."""


def import_string(dotted_path: str) -> Any:
    """Import a dotted ``module.attribute`` path and return the attribute."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ImportError(f"'{dotted_path}' is not a dotted module path")
    module = importlib.import_module(module_path)
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ImportError(f"Module '{module_path}' has no attribute '{attr}'") from exc


class ServiceManager:
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else get_config()
        self._instances: Dict[str, Any] = {}
        self._factories: Dict[str, Any] = dict(
            self.config.get("service_manager", {}).get("factories", {})
        )
        self._shared: Dict[str, bool] = dict(self.config.get("service_manager", {}).get("shared", {}))

    def set_service(self, name: str, instance: Any) -> None:
        self._instances[name] = instance

    def set_factory(self, name: str, factory: Callable[["ServiceManager"], Any] | str) -> None:
        self._factories[name] = factory
        self._instances.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._instances or name in self._factories

    def get(self, name: str) -> Any:
        if name in self._instances:
            return self._instances[name]
        factory = self._factories.get(name)
        if factory is None:
            raise ServiceNotFoundError(f"Service '{name}' is not registered")
        if isinstance(factory, str):
            factory = import_string(factory)
        instance = factory(self)
        if self._shared.get(name, True):
            self._instances[name] = instance
        return instance
