"""
View helpers available to adapters and representations.

Only the ``Url`` helper is registered by default; it assembles configured
segment routes and, with ``force_canonical``, prefixes the base URL.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from exhibit.mvc.router import assemble_route
from exhibit.services import ServiceNotFoundError
from exhibit.utils.urls import get_app_base_url


class UrlHelper:
    def __init__(self, routes: Mapping[str, Any], base_url: str):
        self.routes = routes
        self.base_url = base_url

    def __call__(
        self,
        route_name: str,
        params: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        route = self.routes.get(route_name)
        if route is None:
            raise ServiceNotFoundError(f"Route '{route_name}' is not configured")
        template = route["options"]["route"]
        defaults = {k: v for k, v in route["options"].get("defaults", {}).items() if k not in ("controller", "action")}
        path = assemble_route(template, {**defaults, **dict(params or {})})
        if (options or {}).get("force_canonical"):
            return f"{self.base_url}{path}"
        return path


class ViewHelperManager:
    def __init__(self, helpers: Optional[Dict[str, Any]] = None):
        self._helpers: Dict[str, Any] = dict(helpers or {})

    def set(self, name: str, helper: Callable) -> None:
        self._helpers[name] = helper

    def has(self, name: str) -> bool:
        return name in self._helpers

    def get(self, name: str):
        if name not in self._helpers:
            raise ServiceNotFoundError(f"View helper '{name}' is not registered")
        return self._helpers[name]


def view_helper_manager_factory(services) -> ViewHelperManager:
    request = services.get("Request") if services.has("Request") else None
    base_url = get_app_base_url(
        services.config.get("app", {}).get("base_url"),
        str(request.base_url) if request is not None else None,
    )
    routes = services.config.get("router", {}).get("routes", {})
    return ViewHelperManager({"Url": UrlHelper(routes, base_url)})
