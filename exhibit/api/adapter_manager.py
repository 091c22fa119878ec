"""
Registry of API adapters keyed by resource name.

Adapter classes are configured under ``api_manager.resources``; each lookup
returns a fresh adapter bound to the resource name and service manager.
"""
from __future__ import annotations

from typing import Dict, List

from exhibit.api.exceptions import NotFoundException
from exhibit.services import import_string


class AdapterManager:
    def __init__(self, services, resources: Dict[str, dict]):
        self.services = services
        self._resources = dict(resources)

    def registered_names(self) -> List[str]:
        return sorted(self._resources)

    def has(self, resource_name: str) -> bool:
        return resource_name in self._resources

    def get(self, resource_name: str):
        definition = self._resources.get(resource_name)
        if definition is None:
            raise NotFoundException(f'The API does not support the "{resource_name}" resource.')
        adapter_class = definition["adapter_class"]
        if isinstance(adapter_class, str):
            adapter_class = import_string(adapter_class)
        adapter = adapter_class()
        adapter.set_resource_name(resource_name)
        adapter.set_service_locator(self.services)
        return adapter


def adapter_manager_factory(services) -> AdapterManager:
    return AdapterManager(services, services.config.get("api_manager", {}).get("resources", {}))
