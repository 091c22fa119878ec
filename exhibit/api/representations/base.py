"""
Abstract representation.

A representation wraps the information an adapter produced and turns it
into JSON-LD. Service lookups (adapters, translator, view helpers) go
through the service locator and are cached on first use.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

from exhibit.stdlib.date_time import DateTime


def serialize(value: Any) -> Any:
    """Recursively convert representations and helpers to JSON-ready data."""
    json_serialize = getattr(value, "json_serialize", None)
    if callable(json_serialize):
        return serialize(json_serialize())
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    if isinstance(value, datetime):
        return DateTime(value).json_serialize()
    return value


class AbstractRepresentation:
    def __init__(self, services=None):
        self._data: Any = None
        self._services = services
        self._translator = None
        self._view_helper_manager = None

    def set_service_locator(self, services) -> None:
        self._services = services

    def get_service_locator(self):
        return self._services

    def set_data(self, data: Any) -> None:
        self.validate_data(data)
        self._data = data

    @property
    def data(self) -> Any:
        return self._data

    def validate_data(self, data: Any) -> None:
        """Raise InvalidArgumentException when ``data`` does not fit."""

    def get_adapter(self, resource_name: str):
        return self._services.get("ApiAdapterManager").get(resource_name)

    def get_date_time(self, value: datetime) -> DateTime:
        return DateTime(value)

    def get_translator(self):
        if self._translator is None:
            self._translator = self._services.get("MvcTranslator")
        return self._translator

    def get_view_helper(self, name: str):
        if self._view_helper_manager is None:
            self._view_helper_manager = self._services.get("ViewHelperManager")
        return self._view_helper_manager.get(name)

    def primary_media(self):
        """Media typifying this representation; none by default."""
        return None

    def json_serialize(self) -> Any:
        raise NotImplementedError
