"""
Abstract API adapter.

Binds an adapter to its resource name and the service locator. Every
operation defaults to raising OperationNotImplementedException so concrete
adapters only override what their resource supports.
"""
from __future__ import annotations

from typing import Any, Optional, Type

from exhibit.api.exceptions import InvalidArgumentException, OperationNotImplementedException
from exhibit.api.request import Request
from exhibit.api.response import Response


class AbstractAdapter:
    #: Representation class wrapping the adapter's data.
    representation_class: Optional[Type] = None

    def __init__(self):
        self._resource_name: Optional[str] = None
        self._services = None

    # Wiring --------------------------------------------------------------

    def set_resource_name(self, name: str) -> None:
        self._resource_name = name

    def get_resource_name(self) -> Optional[str]:
        return self._resource_name

    def set_service_locator(self, services) -> None:
        self._services = services

    def get_service_locator(self):
        return self._services

    def get_event_manager(self):
        return self._services.get("EventManager")

    def get_translator(self):
        return self._services.get("MvcTranslator")

    def get_acl(self):
        return self._services.get("Acl")

    def get_resource_id(self) -> str:
        """Return the ACL resource identifier for this adapter."""
        return type(self).__name__

    # Operations ----------------------------------------------------------

    def _not_implemented(self, operation: str):
        t = self.get_translator()
        return OperationNotImplementedException(
            t.translate('The %s adapter does not implement the %s operation.')
            % (type(self).__name__, operation)
        )

    def search(self, request: Request) -> Response:
        raise self._not_implemented(Request.SEARCH)

    def create(self, request: Request) -> Response:
        raise self._not_implemented(Request.CREATE)

    def batch_create(self, request: Request) -> Response:
        raise self._not_implemented(Request.BATCH_CREATE)

    def read(self, request: Request) -> Response:
        raise self._not_implemented(Request.READ)

    def update(self, request: Request) -> Response:
        raise self._not_implemented(Request.UPDATE)

    def delete(self, request: Request) -> Response:
        raise self._not_implemented(Request.DELETE)

    def get_api_url(self, data: Any) -> str:
        raise self._not_implemented("get_api_url")

    # Representations -----------------------------------------------------

    def get_representation(self, id: Any, data: Any):
        if self.representation_class is None:
            raise InvalidArgumentException(
                self.get_translator().translate('The %s adapter has no representation class.')
                % type(self).__name__
            )
        return self.representation_class(id, data, self)
