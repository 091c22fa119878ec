"""
API manager.

Entry point for every API call. ``execute`` validates the request, resolves
the adapter, checks the ACL, wraps the adapter call in events and turns
adapter exceptions into response statuses.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from exhibit.api import request as ops
from exhibit.api.exceptions import (
    ApiException,
    BadRequestException,
    InvalidArgumentException,
    InvalidRequestException,
    NotFoundException,
    PermissionDeniedException,
    ValidationException,
)
from exhibit.api.request import Request
from exhibit.api.response import Response
from exhibit.event import Event

logger = logging.getLogger(__name__)

# Adapter exception class -> response status, most specific first.
_STATUS_BY_EXCEPTION = (
    (ValidationException, Response.ERROR_VALIDATION),
    (NotFoundException, Response.ERROR_NOT_FOUND),
    (PermissionDeniedException, Response.ERROR_PERMISSION_DENIED),
    (BadRequestException, Response.ERROR_BAD_REQUEST),
    (InvalidRequestException, Response.ERROR_BAD_REQUEST),
    (InvalidArgumentException, Response.ERROR_BAD_REQUEST),
    (ApiException, Response.ERROR_INTERNAL),
)


class ApiManager:
    def __init__(self, services):
        self.services = services

    # Convenience wrappers -------------------------------------------------

    def search(self, resource: str, data: Optional[dict] = None) -> Response:
        return self.execute(Request(Request.SEARCH, resource, content=data or {}))

    def create(self, resource: str, data: Optional[dict] = None) -> Response:
        return self.execute(Request(Request.CREATE, resource, content=data or {}))

    def batch_create(self, resource: str, data: Optional[list] = None) -> Response:
        return self.execute(Request(Request.BATCH_CREATE, resource, content=data or []))

    def read(self, resource: str, id: Any, data: Optional[dict] = None) -> Response:
        return self.execute(Request(Request.READ, resource, id=id, content=data or {}))

    def update(self, resource: str, id: Any, data: Optional[dict] = None) -> Response:
        return self.execute(Request(Request.UPDATE, resource, id=id, content=data or {}))

    def delete(self, resource: str, id: Any, data: Optional[dict] = None) -> Response:
        return self.execute(Request(Request.DELETE, resource, id=id, content=data or {}))

    # Execution ------------------------------------------------------------

    def _log(self):
        return self.services.get("Logger")

    def _validate_request(self, request: Request) -> None:
        if not request.is_valid_operation():
            raise InvalidRequestException(f'The API does not support the "{request.operation}" operation.')
        if request.operation == ops.BATCH_CREATE and not isinstance(request.content, list):
            raise InvalidRequestException("The content of a batch_create request must be a list.")
        if request.operation in (ops.SEARCH, ops.CREATE, ops.READ, ops.UPDATE, ops.DELETE) and not isinstance(request.content, dict):
            raise InvalidRequestException(f'The content of a "{request.operation}" request must be an object.')
        if request.operation in ops.ID_OPERATIONS and request.id in (None, ""):
            raise InvalidRequestException(f'The "{request.operation}" operation requires an id.')

    def execute(self, request: Request) -> Response:
        t = self.services.get("MvcTranslator")
        try:
            self._validate_request(request)
            adapter = self.services.get("ApiAdapterManager").get(request.resource)

            acl = self.services.get("Acl")
            if not acl.user_is_allowed(adapter, request.operation):
                raise PermissionDeniedException(
                    t.translate('Permission denied for the current user to %s the %s resource.')
                    % (request.operation, adapter.get_resource_id())
                )

            events = self.services.get("EventManager")
            params = {"services": self.services, "request": request}
            events.trigger(Event(Event.API_EXECUTE_PRE, adapter, params))
            events.trigger(Event(f"api.{request.operation}.pre", adapter, params))

            response = getattr(adapter, request.operation)(request)
            if not isinstance(response, Response):
                raise ApiException(
                    t.translate('The "%s" operation for the "%s" adapter did not return a valid response.')
                    % (request.operation, request.resource)
                )
            response.request = request

            params = {"services": self.services, "request": request, "response": response}
            events.trigger(Event(f"api.{request.operation}.post", adapter, params))
            events.trigger(Event(Event.API_EXECUTE_POST, adapter, params))
            return response
        except ApiException as exc:
            return self._error_response(request, exc)
        except Exception:
            self._log().exception("api: unhandled error while executing %r", request)
            raise

    def _error_response(self, request: Request, exc: ApiException) -> Response:
        response = Response()
        response.request = request
        for exc_class, status in _STATUS_BY_EXCEPTION:
            if isinstance(exc, exc_class):
                response.set_status(status)
                break
        if isinstance(exc, ValidationException):
            response.merge_errors(exc.get_error_store())
        else:
            response.add_error(type(exc).__name__, str(exc))
        self._log().error("api: %s failed for %r: %s", type(exc).__name__, request, exc)
        return response


def api_manager_factory(services) -> ApiManager:
    return ApiManager(services)
