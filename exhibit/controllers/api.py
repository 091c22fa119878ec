"""
RESTful controller for the ``api`` route.

Maps HTTP verbs onto API manager operations and API response statuses onto
HTTP status codes.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from exhibit.api.representations.base import serialize
from exhibit.api.request import Request as ApiRequest
from exhibit.api.response import Response as ApiResponse
from exhibit.controllers.deps import get_services
from exhibit.mvc.router import expand_segment_route

logger = logging.getLogger(__name__)

TOTAL_RESULTS_HEADER = "X-Total-Results"

HTTP_STATUS = {
    ApiResponse.SUCCESS: status.HTTP_200_OK,
    ApiResponse.ERROR_VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ApiResponse.ERROR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ApiResponse.ERROR_PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ApiResponse.ERROR_BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ApiResponse.ERROR_INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ApiResponse.ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_response(response: ApiResponse, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    if response.is_error():
        return JSONResponse(
            {"errors": response.get_errors()},
            status_code=HTTP_STATUS.get(response.get_status(), status.HTTP_500_INTERNAL_SERVER_ERROR),
        )
    headers = {}
    if response.get_total_results() is not None:
        headers[TOTAL_RESULTS_HEADER] = str(response.get_total_results())
    return JSONResponse(serialize(response.get_content()), status_code=success_status, headers=headers)


class ApiController:
    def __init__(self, config: Dict[str, Any]):
        self.config = config

    def router(self, route_template: str) -> APIRouter:
        """Build the router serving every path the route template covers."""
        router = APIRouter(tags=["api"])
        for path in expand_segment_route(route_template):
            if "{id}" in path:
                router.add_api_route(path, self.read, methods=["GET"])
                router.add_api_route(path, self.update, methods=["PUT", "PATCH"])
                router.add_api_route(path, self.delete, methods=["DELETE"])
            else:
                router.add_api_route(path, self.search, methods=["GET"])
                router.add_api_route(path, self.create, methods=["POST"])
        return router

    @staticmethod
    def _execute(services, request: ApiRequest, success_status: int = status.HTTP_200_OK) -> JSONResponse:
        response = services.get("ApiManager").execute(request)
        logger.debug("api_request: %r status=%s", request, response.get_status())
        return to_http_response(response, success_status)

    def search(self, resource: str, request: Request, services=Depends(get_services)):
        query = dict(request.query_params)
        return self._execute(services, ApiRequest(ApiRequest.SEARCH, resource, content=query))

    def create(self, resource: str, payload: Any = Body(default=None), services=Depends(get_services)):
        if isinstance(payload, list):
            api_request = ApiRequest(ApiRequest.BATCH_CREATE, resource, content=payload)
        else:
            api_request = ApiRequest(ApiRequest.CREATE, resource, content=payload if payload is not None else {})
        return self._execute(services, api_request, status.HTTP_201_CREATED)

    def read(self, resource: str, id: str, services=Depends(get_services)):
        return self._execute(services, ApiRequest(ApiRequest.READ, resource, id=id, content={}))

    def update(self, resource: str, id: str, payload: Any = Body(default=None), services=Depends(get_services)):
        content = payload if payload is not None else {}
        return self._execute(services, ApiRequest(ApiRequest.UPDATE, resource, id=id, content=content))

    def delete(self, resource: str, id: str, services=Depends(get_services)):
        return self._execute(services, ApiRequest(ApiRequest.DELETE, resource, id=id, content={}))
