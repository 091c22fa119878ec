"""
Exception handlers.

``/api`` paths and JSON clients get JSON bodies; everything else renders the
``view_manager`` not-found and exception templates.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exhibit.mvc.view import ViewRenderer

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _wants_json(request: Request) -> bool:
    if request.url.path == API_PREFIX or request.url.path.startswith(API_PREFIX + "/"):
        return True
    return "application/json" in request.headers.get("accept", "")


def install_exception_handlers(app: FastAPI, view_manager: Dict[str, Any]) -> None:
    renderer = ViewRenderer(view_manager)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if _wants_json(request):
            return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)
        if exc.status_code != status.HTTP_404_NOT_FOUND:
            return HTMLResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)
        reason = exc.detail if view_manager.get("display_not_found_reason") else None
        html = renderer.render(
            view_manager.get("not_found_template", "error/404"),
            path=request.url.path,
            reason=reason,
        )
        return HTMLResponse(html, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error: path=%s", request.url.path)
        message = f"{type(exc).__name__}: {exc}" if view_manager.get("display_exceptions") else None
        if _wants_json(request):
            body = {"errors": {"internal": [message or "An internal error occurred."]}}
            return JSONResponse(body, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        html = renderer.render(
            view_manager.get("exception_template", "error/index"),
            message=message,
        )
        return HTMLResponse(html, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
