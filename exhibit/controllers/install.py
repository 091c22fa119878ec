"""
Controller for the ``install`` route.

``GET`` renders the install form; ``POST`` runs the installer with the form
or JSON payload.
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.concurrency import run_in_threadpool

from exhibit.controllers.deps import get_services
from exhibit.install.installer import Installer
from exhibit.mvc.router import expand_segment_route
from exhibit.mvc.view import ViewRenderer

logger = logging.getLogger(__name__)

TEMPLATE = "install/index"


async def _payload(request: Request) -> Dict[str, Any]:
    """Read the submitted fields.

    :raises ValueError: when a JSON body cannot be decoded
    """
    if request.headers.get("content-type", "").startswith("application/json"):
        body = await request.json()
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return {key: form.get(key) for key in ("email", "name", "password")}


def _wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "") or request.headers.get(
        "content-type", ""
    ).startswith("application/json")


def _form_text(value) -> str:
    return value if isinstance(value, str) else ""


class InstallController:
    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.renderer = ViewRenderer(config.get("view_manager", {}))

    def router(self, route_template: str) -> APIRouter:
        router = APIRouter(tags=["install"])
        for path in expand_segment_route(route_template):
            router.add_api_route(path, self.index, methods=["GET"], response_class=HTMLResponse)
            router.add_api_route(path, self.install, methods=["POST"])
        return router

    def index(self, step: str = "index"):
        return HTMLResponse(self.renderer.render(TEMPLATE, step=step, errors=[], info=[], success=False))

    async def install(self, request: Request, step: str = "index", services=Depends(get_services)):
        try:
            data = await _payload(request)
        except ValueError as exc:
            logger.info("install: rejected malformed JSON body: %s", exc)
            message = services.get("MvcTranslator").translate("The request body is not valid JSON.")
            return self._report(request, step, {}, False, [message], [])

        installer = Installer(services)
        # Migrations and password hashing block; keep them off the event loop.
        success = await run_in_threadpool(installer.install, data)
        return self._report(request, step, data, success, installer.get_errors(), installer.get_info())

    def _report(self, request: Request, step: str, data: Dict[str, Any], success: bool,
                errors: List[str], info: List[str]):
        code = status.HTTP_200_OK if success else status.HTTP_400_BAD_REQUEST
        if _wants_json(request):
            return JSONResponse({"success": success, "errors": errors, "info": info}, status_code=code)
        html = self.renderer.render(
            TEMPLATE,
            step=step,
            errors=errors,
            info=info,
            success=success,
            email=_form_text(data.get("email")),
            name=_form_text(data.get("name")),
        )
        return HTMLResponse(html, status_code=code)
