"""
FastAPI app assembly: logging, configured routes and exception handlers.
"""
import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI

from exhibit import __version__
from exhibit.config import get_config
from exhibit.controllers.errors import install_exception_handlers
from exhibit.event import EventManager
from exhibit.services import import_string
from exhibit.utils.loggers import configure_application_logger, configure_sql_logger

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)


def _mount_routes(app: FastAPI, config: Dict[str, Any]) -> None:
    invokables = config.get("controllers", {}).get("invokables", {})
    for name, route in config.get("router", {}).get("routes", {}).items():
        options = route["options"]
        controller_name = options.get("defaults", {}).get("controller")
        if controller_name not in invokables:
            raise ValueError(f"Route '{name}' names unknown controller '{controller_name}'")
        controller = import_string(invokables[controller_name])(config)
        app.include_router(controller.router(options["route"]))
        logger.debug("route_mounted: %s -> %s", name, controller_name)


def create_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    config = config if config is not None else get_config()
    app = FastAPI(
        title="Exhibit",
        description="API for curating collections of items, vocabularies and resource classes.",
        version=__version__,
    )
    # Avoid implicit trailing-slash redirects for predictable URLs
    app.router.redirect_slashes = False

    configure_application_logger(config)
    configure_sql_logger(config)

    app.state.config = config
    app.state.event_manager = EventManager()

    _mount_routes(app, config)
    install_exception_handlers(app, config.get("view_manager", {}))
    logger.info("app_startup: log_level=%s routes=%s", LOG_LEVEL_NAME, sorted(config["router"]["routes"]))
    return app


app = create_app()
