"""
Module configuration.

Assembles the service, routing, view, API and persistence configuration as a
nested dict sourced from the environment. Typed sections are parsed with
pydantic so consumers get validated values.
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel
from sqlalchemy.engine import URL

PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent

# Maps the configured driver names onto SQLAlchemy dialect+DBAPI names.
_DRIVERS = {
    "pdo_mysql": "mysql+pymysql",
    "pdo_pgsql": "postgresql+psycopg2",
    "pdo_sqlite": "sqlite",
}


class ConnectionSettings(BaseModel):
    user: Optional[str] = None
    password: Optional[str] = None
    dbname: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    unix_socket: Optional[str] = None
    charset: Optional[str] = None
    driver: str = "pdo_mysql"

    def to_url(self) -> URL:
        """Build the SQLAlchemy URL for this connection."""
        if self.driver not in _DRIVERS:
            raise ValueError(f"Unsupported database driver '{self.driver}'. Allowed: {sorted(_DRIVERS)}")
        drivername = _DRIVERS[self.driver]
        if drivername == "sqlite":
            return URL.create(drivername, database=self.dbname)
        query: Dict[str, str] = {}
        if self.charset:
            query["charset"] = self.charset
        if self.unix_socket:
            query["unix_socket"] = self.unix_socket
        return URL.create(
            drivername,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.dbname,
            query=query,
        )


class LoggerSettings(BaseModel):
    log: bool = False
    path: Path


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _build_config() -> Dict[str, Any]:
    log_dir = Path(os.getenv("EXHIBIT_LOG_DIR", str(PROJECT_ROOT / "data" / "logs")))
    return {
        "service_manager": {
            "factories": {
                "EntityManager": "exhibit.db.database.entity_manager_factory",
                "ApiManager": "exhibit.api.manager.api_manager_factory",
                "Logger": "exhibit.utils.loggers.logger_factory",
                "ApiAdapterManager": "exhibit.api.adapter_manager.adapter_manager_factory",
                "Acl": "exhibit.acl.acl_factory",
                "EventManager": "exhibit.event.event_manager_factory",
                "Paginator": "exhibit.stdlib.paginator.paginator_factory",
                "ViewHelperManager": "exhibit.mvc.view_helpers.view_helper_manager_factory",
                "MvcTranslator": "exhibit.i18n.translator_factory",
            },
            # Built anew on every lookup.
            "shared": {
                "Paginator": False,
            },
        },
        "router": {
            "routes": {
                "api": {
                    "type": "segment",
                    "options": {
                        "route": "/api/:resource[/:id]",
                        "defaults": {"controller": "Exhibit\\Controller\\Api"},
                    },
                },
                "install": {
                    "type": "segment",
                    "options": {
                        "route": "/install[/:step]",
                        "defaults": {
                            "controller": "Exhibit\\Controller\\Install",
                            "action": "index",
                        },
                    },
                },
            },
        },
        "controllers": {
            "invokables": {
                "Exhibit\\Controller\\Api": "exhibit.controllers.api.ApiController",
                "Exhibit\\Controller\\Install": "exhibit.controllers.install.InstallController",
            },
        },
        "view_manager": {
            "display_not_found_reason": True,
            "display_exceptions": _normalize_bool(os.getenv("EXHIBIT_DISPLAY_EXCEPTIONS"), True),
            "doctype": "HTML5",
            "not_found_template": "error/404",
            "exception_template": "error/index",
            "template_path_stack": [str(PACKAGE_ROOT / "view")],
        },
        "api_manager": {
            "resources": {
                "users": {"adapter_class": "exhibit.api.adapters.users.UserAdapter"},
                "vocabularies": {"adapter_class": "exhibit.api.adapters.vocabularies.VocabularyAdapter"},
                "resource_classes": {"adapter_class": "exhibit.api.adapters.resource_classes.ResourceClassAdapter"},
                "items": {"adapter_class": "exhibit.api.adapters.items.ItemAdapter"},
                "jobs": {"adapter_class": "exhibit.api.adapters.jobs.JobAdapter"},
            },
        },
        "entity_manager": {
            "conn": {
                "user": os.getenv("EXHIBIT_DB_USER"),
                "password": os.getenv("EXHIBIT_DB_PASSWORD"),
                "dbname": os.getenv("EXHIBIT_DB_NAME"),
                "host": os.getenv("EXHIBIT_DB_HOST"),
                "port": _env_int("EXHIBIT_DB_PORT"),
                "unix_socket": os.getenv("EXHIBIT_DB_UNIX_SOCKET"),
                "charset": os.getenv("EXHIBIT_DB_CHARSET"),
                "driver": os.getenv("EXHIBIT_DB_DRIVER", "pdo_mysql"),
            },
            "url": os.getenv("DATABASE_URL"),
            "is_dev_mode": _normalize_bool(os.getenv("EXHIBIT_DEV_MODE"), False),
        },
        "loggers": {
            "application": {
                "log": _normalize_bool(os.getenv("EXHIBIT_LOG_APPLICATION"), False),
                "path": str(log_dir / "application.log"),
            },
            "sql": {
                "log": _normalize_bool(os.getenv("EXHIBIT_LOG_SQL"), False),
                "path": str(log_dir / "sql.log"),
            },
        },
        "install": {
            "tasks": [
                "exhibit.install.tasks.ConnectionTask",
                "exhibit.install.tasks.SchemaTask",
                "exhibit.install.tasks.UserOneTask",
            ],
            "alembic_ini": os.getenv("EXHIBIT_ALEMBIC_INI", str(PROJECT_ROOT / "alembic.ini")),
        },
        "pagination": {
            "per_page": _env_int("EXHIBIT_PER_PAGE") or 25,
        },
        "translator": {
            "locale": os.getenv("EXHIBIT_LOCALE", "en_US"),
            "directory": str(PACKAGE_ROOT / "language"),
        },
        "app": {
            "base_url": os.getenv("APP_BASE_URL"),
        },
    }


@lru_cache(maxsize=None)
def get_config() -> Dict[str, Any]:
    """Return the cached module configuration."""
    return _build_config()


def refresh_config_cache() -> None:
    """Invalidate the cached configuration (useful for tests)."""
    get_config.cache_clear()


def connection_settings(config: Dict[str, Any]) -> ConnectionSettings:
    return ConnectionSettings(**config["entity_manager"]["conn"])


def logger_settings(config: Dict[str, Any], name: str) -> LoggerSettings:
    return LoggerSettings(**config["loggers"][name])
