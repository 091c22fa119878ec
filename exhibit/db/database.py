"""
Database engine and session management.

Builds the SQLAlchemy engine from the ``entity_manager`` configuration with a
test fallback (SQLite in-memory) and exposes the FastAPI session dependency
plus the ``EntityManager`` service factory.
"""
import logging
import os
import sqlite3
import sys

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from exhibit.config import connection_settings, get_config

logger = logging.getLogger(__name__)


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so module import during collection is detected through ``sys.modules``.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def get_database_url(config=None) -> str:
    """Return the configured database URL.

    Precedence:
    1. ``EXHIBIT_TEST_DB`` (explicit test database)
    2. in-memory SQLite when running under pytest
    3. ``DATABASE_URL``
    4. the URL assembled from ``entity_manager.conn``
    """
    config = config or get_config()
    explicit_test_db = os.getenv("EXHIBIT_TEST_DB")
    if explicit_test_db:
        return explicit_test_db
    if _is_pytest_runtime():
        return "sqlite+pysqlite:///:memory:"
    if config["entity_manager"].get("url"):
        return config["entity_manager"]["url"]
    return connection_settings(config).to_url().render_as_string(hide_password=False)


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite") and ":memory:" in url:
        # StaticPool so the schema persists across connections
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE actions unless foreign keys are switched on.
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


DATABASE_URL = get_database_url()

engine = create_engine(
    DATABASE_URL,
    echo=bool(get_config()["entity_manager"].get("is_dev_mode")),
    **_engine_kwargs(DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def entity_manager_factory(services):
    """Build a standalone session when none was injected for the request."""
    logger.debug("entity_manager: opening standalone session")
    return SessionLocal()
