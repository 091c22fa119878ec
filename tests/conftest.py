import os

# Force the in-memory SQLite engine before the application modules import.
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.pop("EXHIBIT_TEST_DB", None)

import pytest
from fastapi.testclient import TestClient

from exhibit.config import get_config
from exhibit.db.database import SessionLocal, engine, get_db
from exhibit.db.models import Base, User
from exhibit.main import app
from exhibit.services import ServiceManager
from exhibit.utils.passwords import hash_password


@pytest.fixture(autouse=True)
def _schema():
    """Create a fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
        app.state.event_manager.clear_listeners()


@pytest.fixture
def make_user(db_session):
    def _make(email="user@example.com", role="researcher", name=None, is_active=True, password="secret123"):
        user = User(
            email=email,
            name=name or email.split("@")[0],
            role=role,
            is_active=is_active,
            password_hash=hash_password(password),
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def services_for(db_session):
    """Build a service manager acting as ``user`` (None for a guest)."""
    def _services(user=None):
        services = ServiceManager(get_config())
        services.set_service("EntityManager", db_session)
        services.set_service("CurrentUser", user)
        return services

    return _services