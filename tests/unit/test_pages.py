import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from exhibit.controllers.deps import resolve_identity_from_headers
from exhibit.db.database import get_db
from exhibit.db.models import User
from exhibit.main import app, create_app


@pytest.fixture
def install_db(client, tmp_path):
    """Point the app at an empty database file so the installer can migrate it."""
    # The installer runs in a worker thread.
    engine = create_engine(f"sqlite:///{tmp_path / 'install.db'}", connect_args={"check_same_thread": False})
    sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def _override_get_db():
        session = sessions()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    yield sessions
    engine.dispose()


def test_unknown_page_renders_not_found_template(client):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.headers["content-type"].startswith("text/html")
    assert "<code>/nowhere</code>" in r.text
    assert "Not Found" in r.text


def test_unknown_page_as_json(client):
    r = client.get("/nowhere", headers={"accept": "application/json"})
    assert r.status_code == 404
    assert r.json() == {"detail": "Not Found"}


def test_api_method_errors_are_json(client):
    r = client.post("/api/items/1", json={})
    assert r.status_code == 405
    assert r.headers["content-type"].startswith("application/json")


def test_install_form_renders(client):
    for path in ("/install", "/install/user"):
        r = client.get(path)
        assert r.status_code == 200
        assert '<form method="post">' in r.text
        assert 'name="password"' in r.text


def test_install_with_json_payload(client, install_db):
    r = client.post("/install", json={"email": "root@example.com", "name": "Root", "password": "secret123"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["errors"] == []
    assert "Installed the database schema." in body["info"]

    session = install_db()
    try:
        assert session.query(User).one().role == "global_admin"
    finally:
        session.close()


def test_install_with_form_payload_reports_errors(client, install_db):
    r = client.post("/install", data={"email": "not-an-email", "name": "Root", "password": "secret123"})
    assert r.status_code == 400
    assert r.headers["content-type"].startswith("text/html")
    assert "A valid email address is required." in r.text
    # Entered values are kept in the form.
    assert 'value="not-an-email"' in r.text


def test_install_rejects_malformed_json_body(client, install_db):
    r = client.post("/install", content=b'{"email": ', headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "errors": ["The request body is not valid JSON."], "info": []}


def test_install_reports_non_string_fields(client, install_db):
    r = client.post("/install", json={"email": 5, "name": [], "password": 123456789})
    assert r.status_code == 400
    errors = r.json()["errors"]
    assert "A valid email address is required." in errors
    assert "The name cannot be empty." in errors
    assert "The password must be at least 6 characters long." in errors

    session = install_db()
    try:
        assert session.query(User).count() == 0
    finally:
        session.close()


def test_install_form_success_page(client, install_db):
    r = client.post("/install/user", data={"email": "root@example.com", "name": "Root", "password": "secret123"})
    assert r.status_code == 200
    assert "Installation complete." in r.text


def test_unhandled_errors_render_exception_template():
    app = create_app()
    router = APIRouter()

    @router.get("/boom")
    def boom():
        raise RuntimeError("kaput")

    @router.get("/api/debug/boom/now")
    def api_boom():
        raise RuntimeError("kaput")

    app.include_router(router)
    client = TestClient(app, raise_server_exceptions=False)

    r = client.get("/boom")
    assert r.status_code == 500
    assert "RuntimeError: kaput" in r.text

    r = client.get("/api/debug/boom/now")
    assert r.status_code == 500
    assert r.json() == {"errors": {"internal": ["RuntimeError: kaput"]}}


def test_identity_headers():
    assert resolve_identity_from_headers(" Me@Example.com ", None) == "me@example.com"
    assert resolve_identity_from_headers(None, "fwd@example.com") == "fwd@example.com"
    assert resolve_identity_from_headers("", None) is None
