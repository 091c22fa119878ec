import pytest

from exhibit.config import get_config
from exhibit.i18n import Translator
from exhibit.mvc.view import ViewRenderer
from exhibit.mvc.view_helpers import UrlHelper, ViewHelperManager
from exhibit.services import ServiceManager, ServiceNotFoundError
from exhibit.utils.urls import DEFAULT_BASE_URL, get_app_base_url

ROUTES = get_config()["router"]["routes"]


def test_translator_falls_back_to_source_messages(tmp_path):
    t = Translator(locale="fr_FR", directory=str(tmp_path))
    assert t.translate("The title cannot be empty.") == "The title cannot be empty."


def test_translator_service_is_shared():
    services = ServiceManager(get_config())
    assert services.get("MvcTranslator") is services.get("MvcTranslator")


def test_url_helper_assembles_routes():
    url = UrlHelper(ROUTES, "https://exhibit.example.org")
    assert url("api", {"resource": "items", "id": 7}) == "/api/items/7"
    assert url("api", {"resource": "items"}) == "/api/items"
    assert url("api", {"resource": "items", "id": 7}, {"force_canonical": True}) == (
        "https://exhibit.example.org/api/items/7"
    )
    assert url("install") == "/install"
    with pytest.raises(ServiceNotFoundError):
        url("admin")


def test_view_helper_manager_lookup():
    helpers = ViewHelperManager()
    assert not helpers.has("Url")
    helpers.set("Url", UrlHelper(ROUTES, DEFAULT_BASE_URL))
    assert helpers.has("Url")
    with pytest.raises(ServiceNotFoundError):
        helpers.get("Escape")


def test_view_helper_manager_uses_configured_base_url(monkeypatch):
    config = get_config()
    monkeypatch.setitem(config["app"], "base_url", "https://collections.example.org/")
    helper = ServiceManager(config).get("ViewHelperManager").get("Url")
    assert helper("api", {"resource": "users", "id": 1}, {"force_canonical": True}) == (
        "https://collections.example.org/api/users/1"
    )


def test_base_url_precedence(monkeypatch):
    monkeypatch.delenv("APP_HOST", raising=False)
    assert get_app_base_url(" https://a.example.org/ ", "http://testserver/") == "https://a.example.org"
    assert get_app_base_url(None, "http://testserver/") == "http://testserver"
    assert get_app_base_url() == DEFAULT_BASE_URL
    monkeypatch.setenv("APP_HOST", "localhost:9000")
    assert get_app_base_url() == "http://localhost:9000"
    monkeypatch.setenv("APP_HOST", "exhibit.example.org")
    assert get_app_base_url() == "https://exhibit.example.org"


def test_view_renderer_escapes_context():
    renderer = ViewRenderer(get_config()["view_manager"])
    html = renderer.render("error/404", path="/<script>", reason=None)
    assert "&lt;script&gt;" in html
    assert "<script>" not in html
    assert html.lstrip().lower().startswith("<!doctype html>")
