import pytest


def _h(email):
    return {"x-auth-request-email": email}


DCTERMS = {"o:namespace_uri": "http://purl.org/dc/terms/", "o:prefix": "dcterms", "o:label": "Dublin Core"}


@pytest.fixture
def editor(make_user):
    return make_user("editor@example.com", role="editor")


def _create_vocabulary(client, data=None):
    r = client.post("/api/vocabularies", json=data or DCTERMS, headers=_h("editor@example.com"))
    assert r.status_code == 201, r.text
    return r.json()


def test_editor_creates_vocabulary(client, editor):
    body = _create_vocabulary(client)
    assert body["@type"] == "o:Vocabulary"
    assert body["o:prefix"] == "dcterms"
    assert body["o:owner"] == {"@id": f"http://testserver/api/users/{editor.id}", "o:id": editor.id}


def test_vocabulary_uniqueness_and_required_fields(client, editor):
    _create_vocabulary(client)
    r = client.post("/api/vocabularies", json=DCTERMS, headers=_h("editor@example.com"))
    assert r.status_code == 422
    assert set(r.json()["errors"]) == {"o:namespace_uri", "o:prefix"}

    r = client.post("/api/vocabularies", json={}, headers=_h("editor@example.com"))
    assert r.status_code == 422
    assert set(r.json()["errors"]) == {"o:namespace_uri", "o:prefix", "o:label"}


def test_researchers_cannot_create_vocabularies_but_guests_can_read(client, make_user, editor):
    make_user("researcher@example.com")
    r = client.post("/api/vocabularies", json=DCTERMS, headers=_h("researcher@example.com"))
    assert r.status_code == 403

    vocab = _create_vocabulary(client)
    r = client.get(f"/api/vocabularies/{vocab['o:id']}")
    assert r.status_code == 200
    r = client.get("/api/vocabularies", params={"prefix": "dcterms"})
    assert [v["o:id"] for v in r.json()] == [vocab["o:id"]]


def test_resource_class_lifecycle(client, editor):
    vocab = _create_vocabulary(client)
    r = client.post(
        "/api/resource_classes",
        json={"o:vocabulary": {"o:id": vocab["o:id"]}, "o:local_name": "Agent", "o:label": "Agent"},
        headers=_h("editor@example.com"),
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["o:term"] == "dcterms:Agent"
    assert body["o:vocabulary"]["o:id"] == vocab["o:id"]

    r = client.post(
        "/api/resource_classes",
        json={"o:vocabulary": {"o:id": vocab["o:id"]}, "o:local_name": "Agent", "o:label": "Again"},
        headers=_h("editor@example.com"),
    )
    assert r.status_code == 422
    assert "o:local_name" in r.json()["errors"]


def test_resource_class_requires_existing_vocabulary(client, editor):
    r = client.post(
        "/api/resource_classes",
        json={"o:vocabulary": {"o:id": 404}, "o:local_name": "Agent", "o:label": "Agent"},
        headers=_h("editor@example.com"),
    )
    assert r.status_code == 422
    assert r.json()["errors"]["o:vocabulary"] == ["The vocabulary 404 does not exist."]

    r = client.post(
        "/api/resource_classes",
        json={"o:local_name": "Agent", "o:label": "Agent"},
        headers=_h("editor@example.com"),
    )
    assert r.json()["errors"]["o:vocabulary"] == ["A vocabulary is required."]


def test_resource_class_search_by_vocabulary_and_term(client, editor):
    dcterms = _create_vocabulary(client)
    foaf = _create_vocabulary(
        client, {"o:namespace_uri": "http://xmlns.com/foaf/0.1/", "o:prefix": "foaf", "o:label": "FOAF"}
    )
    for vocab, name in ((dcterms, "Agent"), (dcterms, "Collection"), (foaf, "Agent")):
        client.post(
            "/api/resource_classes",
            json={"o:vocabulary": {"o:id": vocab["o:id"]}, "o:local_name": name, "o:label": name},
            headers=_h("editor@example.com"),
        )

    r = client.get("/api/resource_classes", params={"vocabulary_prefix": "dcterms"})
    assert [c["o:term"] for c in r.json()] == ["dcterms:Agent", "dcterms:Collection"]

    r = client.get("/api/resource_classes", params={"term": "foaf:Agent"})
    assert [c["o:term"] for c in r.json()] == ["foaf:Agent"]

    r = client.get(
        "/api/resource_classes",
        params={"vocabulary_namespace_uri": "http://purl.org/dc/terms/", "local_name": "Agent"},
    )
    assert [c["o:term"] for c in r.json()] == ["dcterms:Agent"]

    r = client.get("/api/resource_classes", params={"term": "no-colon"})
    assert r.json() == []
    assert r.headers["X-Total-Results"] == "0"


def test_deleting_vocabulary_removes_its_classes(client, editor):
    vocab = _create_vocabulary(client)
    r = client.post(
        "/api/resource_classes",
        json={"o:vocabulary": {"o:id": vocab["o:id"]}, "o:local_name": "Agent", "o:label": "Agent"},
        headers=_h("editor@example.com"),
    )
    class_id = r.json()["o:id"]

    r = client.delete(f"/api/vocabularies/{vocab['o:id']}", headers=_h("editor@example.com"))
    assert r.status_code == 200
    assert r.json()["o:prefix"] == "dcterms"
    assert client.get(f"/api/resource_classes/{class_id}").status_code == 404


def test_vocabulary_fields_must_be_strings(client, editor):
    r = client.post(
        "/api/vocabularies", json={**DCTERMS, "o:comment": {"en": "Terms"}}, headers=_h("editor@example.com")
    )
    assert r.status_code == 422
    assert r.json()["errors"] == {"o:comment": ['The "o:comment" value must be a string.']}

    r = client.post("/api/vocabularies", json={**DCTERMS, "o:prefix": 7}, headers=_h("editor@example.com"))
    assert r.status_code == 422
    assert 'The "o:prefix" value must be a string.' in r.json()["errors"]["o:prefix"]

    body = _create_vocabulary(client, {**DCTERMS, "o:comment": None})
    assert body["o:comment"] is None


def test_resource_class_fields_must_be_strings(client, editor):
    vocab = _create_vocabulary(client)
    r = client.post(
        "/api/resource_classes",
        json={"o:vocabulary": {"o:id": vocab["o:id"]}, "o:local_name": "Agent", "o:label": 1, "o:comment": []},
        headers=_h("editor@example.com"),
    )
    assert r.status_code == 422
    assert set(r.json()["errors"]) == {"o:label", "o:comment"}
