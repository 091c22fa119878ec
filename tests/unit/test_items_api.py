import pytest

from exhibit.db.models import ResourceClass, Vocabulary


def _h(email):
    return {"x-auth-request-email": email}


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com")


def _create(client, email, **data):
    r = client.post("/api/items", json=data, headers=_h(email))
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_read_item(client, owner):
    body = _create(client, "owner@example.com", **{"o:title": "Map of Paris"})
    assert body["@type"] == "o:Item"
    assert body["o:is_public"] is True
    assert body["o:owner"]["o:id"] == owner.id
    assert body["o:resource_class"] is None
    assert body["o:created"]["@type"] == "http://www.w3.org/2001/XMLSchema#dateTime"

    r = client.get(f"/api/items/{body['o:id']}")
    assert r.status_code == 200
    assert r.json()["o:title"] == "Map of Paris"


def test_item_with_resource_class_gets_its_term_as_type(client, owner, db_session):
    vocab = Vocabulary(namespace_uri="http://purl.org/dc/dcmitype/", prefix="dcmitype", label="DCMI Type")
    resource_class = ResourceClass(vocabulary=vocab, local_name="StillImage", label="Still Image")
    db_session.add_all([vocab, resource_class])
    db_session.commit()

    body = _create(
        client, "owner@example.com", **{"o:title": "Photo", "o:resource_class": {"o:id": resource_class.id}}
    )
    assert body["@type"] == ["o:Item", "dcmitype:StillImage"]
    assert body["o:resource_class"]["o:id"] == resource_class.id

    r = client.patch(f"/api/items/{body['o:id']}", json={"o:resource_class": None}, headers=_h("owner@example.com"))
    assert r.status_code == 200
    assert r.json()["@type"] == "o:Item"

    r = client.patch(
        f"/api/items/{body['o:id']}", json={"o:resource_class": {"o:id": 999}}, headers=_h("owner@example.com")
    )
    assert r.status_code == 422
    assert "o:resource_class" in r.json()["errors"]


def test_visibility_of_private_items(client, owner, make_user):
    make_user("stranger@example.com")
    make_user("reviewer@example.com", role="reviewer")
    _create(client, "owner@example.com", **{"o:title": "Public"})
    private = _create(client, "owner@example.com", **{"o:title": "Private", "o:is_public": False})

    def titles(headers=None, **params):
        r = client.get("/api/items", params=params, headers=headers or {})
        assert r.status_code == 200
        return [i["o:title"] for i in r.json()]

    assert titles() == ["Public"]
    assert titles(_h("stranger@example.com")) == ["Public"]
    assert titles(_h("owner@example.com")) == ["Public", "Private"]
    assert titles(_h("reviewer@example.com")) == ["Public", "Private"]
    assert titles(_h("reviewer@example.com"), is_public="0") == ["Private"]

    assert client.get(f"/api/items/{private['o:id']}").status_code == 403
    assert client.get(f"/api/items/{private['o:id']}", headers=_h("reviewer@example.com")).status_code == 200


def test_search_filters(client, owner, make_user):
    make_user("second@example.com")
    _create(client, "owner@example.com", **{"o:title": "Letter to Anna"})
    _create(client, "owner@example.com", **{"o:title": "Diary"})
    _create(client, "second@example.com", **{"o:title": "ANNA's notebook"})

    r = client.get("/api/items", params={"search": "anna"})
    assert sorted(i["o:title"] for i in r.json()) == ["ANNA's notebook", "Letter to Anna"]

    r = client.get("/api/items", params={"owner_id": owner.id, "sort_by": "title"})
    assert [i["o:title"] for i in r.json()] == ["Diary", "Letter to Anna"]

    r = client.get("/api/items", params={"search": "100%"})
    assert r.json() == []

    r = client.get("/api/items", params={"owner_id": "me"})
    assert r.status_code == 400


def test_batch_create_via_post_list(client, owner):
    r = client.post("/api/items", json=[{"o:title": "One"}, {"o:title": "Two"}], headers=_h("owner@example.com"))
    assert r.status_code == 201, r.text
    assert [i["o:title"] for i in r.json()] == ["One", "Two"]

    r = client.post("/api/items", json=[{"o:title": "Three"}, {"o:title": ""}], headers=_h("owner@example.com"))
    assert r.status_code == 422
    assert client.get("/api/items").headers["X-Total-Results"] == "2"


def test_update_and_delete_item(client, owner, make_user):
    item = _create(client, "owner@example.com", **{"o:title": "Draft"})
    make_user("editor@example.com", role="editor")

    r = client.put(f"/api/items/{item['o:id']}", json={"o:title": "Final"}, headers=_h("owner@example.com"))
    assert r.status_code == 200
    assert r.json()["o:title"] == "Final"
    assert r.json()["o:modified"] is not None

    r = client.delete(f"/api/items/{item['o:id']}", headers=_h("editor@example.com"))
    assert r.status_code == 200
    assert r.json()["o:title"] == "Final"
    assert client.get(f"/api/items/{item['o:id']}").status_code == 404


def test_guests_cannot_write(client, owner):
    item = _create(client, "owner@example.com", **{"o:title": "Locked"})
    assert client.post("/api/items", json={"o:title": "x"}).status_code == 403
    assert client.patch(f"/api/items/{item['o:id']}", json={"o:title": "x"}).status_code == 403
    assert client.delete(f"/api/items/{item['o:id']}").status_code == 403


def test_routing_edges(client, owner):
    assert client.get("/api/widgets").status_code == 404
    assert "errors" in client.get("/api/widgets").json()
    assert client.post("/api/items/1", json={}).status_code == 405
    assert client.put("/api/items", json={}).status_code == 405
    r = client.patch("/api/items/1", json=["not", "an", "object"], headers=_h("owner@example.com"))
    assert r.status_code == 400


def test_non_string_title_is_a_validation_error(client, owner):
    r = client.post("/api/items", json={"o:title": 123}, headers=_h("owner@example.com"))
    assert r.status_code == 422
    assert 'The "o:title" value must be a string.' in r.json()["errors"]["o:title"]

    item = _create(client, "owner@example.com", **{"o:title": "Kept"})
    r = client.patch(f"/api/items/{item['o:id']}", json={"o:title": ["x"]}, headers=_h("owner@example.com"))
    assert r.status_code == 422
    assert client.get(f"/api/items/{item['o:id']}").json()["o:title"] == "Kept"


def test_out_of_range_ids_and_window_values(client, owner):
    huge = "99999999999999999999999"
    assert client.get(f"/api/items/{huge}").status_code == 404
    assert client.delete(f"/api/items/{huge}", headers=_h("owner@example.com")).status_code == 404
    for param in ("limit", "offset", "owner_id", "resource_class_id"):
        r = client.get("/api/items", params={param: huge})
        assert r.status_code == 400, param
    r = client.get("/api/items", params={"page": str(2**62), "per_page": "10"})
    assert r.status_code == 400

    r = client.post(
        "/api/items", json={"o:title": "Ref", "o:resource_class": {"o:id": int(huge)}}, headers=_h("owner@example.com")
    )
    assert r.status_code == 422
    assert "o:resource_class" in r.json()["errors"]
