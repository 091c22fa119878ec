from datetime import datetime

from exhibit.db.models import Job
from exhibit.db.models.jobs import STATUS_COMPLETED, STATUS_IN_PROGRESS


def _h(email):
    return {"x-auth-request-email": email}


def _job(db_session, owner, job_class="Exhibit\\Job\\Reindex", status=STATUS_IN_PROGRESS, **kwargs):
    job = Job(owner_id=owner.id if owner else None, job_class=job_class, status=status, **kwargs)
    db_session.add(job)
    db_session.commit()
    return job


def test_owner_reads_job(client, make_user, db_session):
    owner = make_user("owner@example.com")
    job = _job(db_session, owner, args={"items": [1, 2]}, pid="4242", started=datetime(2015, 2, 1, 19, 43, 16))

    r = client.get(f"/api/jobs/{job.id}", headers=_h("owner@example.com"))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["@type"] == "o:Job"
    assert body["o:job_class"] == "Exhibit\\Job\\Reindex"
    assert body["o:args"] == {"items": [1, 2]}
    assert body["o:started"]["@value"] == "2015-02-01T19:43:16"
    assert body["o:stopped"] is None
    assert body["o:owner"]["o:id"] == owner.id


def test_researchers_only_see_their_own_jobs(client, make_user, db_session):
    owner = make_user("owner@example.com")
    other = make_user("other@example.com")
    make_user("editor@example.com", role="editor")
    mine = _job(db_session, owner)
    theirs = _job(db_session, other)

    r = client.get("/api/jobs", headers=_h("owner@example.com"))
    assert [j["o:id"] for j in r.json()] == [mine.id]
    assert client.get(f"/api/jobs/{theirs.id}", headers=_h("owner@example.com")).status_code == 403

    r = client.get("/api/jobs", headers=_h("editor@example.com"))
    assert [j["o:id"] for j in r.json()] == [mine.id, theirs.id]


def test_job_search_filters(client, make_user, db_session):
    admin = make_user("admin@example.com", role="global_admin")
    _job(db_session, admin, status=STATUS_COMPLETED)
    running = _job(db_session, admin, job_class="Exhibit\\Job\\Import")

    r = client.get("/api/jobs", params={"status": STATUS_IN_PROGRESS}, headers=_h("admin@example.com"))
    assert [j["o:id"] for j in r.json()] == [running.id]
    r = client.get("/api/jobs", params={"class": "Exhibit\\Job\\Import"}, headers=_h("admin@example.com"))
    assert [j["o:id"] for j in r.json()] == [running.id]


def test_jobs_are_read_only(client, make_user, db_session):
    admin = make_user("admin@example.com", role="global_admin")
    job = _job(db_session, admin)

    r = client.post("/api/jobs", json={"o:job_class": "X"}, headers=_h("admin@example.com"))
    assert r.status_code == 500
    assert "OperationNotImplementedException" in r.json()["errors"]
    assert client.patch(f"/api/jobs/{job.id}", json={}, headers=_h("admin@example.com")).status_code == 500
    assert client.delete(f"/api/jobs/{job.id}", headers=_h("admin@example.com")).status_code == 500

    # Researchers are stopped by the ACL before reaching the adapter.
    make_user("researcher@example.com")
    assert client.post("/api/jobs", json={}, headers=_h("researcher@example.com")).status_code == 403


def test_deleting_owner_keeps_job(client, make_user, db_session):
    admin = make_user("admin@example.com", role="global_admin")
    owner = make_user("owner@example.com")
    job = _job(db_session, owner)

    assert client.delete(f"/api/users/{owner.id}", headers=_h("admin@example.com")).status_code == 200
    db_session.expire_all()
    assert db_session.get(Job, job.id).owner_id is None
