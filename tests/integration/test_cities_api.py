from sqlalchemy.exc import OperationalError

from location_admin.db import models
from location_admin.db.repositories import audits as audit_repo
from location_admin.db.repositories.cities import CityRepository
from location_admin.events import ContentEvent

BASE = "http://testserver/admin"


def _capture(monkeypatch, *events):
    """Register recording listeners on the app and return the record list."""
    from location_admin.api.main import app

    seen = []
    listeners = {event: list(app.state.content_listeners.get(event, [])) for event in ContentEvent}
    for event in events:
        listeners[event].append(lambda p, e=event: seen.append((e, p.item.id, p.item.name)))
    monkeypatch.setattr(app.state, "content_listeners", listeners)
    return seen


# --- store -----------------------------------------------------------------

def test_store_creates_city_and_returns_navigation(client, db_session, state_factory, monkeypatch):
    seen = _capture(monkeypatch, ContentEvent.CREATED)
    state = state_factory("Texas")

    r = client.post("/admin/cities/create", json={"name": "Austin", "state_id": state.id, "order": 2, "status": "draft"})
    assert r.status_code == 200, r.text
    body = r.json()
    city = db_session.query(models.City).one()

    assert body["error"] is False
    assert body["message"] == "Created successfully"
    assert body["previous_url"] == f"{BASE}/cities"
    assert body["next_url"] == f"{BASE}/cities/edit/{city.id}"
    assert (city.name, city.state_id, city.order, city.status) == ("Austin", state.id, 2, "draft")
    assert seen == [(ContentEvent.CREATED, city.id, "Austin")]

    audit = audit_repo.get_audit_logs(db_session, target_type="city", target_id=city.id)
    assert [a.action_type for a in audit] == ["content_create"]


def test_store_accepts_form_encoded_body(client, db_session):
    r = client.post("/admin/cities/create", data={"name": "Waco", "state_id": "", "order": "1", "status": "pending"})
    assert r.status_code == 200, r.text
    city = db_session.query(models.City).one()
    assert (city.name, city.state_id, city.order, city.status) == ("Waco", None, 1, "pending")


def test_store_rejects_invalid_input(client, db_session):
    r = client.post("/admin/cities/create", json={"name": "", "status": "archived"})
    assert r.status_code == 422
    assert db_session.query(models.City).count() == 0

    r = client.post("/admin/cities/create", content="{not json", headers={"content-type": "application/json"})
    assert r.status_code == 422

    r = client.post("/admin/cities/create", json=["Austin"])
    assert r.status_code == 422
    assert r.json()["detail"][0]["type"] == "dict_type"


# --- update ----------------------------------------------------------------

def test_update_overwrites_submitted_fields(client, db_session, state_factory, city_factory, monkeypatch):
    seen = _capture(monkeypatch, ContentEvent.UPDATED)
    state = state_factory("Ohio")
    city = city_factory("Colombus", state=state, order=4, status="draft")

    r = client.put(f"/admin/cities/edit/{city.id}", json={"name": "Columbus", "status": "published"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body == {
        "error": False,
        "data": None,
        "message": "Updated successfully",
        "previous_url": f"{BASE}/cities",
    }

    db_session.refresh(city)
    assert city.name == "Columbus"
    assert city.status == "published"
    # Fields the client did not submit keep their values
    assert city.order == 4
    assert city.state_id == state.id
    assert seen == [(ContentEvent.UPDATED, city.id, "Columbus")]


def test_update_accepts_post_and_clears_state(client, db_session, state_factory, city_factory):
    city = city_factory("Dayton", state=state_factory("Ohio"))
    r = client.post(f"/admin/cities/edit/{city.id}", data={"name": "Dayton", "state_id": "", "order": "9"})
    assert r.status_code == 200, r.text
    db_session.refresh(city)
    assert city.state_id is None
    assert city.order == 9


def test_update_missing_city_is_not_found(client):
    r = client.put("/admin/cities/edit/999", json={"name": "Ghost"})
    assert r.status_code == 404
    assert r.json()["detail"] == "City 999 not found"


# --- destroy ---------------------------------------------------------------

def test_destroy_deletes_and_notifies(client, db_session, city_factory, monkeypatch):
    seen = _capture(monkeypatch, ContentEvent.DELETED)
    city = city_factory("Reno")
    city_id = city.id

    r = client.delete(f"/admin/cities/items/{city_id}")
    assert r.status_code == 200
    assert r.json() == {"error": False, "data": None, "message": "Deleted successfully"}
    assert db_session.query(models.City).count() == 0
    assert seen == [(ContentEvent.DELETED, city_id, "Reno")]


def test_destroy_missing_city_returns_error_envelope(client):
    r = client.delete("/admin/cities/items/12345")
    assert r.status_code == 200
    body = r.json()
    assert body["error"] is True
    assert body["message"] == "City 12345 not found"


def test_destroy_persistence_failure_returns_error_envelope(client, db_session, city_factory, monkeypatch):
    seen = _capture(monkeypatch, ContentEvent.DELETED)
    city = city_factory("Reno")

    def failing_delete(self, city):
        raise OperationalError("DELETE FROM cities", {}, Exception("database is locked"))

    monkeypatch.setattr(CityRepository, "delete", failing_delete)

    r = client.delete(f"/admin/cities/items/{city.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["error"] is True
    assert "database is locked" in body["message"]
    assert seen == []
    assert db_session.query(models.City).count() == 1


# --- bulk delete -----------------------------------------------------------

def test_deletes_requires_selection(client, db_session, city_factory):
    city_factory("Keep")
    r = client.request("DELETE", "/admin/cities/items", json={"ids": []})
    assert r.status_code == 200
    assert r.json()["error"] is True
    assert r.json()["message"] == "Please select at least one record to perform this action!"

    r = client.request("DELETE", "/admin/cities/items")
    assert r.json()["error"] is True
    assert db_session.query(models.City).count() == 1


def test_deletes_removes_each_and_emits_one_event_per_row(client, db_session, city_factory, monkeypatch):
    seen = _capture(monkeypatch, ContentEvent.DELETED)
    a = city_factory("Akron")
    b = city_factory("Boise")
    keep = city_factory("Camden")
    a_id, b_id = a.id, b.id

    r = client.request("DELETE", "/admin/cities/items", json={"ids": [a_id, b_id]})
    assert r.status_code == 200
    assert r.json() == {"error": False, "data": None, "message": "Deleted successfully"}
    assert [c.id for c in db_session.query(models.City).all()] == [keep.id]
    assert seen == [(ContentEvent.DELETED, a_id, "Akron"), (ContentEvent.DELETED, b_id, "Boise")]


def test_deletes_accepts_form_ids(client, db_session, city_factory):
    a = city_factory("Akron")
    r = client.request("DELETE", "/admin/cities/items", data={"ids[]": [str(a.id)]})
    assert r.status_code == 200
    assert r.json()["error"] is False
    assert db_session.query(models.City).count() == 0


def test_deletes_with_unknown_id_deletes_nothing(client, db_session, city_factory):
    a = city_factory("Akron")
    r = client.request("DELETE", "/admin/cities/items", json={"ids": [a.id, 4242]})
    assert r.status_code == 404
    assert db_session.query(models.City).count() == 1


# --- search endpoints ------------------------------------------------------

def test_get_list_blank_keyword_returns_empty(client, city_factory):
    city_factory("Springfield")
    for url in ("/admin/cities/list", "/admin/cities/list?q=", "/admin/cities/list?q=%20%20", "/admin/cities/list?q=%09"):
        r = client.get(url)
        assert r.status_code == 200
        assert r.json()["data"] == []


def test_get_list_matches_with_placeholder_and_cap(client, city_factory):
    city_factory("Hot Springs", order=1)
    city_factory("SPRINGFIELD", order=0)
    city_factory("Denver")
    for i in range(12):
        city_factory(f"Spring Hill {i:02d}", order=3, status="draft")

    data = client.get("/admin/cities/list", params={"q": "spring"}).json()["data"]
    assert len(data) == 11
    assert data[0] == {"id": 0, "name": "Select city..."}
    assert [d["name"] for d in data[1:3]] == ["SPRINGFIELD", "Hot Springs"]
    assert all("spring" in d["name"].lower() for d in data[1:])
    assert set(data[1].keys()) == {"id", "name"}


def test_get_list_trims_keyword(client, city_factory):
    city_factory("Hot Springs")
    city_factory("Denver")
    data = client.get("/admin/cities/list", params={"q": "  springs "}).json()["data"]
    assert [d["name"] for d in data] == ["Select city...", "Hot Springs"]


def test_ajax_get_cities_without_state_returns_all_published(client, state_factory, city_factory):
    ca = state_factory("California")
    tx = state_factory("Texas")
    city_factory("Sacramento", state=ca)
    city_factory("Austin", state=tx)
    city_factory("Draft Town", state=tx, status="draft")

    for params in ({"state_id": "null"}, {}, {"state_id": ""}, {"state_id": "0"}):
        data = client.get("/admin/ajax/cities", params=params).json()["data"]
        assert data[0]["id"] == 0
        assert [d["name"] for d in data[1:]] == ["Austin", "Sacramento"]


def test_ajax_get_cities_filters_by_state(client, state_factory, city_factory):
    ca = state_factory("California")
    tx = state_factory("Texas")
    city_factory("Sacramento", state=ca, order=2)
    city_factory("Fresno", state=ca, order=1)
    city_factory("Hidden", state=ca, status="pending")
    city_factory("Austin", state=tx)

    data = client.get("/admin/ajax/cities", params={"state_id": str(ca.id)}).json()["data"]
    assert data == [
        {"id": 0, "name": "Select city..."},
        {"id": data[1]["id"], "name": "Fresno"},
        {"id": data[2]["id"], "name": "Sacramento"},
    ]

    assert client.get("/admin/ajax/cities", params={"state_id": "abc"}).json()["data"] == [
        {"id": 0, "name": "Select city..."}
    ]


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
