import pytest

import app as app_module
from bstmap.query_engine import QueryEngine
from bstmap.storage import PhoneBook


@pytest.fixture
def client(monkeypatch):
    book = PhoneBook()
    monkeypatch.setattr(app_module, "book", book)
    monkeypatch.setattr(app_module, "qe", QueryEngine(book))
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c


def add(client, name, phone, **extra):
    return client.post("/api/entries", json=dict(extra, name=name, phone=phone))


def test_insert_and_get(client):
    r = add(client, "Alice", "555-1234")
    assert r.status_code == 200
    assert r.get_json()["data"]["record_id"] == 0

    r = client.get("/api/entries/Alice")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True, "data": {"name": "Alice", "phone": "555-1234"}}


def test_missing_entry_is_404(client):
    r = client.get("/api/entries/Nobody")
    assert r.status_code == 404
    assert r.get_json()["ok"] is False


def test_duplicate_insert_conflicts(client):
    add(client, "Alice", "555-1234")
    r = add(client, "Alice", "555-0000")
    assert r.status_code == 409
    body = r.get_json()
    assert body["record"]["phone"] == "555-1234"
    assert client.get("/api/entries/Alice").get_json()["data"]["phone"] == "555-1234"


def test_insert_requires_fields(client):
    r = client.post("/api/entries", json={"name": "Alice"})
    assert r.status_code == 400
    assert "phone" in r.get_json()["error"]


def test_insert_accepts_any_extra_field(client):
    r = add(client, "Alice", "555-1234", self="x")
    assert r.status_code == 200
    assert r.get_json()["data"]["record"]["self"] == "x"


def test_non_object_body_is_rejected(client):
    r = client.post("/api/entries", json=["a"])
    assert r.status_code == 400
    assert r.get_json() == {"ok": False, "error": "JSON object body required"}

    add(client, "Alice", "555-1234")
    r = client.post("/api/entries/Alice/phone", json=["555-4321"])
    assert r.status_code == 400
    assert r.get_json()["ok"] is False
    assert client.get("/api/entries/Alice").get_json()["data"]["phone"] == "555-1234"


def test_listing_is_alphabetical(client):
    for name, phone in [("Charlie", "555-5678"), ("Alice", "555-1234"), ("Bob", "555-9876")]:
        add(client, name, phone)

    rows = client.get("/api/entries").get_json()["data"]["rows"]
    assert [r["name"] for r in rows] == ["Alice", "Bob", "Charlie"]

    rows = client.get("/api/entries?start=B&limit=1").get_json()["data"]["rows"]
    assert [r["name"] for r in rows] == ["Bob"]

    rows = client.get("/api/entries?prefix=Ch").get_json()["data"]["rows"]
    assert [r["name"] for r in rows] == ["Charlie"]


def test_numbers_and_update(client):
    add(client, "Alice", "555-1234")
    add(client, "Alicia", "555-1234")
    rows = client.get("/api/numbers/555-1234").get_json()["data"]["rows"]
    assert [r["name"] for r in rows] == ["Alice", "Alicia"]

    r = client.post("/api/entries/Alice/phone", json={"phone": "555-4321"})
    assert r.status_code == 200
    assert r.get_json()["data"]["record"]["phone"] == "555-4321"

    r = client.post("/api/entries/Nobody/phone", json={"phone": "555-4321"})
    assert r.status_code == 404
    r = client.post("/api/entries/Alice/phone", json={})
    assert r.status_code == 400


def test_status_and_home(client):
    for name in ["A", "B", "C"]:
        add(client, name, "555-0000")
    data = client.get("/api/status").get_json()["data"]
    assert data["entries"] == 3
    assert data["name_index_height"] == 3
    assert data["phone_index_size"] == 1

    r = client.get("/")
    assert r.status_code == 200
    assert b"3 entries" in r.data


def test_parse_limit(monkeypatch):
    monkeypatch.setattr(app_module, "LIMIT_MAX", 10)
    assert app_module.parse_limit("5") == 5
    assert app_module.parse_limit("500") == 10
    assert app_module.parse_limit("0") == 1
    assert app_module.parse_limit("junk") == 50
    assert app_module.parse_limit(None) == 50


def test_warm_start_seeds_book(monkeypatch, capsys):
    book = PhoneBook()
    monkeypatch.setattr(app_module, "book", book)
    monkeypatch.setattr(app_module, "SEED_COUNT", 25)
    monkeypatch.setattr(app_module, "SEED", "3")
    monkeypatch.setitem(app_module.STATE, "seeded", False)
    monkeypatch.setitem(app_module.STATE, "seed_count", 0)
    monkeypatch.setitem(app_module.STATE, "seed", None)
    app_module.warm_start()
    assert len(book) == 25
    assert app_module.STATE["seeded"] is True
    assert "[warm_start] Phone book loaded" in capsys.readouterr().out
