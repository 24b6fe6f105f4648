"""
HTTP-level tests: routing, status codes and error mapping.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the filmorate package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from filmorate.app import create_app  # noqa: E402
from filmorate.core import config as core_config  # noqa: E402


@pytest.fixture()
def app(monkeypatch):
    monkeypatch.delenv("POPULAR_DEFAULT_COUNT", raising=False)
    core_config.get_settings.cache_clear()
    yield create_app()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client(app):
    return TestClient(app, raise_server_exceptions=False)


FILM = {"name": "Metropolis", "description": "Silent sci-fi", "releaseDate": "1927-01-10", "duration": 153}


def _user_payload(login: str, **extra) -> dict:
    body = {"email": f"{login}@example.com", "login": login, "birthday": "1990-05-01"}
    body.update(extra)
    return body


def _create_film(client, **overrides) -> dict:
    resp = client.post("/films", json={**FILM, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _create_user(client, login: str, **extra) -> dict:
    resp = client.post("/users", json=_user_payload(login, **extra))
    assert resp.status_code == 201, resp.text
    return resp.json()


# -------------------------- films --------------------------
def test_create_and_fetch_film(client):
    film = _create_film(client)
    assert film["id"] == 1
    assert film["releaseDate"] == "1927-01-10"
    assert film["likes"] == []

    resp = client.get(f"/films/{film['id']}")
    assert resp.status_code == 200
    assert resp.json() == film
    assert [f["id"] for f in client.get("/films").json()] == [1]


def test_create_film_accepts_snake_case(client):
    body = {"name": "Nosferatu", "release_date": "1922-03-04", "duration": 94}
    resp = client.post("/films", json=body)
    assert resp.status_code == 201
    assert resp.json()["description"] is None


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": "   "}, "name"),
        ({"description": "x" * 201}, "description"),
        ({"releaseDate": "1895-12-27"}, "releaseDate"),
        ({"duration": -1}, "duration"),
    ],
)
def test_create_film_validation(client, overrides, field):
    resp = client.post("/films", json={**FILM, **overrides})
    assert resp.status_code == 400
    assert field in resp.json()["fields"]


def test_release_date_boundary_is_accepted(client):
    assert _create_film(client, releaseDate="1895-12-28")["releaseDate"] == "1895-12-28"


def test_film_not_found(client):
    resp = client.get("/films/999")
    assert resp.status_code == 404
    assert "error" in resp.json()
    assert client.delete("/films/999").status_code == 404


def test_update_film_merges_present_fields(client):
    film = _create_film(client)
    resp = client.put("/films", json={"id": film["id"], "name": "Metropolis (restored)"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Metropolis (restored)"
    assert body["description"] == FILM["description"]
    assert body["duration"] == FILM["duration"]


def test_update_unknown_film(client):
    resp = client.put("/films", json={"id": 42, "name": "Ghost"})
    assert resp.status_code == 404


def test_delete_film(client):
    film = _create_film(client)
    assert client.delete(f"/films/{film['id']}").status_code == 204
    assert client.get(f"/films/{film['id']}").status_code == 404


def test_likes_and_popular(client):
    u1 = _create_user(client, "ann")
    u2 = _create_user(client, "bob")
    f1 = _create_film(client, name="F1")
    f2 = _create_film(client, name="F2")
    f3 = _create_film(client, name="F3")

    resp = client.put(f"/films/{f2['id']}/like/{u1['id']}")
    assert resp.status_code == 200
    assert resp.json()["likes"] == [u1["id"]]
    client.put(f"/films/{f2['id']}/like/{u2['id']}")
    client.put(f"/films/{f3['id']}/like/{u1['id']}")
    client.put(f"/films/{f3['id']}/like/{u1['id']}")

    top = client.get("/films/popular", params={"count": 2}).json()
    assert [f["name"] for f in top] == ["F2", "F3"]
    assert [f["id"] for f in client.get("/films/popular").json()] == [f2["id"], f3["id"], f1["id"]]

    assert client.delete(f"/films/{f2['id']}/like/{u1['id']}").status_code == 204
    assert client.get(f"/films/{f2['id']}").json()["likes"] == [u2["id"]]


def test_like_with_unknown_user(client):
    film = _create_film(client)
    resp = client.put(f"/films/{film['id']}/like/77")
    assert resp.status_code == 404
    assert client.put("/films/77/like/1").status_code == 404


@pytest.mark.parametrize("count", ["0", "-3"])
def test_popular_rejects_non_positive_count(client, count):
    resp = client.get("/films/popular", params={"count": count})
    assert resp.status_code == 400


def test_popular_default_count_from_settings(monkeypatch):
    monkeypatch.setenv("POPULAR_DEFAULT_COUNT", "2")
    core_config.get_settings.cache_clear()
    try:
        client = TestClient(create_app())
        for i in range(4):
            _create_film(client, name=f"F{i}")
        assert len(client.get("/films/popular").json()) == 2
    finally:
        core_config.get_settings.cache_clear()


# -------------------------- users --------------------------
def test_create_user_defaults_name_to_login(client):
    user = _create_user(client, "bob")
    assert user["name"] == "bob"
    assert client.get(f"/users/{user['id']}").json()["name"] == "bob"


@pytest.mark.parametrize(
    "extra, field",
    [
        ({"email": "not-an-email"}, "email"),
        ({"email": ""}, "email"),
        ({"login": "bob smith"}, "login"),
        ({"login": ""}, "login"),
        ({"birthday": "2999-01-01"}, "birthday"),
    ],
)
def test_create_user_validation(client, extra, field):
    resp = client.post("/users", json={**_user_payload("bob"), **extra})
    assert resp.status_code == 400
    assert field in resp.json()["fields"]


def test_update_user(client):
    user = _create_user(client, "bob", name="Bobby")
    resp = client.put("/users", json={"id": user["id"], "login": "robert"})
    assert resp.status_code == 200
    assert resp.json()["login"] == "robert"
    assert resp.json()["name"] == "robert"


def test_update_unknown_user(client):
    resp = client.put("/users", json={"id": 999, "login": "ghost"})
    assert resp.status_code == 404


def test_friendship_flow(client):
    a = _create_user(client, "ann")
    b = _create_user(client, "bob")
    c = _create_user(client, "cid")

    resp = client.put(f"/users/{a['id']}/friends/{b['id']}")
    assert resp.status_code == 200
    assert resp.json()["friends"] == [b["id"]]
    client.put(f"/users/{c['id']}/friends/{b['id']}")

    assert [u["id"] for u in client.get(f"/users/{b['id']}/friends").json()] == [a["id"], c["id"]]
    common = client.get(f"/users/{a['id']}/friends/common/{c['id']}").json()
    assert [u["id"] for u in common] == [b["id"]]

    assert client.delete(f"/users/{b['id']}/friends/{a['id']}").status_code == 204
    assert client.get(f"/users/{a['id']}/friends").json() == []


def test_self_friendship_is_bad_request(client):
    a = _create_user(client, "ann")
    resp = client.put(f"/users/{a['id']}/friends/{a['id']}")
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_delete_user(client):
    a = _create_user(client, "ann")
    assert client.delete(f"/users/{a['id']}").status_code == 204
    assert client.get(f"/users/{a['id']}").status_code == 404
    assert client.get("/users").json() == []


# -------------------------- plumbing --------------------------
def test_unexpected_error_is_generic_500(app, client, monkeypatch):
    def boom():
        raise RuntimeError("secret internal detail")

    monkeypatch.setattr(app.state.film_service, "get_all", boom)
    resp = client.get("/films")
    assert resp.status_code == 500
    assert resp.json() == {"error": "An unexpected error occurred"}


def test_security_headers(client):
    resp = client.get("/films")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["Referrer-Policy"] == "no-referrer"
    assert "Strict-Transport-Security" not in resp.headers


def test_apps_do_not_share_state():
    first = TestClient(create_app())
    _create_film(first)
    second = TestClient(create_app())
    assert second.get("/films").json() == []


def test_description_limit_is_inclusive(client):
    assert len(_create_film(client, description="x" * 200)["description"]) == 200
    resp = client.put("/films", json={"id": 1, "description": "y" * 201})
    assert resp.status_code == 400
    assert "description" in resp.json()["fields"]
