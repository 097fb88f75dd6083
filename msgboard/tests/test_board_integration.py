from __future__ import annotations

import pytest
from flask import Flask

from msgboard.app import create_app

COOKIE = "board_session"


@pytest.fixture(params=["memory", "json", "sql"])
def app(request, make_config) -> Flask:
    return create_app(make_config(request.param))


def _register(client, username: str = "alice", secret: str = "pw1"):
    return client.post("/api/register", json={"username": username, "secret": secret})


def test_board_flow(app: Flask) -> None:
    with app.test_client() as client:
        register = _register(client)
        assert register.status_code == 200
        assert register.get_json() == {"success": True, "username": "alice"}
        assert "HttpOnly" in register.headers["Set-Cookie"]

        duplicate = _register(client, secret="other")
        assert duplicate.status_code == 409
        assert duplicate.get_json()["error"] == "duplicate_username"

        login = client.post("/api/login", json={"username": "alice", "secret": "pw1"})
        assert login.status_code == 200
        cookie = client.get_cookie(COOKIE)
        assert cookie is not None
        token = cookie.value

        rejected = app.test_client().post("/api/posts", json={"content": "hi"})
        assert rejected.status_code == 401
        assert rejected.get_json() == {"error": "unauthorized"}

        created = client.post("/api/posts", json={"content": "hi"})
        assert created.status_code == 200
        assert created.get_json() == {"success": True}

        listed = client.get("/api/posts").get_json()
        assert len(listed) == 1
        assert listed[0]["author"] == "alice"
        assert listed[0]["content"] == "hi"
        assert "createdAt" in listed[0]

        assert client.get("/api/me").get_json() == {"username": "alice"}

        logout = client.post("/api/logout")
        assert logout.status_code == 200

        assert client.get("/api/me").status_code == 401
        stale = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
        assert stale.status_code == 401


def test_bearer_token_authenticates(app: Flask) -> None:
    with app.test_client() as client:
        _register(client)
        token = client.get_cookie(COOKIE).value

    with app.test_client() as api:
        headers = {"Authorization": f"Bearer {token}"}
        assert api.post("/api/posts", json={"content": "via header"}, headers=headers).status_code == 200
        assert api.get("/api/me", headers=headers).get_json() == {"username": "alice"}


def test_posts_listed_newest_first_with_limit(app: Flask) -> None:
    with app.test_client() as client:
        _register(client)
        for i in range(3):
            client.post("/api/posts", json={"content": f"post {i}"})

        everything = client.get("/api/posts").get_json()
        limited = client.get("/api/posts?limit=2").get_json()

    assert [p["content"] for p in everything] == ["post 2", "post 1", "post 0"]
    assert [p["content"] for p in limited] == ["post 2", "post 1"]


def test_wrong_secret_and_unknown_user_look_alike(app: Flask) -> None:
    with app.test_client() as client:
        _register(client)
        wrong = client.post("/api/login", json={"username": "alice", "secret": "nope"})
        unknown = client.post("/api/login", json={"username": "ghost", "secret": "pw1"})

    assert wrong.status_code == unknown.status_code == 400
    assert wrong.get_json() == unknown.get_json() == {"error": "invalid_credentials"}


def test_empty_post_is_rejected_and_not_stored(app: Flask) -> None:
    with app.test_client() as client:
        _register(client)
        for content in ("", "   "):
            response = client.post("/api/posts", json={"content": content})
            assert response.status_code == 400
            assert response.get_json()["error"] == "empty_content"

        assert client.get("/api/posts").get_json() == []


def test_health(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json()["ok"] is True
    assert response.get_json()["storage"] == "ok"


def test_security_headers(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/api/posts")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "Strict-Transport-Security" not in response.headers
