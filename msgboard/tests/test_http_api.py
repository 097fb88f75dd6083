from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from msgboard.app import create_app
from msgboard.container import Container

WRITER = "msgboard.infrastructure.repositories.json_files.write_json_atomic"


def test_password_and_message_aliases(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        assert client.post("/api/register", json={"username": "alice", "password": "pw"}).status_code == 200
        assert client.post("/api/login", json={"username": "alice", "password": "pw"}).status_code == 200
        assert client.post("/api/posts", json={"message": "legacy form"}).status_code == 200

        assert client.get("/api/posts").get_json()[0]["content"] == "legacy form"


def test_register_rejects_blank_fields(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        blank = client.post("/api/register", json={"username": "  ", "secret": "pw"})
        missing = client.post("/api/register", json={"username": "alice"})
        not_json = client.post("/api/register", data="username=alice", content_type="text/plain")

    assert blank.status_code == missing.status_code == not_json.status_code == 400
    assert blank.get_json() == {"error": "invalid_input", "context": {"field": "username"}}
    assert missing.get_json()["context"] == {"field": "secret"}
    assert not_json.get_json()["error"] == "invalid_input"


def test_wrong_json_types_are_validation_errors(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        register = client.post("/api/register", json={"username": 123, "secret": "pw"})
        client.post("/api/register", json={"username": "alice", "secret": "pw"})
        post = client.post("/api/posts", json={"content": ["not", "text"]})
        bad_limit = client.get("/api/posts?limit=abc")
        zero_limit = client.get("/api/posts?limit=0")

    assert register.status_code == 400
    assert register.get_json()["error"] == "validation_error"
    assert register.get_json()["context"]["fields"] == ["username"]
    assert post.status_code == 400
    assert post.get_json()["context"]["fields"] == ["content"]
    assert bad_limit.status_code == zero_limit.status_code == 400


def test_unauthenticated_post_is_rejected_before_validation(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        response = client.post("/api/posts", json={"content": 42})

    assert response.status_code == 401


def test_forged_token_is_rejected(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        response = client.post(
            "/api/posts",
            json={"content": "hi"},
            headers={"Authorization": "Bearer forged-token"},
        )

    assert response.status_code == 401


def test_logout_without_session_succeeds(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        response = client.post("/api/logout")

    assert response.status_code == 200
    assert response.get_json() == {"message": "logged out"}


def test_post_limit_is_configurable(make_config) -> None:
    app = create_app(make_config(recent_limit=2))

    with app.test_client() as client:
        client.post("/api/register", json={"username": "alice", "secret": "pw"})
        for i in range(4):
            client.post("/api/posts", json={"content": f"post {i}"})

        listed = client.get("/api/posts?limit=10").get_json()

    assert [p["content"] for p in listed] == ["post 3", "post 2"]


def test_storage_failure_is_opaque_500(make_config) -> None:
    app = create_app(make_config("json"))

    with app.test_client() as client:
        client.post("/api/register", json={"username": "alice", "secret": "pw"})

        with patch(WRITER, side_effect=OSError("disk full at /secret/path")):
            post = client.post("/api/posts", json={"content": "hi"})
            register = client.post("/api/register", json={"username": "bob", "secret": "pw"})

        assert client.get("/api/posts").get_json() == []
        bob = client.post("/api/login", json={"username": "bob", "secret": "pw"})

    assert post.status_code == register.status_code == 500
    assert post.get_json() == {"error": "storage_error"}
    assert register.get_json() == {"error": "storage_error"}
    assert bob.status_code == 400


def test_unexpected_error_is_internal_error(make_config) -> None:
    container = Container(make_config())
    app = create_app(container.config, container)

    with patch.object(container.post_repository, "list_recent", side_effect=RuntimeError("boom")):
        with app.test_client() as client:
            response = client.get("/api/posts")

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}


def test_health_reports_broken_storage(make_config) -> None:
    container = Container(make_config())
    app = create_app(container.config, container)

    with patch("msgboard.container.check_storage", side_effect=OSError("gone")):
        with app.test_client() as client:
            response = client.get("/api/health")

    assert response.status_code == 503
    assert response.get_json()["ok"] is False


def test_csrf_double_submit(make_config) -> None:
    app = create_app(make_config(ENABLE_CSRF=True))

    with app.test_client() as client:
        client.post("/api/register", json={"username": "alice", "secret": "pw"})
        csrf = client.get_cookie("csrf_token")
        assert csrf is not None

        missing = client.post("/api/posts", json={"content": "hi"})
        forged = client.post("/api/posts", json={"content": "hi"}, headers={"X-CSRF-Token": "nope"})
        ok = client.post("/api/posts", json={"content": "hi"}, headers={"X-CSRF-Token": csrf.value})

    assert missing.status_code == forged.status_code == 403
    assert missing.get_json() == {"error": "csrf"}
    assert ok.status_code == 200


def test_csrf_non_ascii_token_is_rejected_not_crashed(make_config) -> None:
    app = create_app(make_config(ENABLE_CSRF=True))

    with app.test_client() as client:
        client.post("/api/register", json={"username": "alice", "secret": "pw"})
        response = client.post(
            "/api/posts", json={"content": "hi"}, headers={"X-CSRF-Token": "\u00e9t\u00e9"}
        )

    assert response.status_code == 403
    assert response.get_json() == {"error": "csrf"}


def test_hsts_header_when_enabled(make_config) -> None:
    app = create_app(make_config(ENABLE_HSTS=True))

    with app.test_client() as client:
        response = client.get("/api/health")

    assert response.headers["Strict-Transport-Security"].startswith("max-age=")


def test_cors_on_api_routes(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        response = client.get("/api/posts", headers={"Origin": "http://example.com"})

    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_static_front_end(make_config, tmp_path: Path) -> None:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>board</h1>", encoding="utf-8")
    (public / "app.js").write_text("console.log('hi')", encoding="utf-8")
    config = make_config()
    config.static_dir = public
    app = create_app(config)

    with app.test_client() as client:
        index = client.get("/")
        script = client.get("/app.js")
        missing = client.get("/nope.css")

    assert index.status_code == 200
    assert b"<h1>board</h1>" in index.data
    assert script.status_code == 200
    assert missing.status_code == 404


def test_index_without_static_dir(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        response = client.get("/")

    assert response.get_json() == {"service": "msgboard", "storage": "memory"}


def test_request_id_is_echoed(make_config) -> None:
    app = create_app(make_config())

    with app.test_client() as client:
        given = client.get("/api/health", headers={"X-Request-ID": "req-42"})
        generated = client.get("/api/health")

    assert given.headers["X-Request-ID"] == "req-42"
    assert generated.headers["X-Request-ID"] not in ("", "-")
