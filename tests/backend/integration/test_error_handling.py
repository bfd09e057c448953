import logging

import pytest

from blog.config import settings
from blog.models.post import Post
from blog.services import likes as like_service


pytestmark = pytest.mark.asyncio


async def _boom(post):
    raise RuntimeError("database password is hunter2")


async def test_unknown_route_is_json_404(client):
    resp = await client.get("/api/v1/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "The requested resource was not found."}


async def test_wrong_method_is_json_405(client, user_headers):
    _, headers = await user_headers()
    resp = await client.patch("/api/v1/posts", headers=headers)
    assert resp.status_code == 405
    assert resp.json() == {"success": False, "message": "The HTTP method is not allowed for this route."}


async def test_non_json_requests_fall_through(client):
    resp = await client.get("/api/v1/nowhere", headers={"Accept": "text/html"})
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Not Found"}


async def test_xhr_requests_get_json_even_with_html_accept(client):
    resp = await client.get(
        "/api/v1/nowhere",
        headers={"Accept": "text/html", "X-Requested-With": "XMLHttpRequest"},
    )
    assert resp.json()["success"] is False


async def test_unclassified_failure_is_generic_500(client, user_headers, monkeypatch, caplog):
    user, headers = await user_headers()
    post = await Post.create(user_id=user.id, title="T", body="B")
    monkeypatch.setattr(like_service, "count_likes", _boom)

    with caplog.at_level(logging.ERROR, logger="uvicorn.error"):
        resp = await client.get(f"/api/v1/posts/{post.id}/likes/count", headers=headers)

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error."}
    assert "hunter2" not in resp.text
    # Logged once, with its traceback, and not re-raised to the server
    logged = [r for r in caplog.records if r.exc_info]
    assert len(logged) == 1
    assert "unhandled exception" in logged[0].getMessage()


async def test_debug_mode_shows_raw_message(client, user_headers, monkeypatch):
    user, headers = await user_headers()
    post = await Post.create(user_id=user.id, title="T", body="B")
    monkeypatch.setattr(like_service, "count_likes", _boom)
    monkeypatch.setattr(settings, "debug", True)

    resp = await client.get(f"/api/v1/posts/{post.id}/likes/count", headers=headers)
    assert resp.status_code == 500
    assert resp.json()["message"] == "database password is hunter2"


async def test_debug_mode_shows_domain_message(client, user_headers, monkeypatch):
    user, headers = await user_headers()
    post = await Post.create(user_id=user.id, title="T", body="B")
    monkeypatch.setattr(settings, "debug", True)

    await client.post(f"/api/v1/posts/{post.id}/likes", headers=headers)
    resp = await client.post(f"/api/v1/posts/{post.id}/likes", headers=headers)
    assert resp.status_code == 409
    assert resp.json()["message"] == "You have already liked this post."


async def test_path_type_errors_are_validation_failures(client, user_headers):
    _, headers = await user_headers()
    resp = await client.get("/api/v1/posts/not-a-number", headers=headers)
    assert resp.status_code == 422
    assert "post_id" in resp.json()["errors"]


async def test_healthz(client):
    resp = await client.get("/healthz")
    assert resp.json() == {"ok": True}


async def test_unclassified_failure_for_html_clients_is_plain_500(client, user_headers, monkeypatch):
    user, headers = await user_headers()
    post = await Post.create(user_id=user.id, title="T", body="B")
    monkeypatch.setattr(like_service, "count_likes", _boom)

    resp = await client.get(
        f"/api/v1/posts/{post.id}/likes/count",
        headers={**headers, "Accept": "text/html"},
    )
    assert resp.status_code == 500
    assert resp.text == "Internal Server Error"
