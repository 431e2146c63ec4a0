"""
Post endpoint tests: CRUD lifecycle, author listing, error envelopes and
diagnostic headers.
"""
import logging
import uuid

import pytest
from httpx import AsyncClient


async def _create_post(client: AsyncClient, **overrides) -> dict:
    payload = {"authorId": "u1", "content": "hi", "hashtags": ["intro"], "images": ["a.png"]}
    payload.update(overrides)
    resp = await client.post("/api/v1/posts", json=payload)
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_create_post(async_client: AsyncClient):
    post = await _create_post(async_client)
    assert post["authorId"] == "u1"
    assert post["content"] == "hi"
    assert post["hashtags"] == ["intro"]
    assert post["images"] == ["a.png"]
    assert post["likeCount"] == 0
    assert post["commentCount"] == 0
    assert post["status"] == "ACTIVE"
    assert "createdAt" in post
    assert "updatedAt" in post


@pytest.mark.asyncio
async def test_create_post_ignores_client_counters(async_client: AsyncClient):
    post = await _create_post(async_client, likeCount=99, commentCount=7)
    assert post["likeCount"] == 0
    assert post["commentCount"] == 0


@pytest.mark.asyncio
async def test_create_post_missing_content_is_400(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/posts", json={"authorId": "u1"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid request"


@pytest.mark.asyncio
async def test_get_post(async_client: AsyncClient):
    post = await _create_post(async_client)
    resp = await async_client.get(f"/api/v1/posts/{post['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == post["id"]


@pytest.mark.asyncio
async def test_get_missing_post_is_404(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/posts/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Post not found"}


@pytest.mark.asyncio
async def test_get_malformed_id_is_500(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/posts/not-an-id")
    assert resp.status_code == 500
    body = resp.json()
    assert body["message"] == "Failed to fetch post"
    assert "not-an-id" in body["error"]


@pytest.mark.asyncio
async def test_update_post_keeps_author(async_client: AsyncClient):
    post = await _create_post(async_client)
    resp = await async_client.put(
        f"/api/v1/posts/{post['id']}",
        json={"authorId": "intruder", "content": "edited"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["content"] == "edited"
    assert data["authorId"] == "u1"
    assert data["hashtags"] == ["intro"]


@pytest.mark.asyncio
async def test_update_missing_post_is_404(async_client: AsyncClient):
    resp = await async_client.put(f"/api/v1/posts/{uuid.uuid4()}", json={"content": "x"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_malformed_id_is_500(async_client: AsyncClient):
    resp = await async_client.put("/api/v1/posts/123", json={"content": "x"})
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to update post"


@pytest.mark.asyncio
async def test_soft_delete_post(async_client: AsyncClient):
    post = await _create_post(async_client)
    resp = await async_client.delete(f"/api/v1/posts/{post['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Post deleted successfully"}

    fetched = (await async_client.get(f"/api/v1/posts/{post['id']}")).json()
    assert fetched["status"] == "DELETED"
    assert fetched["content"] == "hi"


@pytest.mark.asyncio
async def test_delete_missing_post_is_404(async_client: AsyncClient):
    resp = await async_client.delete(f"/api/v1/posts/{uuid.uuid4()}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_malformed_id_is_500(async_client: AsyncClient):
    resp = await async_client.delete("/api/v1/posts/zzz")
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to delete post"


@pytest.mark.asyncio
async def test_posts_by_author(async_client: AsyncClient):
    first = await _create_post(async_client)
    second = await _create_post(async_client, content="again")
    await _create_post(async_client, authorId="u2")

    resp = await async_client.get("/api/v1/users/u1/posts")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [first["id"], second["id"]]

    empty = await async_client.get("/api/v1/users/nobody/posts")
    assert empty.json() == []


@pytest.mark.asyncio
async def test_diagnostic_headers(async_client: AsyncClient):
    post = await _create_post(async_client)
    resp = await async_client.get(f"/api/v1/posts/{post['id']}")
    assert float(resp.headers["x-response-time-ms"]) >= 0
    assert int(resp.headers["x-query-count"]) >= 0


@pytest.mark.asyncio
async def test_access_log_line(async_client: AsyncClient, caplog):
    with caplog.at_level(logging.INFO, logger="post_service.access"):
        resp = await async_client.get(f"/api/v1/posts/{uuid.uuid4()}")
    assert resp.status_code == 404
    lines = [r.getMessage() for r in caplog.records if r.name == "post_service.access"]
    assert any(line.startswith("GET /api/v1/posts/") and "-> 404" in line for line in lines)


@pytest.mark.asyncio
async def test_update_post_null_fields_are_ignored(async_client: AsyncClient):
    post = await _create_post(async_client)
    resp = await async_client.put(
        f"/api/v1/posts/{post['id']}",
        json={"content": None, "hashtags": None, "images": ["b.png"]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["content"] == "hi"
    assert data["hashtags"] == ["intro"]
    assert data["images"] == ["b.png"]
