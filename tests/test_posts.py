#!/usr/bin/env python3
"""
Tests for the community board: posts, comments, likes and tags.
"""

import pytest


async def anonymous_post(client, **overrides):
    form = {"author": "guest", "password": "pw-1234", "title": "Braces?", "content": "How long do they take?"}
    form.update(overrides)
    response = await client.post("/api/posts", data=form)
    assert response.status_code == 201
    return response.json()


async def add_comment(client, post_id, password="c-pw"):
    response = await client.post(
        f"/api/posts/{post_id}/comments",
        json={"author": "lee", "password": password, "content": "About two years"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.integration
class TestPostCreation:
    async def test_anonymous_post(self, client):
        data = await anonymous_post(client)

        assert data["author"] == "guest"
        assert data["userId"] is None
        assert data["imageData"] is None
        assert "password" not in data

    async def test_anonymous_post_needs_password(self, client):
        response = await client.post("/api/posts", data={"author": "guest", "title": "t", "content": "c"})
        assert response.status_code == 400
        assert response.json()["error"] == "missing_credential"

    async def test_anonymous_post_needs_author(self, client):
        response = await client.post("/api/posts", data={"password": "pw", "title": "t", "content": "c"})
        assert response.status_code == 400

    async def test_signed_in_post_uses_account(self, client, user_headers):
        response = await client.post(
            "/api/posts", data={"title": "Mine", "content": "Hello"}, headers=user_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["author"] == "Kim"
        assert data["userId"] is not None

    async def test_image_is_stored_as_data_uri(self, client):
        response = await client.post(
            "/api/posts",
            data={"author": "guest", "password": "pw", "title": "x-ray", "content": "see attached"},
            files={"image": ("tooth.png", b"\x89PNG-bytes", "image/png")},
        )

        assert response.status_code == 201
        assert response.json()["imageData"].startswith("data:image/png;base64,")


@pytest.mark.integration
class TestPostListing:
    async def test_pagination_and_search(self, client):
        for i in range(12):
            await anonymous_post(client, title=f"Question {i}")
        await anonymous_post(client, title="Implant cost")

        page = (await client.get("/api/posts", params={"page": 2, "limit": 5})).json()
        assert page["totalItems"] == 13
        assert page["totalPages"] == 3
        assert page["currentPage"] == 2
        assert len(page["items"]) == 5

        found = (await client.get("/api/posts", params={"search": "implant"})).json()
        assert found["totalItems"] == 1
        assert found["items"][0]["title"] == "Implant cost"

    async def test_detail_includes_comments(self, client):
        post = await anonymous_post(client)
        await add_comment(client, post["id"])

        detail = (await client.get(f"/api/posts/{post['id']}")).json()

        assert detail["title"] == "Braces?"
        assert len(detail["comments"]) == 1
        assert detail["comments"][0]["likes"] == 0

    async def test_missing_post(self, client):
        assert (await client.get("/api/posts/999")).status_code == 404


@pytest.mark.integration
class TestPostOwnership:
    """Password and account ownership on edit / delete"""

    async def test_verify_password(self, client):
        post = await anonymous_post(client)

        ok = await client.post(f"/api/posts/{post['id']}/verify", json={"password": "pw-1234"})
        bad = await client.post(f"/api/posts/{post['id']}/verify", json={"password": "nope"})

        assert ok.json() == {"success": True}
        assert bad.json() == {"success": False}

    async def test_edit_with_password(self, client):
        post = await anonymous_post(client)
        url = f"/api/posts/{post['id']}"

        missing = await client.put(url, json={"title": "New", "content": "Body"})
        wrong = await client.put(url, json={"title": "New", "content": "Body", "password": "nope"})
        right = await client.put(url, json={"title": "New", "content": "Body", "password": "pw-1234"})

        assert missing.status_code == 400
        assert wrong.status_code == 403
        assert wrong.json()["error"] == "invalid_credential"
        assert right.status_code == 200
        assert right.json()["title"] == "New"

    async def test_delete_with_password(self, client):
        post = await anonymous_post(client)
        url = f"/api/posts/{post['id']}"

        wrong = await client.request("DELETE", url, json={"password": "nope"})
        assert wrong.status_code == 403

        right = await client.request("DELETE", url, json={"password": "pw-1234"})
        assert right.status_code == 204
        assert (await client.get(url)).status_code == 404

    async def test_owner_account_skips_password(self, client, user_headers, make_user):
        created = await client.post("/api/posts", data={"title": "Mine", "content": "Hello"}, headers=user_headers)
        url = f"/api/posts/{created.json()['id']}"

        other_headers = await make_user(username="Park", email="park@example.com")
        stranger = await client.put(url, json={"title": "Hijack", "content": "x"}, headers=other_headers)
        assert stranger.status_code == 400

        owner = await client.put(url, json={"title": "Edited", "content": "Hello again"}, headers=user_headers)
        assert owner.status_code == 200
        assert owner.json()["title"] == "Edited"

        deleted = await client.delete(url, headers=user_headers)
        assert deleted.status_code == 204

        mine = await client.get("/api/auth/me/posts", headers=user_headers)
        assert mine.json() == []

    async def test_edit_missing_post(self, client):
        response = await client.put("/api/posts/999", json={"title": "t", "content": "c", "password": "x"})
        assert response.status_code == 404


@pytest.mark.integration
class TestComments:
    async def test_like_counts_up(self, client):
        post = await anonymous_post(client)
        comment = await add_comment(client, post["id"])

        first = await client.post(f"/api/posts/comments/{comment['id']}/like")
        second = await client.post(f"/api/posts/comments/{comment['id']}/like")

        assert first.json() == {"likes": 1}
        assert second.json() == {"likes": 2}

    async def test_like_missing_comment(self, client):
        assert (await client.post("/api/posts/comments/999/like")).status_code == 404

    async def test_tags_are_deduplicated(self, client):
        post = await anonymous_post(client)
        comment = await add_comment(client, post["id"])
        url = f"/api/posts/comments/{comment['id']}/tags"

        await client.post(url, json={"tag": "helpful"})
        await client.post(url, json={"tag": "helpful"})
        response = await client.post(url, json={"tag": "thanks"})

        assert response.json() == {"tags": "helpful,thanks"}

    async def test_blank_tag_rejected(self, client):
        post = await anonymous_post(client)
        comment = await add_comment(client, post["id"])

        response = await client.post(f"/api/posts/comments/{comment['id']}/tags", json={"tag": "  "})

        assert response.status_code == 400

    async def test_delete_comment_with_password(self, client):
        post = await anonymous_post(client)
        comment = await add_comment(client, post["id"], password="c-pw")
        url = f"/api/posts/comments/{comment['id']}"

        assert (await client.delete(url)).status_code == 400
        assert (await client.request("DELETE", url, json={"password": "nope"})).status_code == 403
        assert (await client.request("DELETE", url, json={"password": "c-pw"})).status_code == 204

        detail = (await client.get(f"/api/posts/{post['id']}")).json()
        assert detail["comments"] == []

    async def test_deleting_post_removes_comments(self, client, admin_headers):
        post = await anonymous_post(client)
        comment = await add_comment(client, post["id"])

        response = await client.delete(f"/api/admin/posts/{post['id']}", headers=admin_headers)

        assert response.status_code == 204
        assert (await client.post(f"/api/posts/comments/{comment['id']}/like")).status_code == 404
