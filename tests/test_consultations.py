#!/usr/bin/env python3
"""
Tests for consultations and the answered flag maintained by admin replies.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from dental_api.crud.consultation import create_reply, delete_reply


async def ask(client, **overrides):
    form = {"author": "guest", "password": "q-pw", "title": "Sensitive teeth", "content": "Cold drinks hurt"}
    form.update(overrides)
    response = await client.post("/api/consultations", data=form)
    assert response.status_code == 201
    return response.json()


@pytest.mark.integration
class TestConsultationBoard:
    async def test_secret_by_default(self, client):
        data = await ask(client)

        assert data["isSecret"] is True
        assert data["isAnswered"] is False

    async def test_secret_consultations_hidden_from_list(self, client):
        await ask(client, title="Private question")
        await ask(client, title="Public question", isSecret="false")

        page = (await client.get("/api/consultations")).json()

        assert page["totalItems"] == 1
        assert [c["title"] for c in page["items"]] == ["Public question"]

    async def test_admin_list_includes_secret(self, client, admin_headers):
        await ask(client, title="Private question")
        await ask(client, title="Public question", isSecret="false")

        page = (await client.get("/api/admin/consultations", headers=admin_headers)).json()

        assert page["totalItems"] == 2

    async def test_owner_edit_and_delete(self, client):
        created = await ask(client)
        url = f"/api/consultations/{created['id']}"

        wrong = await client.put(url, json={"title": "x", "content": "y", "password": "nope"})
        assert wrong.status_code == 403

        right = await client.put(url, json={"title": "Updated", "content": "Still hurts", "password": "q-pw"})
        assert right.status_code == 200
        assert right.json()["title"] == "Updated"

        assert (await client.delete(url)).status_code == 400
        assert (await client.request("DELETE", url, json={"password": "q-pw"})).status_code == 204
        assert (await client.get(url)).status_code == 404

    async def test_signed_in_consultation(self, client, user_headers):
        response = await client.post(
            "/api/consultations", data={"title": "Mine", "content": "Question"}, headers=user_headers
        )
        assert response.status_code == 201

        mine = (await client.get("/api/auth/me/consultations", headers=user_headers)).json()
        assert [c["title"] for c in mine] == ["Mine"]

    async def test_anonymous_needs_password(self, client):
        response = await client.post("/api/consultations", data={"author": "guest", "title": "t", "content": "c"})
        assert response.status_code == 400


@pytest.mark.integration
class TestReplies:
    """Replying marks a consultation answered; removing the last reply clears it"""

    async def test_answered_flag_follows_replies(self, client, admin_headers):
        consultation = await ask(client)
        url = f"/api/consultations/{consultation['id']}"
        replies_url = f"/api/admin/consultations/{consultation['id']}/replies"

        first = await client.post(replies_url, json={"content": "Try a soft brush"}, headers=admin_headers)
        second = await client.post(replies_url, json={"content": "And fluoride paste"}, headers=admin_headers)
        assert first.status_code == 201
        assert second.status_code == 201

        detail = (await client.get(url)).json()
        assert detail["isAnswered"] is True
        assert len(detail["replies"]) == 2

        await client.delete(f"/api/admin/replies/{first.json()['id']}", headers=admin_headers)
        assert (await client.get(url)).json()["isAnswered"] is True

        await client.delete(f"/api/admin/replies/{second.json()['id']}", headers=admin_headers)
        detail = (await client.get(url)).json()
        assert detail["isAnswered"] is False
        assert detail["replies"] == []

    async def test_edit_reply_keeps_flag(self, client, admin_headers):
        consultation = await ask(client)
        reply = await client.post(
            f"/api/admin/consultations/{consultation['id']}/replies",
            json={"content": "Draft"},
            headers=admin_headers,
        )

        edited = await client.put(
            f"/api/admin/replies/{reply.json()['id']}", json={"content": "Final"}, headers=admin_headers
        )

        assert edited.json()["content"] == "Final"
        assert (await client.get(f"/api/consultations/{consultation['id']}")).json()["isAnswered"] is True

    async def test_reply_to_missing_consultation(self, client, admin_headers):
        response = await client.post(
            "/api/admin/consultations/999/replies", json={"content": "hello"}, headers=admin_headers
        )
        assert response.status_code == 404

    async def test_delete_missing_reply(self, client, admin_headers):
        assert (await client.delete("/api/admin/replies/999", headers=admin_headers)).status_code == 404

    async def test_replies_require_admin(self, client, user_headers):
        consultation = await ask(client)
        response = await client.post(
            f"/api/admin/consultations/{consultation['id']}/replies",
            json={"content": "hello"},
            headers=user_headers,
        )
        assert response.status_code == 403


@pytest.mark.unit
class TestReplyTransaction:
    """Commit failure leaves nothing half-written"""

    async def test_rollback_on_commit_failure(self):
        consultation = MagicMock(is_answered=False)
        db = AsyncMock()
        db.add = MagicMock()
        db.get = AsyncMock(return_value=consultation)
        db.commit = AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error")))

        with pytest.raises(OperationalError):
            await create_reply(db, 1, "hello")

        db.rollback.assert_awaited_once()
        db.refresh.assert_not_awaited()

    async def test_missing_consultation_returns_none(self):
        db = AsyncMock()
        db.get = AsyncMock(return_value=None)

        assert await create_reply(db, 1, "hello") is None
        db.commit.assert_not_awaited()

    async def test_delete_rollback_on_commit_failure(self):
        reply = MagicMock(consultation_id=7)
        db = AsyncMock()
        db.get = AsyncMock(return_value=reply)
        remaining = MagicMock()
        remaining.scalar_one.return_value = 0
        db.execute = AsyncMock(return_value=remaining)
        db.commit = AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error")))

        with pytest.raises(OperationalError):
            await delete_reply(db, 3)

        db.delete.assert_awaited_once_with(reply)
        db.rollback.assert_awaited_once()

    async def test_delete_missing_reply_returns_false(self):
        db = AsyncMock()
        db.get = AsyncMock(return_value=None)

        assert await delete_reply(db, 3) is False
        db.commit.assert_not_awaited()


@pytest.mark.integration
class TestReplyDeleteRollback:
    """Failed delete of the last reply keeps the consultation answered"""

    async def test_answered_flag_survives_failed_delete(self, client, admin_headers, session, monkeypatch):
        consultation = await ask(client)
        reply = await client.post(
            f"/api/admin/consultations/{consultation['id']}/replies",
            json={"content": "Use a soft brush"},
            headers=admin_headers,
        )
        reply_id = reply.json()["id"]

        monkeypatch.setattr(
            session, "commit", AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error")))
        )
        with pytest.raises(OperationalError):
            await delete_reply(session, reply_id)

        detail = (await client.get(f"/api/consultations/{consultation['id']}")).json()
        assert detail["isAnswered"] is True
        assert [r["id"] for r in detail["replies"]] == [reply_id]
