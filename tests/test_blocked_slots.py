#!/usr/bin/env python3
"""
Tests for admin slot blocking.
"""

from datetime import date

import pytest
import sqlalchemy as sa

from dental_api.crud import blocked_slot as blocked_slot_crud
from dental_api.crud.blocked_slot import block_slot, get_blocked_slot, unblock_slot
from dental_api.db.models.reservation import BlockedSlot


@pytest.mark.integration
class TestBlockedSlotStore:
    """Idempotent block / unblock"""

    async def test_block_twice_keeps_one_row(self, session):
        first = await block_slot(session, date(2025, 7, 1), "09:00")
        second = await block_slot(session, date(2025, 7, 1), "09:00")

        assert first.id == second.id
        count = (await session.execute(sa.select(sa.func.count()).select_from(BlockedSlot))).scalar_one()
        assert count == 1

    async def test_unblock_removes_row(self, session):
        await block_slot(session, date(2025, 7, 1), "09:00")

        assert await unblock_slot(session, date(2025, 7, 1), "09:00") is True
        assert await get_blocked_slot(session, date(2025, 7, 1), "09:00") is None

    async def test_unblock_never_blocked_slot(self, session):
        assert await unblock_slot(session, date(2025, 7, 1), "14:30") is False

    async def test_same_time_on_other_day_is_separate(self, session):
        a = await block_slot(session, date(2025, 7, 1), "09:00")
        b = await block_slot(session, date(2025, 7, 2), "09:00")
        assert a.id != b.id

    async def test_concurrent_insert_returns_existing_row(self, session, monkeypatch):
        """A lookup that misses a row committed meanwhile hits the unique constraint"""
        first_id = (await block_slot(session, date(2025, 7, 1), "09:00")).id

        lookups = []

        async def stale_then_real(db, slot_date, slot_time):
            lookups.append(slot_time)
            if len(lookups) == 1:
                return None
            return await get_blocked_slot(db, slot_date, slot_time)

        monkeypatch.setattr(blocked_slot_crud, "get_blocked_slot", stale_then_real)

        second = await block_slot(session, date(2025, 7, 1), "09:00")

        assert len(lookups) == 2
        assert second.id == first_id
        count = (await session.execute(sa.select(sa.func.count()).select_from(BlockedSlot))).scalar_one()
        assert count == 1


@pytest.mark.integration
class TestBlockedSlotEndpoints:
    """/api/admin/blocked-slots"""

    async def test_block_and_unblock(self, client, admin_headers):
        body = {"slotDate": "2025-07-04", "slotTime": "15:00"}

        first = await client.post("/api/admin/blocked-slots", json=body, headers=admin_headers)
        second = await client.post("/api/admin/blocked-slots", json=body, headers=admin_headers)

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["id"] == second.json()["id"]

        schedule = (await client.get("/api/schedule", params={"year": 2025, "month": 7})).json()
        assert schedule["2025-07-04"]["15:00"]["blocked"] is True

        response = await client.request("DELETE", "/api/admin/blocked-slots", json=body, headers=admin_headers)
        assert response.status_code == 204

        schedule = (await client.get("/api/schedule", params={"year": 2025, "month": 7})).json()
        assert "2025-07-04" not in schedule

    async def test_unblock_is_idempotent(self, client, admin_headers):
        body = {"slotDate": "2025-07-04", "slotTime": "15:00"}
        response = await client.request("DELETE", "/api/admin/blocked-slots", json=body, headers=admin_headers)
        assert response.status_code == 204

    async def test_rejects_unknown_time_label(self, client, admin_headers):
        body = {"slotDate": "2025-07-04", "slotTime": "13:00"}
        response = await client.post("/api/admin/blocked-slots", json=body, headers=admin_headers)
        assert response.status_code == 422

    async def test_requires_admin(self, client):
        body = {"slotDate": "2025-07-04", "slotTime": "15:00"}
        response = await client.post("/api/admin/blocked-slots", json=body)
        assert response.status_code == 401
