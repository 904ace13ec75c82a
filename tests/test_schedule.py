#!/usr/bin/env python3
"""
Tests for the monthly availability view.
"""

from datetime import date

import pytest

from dental_api.core.clinic import ACTIVE_STATUSES, CANCELLED, COMPLETED, TIME_SLOTS, is_time_slot
from dental_api.core.errors import ClinicError, ErrorKind
from dental_api.crud.blocked_slot import block_slot
from dental_api.crud.reservation import SlotLoad, create_reservation, update_reservation_status
from dental_api.services.schedule import build_schedule, get_schedule, month_bounds, parse_year_month


@pytest.mark.unit
class TestTimeSlots:
    """Bookable half-hour labels"""

    def test_slots_skip_lunch_break(self):
        assert TIME_SLOTS[0] == "09:00"
        assert TIME_SLOTS[-1] == "17:30"
        assert "12:30" in TIME_SLOTS
        assert "13:00" not in TIME_SLOTS
        assert "13:30" not in TIME_SLOTS
        assert len(TIME_SLOTS) == 16

    def test_is_time_slot(self):
        assert is_time_slot("14:00")
        assert not is_time_slot("9:00")
        assert not is_time_slot("18:00")


@pytest.mark.unit
class TestBuildSchedule:
    """Pure merge of reservations and blocked slots"""

    def test_counts_and_blocked_flag(self):
        reservations = [
            SlotLoad(date(2025, 7, 1), "09:00", "pending"),
            SlotLoad(date(2025, 7, 1), "09:00", "confirmed"),
            SlotLoad(date(2025, 7, 1), "10:00", "completed"),
        ]
        blocked = [(date(2025, 7, 1), "09:00"), (date(2025, 7, 2), "14:00")]

        schedule = build_schedule(reservations, blocked)

        assert schedule["2025-07-01"]["09:00"] == {"pending": 1, "confirmed": 1, "blocked": True}
        assert schedule["2025-07-02"]["14:00"] == {"pending": 0, "confirmed": 0, "blocked": True}

    def test_cancelled_reservation_is_not_counted(self):
        reservations = [
            SlotLoad(date(2025, 6, 10), "10:00", "pending"),
            SlotLoad(date(2025, 6, 10), "10:00", "confirmed"),
            SlotLoad(date(2025, 6, 10), "10:00", "cancelled"),
        ]

        schedule = build_schedule(reservations, [(date(2025, 6, 10), "14:00")])

        assert schedule == {
            "2025-06-10": {
                "10:00": {"pending": 1, "confirmed": 1, "blocked": False},
                "14:00": {"pending": 0, "confirmed": 0, "blocked": True},
            }
        }

    def test_inactive_statuses_add_no_load(self):
        reservations = [
            SlotLoad(date(2025, 7, 3), "11:00", "completed"),
            SlotLoad(date(2025, 7, 3), "11:00", "cancelled"),
        ]

        schedule = build_schedule(reservations, [])

        slot = schedule.get("2025-07-03", {}).get("11:00", {"pending": 0, "confirmed": 0, "blocked": False})
        assert slot["pending"] == 0
        assert slot["confirmed"] == 0
        assert slot["blocked"] is False

    def test_empty_month(self):
        assert build_schedule([], []) == {}

    @pytest.mark.parametrize("status", ACTIVE_STATUSES)
    def test_each_active_status_has_its_own_count(self, status):
        schedule = build_schedule([SlotLoad(date(2025, 7, 4), "16:00", status)], [])

        slot = schedule["2025-07-04"]["16:00"]
        assert slot[status] == 1
        assert sum(slot[s] for s in ACTIVE_STATUSES) == 1

    def test_inactive_statuses_are_not_active(self):
        assert COMPLETED not in ACTIVE_STATUSES
        assert CANCELLED not in ACTIVE_STATUSES


@pytest.mark.unit
class TestMonthArguments:
    """Query parameter parsing and month windows"""

    def test_month_bounds(self):
        assert month_bounds(2025, 7) == (date(2025, 7, 1), date(2025, 8, 1))

    def test_december_rolls_into_next_year(self):
        assert month_bounds(2025, 12) == (date(2025, 12, 1), date(2026, 1, 1))

    def test_parse_valid(self):
        assert parse_year_month("2025", "7") == (2025, 7)

    def test_last_supported_month(self):
        assert parse_year_month("9999", "11") == (9999, 11)
        assert parse_year_month("9999", "1") == (9999, 1)
        assert month_bounds(9999, 11) == (date(9999, 11, 1), date(9999, 12, 1))

    @pytest.mark.parametrize(
        "year,month",
        [
            (None, "7"), ("2025", None), ("", ""), ("abc", "7"), ("2025", "13"), ("2025", "0"),
            ("9999", "12"), ("10000", "1"), ("0", "1"),
        ],
    )
    def test_parse_invalid(self, year, month):
        with pytest.raises(ClinicError) as exc_info:
            parse_year_month(year, month)
        assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT
        assert exc_info.value.status_code == 400


@pytest.mark.integration
class TestScheduleQueries:
    """Schedule built from stored rows"""

    async def test_month_window_is_half_open(self, session):
        await create_reservation(
            session, patient_name="A", phone_number="1", desired_date=date(2025, 6, 30), desired_time="09:00"
        )
        await create_reservation(
            session, patient_name="B", phone_number="2", desired_date=date(2025, 7, 1), desired_time="09:00"
        )
        await create_reservation(
            session, patient_name="C", phone_number="3", desired_date=date(2025, 7, 31), desired_time="17:30"
        )
        await create_reservation(
            session, patient_name="D", phone_number="4", desired_date=date(2025, 8, 1), desired_time="09:00"
        )

        schedule = await get_schedule(session, 2025, 7)

        assert set(schedule) == {"2025-07-01", "2025-07-31"}
        assert schedule["2025-07-31"]["17:30"]["pending"] == 1

    async def test_blocked_slot_keeps_counts(self, session):
        r = await create_reservation(
            session, patient_name="A", phone_number="1", desired_date=date(2025, 7, 10), desired_time="10:00"
        )
        await update_reservation_status(session, r.id, "confirmed")
        await block_slot(session, date(2025, 7, 10), "10:00")

        schedule = await get_schedule(session, 2025, 7)

        assert schedule["2025-07-10"]["10:00"] == {"pending": 0, "confirmed": 1, "blocked": True}

    async def test_schedule_endpoint(self, client, reservation_payload):
        await client.post("/api/reservations", json=reservation_payload)

        response = await client.get("/api/schedule", params={"year": 2025, "month": 7})

        assert response.status_code == 200
        assert response.json() == {"2025-07-01": {"09:00": {"pending": 1, "confirmed": 0, "blocked": False}}}

    async def test_schedule_endpoint_rejects_bad_month(self, client):
        response = await client.get("/api/schedule", params={"year": 2025, "month": 13})
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_argument"

    async def test_schedule_endpoint_requires_both_params(self, client):
        response = await client.get("/api/schedule", params={"year": 2025})
        assert response.status_code == 400

    async def test_schedule_endpoint_accepts_year_9999(self, client):
        response = await client.get("/api/schedule", params={"year": 9999, "month": 1})
        assert response.status_code == 200
        assert response.json() == {}

    async def test_schedule_endpoint_rejects_december_9999(self, client):
        response = await client.get("/api/schedule", params={"year": 9999, "month": 12})
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_argument"
