# dental_api/services/schedule.py
"""
Monthly availability view.

Reservations and blocked slots for one calendar month are merged into
``{"YYYY-MM-DD": {"HH:MM": {"pending": n, "confirmed": n, "blocked": bool}}}``.
Only pending/confirmed reservations add load; completed and cancelled ones
leave the slot free. A blocked flag never hides the counts.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, TypedDict

from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.clinic import ACTIVE_STATUSES
from dental_api.core.errors import ClinicError, ErrorKind
from dental_api.crud.blocked_slot import list_blocked_slots_between
from dental_api.crud.reservation import SlotLoad, list_reservation_slots_between

MIN_YEAR = 1
MAX_YEAR = 9999


class SlotSummary(TypedDict):
    pending: int
    confirmed: int
    blocked: bool


Schedule = dict[str, dict[str, SlotSummary]]


def parse_year_month(year: Optional[str], month: Optional[str]) -> tuple[int, int]:
    """Validate raw query values; raises INVALID_ARGUMENT before anything is queried."""
    if not year or not month:
        raise ClinicError(ErrorKind.INVALID_ARGUMENT, "Year and month are required.")
    try:
        y, m = int(year), int(month)
    except ValueError:
        raise ClinicError(ErrorKind.INVALID_ARGUMENT, "Year and month must be numbers.")
    # December of MAX_YEAR has no following month to end its window
    if not (MIN_YEAR <= y <= MAX_YEAR) or not (1 <= m <= 12) or (y, m) == (MAX_YEAR, 12):
        raise ClinicError(ErrorKind.INVALID_ARGUMENT, "Year or month out of range.")
    return y, m


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """``[first day of month, first day of next month)``."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def _entry(schedule: Schedule, day: date, label: str) -> SlotSummary:
    slots = schedule.setdefault(day.isoformat(), {})
    if label not in slots:
        slots[label] = {"pending": 0, "confirmed": 0, "blocked": False}
    return slots[label]


def build_schedule(
    reservations: Iterable[SlotLoad],
    blocked: Iterable[tuple[date, str]],
) -> Schedule:
    schedule: Schedule = {}
    for r in reservations:
        entry = _entry(schedule, r.desired_date, r.desired_time)
        if r.status in ACTIVE_STATUSES:
            entry[r.status] += 1
    for slot_date, slot_time in blocked:
        _entry(schedule, slot_date, slot_time)["blocked"] = True
    return schedule


async def get_schedule(db: AsyncSession, year: int, month: int) -> Schedule:
    start, end = month_bounds(year, month)
    reservations = await list_reservation_slots_between(db, start, end)
    blocked = await list_blocked_slots_between(db, start, end)
    return build_schedule(reservations, ((b.slot_date, b.slot_time) for b in blocked))
