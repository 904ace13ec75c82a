# dental_api/core/clinic.py
from __future__ import annotations

from datetime import datetime, time, timedelta

SLOT_LENGTH = timedelta(minutes=30)

# Bookable windows; lunch break 13:00-14:00 is left out
OPENING_WINDOWS = (
    (time(9, 0), time(13, 0)),
    (time(14, 0), time(18, 0)),
)

PENDING = "pending"
CONFIRMED = "confirmed"
COMPLETED = "completed"
CANCELLED = "cancelled"

# Only these count toward a slot's displayed load; each is also a key of its summary
ACTIVE_STATUSES = (PENDING, CONFIRMED)


def _labels() -> tuple[str, ...]:
    out: list[str] = []
    anchor = datetime(2000, 1, 1)
    for start, end in OPENING_WINDOWS:
        cur = datetime.combine(anchor, start)
        stop = datetime.combine(anchor, end)
        while cur < stop:
            out.append(cur.strftime("%H:%M"))
            cur += SLOT_LENGTH
    return tuple(out)


TIME_SLOTS: tuple[str, ...] = _labels()


def is_time_slot(label: str) -> bool:
    return label in TIME_SLOTS
