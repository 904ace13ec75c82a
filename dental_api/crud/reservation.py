# dental_api/crud/reservation.py

from __future__ import annotations
from datetime import date
from typing import NamedTuple, Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.clinic import PENDING
from dental_api.core.logging import get_logger
from dental_api.db.models.reservation import Reservation

logger = get_logger(__name__)


class SlotLoad(NamedTuple):
    """A reservation reduced to what the schedule view needs."""

    desired_date: date
    desired_time: str
    status: str


async def create_reservation(
    db: AsyncSession,
    *,
    patient_name: str,
    phone_number: str,
    desired_date: date,
    desired_time: str,
    notes: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Reservation:
    # No slot-capacity check: several pending requests may share a slot
    obj = Reservation(
        patient_name=patient_name,
        phone_number=phone_number,
        desired_date=desired_date,
        desired_time=desired_time,
        notes=notes,
        status=PENDING,
        user_id=user_id,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info(
        "reservation_created",
        reservation_id=obj.id,
        desired_date=desired_date.isoformat(),
        desired_time=desired_time,
        owned=user_id is not None,
    )
    return obj


async def get_reservation(db: AsyncSession, reservation_id: int) -> Optional[Reservation]:
    return await db.get(Reservation, reservation_id)


async def list_reservations(db: AsyncSession) -> Sequence[Reservation]:
    stmt = sa.select(Reservation).order_by(
        Reservation.desired_date.desc(), Reservation.created_at.desc()
    )
    res = await db.execute(stmt)
    return res.scalars().all()


async def list_reservations_by_owner(db: AsyncSession, user_id: int) -> Sequence[Reservation]:
    stmt = (
        sa.select(Reservation)
        .where(Reservation.user_id == user_id)
        .order_by(Reservation.desired_date.desc())
    )
    res = await db.execute(stmt)
    return res.scalars().all()


async def update_reservation_status(
    db: AsyncSession, reservation_id: int, status: str
) -> Optional[Reservation]:
    """Admin status change. Any transition is accepted, completed->pending included."""
    obj = await db.get(Reservation, reservation_id)
    if not obj:
        return None
    previous = obj.status
    obj.status = status
    await db.commit()
    await db.refresh(obj)
    logger.info("reservation_status_changed", reservation_id=obj.id, previous=previous, status=status)
    return obj


async def update_reservation_details(
    db: AsyncSession,
    reservation_id: int,
    *,
    desired_date: date,
    desired_time: str,
    notes: Optional[str],
) -> Optional[Reservation]:
    """Patient self-service edit; always sends the request back for review."""
    obj = await db.get(Reservation, reservation_id)
    if not obj:
        return None
    obj.desired_date = desired_date
    obj.desired_time = desired_time
    obj.notes = notes
    obj.status = PENDING
    await db.commit()
    await db.refresh(obj)
    logger.info("reservation_updated", reservation_id=obj.id, desired_date=desired_date.isoformat())
    return obj


async def delete_reservation(db: AsyncSession, reservation_id: int) -> bool:
    obj = await db.get(Reservation, reservation_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    logger.info("reservation_deleted", reservation_id=reservation_id)
    return True


async def find_latest_reservation_for_patient(
    db: AsyncSession, patient_name: str, phone_number: str
) -> Optional[Reservation]:
    # exact, case-sensitive match; newest wins, id breaks ties
    stmt = (
        sa.select(Reservation)
        .where(
            Reservation.patient_name == patient_name,
            Reservation.phone_number == phone_number,
        )
        .order_by(Reservation.created_at.desc(), Reservation.id.desc())
        .limit(1)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def list_reservation_slots_between(
    db: AsyncSession, start: date, end: date
) -> list[SlotLoad]:
    """Reservations with ``start <= desired_date < end``."""
    stmt = sa.select(
        Reservation.desired_date, Reservation.desired_time, Reservation.status
    ).where(Reservation.desired_date >= start, Reservation.desired_date < end)
    res = await db.execute(stmt)
    return [SlotLoad(*row) for row in res.all()]
