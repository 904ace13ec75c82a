# dental_api/crud/blocked_slot.py

from __future__ import annotations
from datetime import date
from typing import Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from dental_api.core.logging import get_logger
from dental_api.db.models.reservation import BlockedSlot

logger = get_logger(__name__)


async def get_blocked_slot(db: AsyncSession, slot_date: date, slot_time: str) -> Optional[BlockedSlot]:
    stmt = sa.select(BlockedSlot).where(
        BlockedSlot.slot_date == slot_date,
        BlockedSlot.slot_time == slot_time,
    )
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


async def block_slot(db: AsyncSession, slot_date: date, slot_time: str) -> BlockedSlot:
    """
    Idempotent. Blocking an already blocked slot returns the existing row;
    if a concurrent request wins the UNIQUE race we roll back and re-read.
    """
    existing = await get_blocked_slot(db, slot_date, slot_time)
    if existing:
        return existing

    obj = BlockedSlot(slot_date=slot_date, slot_time=slot_time)
    db.add(obj)
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError:
        await db.rollback()
        existing = await get_blocked_slot(db, slot_date, slot_time)
        if existing:
            return existing
        raise
    logger.info("slot_blocked", slot_date=slot_date.isoformat(), slot_time=slot_time)
    return obj


async def unblock_slot(db: AsyncSession, slot_date: date, slot_time: str) -> bool:
    """Idempotent; returns whether a row was actually removed."""
    stmt = sa.delete(BlockedSlot).where(
        BlockedSlot.slot_date == slot_date,
        BlockedSlot.slot_time == slot_time,
    )
    res = await db.execute(stmt)
    await db.commit()
    removed = bool(res.rowcount)
    if removed:
        logger.info("slot_unblocked", slot_date=slot_date.isoformat(), slot_time=slot_time)
    return removed


async def list_blocked_slots_between(db: AsyncSession, start: date, end: date) -> Sequence[BlockedSlot]:
    stmt = (
        sa.select(BlockedSlot)
        .where(BlockedSlot.slot_date >= start, BlockedSlot.slot_date < end)
        .order_by(BlockedSlot.slot_date.asc(), BlockedSlot.slot_time.asc())
    )
    res = await db.execute(stmt)
    return res.scalars().all()
