# dental_api/crud/consultation.py

from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from dental_api.core.logging import get_logger
from dental_api.crud.base import PageResult, ilike_any, paginate
from dental_api.db.models.consultation import Consultation, Reply

logger = get_logger(__name__)


async def list_public_consultations(
    db: AsyncSession, *, page: int = 1, limit: int = 10, search: str = ""
) -> PageResult[Consultation]:
    stmt = sa.select(Consultation).where(Consultation.is_secret.is_(False))
    if search:
        stmt = stmt.where(ilike_any(search, Consultation.title, Consultation.content, Consultation.author))
    stmt = stmt.order_by(Consultation.created_at.desc(), Consultation.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def list_consultations(
    db: AsyncSession, *, page: int = 1, limit: int = 10, search: str = ""
) -> PageResult[Consultation]:
    """Admin view: secret ones included."""
    stmt = sa.select(Consultation)
    if search:
        stmt = stmt.where(ilike_any(search, Consultation.title, Consultation.content, Consultation.author))
    stmt = stmt.order_by(Consultation.created_at.desc(), Consultation.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def list_consultations_by_owner(db: AsyncSession, user_id: int) -> Sequence[Consultation]:
    stmt = (
        sa.select(Consultation)
        .where(Consultation.user_id == user_id)
        .order_by(Consultation.created_at.desc())
    )
    res = await db.execute(stmt)
    return res.scalars().all()


async def get_consultation(db: AsyncSession, consultation_id: int) -> Optional[Consultation]:
    return await db.get(Consultation, consultation_id)


async def create_consultation(
    db: AsyncSession,
    *,
    author: str,
    password_hash: Optional[str],
    title: str,
    content: str,
    is_secret: bool = True,
    image_data: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Consultation:
    obj = Consultation(
        author=author,
        password=password_hash,
        title=title,
        content=content,
        is_secret=is_secret,
        image_data=image_data,
        user_id=user_id,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_consultation(
    db: AsyncSession, consultation_id: int, *, title: str, content: str
) -> Optional[Consultation]:
    obj = await db.get(Consultation, consultation_id)
    if not obj:
        return None
    obj.title = title
    obj.content = content
    await db.commit()
    await db.refresh(obj)
    return obj


async def delete_consultation(db: AsyncSession, consultation_id: int) -> bool:
    obj = await db.get(Consultation, consultation_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    return True


# --- replies ---

async def list_replies(db: AsyncSession, consultation_id: int) -> Sequence[Reply]:
    stmt = (
        sa.select(Reply)
        .where(Reply.consultation_id == consultation_id)
        .order_by(Reply.created_at.desc(), Reply.id.desc())
    )
    res = await db.execute(stmt)
    return res.scalars().all()


async def create_reply(db: AsyncSession, consultation_id: int, content: str) -> Optional[Reply]:
    """
    Insert the reply and mark the consultation answered in one transaction.
    Returns None if the consultation does not exist.
    """
    consultation = await db.get(Consultation, consultation_id)
    if not consultation:
        return None

    reply = Reply(consultation_id=consultation_id, content=content)
    db.add(reply)
    consultation.is_answered = True
    consultation.updated_at = datetime.now(timezone.utc)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("reply_create_rolled_back", consultation_id=consultation_id, error=str(e))
        raise
    await db.refresh(reply)
    logger.info("reply_created", consultation_id=consultation_id, reply_id=reply.id)
    return reply


async def update_reply(db: AsyncSession, reply_id: int, content: str) -> Optional[Reply]:
    obj = await db.get(Reply, reply_id)
    if not obj:
        return None
    obj.content = content
    await db.commit()
    await db.refresh(obj)
    return obj


async def delete_reply(db: AsyncSession, reply_id: int) -> bool:
    """
    Delete the reply; if it was the last one, flip the consultation back to
    unanswered. Both happen in one transaction.
    """
    reply = await db.get(Reply, reply_id)
    if not reply:
        return False
    consultation_id = reply.consultation_id

    try:
        await db.delete(reply)
        await db.flush()
        remaining = (
            await db.execute(
                sa.select(sa.func.count()).select_from(Reply).where(Reply.consultation_id == consultation_id)
            )
        ).scalar_one()
        if remaining == 0:
            await db.execute(
                sa.update(Consultation)
                .where(Consultation.id == consultation_id)
                .values(is_answered=False, updated_at=datetime.now(timezone.utc))
            )
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("reply_delete_rolled_back", reply_id=reply_id, error=str(e))
        raise
    logger.info("reply_deleted", consultation_id=consultation_id, reply_id=reply_id, remaining=remaining)
    return True
