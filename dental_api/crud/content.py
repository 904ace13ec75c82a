# dental_api/crud/content.py

from __future__ import annotations
from typing import Any, Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.crud.base import PageResult, delete_by_id, ilike_any, paginate, update_by_id
from dental_api.db.models.content import AboutContent, Doctor, Faq, Notice

# category values meaning "no filter"
ALL_CATEGORIES = ("", "all", "전체")

ABOUT_ID = 1
DEFAULT_ABOUT = {
    "title": "About our clinic",
    "subtitle": "Caring for every smile, one patient at a time.",
    "content": "",
}


# --- notices ---

async def list_notices(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 10,
    search: str = "",
    category: str = "",
) -> PageResult[Notice]:
    stmt = sa.select(Notice)
    if search:
        stmt = stmt.where(ilike_any(search, Notice.title, Notice.content))
    if category not in ALL_CATEGORIES:
        stmt = stmt.where(Notice.category == category)
    stmt = stmt.order_by(Notice.created_at.desc(), Notice.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def list_latest_notices(db: AsyncSession, limit: int = 3) -> Sequence[Notice]:
    res = await db.execute(sa.select(Notice).order_by(Notice.created_at.desc(), Notice.id.desc()).limit(limit))
    return res.scalars().all()


async def get_notice(db: AsyncSession, notice_id: int) -> Optional[Notice]:
    return await db.get(Notice, notice_id)


async def create_notice(
    db: AsyncSession, *, title: str, content: str, category: Optional[str], image_data: Optional[str]
) -> Notice:
    obj = Notice(title=title, content=content, category=category, image_data=image_data)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_notice(db: AsyncSession, notice_id: int, **changes: Any) -> Optional[Notice]:
    return await update_by_id(db, Notice, notice_id, changes)


async def delete_notice(db: AsyncSession, notice_id: int) -> bool:
    return await delete_by_id(db, Notice, notice_id)


# --- doctors ---

async def list_doctors(db: AsyncSession) -> Sequence[Doctor]:
    res = await db.execute(sa.select(Doctor).order_by(Doctor.id.asc()))
    return res.scalars().all()


async def create_doctor(
    db: AsyncSession, *, name: str, position: str, history: Optional[str], image_data: Optional[str]
) -> Doctor:
    obj = Doctor(name=name, position=position, history=history, image_data=image_data)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_doctor(db: AsyncSession, doctor_id: int, **changes: Any) -> Optional[Doctor]:
    return await update_by_id(db, Doctor, doctor_id, changes)


async def delete_doctor(db: AsyncSession, doctor_id: int) -> bool:
    return await delete_by_id(db, Doctor, doctor_id)


# --- about page ---

async def get_about(db: AsyncSession) -> Optional[AboutContent]:
    return await db.get(AboutContent, ABOUT_ID)


async def ensure_about(db: AsyncSession) -> AboutContent:
    """Seed the single about row if it is missing."""
    obj = await db.get(AboutContent, ABOUT_ID)
    if obj:
        return obj
    obj = AboutContent(id=ABOUT_ID, **DEFAULT_ABOUT)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_about(db: AsyncSession, **changes: Any) -> AboutContent:
    obj = await ensure_about(db)
    for k, v in changes.items():
        setattr(obj, k, v)
    await db.commit()
    await db.refresh(obj)
    return obj


# --- faqs ---

async def list_faqs(db: AsyncSession, *, search: str = "") -> Sequence[Faq]:
    stmt = sa.select(Faq)
    if search:
        stmt = stmt.where(ilike_any(search, Faq.question, Faq.answer))
    stmt = stmt.order_by(Faq.category.asc(), Faq.id.asc())
    res = await db.execute(stmt)
    return res.scalars().all()


async def create_faq(
    db: AsyncSession, *, category: str, question: str, answer: str, image_data: Optional[str]
) -> Faq:
    obj = Faq(category=category, question=question, answer=answer, image_data=image_data)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_faq(db: AsyncSession, faq_id: int, **changes: Any) -> Optional[Faq]:
    return await update_by_id(db, Faq, faq_id, changes)


async def delete_faq(db: AsyncSession, faq_id: int) -> bool:
    return await delete_by_id(db, Faq, faq_id)
