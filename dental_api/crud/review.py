# dental_api/crud/review.py

from __future__ import annotations
from typing import Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.crud.base import PageResult, delete_by_id, paginate, update_by_id
from dental_api.db.models.content import Review


async def list_approved_reviews(db: AsyncSession, *, page: int = 1, limit: int = 5) -> PageResult[Review]:
    stmt = (
        sa.select(Review)
        .where(Review.is_approved.is_(True))
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    return await paginate(db, stmt, page=page, limit=limit)


async def list_latest_approved_reviews(db: AsyncSession, limit: int = 3) -> Sequence[Review]:
    res = await db.execute(
        sa.select(Review)
        .where(Review.is_approved.is_(True))
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(limit)
    )
    return res.scalars().all()


async def list_reviews(db: AsyncSession) -> Sequence[Review]:
    res = await db.execute(sa.select(Review).order_by(Review.created_at.desc(), Review.id.desc()))
    return res.scalars().all()


async def create_review(
    db: AsyncSession, *, patient_name: str, rating: int, content: str, image_data: Optional[str]
) -> Review:
    # new reviews wait for approval
    obj = Review(patient_name=patient_name, rating=rating, content=content, image_data=image_data)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def set_review_approval(db: AsyncSession, review_id: int, is_approved: bool) -> Optional[Review]:
    return await update_by_id(db, Review, review_id, {"is_approved": is_approved})


async def reply_to_review(db: AsyncSession, review_id: int, reply: str) -> Optional[Review]:
    return await update_by_id(db, Review, review_id, {"admin_reply": reply})


async def delete_review(db: AsyncSession, review_id: int) -> bool:
    return await delete_by_id(db, Review, review_id)
