# dental_api/crud/gallery.py

from __future__ import annotations
from typing import Any, Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.crud.base import PageResult, delete_by_id, paginate, update_by_id
from dental_api.db.models.content import CasePhoto, ClinicPhoto


# --- clinic photos ---

async def list_clinic_photos_page(db: AsyncSession, *, page: int = 1, limit: int = 8) -> PageResult[ClinicPhoto]:
    stmt = sa.select(ClinicPhoto).order_by(ClinicPhoto.display_order.asc(), ClinicPhoto.id.asc())
    return await paginate(db, stmt, page=page, limit=limit)


async def list_clinic_photos(db: AsyncSession) -> Sequence[ClinicPhoto]:
    res = await db.execute(
        sa.select(ClinicPhoto).order_by(ClinicPhoto.display_order.asc(), ClinicPhoto.id.asc())
    )
    return res.scalars().all()


async def create_clinic_photo(db: AsyncSession, *, caption: Optional[str], image_data: str) -> ClinicPhoto:
    # new photos go to the end of the gallery
    last = (await db.execute(sa.select(sa.func.max(ClinicPhoto.display_order)))).scalar_one_or_none()
    obj = ClinicPhoto(caption=caption, image_data=image_data, display_order=(last or 0) + 1)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_clinic_photo_caption(db: AsyncSession, photo_id: int, caption: Optional[str]) -> Optional[ClinicPhoto]:
    return await update_by_id(db, ClinicPhoto, photo_id, {"caption": caption})


async def delete_clinic_photo(db: AsyncSession, photo_id: int) -> bool:
    return await delete_by_id(db, ClinicPhoto, photo_id)


# --- before/after cases ---

async def list_cases(
    db: AsyncSession, *, page: int = 1, limit: int = 9, category: str = ""
) -> PageResult[CasePhoto]:
    stmt = sa.select(CasePhoto)
    if category:
        stmt = stmt.where(CasePhoto.category == category)
    stmt = stmt.order_by(CasePhoto.created_at.desc(), CasePhoto.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def list_latest_cases(db: AsyncSession, limit: int = 3) -> Sequence[CasePhoto]:
    res = await db.execute(
        sa.select(CasePhoto).order_by(CasePhoto.created_at.desc(), CasePhoto.id.desc()).limit(limit)
    )
    return res.scalars().all()


async def create_case(
    db: AsyncSession,
    *,
    title: str,
    category: Optional[str],
    description: Optional[str],
    before_image_data: Optional[str],
    after_image_data: Optional[str],
) -> CasePhoto:
    obj = CasePhoto(
        title=title,
        category=category,
        description=description,
        before_image_data=before_image_data,
        after_image_data=after_image_data,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_case(db: AsyncSession, case_id: int, **changes: Any) -> Optional[CasePhoto]:
    return await update_by_id(db, CasePhoto, case_id, changes)


async def delete_case(db: AsyncSession, case_id: int) -> bool:
    return await delete_by_id(db, CasePhoto, case_id)
