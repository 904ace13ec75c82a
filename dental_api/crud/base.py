# dental_api/crud/base.py

from __future__ import annotations
from dataclasses import dataclass
from math import ceil
from typing import Any, Generic, Sequence, TypeVar

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


@dataclass
class PageResult(Generic[T]):
    items: Sequence[T]
    total_items: int
    current_page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total_items / self.limit) if self.limit else 0


async def paginate(
    db: AsyncSession,
    stmt: sa.Select[Any],
    *,
    page: int,
    limit: int,
) -> PageResult[Any]:
    """Run ``stmt`` for one page plus a COUNT over the same filters."""
    count_stmt = sa.select(sa.func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()
    res = await db.execute(stmt.limit(limit).offset((page - 1) * limit))
    return PageResult(items=res.scalars().all(), total_items=total, current_page=page, limit=limit)


def ilike_any(term: str, *columns) -> sa.ColumnElement[bool]:
    pattern = f"%{term}%"
    return sa.or_(*(col.ilike(pattern) for col in columns))


async def update_by_id(db: AsyncSession, model: type[T], obj_id: int, changes: dict[str, Any]) -> T | None:
    obj = await db.get(model, obj_id)
    if not obj:
        return None
    for k, v in changes.items():
        setattr(obj, k, v)
    await db.commit()
    await db.refresh(obj)
    return obj


async def delete_by_id(db: AsyncSession, model: type[Any], obj_id: int) -> bool:
    obj = await db.get(model, obj_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    return True
