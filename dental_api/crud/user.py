# dental_api/crud/user.py
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from dental_api.db.models.user import User


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    stmt = sa.select(User).where(User.email == email)
    res = await db.execute(stmt)
    return res.scalar_one_or_none()


async def create_user(db: AsyncSession, *, username: str, email: str, password_hash: str) -> User:
    """Raises IntegrityError when the email is already registered."""
    obj = User(username=username, email=email, password=password_hash)
    db.add(obj)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise
    await db.refresh(obj)
    return obj


async def update_user(
    db: AsyncSession,
    user_id: int,
    *,
    username: str,
    password_hash: Optional[str] = None,
) -> Optional[User]:
    obj = await db.get(User, user_id)
    if not obj:
        return None
    obj.username = username
    if password_hash is not None:
        obj.password = password_hash
    await db.commit()
    await db.refresh(obj)
    return obj
