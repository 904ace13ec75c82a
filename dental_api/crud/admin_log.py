# dental_api/crud/admin_log.py
from typing import Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.db.models.admin_log import AdminLog

LOGIN_SUCCESS = "login_success"


async def record_admin_action(db: AsyncSession, action: str, ip_address: Optional[str]) -> AdminLog:
    obj = AdminLog(action=action, ip_address=ip_address)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def list_admin_logs(db: AsyncSession, *, limit: int = 100) -> Sequence[AdminLog]:
    stmt = sa.select(AdminLog).order_by(AdminLog.created_at.desc(), AdminLog.id.desc()).limit(limit)
    res = await db.execute(stmt)
    return res.scalars().all()
