# dental_api/api/routes/schedule.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.db.session import get_session
from dental_api.schemas.reservation import SlotStatus
from dental_api.services.schedule import get_schedule, parse_year_month

router = APIRouter(prefix="/api", tags=["schedule"])


@router.get("/schedule", response_model=dict[str, dict[str, SlotStatus]])
async def schedule_ep(
    # raw strings so bad input maps to 400 rather than FastAPI's 422
    year: Optional[str] = None,
    month: Optional[str] = None,
    db: AsyncSession = Depends(get_session),
):
    y, m = parse_year_month(year, month)
    return await get_schedule(db, y, m)
