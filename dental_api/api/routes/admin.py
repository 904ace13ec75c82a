# dental_api/api/routes/admin.py
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import ClinicError, ErrorKind, not_found
from dental_api.core.logging import get_logger
from dental_api.core.security import constant_time_equals, create_admin_token, get_app_settings, require_admin
from dental_api.crud.admin_log import LOGIN_SUCCESS, list_admin_logs, record_admin_action
from dental_api.crud.blocked_slot import block_slot, unblock_slot
from dental_api.crud.reservation import delete_reservation, list_reservations, update_reservation_status
from dental_api.db.session import get_session
from dental_api.schemas.admin import AdminLogin, AdminLogOut
from dental_api.schemas.reservation import (
    BlockedSlotIn,
    BlockedSlotOut,
    ReservationOut,
    ReservationStatusUpdate,
)
from dental_api.schemas.user import AccessTokenOut

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


@router.post("/login", response_model=AccessTokenOut)
async def admin_login_ep(
    payload: AdminLogin,
    request: Request,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    ip = _client_ip(request)
    if not settings.ADMIN_PASSWORD:
        logger.warning("admin_login_disabled", ip=ip)
        raise ClinicError(ErrorKind.UNAUTHENTICATED, "Admin login is not configured")
    if not constant_time_equals(payload.password, settings.ADMIN_PASSWORD):
        logger.warning("admin_login_failed", ip=ip)
        raise ClinicError(ErrorKind.UNAUTHENTICATED, "Invalid admin password")

    await record_admin_action(db, LOGIN_SUCCESS, ip)
    logger.info("admin_login_success", ip=ip)
    return AccessTokenOut(access_token=create_admin_token(settings))


@router.get("/logs", response_model=list[AdminLogOut], dependencies=[Depends(require_admin)])
async def admin_logs_ep(db: AsyncSession = Depends(get_session)):
    return await list_admin_logs(db, limit=100)


# --- reservations ---

@router.get("/reservations", response_model=list[ReservationOut], dependencies=[Depends(require_admin)])
async def admin_list_reservations_ep(db: AsyncSession = Depends(get_session)):
    return await list_reservations(db)


@router.put(
    "/reservations/{reservation_id}/status",
    response_model=ReservationOut,
    dependencies=[Depends(require_admin)],
)
async def admin_reservation_status_ep(
    reservation_id: int,
    payload: ReservationStatusUpdate,
    db: AsyncSession = Depends(get_session),
):
    obj = await update_reservation_status(db, reservation_id, payload.status)
    if not obj:
        raise not_found("Reservation")
    return obj


@router.delete(
    "/reservations/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def admin_delete_reservation_ep(reservation_id: int, db: AsyncSession = Depends(get_session)):
    ok = await delete_reservation(db, reservation_id)
    if not ok:
        raise not_found("Reservation")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- blocked slots ---

@router.post(
    "/blocked-slots",
    response_model=BlockedSlotOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def block_slot_ep(payload: BlockedSlotIn, db: AsyncSession = Depends(get_session)):
    # blocking twice is fine; the existing row comes back
    return await block_slot(db, payload.slot_date, payload.slot_time)


@router.delete(
    "/blocked-slots",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def unblock_slot_ep(payload: BlockedSlotIn, db: AsyncSession = Depends(get_session)):
    await unblock_slot(db, payload.slot_date, payload.slot_time)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
