# dental_api/api/routes/reservations.py
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import not_found
from dental_api.core.security import CurrentUser, get_app_settings, optional_user
from dental_api.crud.reservation import (
    create_reservation,
    delete_reservation,
    get_reservation,
    update_reservation_details,
)
from dental_api.db.session import get_session
from dental_api.schemas.reservation import (
    ReservationAccess,
    ReservationCreate,
    ReservationOut,
    ReservationUpdate,
    ReservationVerify,
)
from dental_api.services.reservation_token import (
    ReservationClaim,
    issue_access_token,
    require_reservation_claim,
)

router = APIRouter(prefix="/api/reservations", tags=["reservations"])


@router.post("", response_model=ReservationOut, status_code=status.HTTP_201_CREATED)
async def create_reservation_ep(
    payload: ReservationCreate,
    db: AsyncSession = Depends(get_session),
    user: Optional[CurrentUser] = Depends(optional_user),
):
    # a signed-in patient books under their account name
    return await create_reservation(
        db,
        patient_name=user.username if user else payload.patient_name,
        phone_number=payload.phone_number,
        desired_date=payload.desired_date,
        desired_time=payload.desired_time,
        notes=payload.notes,
        user_id=user.id if user else None,
    )


@router.post("/verify", response_model=ReservationAccess)
async def verify_reservation_ep(
    payload: ReservationVerify,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    issued = await issue_access_token(db, payload.patient_name, payload.phone_number, settings)
    if issued is None:
        raise not_found("Matching reservation")
    return ReservationAccess(access_token=issued.access_token, reservation_id=issued.reservation_id)


@router.get("/{reservation_id}", response_model=ReservationOut)
async def get_reservation_ep(
    reservation_id: int,
    claim: ReservationClaim = Depends(require_reservation_claim),
    db: AsyncSession = Depends(get_session),
):
    obj = await get_reservation(db, reservation_id)
    if not obj:
        raise not_found("Reservation")
    return obj


@router.put("/{reservation_id}", response_model=ReservationOut)
async def update_reservation_ep(
    reservation_id: int,
    payload: ReservationUpdate,
    claim: ReservationClaim = Depends(require_reservation_claim),
    db: AsyncSession = Depends(get_session),
):
    obj = await update_reservation_details(
        db,
        reservation_id,
        desired_date=payload.desired_date,
        desired_time=payload.desired_time,
        notes=payload.notes,
    )
    if not obj:
        raise not_found("Reservation")
    return obj


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_reservation_ep(
    reservation_id: int,
    claim: ReservationClaim = Depends(require_reservation_claim),
    db: AsyncSession = Depends(get_session),
):
    ok = await delete_reservation(db, reservation_id)
    if not ok:
        raise not_found("Reservation")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
