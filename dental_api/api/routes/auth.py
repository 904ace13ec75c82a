# dental_api/api/routes/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import ClinicError, ErrorKind, not_found
from dental_api.core.logging import get_logger
from dental_api.core.security import (
    CurrentUser,
    create_user_token,
    get_app_settings,
    hash_password_async,
    require_user,
    verify_password_async,
)
from dental_api.crud.consultation import list_consultations_by_owner
from dental_api.crud.post import list_posts_by_owner
from dental_api.crud.reservation import list_reservations_by_owner
from dental_api.crud.user import create_user, get_user, get_user_by_email, update_user
from dental_api.db.session import get_session
from dental_api.schemas.consultation import ConsultationOut
from dental_api.schemas.post import PostSummary
from dental_api.schemas.reservation import ReservationOut
from dental_api.schemas.user import (
    AccessTokenOut,
    MessageOut,
    ProfileUpdate,
    UserLogin,
    UserOut,
    UserRegister,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

BAD_LOGIN = "Email or password is incorrect"


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register_ep(payload: UserRegister, db: AsyncSession = Depends(get_session)):
    if await get_user_by_email(db, payload.email):
        raise ClinicError(ErrorKind.CONFLICT, "Email already registered")
    password_hash = await hash_password_async(payload.password)
    try:
        user = await create_user(db, username=payload.username, email=payload.email, password_hash=password_hash)
    except IntegrityError:
        # lost a race with a concurrent signup
        raise ClinicError(ErrorKind.CONFLICT, "Email already registered")
    logger.info("user_registered", user_id=user.id)
    return user


@router.post("/login", response_model=AccessTokenOut)
async def login_ep(
    payload: UserLogin,
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    user = await get_user_by_email(db, payload.email)
    if not user or not await verify_password_async(payload.password, user.password):
        logger.info("user_login_failed")
        raise ClinicError(ErrorKind.UNAUTHENTICATED, BAD_LOGIN)
    return AccessTokenOut(access_token=create_user_token(user.id, user.username, user.email, settings))


@router.get("/me", response_model=UserOut)
async def me_ep(user: CurrentUser = Depends(require_user)):
    return UserOut(id=user.id, username=user.username, email=user.email)


@router.get("/me/reservations", response_model=list[ReservationOut])
async def my_reservations_ep(user: CurrentUser = Depends(require_user), db: AsyncSession = Depends(get_session)):
    return await list_reservations_by_owner(db, user.id)


@router.get("/me/posts", response_model=list[PostSummary])
async def my_posts_ep(user: CurrentUser = Depends(require_user), db: AsyncSession = Depends(get_session)):
    return await list_posts_by_owner(db, user.id)


@router.get("/me/consultations", response_model=list[ConsultationOut])
async def my_consultations_ep(user: CurrentUser = Depends(require_user), db: AsyncSession = Depends(get_session)):
    return await list_consultations_by_owner(db, user.id)


@router.put("/me/update", response_model=MessageOut)
async def update_me_ep(
    payload: ProfileUpdate,
    user: CurrentUser = Depends(require_user),
    db: AsyncSession = Depends(get_session),
):
    account = await get_user(db, user.id)
    if not account:
        raise not_found("User")

    new_hash = None
    if payload.new_password:
        if not payload.current_password:
            raise ClinicError(ErrorKind.MISSING_CREDENTIAL, "Current password is required to set a new one")
        if not await verify_password_async(payload.current_password, account.password):
            raise ClinicError(ErrorKind.INVALID_CREDENTIAL, "Current password does not match")
        new_hash = await hash_password_async(payload.new_password)

    await update_user(db, user.id, username=payload.username, password_hash=new_hash)
    return MessageOut(message="Profile updated")
