# dental_api/api/routes/consultations.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import ClinicError, ErrorKind, not_found
from dental_api.core.security import (
    CurrentUser,
    get_app_settings,
    hash_password_async,
    optional_user,
    verify_password_async,
)
from dental_api.crud.consultation import (
    create_consultation,
    delete_consultation,
    get_consultation,
    list_public_consultations,
    list_replies,
    update_consultation,
)
from dental_api.db.session import get_session
from dental_api.schemas.base import Page, PasswordBody, VerifyResult
from dental_api.schemas.consultation import (
    ConsultationDetail,
    ConsultationOut,
    ConsultationSummary,
    ConsultationUpdate,
    ReplyOut,
)
from dental_api.services.ownership import resolve_ownership
from dental_api.services.uploads import read_image

router = APIRouter(prefix="/api/consultations", tags=["consultations"])


@router.get("", response_model=Page[ConsultationSummary])
async def list_consultations_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    db: AsyncSession = Depends(get_session),
):
    # secret consultations never show up in the public list
    result = await list_public_consultations(db, page=page, limit=limit, search=search)
    return Page[ConsultationSummary].from_result(result)


@router.post("", response_model=ConsultationOut, status_code=status.HTTP_201_CREATED)
async def create_consultation_ep(
    title: str = Form(..., min_length=1, max_length=255),
    content: str = Form(..., min_length=1),
    author: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    is_secret: bool = Form(True, alias="isSecret"),
    image: Optional[UploadFile] = File(None),
    user: Optional[CurrentUser] = Depends(optional_user),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    if user is None:
        if not author or not author.strip():
            raise ClinicError(ErrorKind.INVALID_ARGUMENT, "Author is required")
        if not password:
            raise ClinicError(ErrorKind.MISSING_CREDENTIAL)

    image_data = await read_image(image, settings.MAX_UPLOAD_BYTES)
    return await create_consultation(
        db,
        author=user.username if user else author.strip(),
        password_hash=await hash_password_async(password) if password else None,
        title=title,
        content=content,
        is_secret=is_secret,
        image_data=image_data,
        user_id=user.id if user else None,
    )


@router.get("/{consultation_id}", response_model=ConsultationDetail)
async def get_consultation_ep(consultation_id: int, db: AsyncSession = Depends(get_session)):
    consultation = await get_consultation(db, consultation_id)
    if not consultation:
        raise not_found("Consultation")
    replies = await list_replies(db, consultation_id)
    return ConsultationDetail(
        **ConsultationOut.model_validate(consultation).model_dump(),
        replies=[ReplyOut.model_validate(r) for r in replies],
    )


@router.post("/{consultation_id}/verify", response_model=VerifyResult)
async def verify_consultation_password_ep(
    consultation_id: int, payload: PasswordBody, db: AsyncSession = Depends(get_session)
):
    consultation = await get_consultation(db, consultation_id)
    if not consultation:
        raise not_found("Consultation")
    match = bool(payload.password) and await verify_password_async(payload.password, consultation.password)
    return VerifyResult(success=match)


@router.put("/{consultation_id}", response_model=ConsultationOut)
async def update_consultation_ep(
    consultation_id: int,
    payload: ConsultationUpdate,
    user: Optional[CurrentUser] = Depends(optional_user),
    db: AsyncSession = Depends(get_session),
):
    consultation = await get_consultation(db, consultation_id)
    if not consultation:
        raise not_found("Consultation")
    decision = await resolve_ownership(
        owner_user_id=consultation.user_id,
        password_hash=consultation.password,
        caller_user_id=user.id if user else None,
        submitted_password=payload.password,
    )
    decision.raise_if_denied()
    return await update_consultation(db, consultation_id, title=payload.title, content=payload.content)


@router.delete("/{consultation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_consultation_ep(
    consultation_id: int,
    payload: Optional[PasswordBody] = None,
    user: Optional[CurrentUser] = Depends(optional_user),
    db: AsyncSession = Depends(get_session),
):
    consultation = await get_consultation(db, consultation_id)
    if not consultation:
        raise not_found("Consultation")
    decision = await resolve_ownership(
        owner_user_id=consultation.user_id,
        password_hash=consultation.password,
        caller_user_id=user.id if user else None,
        submitted_password=payload.password if payload else None,
    )
    decision.raise_if_denied()
    await delete_consultation(db, consultation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
