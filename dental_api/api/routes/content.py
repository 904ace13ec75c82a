# dental_api/api/routes/content.py
"""Public read side of the site content, plus review and contact submission."""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import not_found
from dental_api.core.logging import get_logger
from dental_api.core.security import get_app_settings
from dental_api.crud.contact import create_contact_message
from dental_api.crud.content import ensure_about, get_notice, list_doctors, list_faqs, list_latest_notices, list_notices
from dental_api.crud.gallery import list_cases, list_clinic_photos_page, list_latest_cases
from dental_api.crud.review import create_review, list_approved_reviews, list_latest_approved_reviews
from dental_api.db.session import get_session
from dental_api.schemas.base import Page
from dental_api.schemas.content import (
    AboutOut,
    CaseBrief,
    CaseOut,
    ClinicPhotoOut,
    ContactAck,
    ContactIn,
    DoctorOut,
    FaqOut,
    HomeSummary,
    NoticeBrief,
    NoticeOut,
    ReviewBrief,
    ReviewOut,
)
from dental_api.services.uploads import read_image

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["content"])


@router.get("/notices", response_model=Page[NoticeOut])
async def list_notices_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    category: str = "",
    db: AsyncSession = Depends(get_session),
):
    result = await list_notices(db, page=page, limit=limit, search=search, category=category)
    return Page[NoticeOut].from_result(result)


@router.get("/notices/{notice_id}", response_model=NoticeOut)
async def get_notice_ep(notice_id: int, db: AsyncSession = Depends(get_session)):
    obj = await get_notice(db, notice_id)
    if not obj:
        raise not_found("Notice")
    return obj


@router.get("/doctors", response_model=list[DoctorOut])
async def list_doctors_ep(db: AsyncSession = Depends(get_session)):
    return await list_doctors(db)


@router.get("/about", response_model=AboutOut)
async def about_ep(db: AsyncSession = Depends(get_session)):
    return await ensure_about(db)


@router.get("/clinic-photos", response_model=Page[ClinicPhotoOut])
async def list_clinic_photos_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(8, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    return Page[ClinicPhotoOut].from_result(await list_clinic_photos_page(db, page=page, limit=limit))


@router.get("/cases", response_model=Page[CaseOut])
async def list_cases_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(9, ge=1, le=100),
    category: str = "",
    db: AsyncSession = Depends(get_session),
):
    return Page[CaseOut].from_result(await list_cases(db, page=page, limit=limit, category=category))


@router.get("/faqs", response_model=list[FaqOut])
async def list_faqs_ep(search: str = "", db: AsyncSession = Depends(get_session)):
    return await list_faqs(db, search=search)


@router.get("/reviews", response_model=Page[ReviewOut])
async def list_reviews_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    # approved only
    return Page[ReviewOut].from_result(await list_approved_reviews(db, page=page, limit=limit))


@router.post("/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
async def create_review_ep(
    patient_name: str = Form(..., alias="patientName", min_length=1, max_length=100),
    rating: int = Form(..., ge=1, le=5),
    content: str = Form(..., min_length=1),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image(image, settings.MAX_UPLOAD_BYTES)
    return await create_review(db, patient_name=patient_name, rating=rating, content=content, image_data=image_data)


@router.get("/home-summary", response_model=HomeSummary)
async def home_summary_ep(db: AsyncSession = Depends(get_session)):
    notices = await list_latest_notices(db)
    cases = await list_latest_cases(db)
    reviews = await list_latest_approved_reviews(db)
    return HomeSummary(
        notices=[NoticeBrief.model_validate(n) for n in notices],
        cases=[CaseBrief.model_validate(c) for c in cases],
        reviews=[ReviewBrief.model_validate(r) for r in reviews],
    )


@router.post("/contact", response_model=ContactAck, status_code=status.HTTP_201_CREATED)
async def contact_ep(payload: ContactIn, db: AsyncSession = Depends(get_session)):
    msg = await create_contact_message(db, name=payload.name, email=payload.email, message=payload.message)
    logger.info("contact_message_received", contact_id=msg.id)
    return ContactAck(success=True, message="Your message has been received")
