# dental_api/api/routes/admin_content.py
"""Admin management of notices, forum, consultations, doctors, galleries, FAQs and reviews."""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import ClinicError, ErrorKind, not_found
from dental_api.core.security import get_app_settings, require_admin
from dental_api.crud import consultation as consultation_crud
from dental_api.crud import content as content_crud
from dental_api.crud import gallery as gallery_crud
from dental_api.crud import post as post_crud
from dental_api.crud import review as review_crud
from dental_api.db.session import get_session
from dental_api.schemas.base import EntryEdit, Page
from dental_api.schemas.consultation import ConsultationOut, ConsultationSummary, ReplyIn, ReplyOut
from dental_api.schemas.content import (
    AboutOut,
    AboutUpdate,
    CaptionUpdate,
    CaseOut,
    ClinicPhotoOut,
    DoctorOut,
    FaqOut,
    NoticeOut,
    ReviewApproval,
    ReviewOut,
    ReviewReply,
)
from dental_api.schemas.post import PostOut
from dental_api.services.uploads import read_image, read_image_or_keep

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- notices ---

@router.get("/notices", response_model=Page[NoticeOut])
async def admin_list_notices_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    query: str = "",
    db: AsyncSession = Depends(get_session),
):
    result = await content_crud.list_notices(db, page=page, limit=limit, search=query)
    return Page[NoticeOut].from_result(result)


@router.get("/notices/{notice_id}", response_model=NoticeOut)
async def admin_get_notice_ep(notice_id: int, db: AsyncSession = Depends(get_session)):
    obj = await content_crud.get_notice(db, notice_id)
    if not obj:
        raise not_found("Notice")
    return obj


@router.post("/notices", response_model=NoticeOut, status_code=status.HTTP_201_CREATED)
async def create_notice_ep(
    title: str = Form(..., min_length=1, max_length=255),
    content: str = Form(..., min_length=1),
    category: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image(image, settings.MAX_UPLOAD_BYTES)
    return await content_crud.create_notice(db, title=title, content=content, category=category, image_data=image_data)


@router.put("/notices/{notice_id}", response_model=NoticeOut)
async def update_notice_ep(
    notice_id: int,
    title: str = Form(..., min_length=1, max_length=255),
    content: str = Form(..., min_length=1),
    category: Optional[str] = Form(None),
    existing_image_data: Optional[str] = Form(None, alias="existingImageData"),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image_or_keep(image, existing_image_data, settings.MAX_UPLOAD_BYTES)
    obj = await content_crud.update_notice(
        db, notice_id, title=title, content=content, category=category, image_data=image_data
    )
    if not obj:
        raise not_found("Notice")
    return obj


@router.delete("/notices/{notice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notice_ep(notice_id: int, db: AsyncSession = Depends(get_session)):
    if not await content_crud.delete_notice(db, notice_id):
        raise not_found("Notice")
    return _no_content()


# --- forum moderation ---

@router.put("/posts/{post_id}", response_model=PostOut)
async def admin_update_post_ep(post_id: int, payload: EntryEdit, db: AsyncSession = Depends(get_session)):
    obj = await post_crud.update_post(db, post_id, title=payload.title, content=payload.content)
    if not obj:
        raise not_found("Post")
    return obj


@router.delete("/posts/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_comment_ep(comment_id: int, db: AsyncSession = Depends(get_session)):
    if not await post_crud.delete_comment(db, comment_id):
        raise not_found("Comment")
    return _no_content()


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_post_ep(post_id: int, db: AsyncSession = Depends(get_session)):
    if not await post_crud.delete_post(db, post_id):
        raise not_found("Post")
    return _no_content()


# --- consultations and replies ---

@router.get("/consultations", response_model=Page[ConsultationSummary])
async def admin_list_consultations_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    db: AsyncSession = Depends(get_session),
):
    result = await consultation_crud.list_consultations(db, page=page, limit=limit, search=search)
    return Page[ConsultationSummary].from_result(result)


@router.put("/consultations/{consultation_id}", response_model=ConsultationOut)
async def admin_update_consultation_ep(
    consultation_id: int, payload: EntryEdit, db: AsyncSession = Depends(get_session)
):
    obj = await consultation_crud.update_consultation(
        db, consultation_id, title=payload.title, content=payload.content
    )
    if not obj:
        raise not_found("Consultation")
    return obj


@router.delete("/consultations/{consultation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_consultation_ep(consultation_id: int, db: AsyncSession = Depends(get_session)):
    if not await consultation_crud.delete_consultation(db, consultation_id):
        raise not_found("Consultation")
    return _no_content()


@router.post(
    "/consultations/{consultation_id}/replies",
    response_model=ReplyOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply_ep(consultation_id: int, payload: ReplyIn, db: AsyncSession = Depends(get_session)):
    reply = await consultation_crud.create_reply(db, consultation_id, payload.content)
    if reply is None:
        raise not_found("Consultation")
    return reply


@router.put("/replies/{reply_id}", response_model=ReplyOut)
async def update_reply_ep(reply_id: int, payload: ReplyIn, db: AsyncSession = Depends(get_session)):
    reply = await consultation_crud.update_reply(db, reply_id, payload.content)
    if reply is None:
        raise not_found("Reply")
    return reply


@router.delete("/replies/{reply_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reply_ep(reply_id: int, db: AsyncSession = Depends(get_session)):
    if not await consultation_crud.delete_reply(db, reply_id):
        raise not_found("Reply")
    return _no_content()


# --- doctors ---

@router.post("/doctors", response_model=DoctorOut, status_code=status.HTTP_201_CREATED)
async def create_doctor_ep(
    name: str = Form(..., min_length=1, max_length=100),
    position: str = Form(..., min_length=1, max_length=100),
    history: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image(image, settings.MAX_UPLOAD_BYTES)
    return await content_crud.create_doctor(db, name=name, position=position, history=history, image_data=image_data)


@router.put("/doctors/{doctor_id}", response_model=DoctorOut)
async def update_doctor_ep(
    doctor_id: int,
    name: str = Form(..., min_length=1, max_length=100),
    position: str = Form(..., min_length=1, max_length=100),
    history: Optional[str] = Form(None),
    existing_image_data: Optional[str] = Form(None, alias="existingImageData"),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image_or_keep(image, existing_image_data, settings.MAX_UPLOAD_BYTES)
    obj = await content_crud.update_doctor(
        db, doctor_id, name=name, position=position, history=history, image_data=image_data
    )
    if not obj:
        raise not_found("Doctor")
    return obj


@router.delete("/doctors/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor_ep(doctor_id: int, db: AsyncSession = Depends(get_session)):
    if not await content_crud.delete_doctor(db, doctor_id):
        raise not_found("Doctor")
    return _no_content()


# --- about page ---

@router.put("/about", response_model=AboutOut)
async def update_about_ep(payload: AboutUpdate, db: AsyncSession = Depends(get_session)):
    return await content_crud.update_about(db, **payload.model_dump())


# --- clinic photos ---

@router.get("/clinic-photos", response_model=list[ClinicPhotoOut])
async def admin_list_clinic_photos_ep(db: AsyncSession = Depends(get_session)):
    return await gallery_crud.list_clinic_photos(db)


@router.post("/clinic-photos", response_model=ClinicPhotoOut, status_code=status.HTTP_201_CREATED)
async def create_clinic_photo_ep(
    caption: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image(image, settings.MAX_UPLOAD_BYTES)
    if image_data is None:
        raise ClinicError(ErrorKind.INVALID_ARGUMENT, "Image file is required")
    return await gallery_crud.create_clinic_photo(db, caption=caption, image_data=image_data)


@router.put("/clinic-photos/{photo_id}", response_model=ClinicPhotoOut)
async def update_clinic_photo_ep(photo_id: int, payload: CaptionUpdate, db: AsyncSession = Depends(get_session)):
    obj = await gallery_crud.update_clinic_photo_caption(db, photo_id, payload.caption)
    if not obj:
        raise not_found("Photo")
    return obj


@router.delete("/clinic-photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_clinic_photo_ep(photo_id: int, db: AsyncSession = Depends(get_session)):
    if not await gallery_crud.delete_clinic_photo(db, photo_id):
        raise not_found("Photo")
    return _no_content()


# --- before/after cases ---

@router.post("/cases", response_model=CaseOut, status_code=status.HTTP_201_CREATED)
async def create_case_ep(
    title: str = Form(..., min_length=1, max_length=255),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    before_image: Optional[UploadFile] = File(None, alias="beforeImage"),
    after_image: Optional[UploadFile] = File(None, alias="afterImage"),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    return await gallery_crud.create_case(
        db,
        title=title,
        category=category,
        description=description,
        before_image_data=await read_image(before_image, settings.MAX_UPLOAD_BYTES),
        after_image_data=await read_image(after_image, settings.MAX_UPLOAD_BYTES),
    )


@router.put("/cases/{case_id}", response_model=CaseOut)
async def update_case_ep(
    case_id: int,
    title: str = Form(..., min_length=1, max_length=255),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    existing_before_image: Optional[str] = Form(None, alias="existingBeforeImage"),
    existing_after_image: Optional[str] = Form(None, alias="existingAfterImage"),
    before_image: Optional[UploadFile] = File(None, alias="beforeImage"),
    after_image: Optional[UploadFile] = File(None, alias="afterImage"),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    obj = await gallery_crud.update_case(
        db,
        case_id,
        title=title,
        category=category,
        description=description,
        before_image_data=await read_image_or_keep(before_image, existing_before_image, settings.MAX_UPLOAD_BYTES),
        after_image_data=await read_image_or_keep(after_image, existing_after_image, settings.MAX_UPLOAD_BYTES),
    )
    if not obj:
        raise not_found("Case")
    return obj


@router.delete("/cases/{case_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_case_ep(case_id: int, db: AsyncSession = Depends(get_session)):
    if not await gallery_crud.delete_case(db, case_id):
        raise not_found("Case")
    return _no_content()


# --- faqs ---

@router.post("/faqs", response_model=FaqOut, status_code=status.HTTP_201_CREATED)
async def create_faq_ep(
    category: str = Form(..., min_length=1, max_length=100),
    question: str = Form(..., min_length=1),
    answer: str = Form(..., min_length=1),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image(image, settings.MAX_UPLOAD_BYTES)
    return await content_crud.create_faq(db, category=category, question=question, answer=answer, image_data=image_data)


@router.put("/faqs/{faq_id}", response_model=FaqOut)
async def update_faq_ep(
    faq_id: int,
    category: str = Form(..., min_length=1, max_length=100),
    question: str = Form(..., min_length=1),
    answer: str = Form(..., min_length=1),
    existing_image_data: Optional[str] = Form(None, alias="existingImageData"),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    image_data = await read_image_or_keep(image, existing_image_data, settings.MAX_UPLOAD_BYTES)
    obj = await content_crud.update_faq(
        db, faq_id, category=category, question=question, answer=answer, image_data=image_data
    )
    if not obj:
        raise not_found("FAQ")
    return obj


@router.delete("/faqs/{faq_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_faq_ep(faq_id: int, db: AsyncSession = Depends(get_session)):
    if not await content_crud.delete_faq(db, faq_id):
        raise not_found("FAQ")
    return _no_content()


# --- reviews ---

@router.get("/reviews", response_model=list[ReviewOut])
async def admin_list_reviews_ep(db: AsyncSession = Depends(get_session)):
    return await review_crud.list_reviews(db)


@router.put("/reviews/{review_id}/approve", response_model=ReviewOut)
async def approve_review_ep(review_id: int, payload: ReviewApproval, db: AsyncSession = Depends(get_session)):
    obj = await review_crud.set_review_approval(db, review_id, payload.is_approved)
    if not obj:
        raise not_found("Review")
    return obj


@router.post("/reviews/{review_id}/reply", response_model=ReviewOut)
async def reply_review_ep(review_id: int, payload: ReviewReply, db: AsyncSession = Depends(get_session)):
    obj = await review_crud.reply_to_review(db, review_id, payload.reply)
    if not obj:
        raise not_found("Review")
    return obj


@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review_ep(review_id: int, db: AsyncSession = Depends(get_session)):
    if not await review_crud.delete_review(db, review_id):
        raise not_found("Review")
    return _no_content()
