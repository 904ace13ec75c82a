# dental_api/schemas/content.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from dental_api.schemas.base import CamelModel


class NoticeOut(CamelModel):
    id: int
    title: str
    category: Optional[str] = None
    content: str
    image_data: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class DoctorOut(CamelModel):
    id: int
    name: str
    position: str
    history: Optional[str] = None
    image_data: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class AboutOut(CamelModel):
    id: int
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    image_data: Optional[str] = None
    updated_at: Optional[datetime] = None


class AboutUpdate(CamelModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    content: Optional[str] = None
    image_data: Optional[str] = None


class ClinicPhotoOut(CamelModel):
    id: int
    caption: Optional[str] = None
    image_data: str
    display_order: int
    created_at: datetime


class CaptionUpdate(CamelModel):
    caption: Optional[str] = None


class CaseOut(CamelModel):
    id: int
    title: str
    category: Optional[str] = None
    description: Optional[str] = None
    before_image_data: Optional[str] = None
    after_image_data: Optional[str] = None
    created_at: datetime


class FaqOut(CamelModel):
    id: int
    category: str
    question: str
    answer: str
    image_data: Optional[str] = None
    created_at: datetime


class ReviewOut(CamelModel):
    id: int
    patient_name: str
    rating: int
    content: str
    is_approved: bool
    admin_reply: Optional[str] = None
    image_data: Optional[str] = None
    created_at: datetime


class ReviewApproval(CamelModel):
    is_approved: bool


class ReviewReply(CamelModel):
    reply: str = Field(..., min_length=1)


class NoticeBrief(CamelModel):
    id: int
    title: str
    created_at: datetime


class CaseBrief(CamelModel):
    id: int
    title: str
    category: Optional[str] = None
    before_image_data: Optional[str] = None


class ReviewBrief(CamelModel):
    patient_name: str
    rating: int
    content: str


class HomeSummary(CamelModel):
    notices: List[NoticeBrief]
    cases: List[CaseBrief]
    reviews: List[ReviewBrief]


class ContactIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1)


class ContactAck(CamelModel):
    success: bool
    message: str
