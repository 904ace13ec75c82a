# dental_api/schemas/consultation.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from dental_api.schemas.base import CamelModel, EntryEdit


class ConsultationSummary(CamelModel):
    id: int
    title: str
    author: str
    created_at: datetime
    is_secret: bool
    is_answered: bool
    user_id: Optional[int] = None


class ConsultationOut(ConsultationSummary):
    content: str
    image_data: Optional[str] = None
    updated_at: Optional[datetime] = None


class ReplyOut(CamelModel):
    id: int
    consultation_id: int
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ConsultationDetail(ConsultationOut):
    replies: List[ReplyOut] = []


class ConsultationUpdate(EntryEdit):
    password: Optional[str] = None


class ReplyIn(CamelModel):
    content: str = Field(..., min_length=1)
