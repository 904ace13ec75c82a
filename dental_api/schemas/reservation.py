# dental_api/schemas/reservation.py
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from dental_api.core.clinic import CANCELLED, COMPLETED, CONFIRMED, PENDING, TIME_SLOTS, is_time_slot
from dental_api.schemas.base import CamelModel

ReservationStatus = Literal[PENDING, CONFIRMED, COMPLETED, CANCELLED]


def _check_slot(v: str) -> str:
    v = v.strip()
    if not is_time_slot(v):
        raise ValueError(f"time must be one of {', '.join(TIME_SLOTS)}")
    return v


class ReservationCreate(CamelModel):
    patient_name: str = Field(..., min_length=1, max_length=100)
    phone_number: str = Field(..., min_length=1, max_length=100)
    desired_date: date
    desired_time: str
    notes: Optional[str] = None

    @field_validator("patient_name", "phone_number")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("desired_time")
    @classmethod
    def _valid_slot(cls, v: str) -> str:
        return _check_slot(v)


class ReservationUpdate(CamelModel):
    """Patient self-service edit; status is not client-controlled."""

    desired_date: date
    desired_time: str
    notes: Optional[str] = None

    @field_validator("desired_time")
    @classmethod
    def _valid_slot(cls, v: str) -> str:
        return _check_slot(v)


class ReservationStatusUpdate(CamelModel):
    status: ReservationStatus


class ReservationVerify(CamelModel):
    # compared verbatim against stored values
    patient_name: str
    phone_number: str


class ReservationAccess(CamelModel):
    access_token: str
    reservation_id: int


class ReservationOut(CamelModel):
    id: int
    patient_name: str
    phone_number: str
    desired_date: date
    desired_time: str
    notes: Optional[str] = None
    status: str
    created_at: datetime
    user_id: Optional[int] = None


class BlockedSlotIn(CamelModel):
    slot_date: date
    slot_time: str

    @field_validator("slot_time")
    @classmethod
    def _valid_slot(cls, v: str) -> str:
        return _check_slot(v)


class BlockedSlotOut(CamelModel):
    id: int
    slot_date: date
    slot_time: str


class SlotStatus(CamelModel):
    pending: int = 0
    confirmed: int = 0
    blocked: bool = False
