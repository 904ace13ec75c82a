# dental_api/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from dental_api.schemas.base import CamelModel


class UserRegister(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def _clean_name(cls, v: str) -> str:
        # trim + collapse internal extra spaces
        v = " ".join(v.strip().split())
        if not v:
            raise ValueError("username cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class UserLogin(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AccessTokenOut(CamelModel):
    access_token: str


class UserOut(CamelModel):
    id: int
    username: str
    email: str
    created_at: Optional[datetime] = None


class ProfileUpdate(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class MessageOut(CamelModel):
    message: str
