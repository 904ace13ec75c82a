# dental_api/schemas/admin.py
from datetime import datetime
from typing import Optional

from dental_api.schemas.base import CamelModel


class AdminLogin(CamelModel):
    password: str


class AdminLogOut(CamelModel):
    id: int
    action: str
    ip_address: Optional[str] = None
    created_at: datetime
