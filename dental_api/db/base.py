# dental_api/db/base.py

"""
Imports every ORM model so ``Base.metadata`` (and Alembic) can see them.
Add new models here.
"""
from dental_api.db.session import Base  # noqa: F401
from dental_api.db.models.user import User  # noqa: F401
from dental_api.db.models.reservation import BlockedSlot, Reservation  # noqa: F401
from dental_api.db.models.post import Post, PostComment  # noqa: F401
from dental_api.db.models.consultation import Consultation, Reply  # noqa: F401
from dental_api.db.models.content import (  # noqa: F401
    AboutContent,
    CasePhoto,
    ClinicPhoto,
    Doctor,
    Faq,
    Notice,
    Review,
)
from dental_api.db.models.admin_log import AdminLog  # noqa: F401
from dental_api.db.models.contact import ContactMessage  # noqa: F401
