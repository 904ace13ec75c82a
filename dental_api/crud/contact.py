# dental_api/crud/contact.py
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.db.models.contact import ContactMessage


async def create_contact_message(db: AsyncSession, *, name: str, email: str, message: str) -> ContactMessage:
    obj = ContactMessage(name=name, email=email, message=message)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj
