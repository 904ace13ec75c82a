# dental_api/db/models/reservation.py

from __future__ import annotations
from datetime import date, datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from dental_api.core.clinic import PENDING
from dental_api.db.session import Base


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        sa.Index("ix_reservations_desired_date", "desired_date"),
        sa.Index("ix_reservations_patient_phone", "patient_name", "phone_number"),
        sa.Index("ix_reservations_user_id", "user_id"),
    )

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    patient_name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    phone_number: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    desired_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    # a label from core.clinic.TIME_SLOTS, e.g. "10:00"
    desired_time: Mapped[str] = mapped_column(sa.String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(sa.Text)
    status: Mapped[str] = mapped_column(sa.String(50), nullable=False, default=PENDING, server_default=PENDING)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # set only when the submitter was signed in
    user_id: Mapped[int | None] = mapped_column(
        sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )


class BlockedSlot(Base):
    __tablename__ = "blocked_slots"
    __table_args__ = (
        sa.UniqueConstraint("slot_date", "slot_time", name="uq_blocked_slots_slot_date_slot_time"),
    )

    id: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    slot_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    slot_time: Mapped[str] = mapped_column(sa.String(50), nullable=False)
