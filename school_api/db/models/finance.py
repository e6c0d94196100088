from __future__ import annotations

import uuid
import datetime as dt
from enum import Enum
from typing import Optional

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from school_api.db.base import Base, SchoolMixin, TimestampMixin, UUIDPkMixin


class FeeStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"


class FeeCollection(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """A fee charged to (and possibly collected from) a student."""
    __tablename__ = "fee_collections"

    student_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="SET NULL"), nullable=True
    )
    amount: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=FeeStatus.PENDING.value)
    payment_mode: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
