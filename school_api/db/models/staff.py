from __future__ import annotations

import uuid
from datetime import date
from enum import Enum
from typing import Optional

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from school_api.db.base import Base, TimestampMixin, UUIDPkMixin


class EmployeeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"


class Employee(UUIDPkMixin, TimestampMixin, Base):
    """School employee. school_id is nullable so legacy rows can be back-filled."""
    __tablename__ = "employees"

    school_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("schools.id", ondelete="SET NULL"), nullable=True, index=True
    )
    employee_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    department: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    position: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=EmployeeStatus.ACTIVE.value
    )
    salary: Mapped[Optional[float]] = mapped_column(Numeric(12, 2), nullable=True)
    date_of_joining: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
