from __future__ import annotations

import uuid
import datetime as dt
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Date, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from school_api.db.base import Base, SchoolMixin, TimestampMixin, UUIDPkMixin


class AdmissionStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WAITLISTED = "WAITLISTED"


class Student(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """Enrolled (or applying) student."""
    __tablename__ = "students"

    student_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    grade: Mapped[Optional[str]] = mapped_column(Text, nullable=True, index=True)
    roll_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    admission_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=AdmissionStatus.PENDING.value
    )
    transport_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class StudentPerformance(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """Per-student, per-subject performance record for a grade."""
    __tablename__ = "student_performances"

    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    grade: Mapped[str] = mapped_column(Text, nullable=False)
    subject: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    score: Mapped[Optional[float]] = mapped_column(Numeric(5, 2), nullable=True)


class Attendance(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """Daily attendance mark for a student."""
    __tablename__ = "attendance"

    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    is_present: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
