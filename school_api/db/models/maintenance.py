from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from school_api.db.base import Base, SchoolMixin, TimestampMixin, UUIDPkMixin


class MaintenanceStatus(str, Enum):
    OK = "OK"
    NEEDS_REPAIR = "NEEDS_REPAIR"
    IN_PROGRESS = "IN_PROGRESS"


ATTENTION_STATUSES = (MaintenanceStatus.NEEDS_REPAIR.value, MaintenanceStatus.IN_PROGRESS.value)


class MaintenanceItem(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """Facility or equipment item tracked for maintenance."""
    __tablename__ = "maintenance_items"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=MaintenanceStatus.OK.value)
    last_checked: Mapped[Optional[date]] = mapped_column(Date, nullable=True)


class MaintenanceLog(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """Maintenance activity against a facility (or a bus)."""
    __tablename__ = "maintenance_logs"

    facility: Mapped[str] = mapped_column(Text, nullable=False)
    issue: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=MaintenanceStatus.NEEDS_REPAIR.value)
