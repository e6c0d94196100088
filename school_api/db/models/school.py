from __future__ import annotations

from typing import Optional

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from school_api.db.base import Base, TimestampMixin, UUIDPkMixin


class School(UUIDPkMixin, TimestampMixin, Base):
    """A school; the tenant every other row is scoped to."""
    __tablename__ = "schools"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    registration_number: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
