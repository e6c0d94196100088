from __future__ import annotations

from enum import Enum
from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from school_api.db.base import Base, SchoolMixin, TimestampMixin, UUIDPkMixin


class BusStatus(str, Enum):
    ACTIVE = "ACTIVE"
    MAINTENANCE = "MAINTENANCE"
    INACTIVE = "INACTIVE"


class RouteStatus(str, Enum):
    ON_TIME = "ON_TIME"
    DELAYED = "DELAYED"
    CANCELLED = "CANCELLED"


class Bus(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """School bus."""
    __tablename__ = "buses"

    bus_number: Mapped[str] = mapped_column(Text, nullable=False)
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=BusStatus.ACTIVE.value)


class BusRoute(UUIDPkMixin, SchoolMixin, TimestampMixin, Base):
    """Bus route with its live running status."""
    __tablename__ = "bus_routes"

    route_name: Mapped[str] = mapped_column(Text, nullable=False)
    bus_number: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=RouteStatus.ON_TIME.value)
    delay_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
