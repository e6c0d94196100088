from __future__ import annotations

from datetime import datetime

from school_api.db.models.maintenance import MaintenanceLog
from school_api.db.models.transport import Bus, BusRoute
from .base import BaseRepository


class TransportRepository(BaseRepository):
    """Repository for buses and bus routes."""

    async def count_buses(self, status: str | None = None) -> int:
        if status is None:
            return await self.count(Bus)
        return await self.count(Bus, Bus.status == status)

    async def count_routes(self, status: str | None = None) -> int:
        if status is None:
            return await self.count(BusRoute)
        return await self.count(BusRoute, BusRoute.status == status)

    async def buses_by_status(self):
        return await self.group_count(Bus.status)


class MaintenanceRepository(BaseRepository):
    """Repository for maintenance items and logs."""

    async def count_logs_since(self, since: datetime) -> int:
        return await self.count(MaintenanceLog, MaintenanceLog.created_at >= since)
