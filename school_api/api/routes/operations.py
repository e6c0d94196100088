from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from school_api.core.deps import require_roles, school_scope
from school_api.db.session import get_session_factory
from school_api.schemas.auth import SessionUser, UserRole
from school_api.schemas.dashboard import MaintenanceSummary
from school_api.services.dashboard import DashboardService

router = APIRouter(prefix="/operations", tags=["Operations"])


# PUBLIC_INTERFACE
@router.get(
    "/maintenance/summary",
    response_model=MaintenanceSummary,
    summary="Maintenance summary",
    description="Facility maintenance counts and breakdowns. Requires TRANSPORT or ADMIN.",
)
async def maintenance_summary(
    user: SessionUser = Depends(require_roles(UserRole.TRANSPORT.value, UserRole.ADMIN.value)),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> MaintenanceSummary:
    svc = DashboardService(session_factory, school_scope(user))
    return await svc.maintenance_summary()
