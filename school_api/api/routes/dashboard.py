from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from school_api.core.deps import get_current_session, school_scope
from school_api.db.session import get_session_factory
from school_api.schemas.auth import SessionUser
from school_api.schemas.dashboard import BusStats, EmployeeStats, RevenueStats, StudentStats
from school_api.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard/stats", tags=["Dashboard"])


def _service(
    user: SessionUser = Depends(get_current_session),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> DashboardService:
    return DashboardService(session_factory, school_scope(user))


# PUBLIC_INTERFACE
@router.get("/students", response_model=StudentStats, summary="Student statistics")
async def student_stats(svc: DashboardService = Depends(_service)) -> StudentStats:
    """Headcount, admissions in the last 30 days, 7-day attendance rate and breakdowns."""
    return await svc.student_stats()


# PUBLIC_INTERFACE
@router.get("/employees", response_model=EmployeeStats, summary="Employee statistics")
async def employee_stats(svc: DashboardService = Depends(_service)) -> EmployeeStats:
    """Headcount, recent hires and breakdowns by status and department."""
    return await svc.employee_stats()


# PUBLIC_INTERFACE
@router.get("/revenue", response_model=RevenueStats, summary="Revenue statistics")
async def revenue_stats(svc: DashboardService = Depends(_service)) -> RevenueStats:
    """Fee collection this month vs last month, pending fees and collection rate."""
    return await svc.revenue_stats()


# PUBLIC_INTERFACE
@router.get("/buses", response_model=BusStats, summary="Transport statistics")
async def bus_stats(svc: DashboardService = Depends(_service)) -> BusStats:
    """Fleet and route status, transport riders and recent maintenance."""
    return await svc.bus_stats()
