from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from school_api.core.deps import require_roles, school_scope
from school_api.db.session import get_session_factory
from school_api.schemas.auth import SessionUser, UserRole
from school_api.schemas.staff import (
    EmployeeListResponse,
    EmployeeSummaryResponse,
    FixSchoolIdsResponse,
)
from school_api.services.staff import EmployeeService

router = APIRouter(prefix="/employee", tags=["Employees"])

admin_only = require_roles(UserRole.ADMIN.value)


def _all_means_none(value: Optional[str]) -> Optional[str]:
    return None if not value or value == "all" else value


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=EmployeeListResponse,
    summary="List employees",
    description="Paged employee list with the school-wide summary. Requires ADMIN.",
)
async def list_employees(
    user: SessionUser = Depends(admin_only),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    search: Optional[str] = Query(None, description="Substring to search for"),
    field: str = Query("name", description="name | employeeId | email | phone | position"),
    department: Optional[str] = Query(None, description="Department, or 'all'"),
    status: Optional[str] = Query(None, description="ACTIVE | INACTIVE | ON_LEAVE, or 'all'"),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> EmployeeListResponse:
    svc = EmployeeService(session_factory, school_scope(user))
    return await svc.list_page(
        page=page,
        limit=limit,
        search=search or None,
        field=field,
        department=_all_means_none(department),
        status=_all_means_none(status),
    )


# PUBLIC_INTERFACE
@router.get(
    "/summary",
    response_model=EmployeeSummaryResponse,
    summary="Employee summary",
    description="Headcount per status and total ACTIVE salary. Requires ADMIN.",
)
async def employee_summary(
    user: SessionUser = Depends(admin_only),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> EmployeeSummaryResponse:
    svc = EmployeeService(session_factory, school_scope(user))
    return EmployeeSummaryResponse(summary=await svc.summary())


# PUBLIC_INTERFACE
@router.post(
    "/fix-school-ids",
    response_model=FixSchoolIdsResponse,
    summary="Back-fill employee school ids",
    description=(
        "Assign the caller's school to every employee whose school is missing or different. "
        "Idempotent. Requires ADMIN."
    ),
)
async def fix_school_ids(
    user: SessionUser = Depends(admin_only),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> FixSchoolIdsResponse:
    svc = EmployeeService(session_factory, school_scope(user))
    return await svc.fix_school_ids()
