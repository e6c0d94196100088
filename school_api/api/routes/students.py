from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from school_api.core.deps import require_roles, school_scope
from school_api.db.session import get_session_factory
from school_api.schemas.academic import StudentListResponse
from school_api.schemas.auth import SessionUser, UserRole
from school_api.services.academic import AcademicService

router = APIRouter(prefix="/students", tags=["Students"])


# PUBLIC_INTERFACE
@router.get(
    "/list",
    response_model=StudentListResponse,
    summary="List students",
    description="All students of the caller's school, ascending by name. Requires ADMIN.",
)
async def list_students(
    user: SessionUser = Depends(require_roles(UserRole.ADMIN.value)),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> StudentListResponse:
    svc = AcademicService(session_factory, school_scope(user))
    return StudentListResponse(students=await svc.student_list())
