from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from school_api.core.deps import get_current_session, school_scope
from school_api.core.settings import get_app_settings
from school_api.db.session import get_session_factory
from school_api.schemas.academic import AttendanceStudentsResponse, GradesResponse
from school_api.schemas.auth import SessionUser
from school_api.services.academic import AcademicService, load_grade_catalogue

logger = logging.getLogger(__name__)

# PUBLIC_INTERFACE
router = APIRouter(prefix="/academic", tags=["Academic"])


# PUBLIC_INTERFACE
@router.get(
    "/attendance/grades",
    response_model=GradesResponse,
    summary="Attendance grade catalogue",
    description=(
        "Grade labels for the attendance sheet picker, read from the static grade catalogue. "
        "This list is not derived from the database; see /academic/grades for that."
    ),
)
async def attendance_grades(user: SessionUser = Depends(get_current_session)) -> GradesResponse:
    settings = get_app_settings()
    return GradesResponse(grades=load_grade_catalogue(settings.GRADES_FILE))


# PUBLIC_INTERFACE
@router.get(
    "/attendance/students",
    response_model=AttendanceStudentsResponse,
    summary="Students for an attendance sheet",
    description="Accepted students of a grade in the caller's school, ascending by roll number.",
)
async def attendance_students(
    user: SessionUser = Depends(get_current_session),
    grade: Optional[str] = Query(None, description="Grade label (required)"),
    subject: Optional[str] = Query(None, description="Subject the sheet is for (informational)"),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AttendanceStudentsResponse:
    if not grade:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Grade is required")
    svc = AcademicService(session_factory, school_scope(user))
    students = await svc.attendance_students(grade)
    logger.info("Attendance sheet for grade=%s subject=%s: %d students", grade, subject or "-", len(students))
    return AttendanceStudentsResponse(students=students)


# PUBLIC_INTERFACE
@router.get(
    "/grades",
    response_model=GradesResponse,
    summary="Grades in use",
    description=(
        "Sorted, de-duplicated grade labels taken from accepted students and "
        "performance records of the caller's school."
    ),
)
async def academic_grades(
    user: SessionUser = Depends(get_current_session),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> GradesResponse:
    svc = AcademicService(session_factory, school_scope(user))
    return GradesResponse(grades=await svc.grade_labels())
