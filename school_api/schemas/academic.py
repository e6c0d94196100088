from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class AttendanceStudent(CamelModel):
    """Student row on an attendance sheet."""
    id: UUID = Field(..., description="Student record id")
    student_id: Optional[str] = Field(None, description="Human-facing student code")
    name: str = Field(...)
    roll_number: Optional[str] = Field(None)
    grade: Optional[str] = Field(None)


class AttendanceStudentsResponse(CamelModel):
    students: List[AttendanceStudent] = Field(default_factory=list)


class GradesResponse(CamelModel):
    """Grade labels."""
    grades: List[str] = Field(default_factory=list)


class StudentListItem(CamelModel):
    """Compact roster row for admin pickers."""
    id: UUID = Field(...)
    name: str = Field(...)
    grade: Optional[str] = Field(None)
    admission_number: Optional[str] = Field(None)


class StudentListResponse(CamelModel):
    students: List[StudentListItem] = Field(default_factory=list)
