from __future__ import annotations

from datetime import date, datetime
from typing import List

from sqlalchemy import distinct, select

from school_api.db.models.academic import AdmissionStatus, Attendance, Student, StudentPerformance
from .base import BaseRepository


class StudentRepository(BaseRepository):
    """Repository for students of one school."""

    async def list_accepted_by_grade(self, grade: str) -> List[Student]:
        stmt = (
            select(Student)
            .where(
                Student.school_id == self.school_id,
                Student.grade == grade,
                Student.status == AdmissionStatus.ACCEPTED.value,
            )
            .order_by(Student.roll_number.asc())
        )
        return list(await self.scalars(stmt))

    async def list_roster(self) -> List[Student]:
        stmt = select(Student).where(Student.school_id == self.school_id).order_by(Student.name.asc())
        return list(await self.scalars(stmt))

    async def distinct_accepted_grades(self) -> List[str]:
        stmt = (
            select(distinct(Student.grade))
            .where(
                Student.school_id == self.school_id,
                Student.status == AdmissionStatus.ACCEPTED.value,
                Student.grade.is_not(None),
            )
            .order_by(Student.grade.asc())
        )
        return list(await self.scalars(stmt))

    async def count_admitted_since(self, since: datetime) -> int:
        return await self.count(Student, Student.created_at >= since)

    async def count_using_transport(self) -> int:
        return await self.count(Student, Student.transport_required.is_(True))


class PerformanceRepository(BaseRepository):
    """Repository for student performance records."""

    async def distinct_grades(self) -> List[str]:
        stmt = (
            select(distinct(StudentPerformance.grade))
            .where(StudentPerformance.school_id == self.school_id)
            .order_by(StudentPerformance.grade.asc())
        )
        return list(await self.scalars(stmt))


class AttendanceRepository(BaseRepository):
    """Repository for attendance marks."""

    async def count_since(self, since: date, *, present_only: bool = False) -> int:
        criteria = [Attendance.date >= since]
        if present_only:
            criteria.append(Attendance.is_present.is_(True))
        return await self.count(Attendance, *criteria)
