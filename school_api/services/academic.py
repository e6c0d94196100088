from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from school_api.repositories.academic import PerformanceRepository, StudentRepository
from school_api.schemas.academic import AttendanceStudent, StudentListItem
from school_api.services.base import BaseService

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def load_grade_catalogue(path: Path) -> list:
    """
    Read the static grade catalogue (a JSON object with a "grades" list).

    Raises:
        OSError / ValueError / KeyError when the file is missing or malformed;
        the API surfaces those as 500.
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    return list(data["grades"])


class AcademicService(BaseService):
    """Attendance sheets, grade lists and the student roster."""

    # PUBLIC_INTERFACE
    async def attendance_students(self, grade: str) -> List[AttendanceStudent]:
        """Accepted students of a grade, ascending by roll number."""
        students = await self.run(StudentRepository, lambda repo: repo.list_accepted_by_grade(grade))
        return [AttendanceStudent.model_validate(s) for s in students]

    # PUBLIC_INTERFACE
    async def grade_labels(self) -> List[str]:
        """
        Sorted, de-duplicated grade labels from accepted students and from
        performance records of this school.
        """
        student_grades, performance_grades = await self.gather(
            self.run(StudentRepository, lambda repo: repo.distinct_accepted_grades()),
            self.run(PerformanceRepository, lambda repo: repo.distinct_grades()),
        )
        return sorted(set(student_grades) | set(performance_grades))

    # PUBLIC_INTERFACE
    async def student_list(self) -> List[StudentListItem]:
        """All students of the school, ascending by name."""
        students = await self.run(StudentRepository, lambda repo: repo.list_roster())
        return [StudentListItem.model_validate(s) for s in students]
