from __future__ import annotations

import logging
import math
from typing import Optional

from school_api.db.models.staff import EmployeeStatus
from school_api.repositories.staff import EmployeeRepository
from school_api.schemas.common import Pagination
from school_api.schemas.staff import (
    EmployeeListResponse,
    EmployeeRead,
    EmployeeSummary,
    FixSchoolIdsResponse,
    ReassignedEmployee,
)
from school_api.services.base import BaseService

logger = logging.getLogger(__name__)


class EmployeeService(BaseService):
    """Employee headcount, listing, and the school_id back-fill."""

    # PUBLIC_INTERFACE
    async def summary(self) -> EmployeeSummary:
        """
        Compute headcounts per status and the ACTIVE payroll total.

        The five aggregates are independent and run concurrently.
        """
        total, active, inactive, on_leave, salary = await self.gather(
            self.run(EmployeeRepository, lambda repo: repo.count_by_status()),
            self.run(EmployeeRepository, lambda repo: repo.count_by_status(EmployeeStatus.ACTIVE.value)),
            self.run(EmployeeRepository, lambda repo: repo.count_by_status(EmployeeStatus.INACTIVE.value)),
            self.run(EmployeeRepository, lambda repo: repo.count_by_status(EmployeeStatus.ON_LEAVE.value)),
            self.run(EmployeeRepository, lambda repo: repo.total_salary(EmployeeStatus.ACTIVE.value)),
        )
        return EmployeeSummary(
            total_employees=total,
            active_employees=active,
            inactive_employees=inactive,
            on_leave_employees=on_leave,
            total_salary=salary or 0,
        )

    # PUBLIC_INTERFACE
    async def list_page(
        self,
        *,
        page: int,
        limit: int,
        search: Optional[str] = None,
        field: str = "name",
        department: Optional[str] = None,
        status: Optional[str] = None,
    ) -> EmployeeListResponse:
        """One page of employees plus the school-wide summary."""
        filters = dict(search=search, field=field, department=department, status=status)
        offset = (page - 1) * limit
        employees, total_count, summary = await self.gather(
            self.run(EmployeeRepository, lambda repo: repo.list_employees(limit=limit, offset=offset, **filters)),
            self.run(EmployeeRepository, lambda repo: repo.count_employees(**filters)),
            self.summary(),
        )
        total_pages = math.ceil(total_count / limit) if limit else 0
        return EmployeeListResponse(
            employees=[EmployeeRead.model_validate(e) for e in employees],
            summary=summary,
            pagination=Pagination(
                current_page=page,
                total_pages=total_pages,
                total_count=total_count,
                limit=limit,
                has_next_page=page < total_pages,
                has_prev_page=page > 1,
            ),
        )

    # PUBLIC_INTERFACE
    async def fix_school_ids(self) -> FixSchoolIdsResponse:
        """
        Back-fill employees whose school_id is null or points at another school.

        Reads the mismatched rows, then updates them in one statement. Running it
        again right after reports zero updates.
        """
        async with self.session_factory() as session:
            repo = EmployeeRepository(session, self.school_id)
            mismatched = [
                ReassignedEmployee(id=e.id, name=e.name, old_school_id=e.school_id)
                for e in await repo.list_misassigned()
            ]
            if not mismatched:
                return FixSchoolIdsResponse(
                    message="All employees already have the correct schoolId",
                    updated=0,
                    employees=[],
                )
            updated = await repo.assign_misassigned()

        logger.info("Back-filled school_id on %d employees", updated)
        return FixSchoolIdsResponse(
            message=f"Updated {updated} employees with correct schoolId",
            updated=updated,
            employees=mismatched,
        )
