from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import func, or_, select, update

from school_api.db.models.staff import Employee
from .base import BaseRepository

# Columns the employee list may be searched on
SEARCH_FIELDS = {
    "name": Employee.name,
    "employeeId": Employee.employee_id,
    "email": Employee.email,
    "phone": Employee.phone,
    "position": Employee.position,
}


class EmployeeRepository(BaseRepository):
    """Repository for employees."""

    def _filtered(
        self,
        stmt,
        *,
        search: Optional[str] = None,
        field: str = "name",
        department: Optional[str] = None,
        status: Optional[str] = None,
    ):
        stmt = stmt.where(Employee.school_id == self.school_id)
        if search:
            column = SEARCH_FIELDS.get(field, Employee.name)
            stmt = stmt.where(column.ilike(f"%{search}%"))
        if department:
            stmt = stmt.where(Employee.department == department)
        if status:
            stmt = stmt.where(Employee.status == status)
        return stmt

    async def list_employees(
        self,
        *,
        search: Optional[str] = None,
        field: str = "name",
        department: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Employee]:
        stmt = self._filtered(
            select(Employee), search=search, field=field, department=department, status=status
        )
        stmt = stmt.order_by(Employee.created_at.desc(), Employee.name).offset(offset).limit(limit)
        return list(await self.scalars(stmt))

    async def count_employees(
        self,
        *,
        search: Optional[str] = None,
        field: str = "name",
        department: Optional[str] = None,
        status: Optional[str] = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(Employee.id)),
            search=search,
            field=field,
            department=department,
            status=status,
        )
        return int(await self.scalar_one(stmt))

    async def count_by_status(self, status: Optional[str] = None) -> int:
        if status is None:
            return await self.count(Employee)
        return await self.count(Employee, Employee.status == status)

    async def total_salary(self, status: str) -> float:
        return await self.sum(Employee.salary, Employee.status == status)

    async def count_joined_since(self, since: date) -> int:
        return await self.count(Employee, Employee.date_of_joining >= since)

    async def list_roster(self) -> List[Employee]:
        stmt = select(Employee).where(Employee.school_id == self.school_id).order_by(Employee.name.asc())
        return list(await self.scalars(stmt))

    # Back-fill. These two deliberately look beyond this school: they find rows
    # that belong to no school or to another one.
    def _misassigned(self):
        return or_(Employee.school_id.is_(None), Employee.school_id != self.school_id)

    async def list_misassigned(self) -> List[Employee]:
        stmt = select(Employee).where(self._misassigned()).order_by(Employee.name.asc())
        return list(await self.scalars(stmt))

    async def assign_misassigned(self) -> int:
        """Set school_id on every misassigned employee and commit; returns rows updated."""
        stmt = (
            update(Employee)
            .where(self._misassigned())
            .values(school_id=self.school_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.execute(stmt)
        await self.commit()
        return int(result.rowcount or 0)
