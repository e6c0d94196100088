from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel, Pagination


class EmployeeSummary(CamelModel):
    """Headcount and payroll totals for a school."""
    total_employees: int = Field(0)
    active_employees: int = Field(0)
    inactive_employees: int = Field(0)
    on_leave_employees: int = Field(0)
    total_salary: float = Field(0, description="Sum of salaries of ACTIVE employees")


class EmployeeSummaryResponse(CamelModel):
    summary: EmployeeSummary


class EmployeeRead(CamelModel):
    """Employee read model."""
    id: UUID = Field(...)
    employee_id: Optional[str] = Field(None)
    name: str = Field(...)
    email: Optional[str] = Field(None)
    phone: Optional[str] = Field(None)
    department: Optional[str] = Field(None)
    position: Optional[str] = Field(None)
    status: str = Field(...)
    salary: Optional[float] = Field(None)
    date_of_joining: Optional[date] = Field(None)
    created_at: datetime = Field(...)


class EmployeeListResponse(CamelModel):
    employees: List[EmployeeRead] = Field(default_factory=list)
    summary: EmployeeSummary
    pagination: Pagination


class ReassignedEmployee(CamelModel):
    """An employee moved to the caller's school by the back-fill."""
    id: UUID = Field(...)
    name: str = Field(...)
    old_school_id: Optional[UUID] = Field(None)


class FixSchoolIdsResponse(CamelModel):
    message: str = Field(...)
    updated: int = Field(..., description="Rows updated")
    employees: List[ReassignedEmployee] = Field(default_factory=list)
