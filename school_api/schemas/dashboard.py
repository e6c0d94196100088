from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class StatusCount(CamelModel):
    status: Optional[str] = Field(None)
    count: int = Field(0)


class GradeCount(CamelModel):
    grade: Optional[str] = Field(None)
    count: int = Field(0)


class DepartmentCount(CamelModel):
    department: Optional[str] = Field(None)
    count: int = Field(0)


class FacilityCount(CamelModel):
    facility: Optional[str] = Field(None)
    count: int = Field(0)


class ModeAmount(CamelModel):
    payment_mode: Optional[str] = Field(None)
    amount: float = Field(0)


class StudentStats(CamelModel):
    count: int = Field(0, description="All students of the school")
    recent_admissions: int = Field(0, description="Students created in the last 30 days")
    attendance_rate: int = Field(0, description="Percent present over the last 7 days")
    students_by_status: List[StatusCount] = Field(default_factory=list)
    students_by_grade: List[GradeCount] = Field(default_factory=list)


class EmployeeStats(CamelModel):
    count: int = Field(0)
    active: int = Field(0)
    recent_hires: int = Field(0, description="Joined in the last 30 days")
    employees_by_status: List[StatusCount] = Field(default_factory=list)
    employees_by_department: List[DepartmentCount] = Field(default_factory=list)


class RevenueStats(CamelModel):
    total: float = Field(0)
    current_month: float = Field(0)
    last_month: float = Field(0)
    pending: float = Field(0, description="PENDING and OVERDUE fees, all time")
    collection_rate: int = Field(0, description="Percent of this month's fees already paid")
    revenue_by_mode: List[ModeAmount] = Field(default_factory=list)


class BusStats(CamelModel):
    total: int = Field(0)
    active: int = Field(0)
    total_routes: int = Field(0)
    active_routes: int = Field(0)
    delayed_routes: int = Field(0)
    students_using_transport: int = Field(0)
    recent_maintenance: int = Field(0, description="Maintenance logs in the last 7 days")
    buses_by_status: List[StatusCount] = Field(default_factory=list)


class MaintenanceCounts(CamelModel):
    total_items: int = Field(0)
    total_logs: int = Field(0)
    items_needing_attention: int = Field(0)
    logs_needing_attention: int = Field(0)
    recent_logs: int = Field(0)


class MaintenanceSummary(CamelModel):
    summary: MaintenanceCounts
    items_by_status: List[StatusCount] = Field(default_factory=list)
    logs_by_status: List[StatusCount] = Field(default_factory=list)
    facility_breakdown: List[FacilityCount] = Field(default_factory=list)
