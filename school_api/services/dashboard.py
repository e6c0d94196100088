from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from school_api.db.models.academic import Student
from school_api.db.models.finance import FeeStatus
from school_api.db.models.maintenance import ATTENTION_STATUSES, MaintenanceItem, MaintenanceLog
from school_api.db.models.staff import Employee, EmployeeStatus
from school_api.db.models.transport import BusStatus, RouteStatus
from school_api.repositories.academic import AttendanceRepository, StudentRepository
from school_api.repositories.finance import FeeCollectionRepository
from school_api.repositories.operations import MaintenanceRepository, TransportRepository
from school_api.repositories.staff import EmployeeRepository
from school_api.schemas.dashboard import (
    BusStats,
    DepartmentCount,
    EmployeeStats,
    FacilityCount,
    GradeCount,
    MaintenanceCounts,
    MaintenanceSummary,
    ModeAmount,
    RevenueStats,
    StatusCount,
    StudentStats,
)
from school_api.services.base import BaseService

logger = logging.getLogger(__name__)

RECENT_DAYS = 30
ATTENDANCE_WINDOW_DAYS = 7
MAINTENANCE_WINDOW_DAYS = 7
FACILITY_BREAKDOWN_LIMIT = 10


def _percent(part: float, whole: float) -> int:
    return round(part / whole * 100) if whole > 0 else 0


def _month_bounds(day: date, months_back: int = 0) -> tuple[date, date]:
    """First and last day of the month `months_back` months before `day`."""
    year, month = day.year, day.month - months_back
    while month < 1:
        month += 12
        year -= 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


class DashboardService(BaseService):
    """
    Tenant-scoped statistics behind the dashboard cards and charts.

    Each method fans out its independent count/sum reads concurrently.
    """

    def __init__(self, session_factory, school_id, today: Optional[date] = None) -> None:
        super().__init__(session_factory, school_id)
        self.today = today

    def _now(self) -> datetime:
        if self.today is not None:
            return datetime(self.today.year, self.today.month, self.today.day, tzinfo=timezone.utc)
        return datetime.now(tz=timezone.utc)

    # PUBLIC_INTERFACE
    async def student_stats(self) -> StudentStats:
        now = self._now()
        week_ago = (now - timedelta(days=ATTENDANCE_WINDOW_DAYS)).date()
        total, recent, marks, present, by_status, by_grade = await self.gather(
            self.run(StudentRepository, lambda repo: repo.count(Student)),
            self.run(StudentRepository, lambda repo: repo.count_admitted_since(now - timedelta(days=RECENT_DAYS))),
            self.run(AttendanceRepository, lambda repo: repo.count_since(week_ago)),
            self.run(AttendanceRepository, lambda repo: repo.count_since(week_ago, present_only=True)),
            self.run(StudentRepository, lambda repo: repo.group_count(Student.status)),
            self.run(StudentRepository, lambda repo: repo.group_count(Student.grade)),
        )
        return StudentStats(
            count=total,
            recent_admissions=recent,
            attendance_rate=_percent(present, marks),
            students_by_status=[StatusCount(status=s, count=n) for s, n in by_status],
            students_by_grade=[GradeCount(grade=g, count=n) for g, n in by_grade],
        )

    # PUBLIC_INTERFACE
    async def employee_stats(self) -> EmployeeStats:
        since = (self._now() - timedelta(days=RECENT_DAYS)).date()
        total, active, recent, by_status, by_department = await self.gather(
            self.run(EmployeeRepository, lambda repo: repo.count_by_status()),
            self.run(EmployeeRepository, lambda repo: repo.count_by_status(EmployeeStatus.ACTIVE.value)),
            self.run(EmployeeRepository, lambda repo: repo.count_joined_since(since)),
            self.run(EmployeeRepository, lambda repo: repo.group_count(Employee.status)),
            self.run(EmployeeRepository, lambda repo: repo.group_count(Employee.department)),
        )
        return EmployeeStats(
            count=total,
            active=active,
            recent_hires=recent,
            employees_by_status=[StatusCount(status=s, count=n) for s, n in by_status],
            employees_by_department=[DepartmentCount(department=d, count=n) for d, n in by_department],
        )

    # PUBLIC_INTERFACE
    async def revenue_stats(self) -> RevenueStats:
        """
        Fee revenue for the current calendar month against last month.

        collection_rate compares PAID amounts with all fees dated this month.
        """
        today = self._now().date()
        month_start, month_end = _month_bounds(today)
        last_start, last_end = _month_bounds(today, months_back=1)
        paid = (FeeStatus.PAID.value,)
        collected, last_month, pending, expected, by_mode = await self.gather(
            self.run(
                FeeCollectionRepository,
                lambda repo: repo.total_amount(start=month_start, end=month_end, statuses=paid),
            ),
            self.run(
                FeeCollectionRepository,
                lambda repo: repo.total_amount(start=last_start, end=last_end, statuses=paid),
            ),
            self.run(
                FeeCollectionRepository,
                lambda repo: repo.total_amount(statuses=(FeeStatus.PENDING.value, FeeStatus.OVERDUE.value)),
            ),
            self.run(FeeCollectionRepository, lambda repo: repo.total_amount(start=month_start, end=month_end)),
            self.run(FeeCollectionRepository, lambda repo: repo.paid_by_mode(month_start, month_end)),
        )
        return RevenueStats(
            total=collected,
            current_month=collected,
            last_month=last_month,
            pending=pending,
            collection_rate=_percent(collected, expected),
            revenue_by_mode=[ModeAmount(payment_mode=m, amount=a) for m, a in by_mode],
        )

    # PUBLIC_INTERFACE
    async def bus_stats(self) -> BusStats:
        since = self._now() - timedelta(days=MAINTENANCE_WINDOW_DAYS)
        (
            total,
            active,
            total_routes,
            on_time,
            delayed,
            riders,
            recent_maintenance,
            by_status,
        ) = await self.gather(
            self.run(TransportRepository, lambda repo: repo.count_buses()),
            self.run(TransportRepository, lambda repo: repo.count_buses(BusStatus.ACTIVE.value)),
            self.run(TransportRepository, lambda repo: repo.count_routes()),
            self.run(TransportRepository, lambda repo: repo.count_routes(RouteStatus.ON_TIME.value)),
            self.run(TransportRepository, lambda repo: repo.count_routes(RouteStatus.DELAYED.value)),
            self.run(StudentRepository, lambda repo: repo.count_using_transport()),
            self.run(MaintenanceRepository, lambda repo: repo.count_logs_since(since)),
            self.run(TransportRepository, lambda repo: repo.buses_by_status()),
        )
        return BusStats(
            total=total,
            active=active,
            total_routes=total_routes,
            active_routes=on_time,
            delayed_routes=delayed,
            students_using_transport=riders,
            recent_maintenance=recent_maintenance,
            buses_by_status=[StatusCount(status=s, count=n) for s, n in by_status],
        )

    # PUBLIC_INTERFACE
    async def maintenance_summary(self) -> MaintenanceSummary:
        since = self._now() - timedelta(days=MAINTENANCE_WINDOW_DAYS)
        (
            total_items,
            total_logs,
            items_attention,
            logs_attention,
            recent_logs,
            items_by_status,
            logs_by_status,
            facilities,
        ) = await self.gather(
            self.run(MaintenanceRepository, lambda repo: repo.count(MaintenanceItem)),
            self.run(MaintenanceRepository, lambda repo: repo.count(MaintenanceLog)),
            self.run(
                MaintenanceRepository,
                lambda repo: repo.count(MaintenanceItem, MaintenanceItem.status.in_(ATTENTION_STATUSES)),
            ),
            self.run(
                MaintenanceRepository,
                lambda repo: repo.count(MaintenanceLog, MaintenanceLog.status.in_(ATTENTION_STATUSES)),
            ),
            self.run(MaintenanceRepository, lambda repo: repo.count_logs_since(since)),
            self.run(MaintenanceRepository, lambda repo: repo.group_count(MaintenanceItem.status)),
            self.run(MaintenanceRepository, lambda repo: repo.group_count(MaintenanceLog.status)),
            self.run(
                MaintenanceRepository,
                lambda repo: repo.group_count(MaintenanceLog.facility, limit=FACILITY_BREAKDOWN_LIMIT),
            ),
        )
        return MaintenanceSummary(
            summary=MaintenanceCounts(
                total_items=total_items,
                total_logs=total_logs,
                items_needing_attention=items_attention,
                logs_needing_attention=logs_attention,
                recent_logs=recent_logs,
            ),
            items_by_status=[StatusCount(status=s, count=n) for s, n in items_by_status],
            logs_by_status=[StatusCount(status=s, count=n) for s, n in logs_by_status],
            facility_breakdown=[FacilityCount(facility=f, count=n) for f, n in facilities],
        )
