from datetime import date

from school_api.db.models import (
    AdmissionStatus,
    Attendance,
    Bus,
    BusRoute,
    BusStatus,
    Employee,
    EmployeeStatus,
    FeeCollection,
    FeeStatus,
    MaintenanceItem,
    MaintenanceLog,
    MaintenanceStatus,
    RouteStatus,
    Student,
)
from school_api.services.dashboard import DashboardService, _month_bounds


def test_month_bounds_wraps_year():
    assert _month_bounds(date(2025, 1, 15), months_back=1) == (date(2024, 12, 1), date(2024, 12, 31))
    assert _month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


async def test_student_stats_are_scoped(client, auth_headers, add_rows, school_a, school_b):
    a1, a2, _ = await add_rows(
        Student(school_id=school_a.id, name="A1", grade="Grade 1", status=AdmissionStatus.ACCEPTED.value),
        Student(school_id=school_a.id, name="A2", grade="Grade 1", status=AdmissionStatus.PENDING.value),
        Student(school_id=school_b.id, name="B1", grade="Grade 4", status=AdmissionStatus.ACCEPTED.value),
    )
    today = date.today()
    await add_rows(
        Attendance(school_id=school_a.id, student_id=a1.id, date=today, is_present=True),
        Attendance(school_id=school_a.id, student_id=a2.id, date=today, is_present=False),
    )
    resp = await client.get("/api/dashboard/stats/students", headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert body["attendanceRate"] == 50
    assert body["studentsByGrade"] == [{"grade": "Grade 1", "count": 2}]
    assert {s["status"]: s["count"] for s in body["studentsByStatus"]} == {"ACCEPTED": 1, "PENDING": 1}


async def test_employee_stats(client, auth_headers, add_rows, school_a):
    await add_rows(
        Employee(school_id=school_a.id, name="E1", department="Academics", status=EmployeeStatus.ACTIVE.value,
                 date_of_joining=date.today()),
        Employee(school_id=school_a.id, name="E2", department="Academics", status=EmployeeStatus.ON_LEAVE.value,
                 date_of_joining=date(2000, 1, 1)),
        Employee(school_id=school_a.id, name="E3", department="Transport", status=EmployeeStatus.ACTIVE.value),
    )
    resp = await client.get("/api/dashboard/stats/employees", headers=auth_headers("ADMIN", school_a.id))
    body = resp.json()
    assert body["count"] == 3
    assert body["active"] == 2
    assert body["recentHires"] == 1
    assert body["employeesByDepartment"] == [
        {"department": "Academics", "count": 2},
        {"department": "Transport", "count": 1},
    ]


async def test_revenue_stats_compare_months(session_factory, add_rows, school_a, school_b):
    today = date(2025, 3, 15)
    await add_rows(
        FeeCollection(school_id=school_a.id, amount=300, date=date(2025, 3, 2), status=FeeStatus.PAID.value,
                      payment_mode="CASH"),
        FeeCollection(school_id=school_a.id, amount=100, date=date(2025, 3, 5), status=FeeStatus.PAID.value,
                      payment_mode="CARD"),
        FeeCollection(school_id=school_a.id, amount=100, date=date(2025, 3, 9), status=FeeStatus.PENDING.value),
        FeeCollection(school_id=school_a.id, amount=250, date=date(2025, 2, 20), status=FeeStatus.PAID.value,
                      payment_mode="CASH"),
        FeeCollection(school_id=school_a.id, amount=50, date=date(2025, 1, 20), status=FeeStatus.OVERDUE.value),
        FeeCollection(school_id=school_b.id, amount=9999, date=date(2025, 3, 2), status=FeeStatus.PAID.value),
    )
    stats = await DashboardService(session_factory, school_a.id, today=today).revenue_stats()
    assert stats.current_month == 400
    assert stats.total == 400
    assert stats.last_month == 250
    assert stats.pending == 150
    assert stats.collection_rate == 80
    assert {m.payment_mode: m.amount for m in stats.revenue_by_mode} == {"CARD": 100, "CASH": 300}


async def test_bus_stats(client, auth_headers, add_rows, school_a):
    await add_rows(
        Bus(school_id=school_a.id, bus_number="B1", status=BusStatus.ACTIVE.value),
        Bus(school_id=school_a.id, bus_number="B2", status=BusStatus.MAINTENANCE.value),
        BusRoute(school_id=school_a.id, route_name="North", status=RouteStatus.ON_TIME.value),
        BusRoute(school_id=school_a.id, route_name="South", status=RouteStatus.DELAYED.value),
        Student(school_id=school_a.id, name="Rider", transport_required=True),
        Student(school_id=school_a.id, name="Walker", transport_required=False),
        MaintenanceLog(school_id=school_a.id, facility="B2", status=MaintenanceStatus.IN_PROGRESS.value),
    )
    resp = await client.get("/api/dashboard/stats/buses", headers=auth_headers("TRANSPORT", school_a.id))
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 2
    assert body["active"] == 1
    assert body["totalRoutes"] == 2
    assert body["activeRoutes"] == 1
    assert body["delayedRoutes"] == 1
    assert body["studentsUsingTransport"] == 1
    assert body["recentMaintenance"] == 1


async def test_empty_school_dashboard_is_all_zero(client, auth_headers, school_a):
    headers = auth_headers("ADMIN", school_a.id)
    revenue = (await client.get("/api/dashboard/stats/revenue", headers=headers)).json()
    assert revenue["collectionRate"] == 0
    assert revenue["pending"] == 0
    assert revenue["revenueByMode"] == []
    students = (await client.get("/api/dashboard/stats/students", headers=headers)).json()
    assert students["count"] == 0
    assert students["attendanceRate"] == 0


async def test_maintenance_summary_requires_transport_or_admin(client, auth_headers, school_a):
    resp = await client.get("/api/operations/maintenance/summary", headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 403
    assert resp.json()["error"] == "Forbidden - ADMIN or TRANSPORT access required"


async def test_maintenance_summary(client, auth_headers, add_rows, school_a, school_b):
    await add_rows(
        MaintenanceItem(school_id=school_a.id, name="HVAC", status=MaintenanceStatus.NEEDS_REPAIR.value),
        MaintenanceItem(school_id=school_a.id, name="Floor", status=MaintenanceStatus.OK.value),
        MaintenanceLog(school_id=school_a.id, facility="Lab", status=MaintenanceStatus.IN_PROGRESS.value),
        MaintenanceLog(school_id=school_a.id, facility="Lab", status=MaintenanceStatus.OK.value),
        MaintenanceLog(school_id=school_a.id, facility="Gym", status=MaintenanceStatus.NEEDS_REPAIR.value),
        MaintenanceLog(school_id=school_b.id, facility="Pool", status=MaintenanceStatus.NEEDS_REPAIR.value),
    )
    resp = await client.get("/api/operations/maintenance/summary", headers=auth_headers("TRANSPORT", school_a.id))
    assert resp.status_code == 200
    body = resp.json()
    assert body["summary"] == {
        "totalItems": 2,
        "totalLogs": 3,
        "itemsNeedingAttention": 1,
        "logsNeedingAttention": 2,
        "recentLogs": 3,
    }
    assert body["facilityBreakdown"] == [{"facility": "Lab", "count": 2}, {"facility": "Gym", "count": 1}]
