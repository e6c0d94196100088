from datetime import date

from sqlalchemy import select

from school_api.db.models import Employee, EmployeeStatus


def _employee(school, name, status=EmployeeStatus.ACTIVE, salary=1000, **kw):
    return Employee(
        school_id=school.id if school is not None else None,
        name=name,
        status=status.value,
        salary=salary,
        **kw,
    )


async def test_summary_counts_and_active_payroll(client, auth_headers, add_rows, school_a, school_b):
    await add_rows(
        _employee(school_a, "A1", salary=2500),
        _employee(school_a, "A2", salary=3500),
        _employee(school_a, "I1", EmployeeStatus.INACTIVE, salary=9000),
        _employee(school_a, "L1", EmployeeStatus.ON_LEAVE, salary=7000),
        _employee(school_b, "B1", salary=100000),
    )
    resp = await client.get("/api/employee/summary", headers=auth_headers("ADMIN", school_a.id))
    assert resp.status_code == 200
    assert resp.json() == {
        "summary": {
            "totalEmployees": 4,
            "activeEmployees": 2,
            "inactiveEmployees": 1,
            "onLeaveEmployees": 1,
            "totalSalary": 6000,
        }
    }


async def test_summary_without_active_employees_reports_zero_salary(client, auth_headers, add_rows, school_a):
    await add_rows(_employee(school_a, "I1", EmployeeStatus.INACTIVE, salary=4000))
    resp = await client.get("/api/employee/summary", headers=auth_headers("ADMIN", school_a.id))
    summary = resp.json()["summary"]
    assert summary["totalSalary"] == 0
    assert summary["activeEmployees"] == 0
    assert summary["totalEmployees"] == 1


async def test_fix_school_ids_backfills_then_is_idempotent(
    client, auth_headers, add_rows, session_factory, school_a, school_b
):
    await add_rows(
        _employee(school_a, "Already Here"),
        _employee(None, "Orphan"),
        _employee(school_b, "Elsewhere"),
    )
    headers = auth_headers("ADMIN", school_a.id)

    first = await client.post("/api/employee/fix-school-ids", headers=headers)
    assert first.status_code == 200
    body = first.json()
    assert body["updated"] == 2
    assert body["message"] == "Updated 2 employees with correct schoolId"
    moved = {e["name"]: e["oldSchoolId"] for e in body["employees"]}
    assert moved == {"Orphan": None, "Elsewhere": str(school_b.id)}

    async with session_factory() as session:
        school_ids = set((await session.scalars(select(Employee.school_id))).all())
    assert school_ids == {school_a.id}

    second = await client.post("/api/employee/fix-school-ids", headers=headers)
    assert second.status_code == 200
    assert second.json() == {
        "message": "All employees already have the correct schoolId",
        "updated": 0,
        "employees": [],
    }


async def test_list_paginates_and_filters(client, auth_headers, add_rows, school_a, school_b):
    await add_rows(
        *[_employee(school_a, f"Teacher {i}", department="Academics") for i in range(3)],
        _employee(school_a, "Driver", department="Transport", email="driver@school.test"),
        _employee(school_a, "Away", EmployeeStatus.ON_LEAVE, department="Academics"),
        _employee(school_b, "Teacher B", department="Academics"),
    )
    headers = auth_headers("ADMIN", school_a.id)

    resp = await client.get("/api/employee", params={"page": 2, "limit": 2}, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["employees"]) == 2
    assert body["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalCount": 5,
        "limit": 2,
        "hasNextPage": True,
        "hasPrevPage": True,
    }
    assert body["summary"]["totalEmployees"] == 5

    resp = await client.get(
        "/api/employee",
        params={"department": "Academics", "status": "ACTIVE", "limit": 50},
        headers=headers,
    )
    names = {e["name"] for e in resp.json()["employees"]}
    assert names == {"Teacher 0", "Teacher 1", "Teacher 2"}

    resp = await client.get(
        "/api/employee",
        params={"search": "DRIVER@", "field": "email", "department": "all"},
        headers=headers,
    )
    assert [e["name"] for e in resp.json()["employees"]] == ["Driver"]


async def test_list_rejects_bad_page(client, auth_headers, school_a):
    resp = await client.get("/api/employee", params={"page": 0}, headers=auth_headers("ADMIN", school_a.id))
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request parameters"
    assert resp.json()["details"]


async def test_list_serializes_employee_fields(client, auth_headers, add_rows, school_a):
    await add_rows(
        _employee(
            school_a,
            "Helen",
            salary=4200,
            employee_id="EMP-1",
            position="Principal",
            date_of_joining=date(2024, 6, 1),
        )
    )
    resp = await client.get("/api/employee", headers=auth_headers("ADMIN", school_a.id))
    (emp,) = resp.json()["employees"]
    assert emp["employeeId"] == "EMP-1"
    assert emp["salary"] == 4200
    assert emp["dateOfJoining"] == "2024-06-01"
    assert emp["status"] == "ACTIVE"
