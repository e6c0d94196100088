import json

from school_api.db.models import AdmissionStatus, Student, StudentPerformance


def _student(school, name, grade, roll, status=AdmissionStatus.ACCEPTED, **kw):
    return Student(school_id=school.id, name=name, grade=grade, roll_number=roll, status=status.value, **kw)


async def test_attendance_students_requires_grade(client, auth_headers, school_a):
    resp = await client.get("/api/academic/attendance/students", headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Grade is required"}


async def test_attendance_students_filters_and_orders(client, auth_headers, add_rows, school_a, school_b):
    await add_rows(
        _student(school_a, "Zed", "Grade 5", "02", student_id="S-2"),
        _student(school_a, "Amy", "Grade 5", "01", student_id="S-1"),
        _student(school_a, "Pending Pat", "Grade 5", "03", status=AdmissionStatus.PENDING),
        _student(school_a, "Other Grade", "Grade 6", "01"),
        _student(school_b, "Foreign", "Grade 5", "00"),
    )
    resp = await client.get(
        "/api/academic/attendance/students",
        params={"grade": "Grade 5", "subject": "Math"},
        headers=auth_headers("TEACHER", school_a.id),
    )
    assert resp.status_code == 200
    students = resp.json()["students"]
    assert [s["name"] for s in students] == ["Amy", "Zed"]
    assert students[0]["rollNumber"] == "01"
    assert students[0]["studentId"] == "S-1"
    assert students[0]["grade"] == "Grade 5"


async def test_attendance_students_unknown_grade_is_empty(client, auth_headers, school_a):
    resp = await client.get(
        "/api/academic/attendance/students",
        params={"grade": "Grade 99"},
        headers=auth_headers("ADMIN", school_a.id),
    )
    assert resp.status_code == 200
    assert resp.json() == {"students": []}


async def test_grades_union_is_sorted_and_deduplicated(client, auth_headers, add_rows, school_a, school_b):
    (amy, _, _) = await add_rows(
        _student(school_a, "Amy", "Grade 2", "01"),
        _student(school_a, "Ben", "Grade 1", "01"),
        _student(school_a, "Pending", "Grade 9", "01", status=AdmissionStatus.PENDING),
    )
    (foreign,) = await add_rows(_student(school_b, "Foreign", "Grade 7", "01"))
    await add_rows(
        StudentPerformance(school_id=school_a.id, student_id=amy.id, grade="Grade 2", subject="Math"),
        StudentPerformance(school_id=school_a.id, student_id=amy.id, grade="Grade 3", subject="Math"),
        StudentPerformance(school_id=school_b.id, student_id=foreign.id, grade="Grade 8", subject="Math"),
    )
    resp = await client.get("/api/academic/grades", headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 200
    assert resp.json() == {"grades": ["Grade 1", "Grade 2", "Grade 3"]}


async def test_grades_empty_school(client, auth_headers, school_a):
    resp = await client.get("/api/academic/grades", headers=auth_headers("ADMIN", school_a.id))
    assert resp.json() == {"grades": []}


async def test_attendance_grades_reads_catalogue(client, auth_headers, school_a, tmp_path, monkeypatch):
    catalogue = tmp_path / "grades.json"
    catalogue.write_text(json.dumps({"grades": ["KG", "Grade 1"]}), encoding="utf-8")
    monkeypatch.setenv("GRADES_FILE", str(catalogue))
    resp = await client.get("/api/academic/attendance/grades", headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 200
    assert resp.json() == {"grades": ["KG", "Grade 1"]}


async def test_attendance_grades_default_catalogue(client, auth_headers, school_a):
    resp = await client.get("/api/academic/attendance/grades", headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 200
    assert "Grade 1" in resp.json()["grades"]


async def test_unreadable_catalogue_is_500(client, auth_headers, school_a, tmp_path, monkeypatch):
    monkeypatch.setenv("GRADES_FILE", str(tmp_path / "missing.json"))
    resp = await client.get("/api/academic/attendance/grades", headers=auth_headers("TEACHER", school_a.id))
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


async def test_student_list_is_scoped_and_sorted(client, auth_headers, add_rows, school_a, school_b):
    await add_rows(
        _student(school_a, "Carl", "Grade 1", "01", admission_number="ADM-3"),
        _student(school_a, "Alice", "Grade 2", "01", status=AdmissionStatus.PENDING, admission_number="ADM-1"),
        _student(school_b, "Bob", "Grade 1", "01"),
    )
    resp = await client.get("/api/students/list", headers=auth_headers("ADMIN", school_a.id))
    assert resp.status_code == 200
    students = resp.json()["students"]
    assert [s["name"] for s in students] == ["Alice", "Carl"]
    assert students[0]["admissionNumber"] == "ADM-1"
