"""
Database seeding utilities for a demo school.

Seeds:
- Demo school (Greenfield Public School)
- Accepted and pending students across three grades, with performance records
- A week of attendance marks
- Employees in every status, plus one legacy employee without a school
- Fee collections for this month and last month
- Buses, routes and maintenance records

Usage:
  python -m school_api.db.run_migrations upgrade head
  python -m school_api.db.seed
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

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
    School,
    Student,
    StudentPerformance,
)
from school_api.db.session import get_session_factory

logger = logging.getLogger(__name__)

DEMO_REGISTRATION_NUMBER = "GPS-0001"

_STUDENTS = [
    # name, grade, roll, status, transport
    ("Aarav Shah", "Grade 1", "01", AdmissionStatus.ACCEPTED, True),
    ("Bella Moreno", "Grade 1", "02", AdmissionStatus.ACCEPTED, False),
    ("Chen Wei", "Grade 2", "01", AdmissionStatus.ACCEPTED, True),
    ("Dana Kovac", "Grade 2", "02", AdmissionStatus.ACCEPTED, False),
    ("Emeka Obi", "Grade 3", "01", AdmissionStatus.ACCEPTED, True),
    ("Farah Haddad", "Grade 3", "02", AdmissionStatus.PENDING, False),
    ("Goran Petrov", "Grade 1", "03", AdmissionStatus.WAITLISTED, False),
]

_EMPLOYEES = [
    # name, department, position, status, salary
    ("Helen Park", "Academics", "Principal", EmployeeStatus.ACTIVE, 6000),
    ("Ivan Novak", "Academics", "Teacher", EmployeeStatus.ACTIVE, 3200),
    ("Julia Santos", "Academics", "Teacher", EmployeeStatus.ON_LEAVE, 3100),
    ("Kofi Mensah", "Transport", "Driver", EmployeeStatus.ACTIVE, 1800),
    ("Lena Fischer", "Administration", "Accountant", EmployeeStatus.INACTIVE, 2500),
]


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """
    Seed the database with one demo school and its records.

    Safe to run repeatedly: if the demo school already exists nothing is written.
    """
    async with get_session_factory()() as session:
        existing = await session.scalar(
            select(School).where(School.registration_number == DEMO_REGISTRATION_NUMBER)
        )
        if existing is not None:
            logger.info("Demo school already present (%s); skipping seed", existing.id)
            return

        school = School(
            name="Greenfield Public School",
            registration_number=DEMO_REGISTRATION_NUMBER,
            address="12 Orchard Lane",
            email="office@greenfield.example",
        )
        session.add(school)
        await session.flush()

        students = _seed_students(session, school)
        await session.flush()
        _seed_academic_records(session, school, students)
        _seed_employees(session, school)
        _seed_fees(session, school, students)
        _seed_operations(session, school)

        await session.commit()
        logger.info("Seeded demo school %s", school.id)


def _seed_students(session: AsyncSession, school: School) -> List[Student]:
    students = []
    for idx, (name, grade, roll, status, transport) in enumerate(_STUDENTS, start=1):
        student = Student(
            school_id=school.id,
            student_id=f"STU-{idx:04d}",
            name=name,
            email=f"{name.split()[0].lower()}@students.greenfield.example",
            grade=grade,
            roll_number=roll,
            admission_number=f"ADM-2024-{idx:03d}",
            status=status.value,
            transport_required=transport,
        )
        session.add(student)
        students.append(student)
    return students


def _seed_academic_records(session: AsyncSession, school: School, students: List[Student]) -> None:
    today = date.today()
    for student in students:
        if student.status != AdmissionStatus.ACCEPTED.value:
            continue
        for subject, score in (("Mathematics", 78), ("English", 84)):
            session.add(
                StudentPerformance(
                    school_id=school.id,
                    student_id=student.id,
                    grade=student.grade,
                    subject=subject,
                    score=score,
                )
            )
        for offset in range(5):
            session.add(
                Attendance(
                    school_id=school.id,
                    student_id=student.id,
                    date=today - timedelta(days=offset),
                    is_present=offset != 2,
                )
            )


def _seed_employees(session: AsyncSession, school: School) -> None:
    for idx, (name, department, position, status, salary) in enumerate(_EMPLOYEES, start=1):
        session.add(
            Employee(
                school_id=school.id,
                employee_id=f"EMP-{idx:03d}",
                name=name,
                email=f"{name.split()[0].lower()}@greenfield.example",
                phone=f"+1-555-010{idx}",
                department=department,
                position=position,
                status=status.value,
                salary=salary,
                date_of_joining=date.today() - timedelta(days=40 * idx),
            )
        )
    # Legacy row imported before schools existed; /employee/fix-school-ids claims it.
    session.add(
        Employee(
            school_id=None,
            employee_id="EMP-LEGACY",
            name="Mira Quinn",
            department="Administration",
            position="Clerk",
            status=EmployeeStatus.ACTIVE.value,
            salary=1500,
        )
    )


def _seed_fees(session: AsyncSession, school: School, students: List[Student]) -> None:
    this_month = date.today().replace(day=1)
    last_month = (this_month - timedelta(days=1)).replace(day=1)
    accepted = [s for s in students if s.status == AdmissionStatus.ACCEPTED.value]
    modes = ["CASH", "CARD", "BANK_TRANSFER"]
    for idx, student in enumerate(accepted):
        session.add(
            FeeCollection(
                school_id=school.id,
                student_id=student.id,
                amount=500,
                date=last_month,
                status=FeeStatus.PAID.value,
                payment_mode=modes[idx % len(modes)],
            )
        )
        session.add(
            FeeCollection(
                school_id=school.id,
                student_id=student.id,
                amount=500,
                date=this_month,
                status=FeeStatus.PAID.value if idx % 2 == 0 else FeeStatus.PENDING.value,
                payment_mode=modes[idx % len(modes)] if idx % 2 == 0 else None,
            )
        )


def _seed_operations(session: AsyncSession, school: School) -> None:
    session.add_all(
        [
            Bus(school_id=school.id, bus_number="BUS-01", capacity=40, status=BusStatus.ACTIVE.value),
            Bus(school_id=school.id, bus_number="BUS-02", capacity=40, status=BusStatus.ACTIVE.value),
            Bus(school_id=school.id, bus_number="BUS-03", capacity=30, status=BusStatus.MAINTENANCE.value),
            BusRoute(school_id=school.id, route_name="North Loop", bus_number="BUS-01",
                     status=RouteStatus.ON_TIME.value),
            BusRoute(school_id=school.id, route_name="River Road", bus_number="BUS-02",
                     status=RouteStatus.DELAYED.value, delay_reason="Road works"),
            MaintenanceItem(school_id=school.id, name="Science Lab HVAC",
                            status=MaintenanceStatus.NEEDS_REPAIR.value, last_checked=date.today()),
            MaintenanceItem(school_id=school.id, name="Gym Floor",
                            status=MaintenanceStatus.OK.value, last_checked=date.today()),
            MaintenanceLog(school_id=school.id, facility="Science Lab", issue="HVAC not cooling",
                           status=MaintenanceStatus.IN_PROGRESS.value),
            MaintenanceLog(school_id=school.id, facility="BUS-03", issue="Brake inspection",
                           status=MaintenanceStatus.NEEDS_REPAIR.value),
        ]
    )


if __name__ == "__main__":
    asyncio.run(seed_all())
