import asyncio

from sqlalchemy import func, select

from school_api.db.models import Employee, School, Student
from school_api.db.run_migrations import main as run_alembic
from school_api.db.seed import seed_all
from school_api.db.session import dispose_engine, get_session_factory


async def test_migrations_and_seed_build_a_demo_school(tmp_path, monkeypatch):
    monkeypatch.setenv("POSTGRES_URL", f"sqlite+aiosqlite:///{tmp_path / 'seeded.db'}")
    await dispose_engine()
    try:
        await asyncio.to_thread(run_alembic, ["upgrade", "head"])
        await seed_all()
        await seed_all()

        async with get_session_factory()() as session:
            schools = await session.scalar(select(func.count(School.id)))
            students = await session.scalar(select(func.count(Student.id)))
            orphans = await session.scalar(select(func.count(Employee.id)).where(Employee.school_id.is_(None)))
        assert schools == 1
        assert students > 0
        assert orphans == 1
    finally:
        await dispose_engine()
