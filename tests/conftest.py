import os

os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("AUTO_SEED", "false")
os.environ["SESSION_SECRET_KEY"] = "test-secret"

from typing import Optional  # noqa: E402
from uuid import UUID  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

import school_api.db.models  # noqa: E402,F401
from school_api.api.main import app  # noqa: E402
from school_api.core.security import create_session_token  # noqa: E402
from school_api.db.base import Base  # noqa: E402
from school_api.db.models import School  # noqa: E402
from school_api.db.session import get_async_session, get_session_factory  # noqa: E402


@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'school.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def add_rows(session_factory):
    """Persist ORM rows and return them."""

    async def _add(*rows):
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()
        return rows

    return _add


@pytest.fixture
async def school_a(add_rows) -> School:
    (school,) = await add_rows(School(name="Alpha School", registration_number="A-001"))
    return school


@pytest.fixture
async def school_b(add_rows) -> School:
    (school,) = await add_rows(School(name="Beta School", registration_number="B-001"))
    return school


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a role and school."""

    def _headers(role: str, school_id: Optional[UUID] = None) -> dict:
        token = create_session_token(
            subject=f"{role.lower()}-user",
            role=role,
            school_id=str(school_id) if school_id else None,
            school_name="Test School" if school_id else None,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
async def client(session_factory):
    async def _session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_async_session] = _session_override
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()
