from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import Executable, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository:
    """
    Base class for repositories providing common helpers.

    Note:
      Tenant isolation is explicit: every repository is bound to one school_id and
      its queries filter on it. There is no database-side row-level security.
    """

    def __init__(self, session: AsyncSession, school_id: UUID) -> None:
        self.session = session
        self.school_id = school_id

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        return await self.session.execute(statement, params or {})

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return scalars."""
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return exactly one scalar."""
        result = await self.execute(statement, params)
        return result.scalar_one()

    async def count(self, model, *criteria) -> int:
        """Count rows of `model` in this school matching extra criteria."""
        stmt = select(func.count(model.id)).where(model.school_id == self.school_id, *criteria)
        return int(await self.scalar_one(stmt))

    async def sum(self, column, *criteria) -> float:
        """Sum `column` over this school's rows; a missing aggregate becomes 0."""
        model = column.class_
        stmt = select(func.coalesce(func.sum(column), 0)).where(model.school_id == self.school_id, *criteria)
        return float(await self.scalar_one(stmt) or 0)

    async def group_count(self, column, *criteria, limit: Optional[int] = None) -> list[tuple[Any, int]]:
        """Return (value, count) pairs grouped by `column`, most frequent first."""
        model = column.class_
        counted = func.count(model.id)
        stmt: Select = (
            select(column, counted)
            .where(model.school_id == self.school_id, *criteria)
            .group_by(column)
            .order_by(counted.desc(), column)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.execute(stmt)
        return [(value, int(n)) for value, n in result.all()]

    async def commit(self) -> None:
        """Commit current transaction."""
        await self.session.commit()
