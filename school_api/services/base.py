from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Type, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from school_api.repositories.base import BaseRepository

R = TypeVar("R", bound=BaseRepository)


class BaseService:
    """
    Base class for services. Holds a session factory and the caller's school.

    Services keep orchestration; data access is delegated to repositories.
    Each read passed to `gather` runs on its own session so independent
    aggregates can be in flight at the same time.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], school_id: UUID) -> None:
        self.session_factory = session_factory
        self.school_id = school_id

    async def run(self, repo_cls: Type[R], op: Callable[[R], Awaitable[Any]]) -> Any:
        """Run one repository operation on a fresh session."""
        async with self.session_factory() as session:
            return await op(repo_cls(session, self.school_id))

    async def gather(self, *reads: Awaitable[Any]) -> list[Any]:
        """Await independent reads concurrently; the first failure propagates."""
        return list(await asyncio.gather(*reads))
