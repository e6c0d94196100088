from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select

from school_api.db.models.finance import FeeCollection, FeeStatus
from .base import BaseRepository


class FeeCollectionRepository(BaseRepository):
    """Repository for fee collections."""

    async def total_amount(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        statuses: Sequence[str] = (),
    ) -> float:
        criteria = []
        if start is not None:
            criteria.append(FeeCollection.date >= start)
        if end is not None:
            criteria.append(FeeCollection.date <= end)
        if statuses:
            criteria.append(FeeCollection.status.in_(list(statuses)))
        return await self.sum(FeeCollection.amount, *criteria)

    async def paid_by_mode(self, start: date, end: date) -> List[Tuple[Optional[str], float]]:
        total = func.coalesce(func.sum(FeeCollection.amount), 0)
        stmt = (
            select(FeeCollection.payment_mode, total)
            .where(
                FeeCollection.school_id == self.school_id,
                FeeCollection.date >= start,
                FeeCollection.date <= end,
                FeeCollection.status == FeeStatus.PAID.value,
            )
            .group_by(FeeCollection.payment_mode)
            .order_by(FeeCollection.payment_mode)
        )
        result = await self.execute(stmt)
        return [(mode, float(amount or 0)) for mode, amount in result.all()]
