from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.database import EntityStore
from .exceptions import NotFoundError


class BaseManager:
    """Shared lookups for the entity managers.

    A manager is built per request around the injected store and keeps no
    rows between calls.
    """

    model = None
    label = "Registro"

    def __init__(self, store: EntityStore):
        self.store = store

    async def _fetch(self, session: AsyncSession, model, row_id: int, lock: Optional[str] = None):
        """Load one row by id.

        ``lock="share"`` takes a shared row lock (the row must stay alive
        while a referencing row is written), ``lock="update"`` an exclusive
        one (the row is about to change or disappear). Backends without row
        locks ignore the clause.
        """
        stmt = select(model).where(model.id == row_id)
        if lock == "share":
            stmt = stmt.with_for_update(read=True)
        elif lock == "update":
            stmt = stmt.with_for_update()
        res = await session.execute(stmt)
        return res.scalar_one_or_none()

    async def _count_references(self, session: AsyncSession, column, row_id: int) -> int:
        res = await session.execute(select(func.count()).where(column == row_id))
        return res.scalar_one()

    def _not_found(self, row_id: int) -> NotFoundError:
        return NotFoundError(f"{self.label} {row_id} not found")

    async def get(self, row_id: int):
        async with self.store.transaction() as session:
            row = await self._fetch(session, self.model, row_id)
        if row is None:
            raise self._not_found(row_id)
        return row

    async def list(self):
        async with self.store.transaction() as session:
            res = await session.execute(select(self.model).order_by(self.model.id.asc()))
            return list(res.scalars().all())
