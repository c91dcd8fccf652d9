"""SQL implementations of EntryRepository and CashEstimateRepository."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from credscore.domain.entities import CashEstimate, DailyEntry
from credscore.domain.interfaces import CashEstimateRepository, EntryRepository
from credscore.infrastructure.database.models import CashEstimateModel, DailyEntryModel

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PostgresEntryRepository(EntryRepository):
    """
    SQL implementation of the DailyEntry repository.

    Runs on PostgreSQL in production and SQLite in tests; the upsert uses
    each dialect's native INSERT ... ON CONFLICT.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def upsert(self, entry: DailyEntry) -> DailyEntry:
        """
        Insert or replace the entry for (user_id, date) in one statement.

        Racing writers for the same day resolve last-write-wins; the row id
        and created_at of the first write are kept.
        """
        dialect = self._session.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Upsert not supported for dialect: {dialect}")

        stmt = insert(DailyEntryModel).values(
            id=str(entry.id),
            user_id=entry.user_id,
            entry_date=entry.date,
            revenue_cents=entry.revenue_cents,
            expense_cents=entry.expense_cents,
            expense_note=entry.expense_note,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[DailyEntryModel.user_id, DailyEntryModel.entry_date],
            set_={
                "revenue_cents": stmt.excluded.revenue_cents,
                "expense_cents": stmt.excluded.expense_cents,
                "expense_note": stmt.excluded.expense_note,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self._session.execute(stmt)
        await self._session.flush()

        stored = await self._get_one(entry.user_id, entry.date)
        return stored if stored is not None else entry

    async def get_by_user_id(
        self,
        user_id: str,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[DailyEntry]:
        """Retrieve entries in an inclusive date range, newest first."""
        stmt = select(DailyEntryModel).where(DailyEntryModel.user_id == user_id)
        if from_date is not None:
            stmt = stmt.where(DailyEntryModel.entry_date >= from_date)
        if to_date is not None:
            stmt = stmt.where(DailyEntryModel.entry_date <= to_date)
        stmt = stmt.order_by(DailyEntryModel.entry_date.desc())

        result = await self._session.execute(
            stmt.execution_options(populate_existing=True)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def _get_one(self, user_id: str, day: date) -> Optional[DailyEntry]:
        # The upsert bypasses the identity map, so refresh any cached row
        stmt = (
            select(DailyEntryModel)
            .where(
                DailyEntryModel.user_id == user_id,
                DailyEntryModel.entry_date == day,
            )
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model is not None else None

    def _to_entity(self, model: DailyEntryModel) -> DailyEntry:
        """Convert database model to domain entity."""
        return DailyEntry(
            id=UUID(model.id),
            user_id=model.user_id,
            date=model.entry_date,
            revenue_cents=model.revenue_cents,
            expense_cents=model.expense_cents,
            expense_note=model.expense_note,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class PostgresCashEstimateRepository(CashEstimateRepository):
    """SQL implementation of the CashEstimate repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, estimate: CashEstimate) -> CashEstimate:
        """Persist a cash estimate to the database."""
        model = CashEstimateModel(
            id=str(estimate.id),
            user_id=estimate.user_id,
            as_of_date=estimate.as_of_date,
            cash_available_cents=estimate.cash_available_cents,
            created_at=estimate.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return estimate

    async def get_latest(self, user_id: str) -> Optional[CashEstimate]:
        """Retrieve the most recently recorded estimate."""
        stmt = (
            select(CashEstimateModel)
            .where(CashEstimateModel.user_id == user_id)
            .order_by(CashEstimateModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return CashEstimate(
            id=UUID(model.id),
            user_id=model.user_id,
            as_of_date=model.as_of_date,
            cash_available_cents=model.cash_available_cents,
            created_at=model.created_at,
        )
