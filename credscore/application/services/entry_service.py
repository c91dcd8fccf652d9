"""Entry service - handles daily entry and cash estimate use cases."""

from datetime import date, datetime, timedelta
from typing import Callable, Optional

import structlog

from credscore.domain.entities import CashEstimate, DailyEntry, utcnow
from credscore.domain.exceptions import InvalidEntryRequestException
from credscore.domain.interfaces import CashEstimateRepository, EntryRepository
from credscore.application.dto import (
    CashEstimateRequest,
    CashEstimateResponse,
    EntryListResponse,
    EntryRequest,
    EntryResponse,
)
from credscore.service.scoring import scoring_settings

logger = structlog.get_logger(__name__)


class EntryService:
    """
    Application service for self-reported cashflow data.

    Writes daily entries (one per user per day, last write wins) and
    cash estimates, and lists a user's entries.
    """

    def __init__(
        self,
        entry_repository: EntryRepository,
        cash_estimate_repository: CashEstimateRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._entry_repo = entry_repository
        self._cash_repo = cash_estimate_repository
        self._clock = clock

    async def record_entry(self, request: EntryRequest) -> EntryResponse:
        """
        Insert or replace the entry for the request's user and date.

        Raises:
            InvalidEntryRequestException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidEntryRequestException("; ".join(errors))

        now = self._clock()
        entry = await self._entry_repo.upsert(
            DailyEntry(
                user_id=request.user_id,
                date=request.date,
                revenue_cents=request.revenue_cents,
                expense_cents=request.expense_cents,
                expense_note=request.expense_note,
                created_at=now,
                updated_at=now,
            )
        )

        logger.info(
            "entry_upserted",
            user_id=request.user_id,
            date=request.date.isoformat(),
            revenue_cents=entry.revenue_cents,
            expense_cents=entry.expense_cents,
        )

        return EntryResponse.from_entity(entry)

    async def list_entries(
        self,
        user_id: str,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> EntryListResponse:
        """
        List a user's entries, newest first.

        Defaults to the scoring lookback: the last 14 days up to today.

        Raises:
            InvalidEntryRequestException: If from_date is after to_date
        """
        to_date = to_date or self._clock().date()
        from_date = from_date or to_date - timedelta(days=scoring_settings.lookback_days - 1)
        if from_date > to_date:
            raise InvalidEntryRequestException("from_date must not be after to_date")

        entries = await self._entry_repo.get_by_user_id(user_id, from_date, to_date)

        logger.info(
            "entries_listed",
            user_id=user_id,
            from_date=from_date.isoformat(),
            to_date=to_date.isoformat(),
            count=len(entries),
        )

        return EntryListResponse.from_entities(user_id, from_date, to_date, entries)

    async def record_cash_estimate(
        self,
        request: CashEstimateRequest,
    ) -> CashEstimateResponse:
        """
        Record a cash-on-hand estimate.

        Raises:
            InvalidEntryRequestException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidEntryRequestException("; ".join(errors))

        estimate = await self._cash_repo.save(
            CashEstimate(
                user_id=request.user_id,
                as_of_date=request.as_of_date,
                cash_available_cents=request.cash_available_cents,
                created_at=self._clock(),
            )
        )

        logger.info(
            "cash_estimate_recorded",
            user_id=request.user_id,
            as_of_date=request.as_of_date.isoformat(),
        )

        return CashEstimateResponse.from_entity(estimate)
