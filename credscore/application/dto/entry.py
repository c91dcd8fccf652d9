"""Data transfer objects for daily entry and cash estimate operations."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

MAX_NOTE_LENGTH = 500


@dataclass(frozen=True)
class EntryRequest:
    """Input data for recording one day of revenue and expenses."""
    user_id: str
    date: date
    revenue_cents: int
    expense_cents: int = 0
    expense_note: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        if self.revenue_cents < 0:
            errors.append("revenue_cents must not be negative")

        if self.expense_cents < 0:
            errors.append("expense_cents must not be negative")

        if self.expense_note is not None and len(self.expense_note) > MAX_NOTE_LENGTH:
            errors.append(f"expense_note must be at most {MAX_NOTE_LENGTH} characters")

        return errors


@dataclass(frozen=True)
class CashEstimateRequest:
    """Input data for recording a cash-on-hand estimate."""
    user_id: str
    as_of_date: date
    cash_available_cents: int

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        if self.cash_available_cents < 0:
            errors.append("cash_available_cents must not be negative")

        return errors


@dataclass(frozen=True)
class EntryResponse:
    entry_id: str
    user_id: str
    date: date
    revenue_cents: int
    expense_cents: int
    expense_note: Optional[str]

    @classmethod
    def from_entity(cls, entry) -> "EntryResponse":
        return cls(
            entry_id=str(entry.id),
            user_id=entry.user_id,
            date=entry.date,
            revenue_cents=entry.revenue_cents,
            expense_cents=entry.expense_cents,
            expense_note=entry.expense_note,
        )


@dataclass(frozen=True)
class EntryListResponse:
    """A user's entries within a date range, newest first."""

    user_id: str
    from_date: date
    to_date: date
    entries: List[EntryResponse]

    @classmethod
    def from_entities(
        cls,
        user_id: str,
        from_date: date,
        to_date: date,
        entries: list,
    ) -> "EntryListResponse":
        return cls(
            user_id=user_id,
            from_date=from_date,
            to_date=to_date,
            entries=[EntryResponse.from_entity(e) for e in entries],
        )


@dataclass(frozen=True)
class CashEstimateResponse:
    estimate_id: str
    user_id: str
    as_of_date: date
    cash_available_cents: int

    @classmethod
    def from_entity(cls, estimate) -> "CashEstimateResponse":
        return cls(
            estimate_id=str(estimate.id),
            user_id=estimate.user_id,
            as_of_date=estimate.as_of_date,
            cash_available_cents=estimate.cash_available_cents,
        )
