"""Daily entry entity representing one self-reported day of trading."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DailyEntry:
    """
    A user's revenue and expenses for one calendar day.

    There is at most one entry per user per date; writing the same day
    again replaces the amounts.
    """

    user_id: str
    date: date
    revenue_cents: int
    expense_cents: int = 0
    expense_note: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def net_cents(self) -> int:
        return self.revenue_cents - self.expense_cents

    def to_dict(self) -> dict:
        return {
            "entry_id": str(self.id),
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "revenue_cents": self.revenue_cents,
            "expense_cents": self.expense_cents,
            "expense_note": self.expense_note,
        }
