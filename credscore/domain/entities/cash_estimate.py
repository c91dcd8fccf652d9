"""Cash estimate entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

from .daily_entry import utcnow


@dataclass
class CashEstimate:
    """Cash the user reports having available as of a given day."""

    user_id: str
    as_of_date: date
    cash_available_cents: int
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "estimate_id": str(self.id),
            "user_id": self.user_id,
            "as_of_date": self.as_of_date.isoformat(),
            "cash_available_cents": self.cash_available_cents,
        }
