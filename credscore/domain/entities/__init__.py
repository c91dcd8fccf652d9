"""Domain Entities - Core business objects."""

from .daily_entry import DailyEntry, utcnow
from .cash_estimate import CashEstimate
from .score_snapshot import ScoreSnapshot
from .polish import PolishedText

__all__ = [
    "DailyEntry",
    "CashEstimate",
    "ScoreSnapshot",
    "PolishedText",
    "utcnow",
]
