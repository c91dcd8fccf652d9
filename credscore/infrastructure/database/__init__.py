"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import Base, DailyEntryModel, CashEstimateModel, ScoreSnapshotModel

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "DailyEntryModel",
    "CashEstimateModel",
    "ScoreSnapshotModel",
]
