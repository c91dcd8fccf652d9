"""Application services (use cases)."""

from .entry_service import EntryService
from .score_service import ScoreService

__all__ = [
    "EntryService",
    "ScoreService",
]
