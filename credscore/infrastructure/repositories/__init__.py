"""Repository implementations."""

from .entry_repository import PostgresCashEstimateRepository, PostgresEntryRepository
from .score_repository import PostgresScoreSnapshotRepository

__all__ = [
    "PostgresEntryRepository",
    "PostgresCashEstimateRepository",
    "PostgresScoreSnapshotRepository",
]
