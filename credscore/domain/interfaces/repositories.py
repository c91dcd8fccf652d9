"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from credscore.domain.entities import CashEstimate, DailyEntry, ScoreSnapshot


class EntryRepository(ABC):
    """
    Abstract repository for DailyEntry persistence.

    Implementations may use PostgreSQL, SQLite, in-memory storage, etc.
    """

    @abstractmethod
    async def upsert(self, entry: DailyEntry) -> DailyEntry:
        """
        Insert an entry or replace the amounts of the existing one.

        Must be a single atomic insert-or-update keyed by (user_id, date):
        concurrent writers for the same day resolve last-write-wins and
        never produce duplicate or merged rows.

        Args:
            entry: The entry to write

        Returns:
            The stored entry as it now exists
        """
        ...

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: str,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[DailyEntry]:
        """
        Retrieve a user's entries within an inclusive date range.

        Args:
            user_id: The user's identifier
            from_date: Earliest date to include (unbounded if None)
            to_date: Latest date to include (unbounded if None)

        Returns:
            List of entries, ordered by date descending
        """
        ...


class CashEstimateRepository(ABC):
    """Abstract repository for CashEstimate persistence."""

    @abstractmethod
    async def save(self, estimate: CashEstimate) -> CashEstimate:
        """
        Persist a cash estimate.

        Args:
            estimate: The estimate to save

        Returns:
            The saved estimate
        """
        ...

    @abstractmethod
    async def get_latest(self, user_id: str) -> Optional[CashEstimate]:
        """
        Retrieve the user's most recent cash estimate.

        Args:
            user_id: The user's identifier

        Returns:
            The most recently recorded estimate (newest created_at), or None
            if the user never recorded one
        """
        ...


class ScoreSnapshotRepository(ABC):
    """
    Abstract repository for ScoreSnapshot persistence.

    Snapshots are append-only.
    """

    @abstractmethod
    async def save(self, snapshot: ScoreSnapshot) -> ScoreSnapshot:
        """
        Persist a snapshot.

        Args:
            snapshot: The snapshot to save

        Returns:
            The saved snapshot
        """
        ...

    @abstractmethod
    async def get_latest(self, user_id: str) -> Optional[ScoreSnapshot]:
        """
        Retrieve the user's latest snapshot.

        Args:
            user_id: The user's identifier

        Returns:
            The snapshot with the newest created_at, or None
        """
        ...

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: str,
        limit: int = 30,
    ) -> List[ScoreSnapshot]:
        """
        Retrieve a user's snapshot history.

        Args:
            user_id: The user's identifier
            limit: Maximum number of snapshots to return

        Returns:
            List of snapshots, ordered by created_at descending
        """
        ...
