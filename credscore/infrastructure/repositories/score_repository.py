"""SQL implementation of ScoreSnapshotRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from credscore.domain.entities import ScoreSnapshot
from credscore.domain.interfaces import ScoreSnapshotRepository
from credscore.infrastructure.database.models import ScoreSnapshotModel


class PostgresScoreSnapshotRepository(ScoreSnapshotRepository):
    """
    SQL implementation of the ScoreSnapshot repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, snapshot: ScoreSnapshot) -> ScoreSnapshot:
        """Persist a snapshot to the database."""
        model = ScoreSnapshotModel(
            id=str(snapshot.id),
            user_id=snapshot.user_id,
            as_of_date=snapshot.as_of_date,
            score=snapshot.score,
            confidence=snapshot.confidence,
            band=snapshot.band,
            flags=list(snapshot.flags),
            feature_breakdown=dict(snapshot.feature_breakdown),
            created_at=snapshot.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return snapshot

    async def get_latest(self, user_id: str) -> Optional[ScoreSnapshot]:
        """Retrieve the newest snapshot for a user."""
        snapshots = await self.get_by_user_id(user_id, limit=1)
        return snapshots[0] if snapshots else None

    async def get_by_user_id(
        self,
        user_id: str,
        limit: int = 30,
    ) -> List[ScoreSnapshot]:
        """Retrieve snapshots for a user, ordered by created_at descending."""
        stmt = (
            select(ScoreSnapshotModel)
            .where(ScoreSnapshotModel.user_id == user_id)
            .order_by(ScoreSnapshotModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: ScoreSnapshotModel) -> ScoreSnapshot:
        """Convert database model to domain entity."""
        return ScoreSnapshot(
            id=UUID(model.id),
            user_id=model.user_id,
            as_of_date=model.as_of_date,
            score=model.score,
            confidence=model.confidence,
            band=model.band,
            flags=list(model.flags or []),
            feature_breakdown=dict(model.feature_breakdown or {}),
            created_at=model.created_at,
        )
