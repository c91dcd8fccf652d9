"""Dependency injection for FastAPI."""

from datetime import datetime
from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from credscore.domain.entities import utcnow
from credscore.domain.interfaces import TextPolisherClient
from credscore.infrastructure.database import get_db_session
from credscore.infrastructure.repositories import (
    PostgresCashEstimateRepository,
    PostgresEntryRepository,
    PostgresScoreSnapshotRepository,
)
from credscore.infrastructure.clients import HttpTextPolisherClient
from credscore.application.services import EntryService, ScoreService


# Repository dependencies
async def get_entry_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresEntryRepository:
    """Get an EntryRepository instance."""
    return PostgresEntryRepository(session)


async def get_cash_estimate_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresCashEstimateRepository:
    """Get a CashEstimateRepository instance."""
    return PostgresCashEstimateRepository(session)


async def get_score_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresScoreSnapshotRepository:
    """Get a ScoreSnapshotRepository instance."""
    return PostgresScoreSnapshotRepository(session)


# External client dependencies
def get_polisher_client() -> TextPolisherClient:
    """Get a TextPolisherClient instance (a no-op without an API key)."""
    return HttpTextPolisherClient()


def get_clock() -> Callable[[], datetime]:
    """Get the time source used for windowing and timestamps."""
    return utcnow


# Service dependencies
async def get_entry_service(
    entry_repo: Annotated[PostgresEntryRepository, Depends(get_entry_repository)],
    cash_repo: Annotated[PostgresCashEstimateRepository, Depends(get_cash_estimate_repository)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> EntryService:
    """Get an EntryService instance."""
    return EntryService(
        entry_repository=entry_repo,
        cash_estimate_repository=cash_repo,
        clock=clock,
    )


async def get_score_service(
    entry_repo: Annotated[PostgresEntryRepository, Depends(get_entry_repository)],
    cash_repo: Annotated[PostgresCashEstimateRepository, Depends(get_cash_estimate_repository)],
    score_repo: Annotated[PostgresScoreSnapshotRepository, Depends(get_score_repository)],
    polisher: Annotated[TextPolisherClient, Depends(get_polisher_client)],
    clock: Annotated[Callable[[], datetime], Depends(get_clock)],
) -> ScoreService:
    """Get a ScoreService instance with all dependencies."""
    return ScoreService(
        entry_repository=entry_repo,
        cash_estimate_repository=cash_repo,
        score_repository=score_repo,
        polisher=polisher,
        clock=clock,
    )
