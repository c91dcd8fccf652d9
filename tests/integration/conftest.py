"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Fixed, adjustable clock
- Mock text polisher with clean, prohibited and failing replies
- In-memory database for testing
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Callable, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from credscore.main import app
from credscore.core.dependencies import (
    get_cash_estimate_repository,
    get_clock,
    get_entry_repository,
    get_polisher_client,
    get_score_repository,
)
from credscore.domain.entities import PolishedText
from credscore.domain.interfaces import TextPolisherClient
from credscore.infrastructure.database import Base
from credscore.infrastructure.repositories import (
    PostgresCashEstimateRepository,
    PostgresEntryRepository,
    PostgresScoreSnapshotRepository,
)


NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()

CLEAN_POLISHED = "Your cashflow shows steady daily revenue."
PROHIBITED_POLISHED = "You should approve this lending request."


# =============================================================================
# Mock Clients
# =============================================================================

class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class MockTextPolisherClient(TextPolisherClient):
    """
    Mock polisher that records calls.

    Modes:
        unpolished: behaves like a disabled or failing polisher
        clean: returns neutral rewritten texts
        prohibited: returns texts with terms that cannot be cleaned
    """

    def __init__(self, mode: str = "unpolished"):
        self.mode = mode
        self.calls: List[dict] = []

    async def polish(
        self,
        entrepreneur_text: str,
        lender_text: str,
        language: str,
    ) -> PolishedText:
        self.calls.append({
            "entrepreneur_text": entrepreneur_text,
            "lender_text": lender_text,
            "language": language,
        })

        if self.mode == "clean":
            return PolishedText(
                entrepreneur_text=CLEAN_POLISHED,
                lender_text=CLEAN_POLISHED,
                polished=True,
            )
        if self.mode == "prohibited":
            return PolishedText(
                entrepreneur_text=PROHIBITED_POLISHED,
                lender_text=CLEAN_POLISHED,
                polished=True,
            )
        return PolishedText(
            entrepreneur_text=entrepreneur_text,
            lender_text=lender_text,
            polished=False,
        )


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to NOW."""
    return FixedClock()


@pytest.fixture
def mock_polisher() -> MockTextPolisherClient:
    """Polisher that leaves the templates untouched."""
    return MockTextPolisherClient()


# =============================================================================
# App Client Fixtures
# =============================================================================

def _override_dependencies(
    session: AsyncSession,
    polisher: TextPolisherClient,
    clock: Callable[[], datetime],
) -> None:
    async def override_get_entry_repository():
        return PostgresEntryRepository(session)

    async def override_get_cash_estimate_repository():
        return PostgresCashEstimateRepository(session)

    async def override_get_score_repository():
        return PostgresScoreSnapshotRepository(session)

    def override_get_polisher_client():
        return polisher

    def override_get_clock():
        return clock

    app.dependency_overrides[get_entry_repository] = override_get_entry_repository
    app.dependency_overrides[get_cash_estimate_repository] = override_get_cash_estimate_repository
    app.dependency_overrides[get_score_repository] = override_get_score_repository
    app.dependency_overrides[get_polisher_client] = override_get_polisher_client
    app.dependency_overrides[get_clock] = override_get_clock


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    mock_polisher: MockTextPolisherClient,
    clock: FixedClock,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses an in-memory SQLite database
    - Pins the clock to NOW
    - Uses a polisher that returns the templates unpolished
    """
    _override_dependencies(test_session, mock_polisher, clock)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_clean_polisher(
    test_session: AsyncSession,
    clock: FixedClock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose polisher returns neutral text."""
    _override_dependencies(test_session, MockTextPolisherClient(mode="clean"), clock)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_prohibited_polisher(
    test_session: AsyncSession,
    clock: FixedClock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client whose polisher returns prohibited vocabulary."""
    _override_dependencies(test_session, MockTextPolisherClient(mode="prohibited"), clock)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

async def _post_entries(
    client: AsyncClient,
    user_id: str,
    days: range,
    revenue_cents: int,
    expense_cents: int = 0,
) -> None:
    """Record one entry per day, `days` counted back from TODAY."""
    for days_ago in days:
        response = await client.post(
            f"/v1/users/{user_id}/entries",
            json={
                "date": (TODAY - timedelta(days=days_ago)).isoformat(),
                "revenue_cents": revenue_cents,
                "expense_cents": expense_cents,
            },
        )
        assert response.status_code == 200


@pytest.fixture
def post_entries():
    """Helper that records one entry per day counted back from TODAY."""
    return _post_entries


@pytest_asyncio.fixture
async def steady_user(client: AsyncClient) -> str:
    """Fourteen identical days plus a fresh cash estimate."""
    user_id = "user_steady"
    await _post_entries(client, user_id, range(14), 10000, 6000)
    response = await client.post(
        f"/v1/users/{user_id}/cash-estimate",
        json={"cash_available_cents": 100000},
    )
    assert response.status_code == 201
    return user_id
