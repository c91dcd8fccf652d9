"""SQLAlchemy ORM models for CredScore entities."""

from datetime import datetime, date, timezone
from uuid import uuid4

from sqlalchemy import (
    BigInteger,
    Date,
    DateTime,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DailyEntryModel(Base):
    """Persisted daily entry. One row per user per date."""

    __tablename__ = "daily_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_entries_user_date"),
    )

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    entry_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    revenue_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    expense_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    expense_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )


class CashEstimateModel(Base):
    """Persisted cash-on-hand estimate."""

    __tablename__ = "cash_estimates"
    __table_args__ = (
        Index("ix_cash_estimates_user_as_of", "user_id", "as_of_date"),
    )

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    as_of_date: Mapped[date] = mapped_column(Date, nullable=False)
    cash_available_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )


class ScoreSnapshotModel(Base):
    """Persisted score snapshot. Append-only."""

    __tablename__ = "score_snapshots"
    __table_args__ = (
        Index("ix_score_snapshots_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    as_of_date: Mapped[date] = mapped_column(Date, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    confidence: Mapped[int] = mapped_column(Integer, nullable=False)
    band: Mapped[str] = mapped_column(String(1), nullable=False)
    flags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    feature_breakdown: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
