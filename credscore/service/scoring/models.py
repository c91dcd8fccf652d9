"""
Data models for behavioral scoring.

These models represent the data structures used throughout the scoring pipeline,
from self-reported daily entries to the final score result.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional


class Band(str, Enum):
    """Coarse risk category, A (lowest observed risk) through D (highest)."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class RiskFlag(str, Enum):
    """Risk flags raised by the composer, in display order."""
    LOW_RELIABILITY = "R1 Low reliability"
    SUSTAINED_DEFICIT = "R2 Sustained deficit"
    HIGH_VOLATILITY = "R3 High volatility"
    LOW_BUFFER = "R4 Low buffer"
    DECLINING_REVENUE = "R5 Declining revenue"


@dataclass(frozen=True)
class DailyEntry:
    """
    A single self-reported day of trading.

    Attributes:
        date: Calendar day the entry covers (one entry per user per day)
        revenue_cents: Revenue for the day in cents (non-negative)
        expense_cents: Expenses for the day in cents (non-negative)
    """
    date: date
    revenue_cents: int
    expense_cents: int = 0

    @property
    def net_cents(self) -> int:
        return self.revenue_cents - self.expense_cents


@dataclass(frozen=True)
class CashEstimate:
    """
    A point-in-time estimate of cash on hand.

    Attributes:
        as_of_date: Day the estimate was made
        cash_available_cents: Cash the owner reports having available, in cents
    """
    as_of_date: date
    cash_available_cents: int


@dataclass(frozen=True)
class FeatureVector:
    """
    The six behavioral features, each bounded to [0, 1].

    Attributes:
        dd: Data discipline (how regularly entries are submitted)
        rs: Revenue stability (inverse coefficient of variation)
        ep: Expense pressure (operating margin, higher is healthier)
        bb: Buffer behavior (days of expenses covered by cash on hand)
        tm: Trend momentum (recent week vs. previous week revenue)
        sr: Shock recovery (how fast revenue returns after a dip)
    """
    dd: float
    rs: float
    ep: float
    bb: float
    tm: float
    sr: float

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.dd, self.rs, self.ep, self.bb, self.tm, self.sr)

    def to_dict(self) -> Dict[str, float]:
        """Short-key form used for persistence and API responses."""
        return {
            "dd": self.dd,
            "rs": self.rs,
            "ep": self.ep,
            "bb": self.bb,
            "tm": self.tm,
            "sr": self.sr,
        }

    def to_named(self) -> Dict[str, float]:
        """Long-key form consumed by the explainability pipeline."""
        return {
            "data_discipline": self.dd,
            "revenue_stability": self.rs,
            "expense_pressure": self.ep,
            "buffer_behavior": self.bb,
            "trend_momentum": self.tm,
            "shock_recovery": self.sr,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "FeatureVector":
        return cls(
            dd=float(data.get("dd", 0.0)),
            rs=float(data.get("rs", 0.0)),
            ep=float(data.get("ep", 0.0)),
            bb=float(data.get("bb", 0.0)),
            tm=float(data.get("tm", 0.0)),
            sr=float(data.get("sr", 0.0)),
        )


COLD_START_FEATURES = FeatureVector(dd=0.1, rs=0.0, ep=0.5, bb=0.4, tm=0.5, sr=0.8)


@dataclass(frozen=True)
class FeatureExtraction:
    """
    Features plus the intermediate signals the composer needs for flags,
    confidence and band gating.
    """
    features: FeatureVector
    submission_rate: float
    distinct_days: int
    cv: float
    delta: float
    has_expenses: bool
    has_buffer: bool
    buffer_days: float
    has_previous_window: bool
    deficit_days_recent: int


@dataclass(frozen=True)
class ScoreResult:
    """
    The outcome of one score computation.

    Attributes:
        score: Composite score from 0-1000 (higher = lower observed risk)
        confidence: Data confidence from 0-100
        band: Risk band gated by score, flags and confidence together
        flags: Raised risk flags in display order
        feature_breakdown: The feature vector the score was built from
    """
    score: int
    confidence: int
    band: Band
    flags: List[str] = field(default_factory=list)
    feature_breakdown: Optional[FeatureVector] = None

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "score": self.score,
            "confidence": self.confidence,
            "band": self.band.value,
            "flags": list(self.flags),
            "feature_breakdown": (
                self.feature_breakdown.to_dict() if self.feature_breakdown else {}
            ),
        }
