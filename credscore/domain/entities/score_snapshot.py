"""Score snapshot entity representing one persisted score computation."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List
from uuid import UUID, uuid4

from .daily_entry import utcnow


@dataclass
class ScoreSnapshot:
    """
    Immutable record of a computed score.

    Every recomputation appends a new snapshot; the latest one is the
    snapshot with the newest created_at.

    Attributes:
        confidence: Data confidence stored as 0-100
        flags: Raised risk flags in display order
        feature_breakdown: Feature values keyed dd, rs, ep, bb, tm, sr
    """

    user_id: str
    as_of_date: date
    score: int
    confidence: int
    band: str
    flags: List[str] = field(default_factory=list)
    feature_breakdown: Dict[str, float] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "snapshot_id": str(self.id),
            "user_id": self.user_id,
            "as_of_date": self.as_of_date.isoformat(),
            "score": self.score,
            "confidence": self.confidence,
            "band": self.band,
            "flags": list(self.flags),
            "feature_breakdown": dict(self.feature_breakdown),
            "created_at": self.created_at.isoformat(),
        }
