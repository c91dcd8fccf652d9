"""Data transfer objects for score operations."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

from credscore.service.explainability import Language

MAX_BUSINESS_TYPE_LENGTH = 100


@dataclass(frozen=True)
class ScoreRequest:
    """Input data for computing or reading a score."""
    user_id: str
    language: str = Language.EN.value
    business_type: str = "general"

    def validate(self) -> List[str]:
        errors = []

        if not self.user_id or not self.user_id.strip():
            errors.append("user_id is required")

        if self.language not in {lang.value for lang in Language}:
            errors.append(f"language must be one of: {', '.join(lang.value for lang in Language)}")

        if not self.business_type or len(self.business_type) > MAX_BUSINESS_TYPE_LENGTH:
            errors.append(
                f"business_type must be 1-{MAX_BUSINESS_TYPE_LENGTH} characters"
            )

        return errors


@dataclass(frozen=True)
class ExplanationDTO:
    """
    Explanations delivered with a score.

    Attributes:
        polished: True when an external polisher rewrote the texts
        sanitized: True when the sanitizer replaced prohibited terms
        used_fallback: True when a polished text was discarded for the template
    """

    entrepreneur_text: str
    lender_text: str
    lender: Dict
    breakdown: Dict
    polished: bool = False
    sanitized: bool = False
    used_fallback: bool = False


@dataclass(frozen=True)
class ScoreResponse:
    """A persisted score snapshot with its explanations."""

    snapshot_id: str
    user_id: str
    as_of_date: date
    score: int
    confidence: int
    band: str
    flags: List[str]
    feature_breakdown: Dict[str, float]
    created_at: str
    explanation: ExplanationDTO

    @classmethod
    def from_entity(cls, snapshot, explanation: ExplanationDTO) -> "ScoreResponse":
        return cls(
            snapshot_id=str(snapshot.id),
            user_id=snapshot.user_id,
            as_of_date=snapshot.as_of_date,
            score=snapshot.score,
            confidence=snapshot.confidence,
            band=snapshot.band,
            flags=list(snapshot.flags),
            feature_breakdown=dict(snapshot.feature_breakdown),
            created_at=snapshot.created_at.isoformat(),
            explanation=explanation,
        )


@dataclass(frozen=True)
class ScoreSummary:
    """Brief summary of a snapshot for history listings."""

    snapshot_id: str
    as_of_date: date
    score: int
    confidence: int
    band: str
    flags: List[str]
    created_at: str


@dataclass(frozen=True)
class ScoreHistoryResponse:
    """Response containing a user's snapshot history."""

    user_id: str
    snapshots: List[ScoreSummary] = field(default_factory=list)

    @classmethod
    def from_entities(cls, user_id: str, snapshots: list) -> "ScoreHistoryResponse":
        summaries = [
            ScoreSummary(
                snapshot_id=str(s.id),
                as_of_date=s.as_of_date,
                score=s.score,
                confidence=s.confidence,
                band=s.band,
                flags=list(s.flags),
                created_at=s.created_at.isoformat(),
            )
            for s in snapshots
        ]
        return cls(user_id=user_id, snapshots=summaries)
