"""Score-related Pydantic schemas."""

from datetime import date

from pydantic import BaseModel, Field, ConfigDict


class LenderExplanationSchema(BaseModel):
    """Structured analyst view of a score."""

    headline: str
    score_line: str
    confidence_line: str
    positive_drivers: list[str]
    negative_drivers: list[str]
    flags: list[str]
    improvements: list[str]
    disclaimer: str


class ExplanationSchema(BaseModel):
    """Explanations delivered with a score."""

    entrepreneur_text: str = Field(
        ...,
        description="Narrative for the business owner",
    )
    lender_text: str = Field(
        ...,
        description="Neutral analyst summary",
    )
    lender: LenderExplanationSchema = Field(
        ...,
        description="Structured form of the analyst summary",
    )
    breakdown: dict = Field(
        ...,
        description="Drivers, improvements and per-feature sentiment",
    )
    polished: bool = Field(
        False,
        description="Whether an external polisher rewrote the texts",
    )
    sanitized: bool = Field(
        False,
        description="Whether prohibited terms were replaced",
    )
    used_fallback: bool = Field(
        False,
        description="Whether a polished text was replaced by its template",
    )


class ScoreResponseSchema(BaseModel):
    """Schema for a score snapshot with explanations."""

    snapshot_id: str = Field(..., description="UUID of the snapshot")
    user_id: str = Field(..., description="The user's identifier")
    as_of_date: date = Field(..., description="Day the score was computed")
    score: int = Field(
        ...,
        ge=0,
        le=1000,
        description="Composite score (0-1000, higher means lower observed risk)",
        examples=[903],
    )
    confidence: int = Field(
        ...,
        ge=0,
        le=100,
        description="Data confidence (0-100)",
        examples=[100],
    )
    band: str = Field(
        ...,
        pattern="^[ABCD]$",
        description="Risk band gated by score, flags and confidence",
        examples=["A"],
    )
    flags: list[str] = Field(
        ...,
        description="Raised risk flags",
        examples=[["R1 Low reliability"]],
    )
    feature_breakdown: dict[str, float] = Field(
        ...,
        description="Feature values keyed dd, rs, ep, bb, tm, sr",
    )
    created_at: str = Field(..., description="ISO 8601 timestamp of the snapshot")
    explanation: ExplanationSchema

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "snapshot_id": "550e8400-e29b-41d4-a716-446655440000",
                    "user_id": "user_123",
                    "as_of_date": "2026-03-15",
                    "score": 555,
                    "confidence": 59,
                    "band": "C",
                    "flags": ["R1 Low reliability"],
                    "feature_breakdown": {
                        "dd": 0.1, "rs": 1.0, "ep": 0.5,
                        "bb": 0.4, "tm": 0.6, "sr": 0.8,
                    },
                    "created_at": "2026-03-15T12:00:00+00:00",
                }
            ]
        }
    )


class ScoreSummarySchema(BaseModel):
    """Schema for a snapshot summary in history."""

    snapshot_id: str
    as_of_date: date
    score: int = Field(..., ge=0, le=1000)
    confidence: int = Field(..., ge=0, le=100)
    band: str
    flags: list[str]
    created_at: str


class ScoreHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/score/history response."""

    user_id: str = Field(..., description="The user's identifier")
    snapshots: list[ScoreSummarySchema] = Field(
        ...,
        description="Score snapshots, newest first",
    )
