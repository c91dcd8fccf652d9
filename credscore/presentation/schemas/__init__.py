"""Pydantic schemas for API request/response validation."""

from .entry import (
    CashEstimateRequestSchema,
    CashEstimateResponseSchema,
    EntryListResponseSchema,
    EntryRequestSchema,
    EntryResponseSchema,
)
from .score import (
    ExplanationSchema,
    LenderExplanationSchema,
    ScoreHistoryResponseSchema,
    ScoreResponseSchema,
    ScoreSummarySchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "EntryRequestSchema",
    "EntryResponseSchema",
    "EntryListResponseSchema",
    "CashEstimateRequestSchema",
    "CashEstimateResponseSchema",
    "ExplanationSchema",
    "LenderExplanationSchema",
    "ScoreResponseSchema",
    "ScoreSummarySchema",
    "ScoreHistoryResponseSchema",
    "ErrorResponseSchema",
]
