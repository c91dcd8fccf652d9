"""Data Transfer Objects for application layer."""

from .entry import (
    CashEstimateRequest,
    CashEstimateResponse,
    EntryListResponse,
    EntryRequest,
    EntryResponse,
)
from .score import (
    ExplanationDTO,
    ScoreHistoryResponse,
    ScoreRequest,
    ScoreResponse,
    ScoreSummary,
)

__all__ = [
    "EntryRequest",
    "EntryResponse",
    "EntryListResponse",
    "CashEstimateRequest",
    "CashEstimateResponse",
    "ScoreRequest",
    "ScoreResponse",
    "ScoreSummary",
    "ScoreHistoryResponse",
    "ExplanationDTO",
]
