"""
Behavioral Scoring Module for the CredScore engine
"""

from .models import (
    Band,
    RiskFlag,
    DailyEntry,
    CashEstimate,
    FeatureVector,
    FeatureExtraction,
    ScoreResult,
    COLD_START_FEATURES,
)
from .settings import ScoringSettings, scoring_settings
from .features import (
    extract_features,
    calculate_submission_rate,
    calculate_revenue_cv,
    calculate_expense_pressure,
    calculate_buffer_days,
    calculate_trend_delta,
    calculate_shock_recovery,
)
from .composer import (
    round_half_up,
    calculate_composite_score,
    evaluate_flags,
    calculate_confidence,
    assign_band,
    compute_score,
)

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Models
    "Band",
    "RiskFlag",
    "DailyEntry",
    "CashEstimate",
    "FeatureVector",
    "FeatureExtraction",
    "ScoreResult",
    "COLD_START_FEATURES",
    # Features
    "extract_features",
    "calculate_submission_rate",
    "calculate_revenue_cv",
    "calculate_expense_pressure",
    "calculate_buffer_days",
    "calculate_trend_delta",
    "calculate_shock_recovery",
    # Composition
    "round_half_up",
    "calculate_composite_score",
    "evaluate_flags",
    "calculate_confidence",
    "assign_band",
    "compute_score",
]
