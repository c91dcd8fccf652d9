"""
Explainability Module for the CredScore engine
"""

from .labels import (
    Audience,
    FeatureKey,
    FEATURE_KEYS,
    FEATURE_LABELS,
    IMPROVEMENT_TIPS,
    BAND_HEADLINES,
    DISCLAIMERS,
    Language,
    Sentiment,
)
from .sentiment import classify_feature
from .breakdown import (
    ExplainableBreakdown,
    ExplanationContext,
    build_explainable_breakdown,
)
from .render import (
    LenderExplanation,
    render,
    render_for_entrepreneur,
    render_for_lender,
    render_for_lender_text,
)

__all__ = [
    # Tables
    "Audience",
    "FeatureKey",
    "FEATURE_KEYS",
    "FEATURE_LABELS",
    "IMPROVEMENT_TIPS",
    "BAND_HEADLINES",
    "DISCLAIMERS",
    "Language",
    "Sentiment",
    # Classification
    "classify_feature",
    # Breakdown
    "ExplainableBreakdown",
    "ExplanationContext",
    "build_explainable_breakdown",
    # Rendering
    "LenderExplanation",
    "render",
    "render_for_entrepreneur",
    "render_for_lender",
    "render_for_lender_text",
]
