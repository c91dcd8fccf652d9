"""
Score Composition for the CredScore behavioral scoring engine.

This module combines the six behavioral features into a 0-1000 score, raises
risk flags, derives a data confidence level and gates the result into a
risk band. It also hosts `compute_score`, the main entry point of the
scoring package.

The band is a risk gate, not a restatement of the score: a high numeric
score with several flags or thin data still lands in band D.
"""

import math
from datetime import datetime
from typing import List, Optional, Sequence

from .features import clamp, extract_features
from .models import (
    Band,
    CashEstimate,
    COLD_START_FEATURES,
    DailyEntry,
    FeatureExtraction,
    FeatureVector,
    RiskFlag,
    ScoreResult,
)
from .settings import ScoringSettings, scoring_settings


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def calculate_composite_score(
    features: FeatureVector,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Weighted sum of the features scaled to 0-1000.

    Default weights: dd 0.20, rs 0.20, ep 0.15, bb 0.20, tm 0.10, sr 0.15.
    """
    weighted = sum(
        weight * value
        for weight, value in zip(settings.weights, features.as_tuple())
    )
    return round_half_up(1000 * weighted)


def evaluate_flags(
    extraction: FeatureExtraction,
    settings: ScoringSettings = scoring_settings,
) -> List[str]:
    """
    Raise risk flags from the extraction signals.

    Each flag is evaluated independently; the list order is the display
    order R1..R5.
    """
    flags = []

    if extraction.submission_rate < settings.low_reliability_rate:
        flags.append(RiskFlag.LOW_RELIABILITY.value)

    if (extraction.has_expenses
            and extraction.deficit_days_recent >= settings.deficit_days_threshold):
        flags.append(RiskFlag.SUSTAINED_DEFICIT.value)

    if extraction.cv > settings.high_volatility_cv:
        flags.append(RiskFlag.HIGH_VOLATILITY.value)

    if extraction.has_buffer and extraction.buffer_days < settings.low_buffer_days:
        flags.append(RiskFlag.LOW_BUFFER.value)

    if (extraction.has_previous_window
            and extraction.delta < settings.declining_revenue_delta):
        flags.append(RiskFlag.DECLINING_REVENUE.value)

    return flags


def calculate_confidence(
    distinct_days: int,
    has_expenses: bool,
    has_buffer: bool,
) -> float:
    """
    Data confidence from 0.0 to 1.0.

    Starts at 0.5, adds 0.03 per distinct reporting day and 0.10 each for
    usable expense data and a fresh cash estimate.
    """
    confidence = 0.5 + 0.03 * distinct_days
    if has_expenses:
        confidence += 0.10
    if has_buffer:
        confidence += 0.10
    return clamp(confidence)


def assign_band(
    score: int,
    flags: Sequence[str],
    confidence: float,
    settings: ScoringSettings = scoring_settings,
) -> Band:
    """
    Gate a score into a risk band. First match wins.

    Args:
        score: Composite score (0-1000)
        flags: Raised risk flags
        confidence: Unrounded confidence (0.0-1.0)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        A: score >= 720, at most 1 flag, confidence >= 0.70
        B: score 620-719, at most 2 flags, confidence >= 0.65
        C: score 520-619, or exactly 3 flags with confidence >= 0.60
        D: everything else
    """
    flag_count = len(flags)

    if (score >= settings.band_a_min_score
            and flag_count <= settings.band_a_max_flags
            and confidence >= settings.band_a_min_confidence):
        return Band.A

    if (settings.band_b_min_score <= score < settings.band_a_min_score
            and flag_count <= settings.band_b_max_flags
            and confidence >= settings.band_b_min_confidence):
        return Band.B

    if (settings.band_c_min_score <= score < settings.band_b_min_score
            or (flag_count == settings.band_c_flag_count
                and confidence >= settings.band_c_min_confidence)):
        return Band.C

    return Band.D


def cold_start_result() -> ScoreResult:
    """Fixed result for users with no entries in the lookback window."""
    return ScoreResult(
        score=0,
        confidence=50,
        band=Band.D,
        flags=[RiskFlag.LOW_RELIABILITY.value],
        feature_breakdown=COLD_START_FEATURES,
    )


def compute_score(
    entries: Sequence[DailyEntry],
    cash_estimate: Optional[CashEstimate],
    now: datetime,
    settings: ScoringSettings = scoring_settings,
) -> ScoreResult:
    """
    Compute a behavioral credit-risk score from daily entries.

    This is the main entry point for the scoring package. It:
    1. Extracts the six features over the lookback window
    2. Short-circuits to the cold-start result when the window is empty
    3. Weights the features into a 0-1000 score
    4. Raises risk flags and derives confidence
    5. Gates score, flags and confidence into a band

    The computation is pure: identical inputs always give identical results.

    Args:
        entries: The user's daily entries (any range; windowed here)
        cash_estimate: The user's latest cash estimate, if any
        now: Reference timestamp for windowing
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        ScoreResult with score, confidence, band, flags and features
    """
    extraction = extract_features(entries, cash_estimate, now, settings)
    if extraction is None:
        return cold_start_result()

    score = calculate_composite_score(extraction.features, settings)
    flags = evaluate_flags(extraction, settings)
    confidence = calculate_confidence(
        extraction.distinct_days,
        extraction.has_expenses,
        extraction.has_buffer,
    )

    return ScoreResult(
        score=score,
        confidence=round_half_up(confidence * 100),
        band=assign_band(score, flags, confidence, settings),
        flags=flags,
        feature_breakdown=extraction.features,
    )
