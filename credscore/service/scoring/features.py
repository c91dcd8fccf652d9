"""
Feature Extraction for the CredScore behavioral scoring engine.

This module turns self-reported daily entries into six behavioral features:
- Data Discipline (dd)
- Revenue Stability (rs)
- Expense Pressure (ep)
- Buffer Behavior (bb)
- Trend Momentum (tm)
- Shock Recovery (sr)

Every feature is bounded to [0, 1] and every missing input has an explicit
default, so extraction never fails on sparse data.

Windowing:
    A calendar date is anchored at 00:00 UTC of that day and its age is
    measured from `now`. The lookback window holds entries aged 0-14 days,
    the recent window 0-7 days and the previous window (7, 14] days.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from .models import CashEstimate, DailyEntry, FeatureExtraction, FeatureVector
from .settings import ScoringSettings, scoring_settings

EPS = 1e-4


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return min(max(value, lower), upper)


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _pstdev(values: Sequence[float], mean: float) -> float:
    if not values:
        return 0.0
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return variance ** 0.5


def as_utc(now: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def day_age(day: date, now: datetime) -> timedelta:
    """Age of a calendar day relative to `now`, anchored at 00:00 UTC."""
    return as_utc(now) - datetime.combine(day, time.min, tzinfo=timezone.utc)


# =============================================================================
# Windows
# =============================================================================

def lookback_window(
    entries: Sequence[DailyEntry],
    now: datetime,
    settings: ScoringSettings = scoring_settings,
) -> List[DailyEntry]:
    """Entries aged between 0 and `lookback_days` (inclusive)."""
    limit = timedelta(days=settings.lookback_days)
    return [e for e in entries if timedelta(0) <= day_age(e.date, now) <= limit]


def trend_windows(
    entries: Sequence[DailyEntry],
    now: datetime,
    settings: ScoringSettings = scoring_settings,
) -> Tuple[List[DailyEntry], List[DailyEntry]]:
    """
    Split entries into the recent and previous trend windows.

    Returns:
        (recent, previous): recent holds entries aged 0-7 days, previous
        holds entries aged more than 7 and at most 14 days.
    """
    split = timedelta(days=settings.trend_window_days)
    limit = timedelta(days=settings.lookback_days)

    recent = []
    previous = []
    for entry in entries:
        age = day_age(entry.date, now)
        if timedelta(0) <= age <= split:
            recent.append(entry)
        elif split < age <= limit:
            previous.append(entry)
    return recent, previous


# =============================================================================
# Features
# =============================================================================

def calculate_submission_rate(
    entries: Sequence[DailyEntry],
    settings: ScoringSettings = scoring_settings,
) -> float:
    """Distinct days with an entry divided by the lookback length."""
    return len({e.date for e in entries}) / settings.lookback_days


def score_data_discipline(submission_rate: float) -> float:
    """
    Step function over the submission rate.

    Regular reporting is the foundation of every other feature, so the
    steps are coarse on purpose: a few missed days do not move the value.
    """
    if submission_rate < 0.35:
        return 0.1
    elif submission_rate < 0.60:
        return 0.4
    elif submission_rate < 0.80:
        return 0.7
    return 1.0


def calculate_revenue_cv(entries: Sequence[DailyEntry]) -> float:
    """
    Coefficient of variation of daily revenue.

    Uses the population standard deviation. The mean is floored at EPS, so
    a window of zero-revenue days yields 0 rather than a division error.
    """
    revenues = [e.revenue_cents for e in entries]
    mean = _mean(revenues)
    return _pstdev(revenues, mean) / max(mean, EPS)


def score_revenue_stability(cv: float) -> float:
    return 1.0 - clamp(cv)


def calculate_expense_pressure(
    entries: Sequence[DailyEntry],
    settings: ScoringSettings = scoring_settings,
) -> Optional[float]:
    """
    Operating margin mapped onto [0, 1].

    Algorithm:
        1. Require at least `min_expense_days` entries with a non-zero expense
        2. margin = mean(revenue - expense) / mean(revenue)
        3. A margin of -10% maps to 0, +30% or better maps to 1

    Returns:
        The feature value, or None when too few expenses were reported to
        judge the margin.
    """
    days_with_expense = [e for e in entries if e.expense_cents > 0]
    if len(days_with_expense) < settings.min_expense_days:
        return None

    mean_revenue = _mean([e.revenue_cents for e in entries])
    mean_net = _mean([e.net_cents for e in entries])
    margin = mean_net / max(mean_revenue, EPS)
    return clamp((margin + 0.10) / 0.40)


def is_cash_estimate_fresh(
    cash_estimate: Optional[CashEstimate],
    now: datetime,
    settings: ScoringSettings = scoring_settings,
) -> bool:
    if cash_estimate is None:
        return False
    max_age = timedelta(days=settings.cash_estimate_max_age_days)
    return day_age(cash_estimate.as_of_date, now) <= max_age


def calculate_buffer_days(
    entries: Sequence[DailyEntry],
    cash_estimate: Optional[CashEstimate],
    now: datetime,
    settings: ScoringSettings = scoring_settings,
) -> Optional[float]:
    """
    Days of spending covered by the latest cash estimate.

    Algorithm:
        1. Ignore estimates older than `cash_estimate_max_age_days`
        2. Daily burn = total expenses / distinct days reported
        3. With no reported expenses, assume 60% of the average daily
           revenue per distinct day is spent
        4. buffer_days = cash available / daily burn

    Returns:
        Buffer in days, or None when no fresh estimate exists.
    """
    if not is_cash_estimate_fresh(cash_estimate, now, settings):
        return None

    distinct_days = len({e.date for e in entries}) or 1
    avg_daily_expense = sum(e.expense_cents for e in entries) / distinct_days
    if avg_daily_expense > 0:
        effective_expense = avg_daily_expense
    else:
        mean_revenue = _mean([e.revenue_cents for e in entries])
        effective_expense = settings.burn_proxy_ratio * (mean_revenue / distinct_days)

    return cash_estimate.cash_available_cents / max(effective_expense, EPS)


def score_buffer_behavior(buffer_days: float) -> float:
    """One week of cover or more earns the full value."""
    return clamp(buffer_days / 7)


def calculate_trend_delta(
    recent: Sequence[DailyEntry],
    previous: Sequence[DailyEntry],
) -> Optional[float]:
    """
    Relative change in mean daily revenue, recent week vs. previous week.

    Returns:
        The delta, or None when there is no previous week to compare with.
        An empty recent week counts as zero revenue.
    """
    if not previous:
        return None
    mean_recent = _mean([e.revenue_cents for e in recent])
    mean_previous = _mean([e.revenue_cents for e in previous])
    return (mean_recent - mean_previous) / max(mean_previous, EPS)


def score_trend_momentum(delta: Optional[float], has_recent: bool) -> float:
    """
    Map the trend delta onto [0, 1].

    A -10% week maps to 0 and a +20% week maps to 1. Without a previous
    week, recent activity alone earns 0.6; with no activity at all the
    value is the uninformative 0.5.
    """
    if delta is not None:
        return clamp((delta + 0.10) / 0.30)
    if has_recent:
        return 0.6
    return 0.5


def calculate_shock_recovery(entries: Sequence[DailyEntry]) -> float:
    """
    How quickly revenue returns to normal after a dip.

    Algorithm:
        1. Sort entries chronologically and take the window mean
        2. A dip is a day with revenue below half the mean
        3. For each dip, count entries until the first day at or above
           the mean; if none follows, count the entries left in the window
        4. Average the recovery counts; a week or longer maps to 0

    Edge Cases:
        - No dips: 0.8 (good, but not proof of resilience)
        - A dip on the final day contributes a recovery cost of zero
    """
    ordered = sorted(entries, key=lambda e: e.date)
    mean = _mean([e.revenue_cents for e in ordered])
    last_index = len(ordered) - 1

    dip_count = 0
    total_recovery = 0
    for i, entry in enumerate(ordered):
        if entry.revenue_cents >= 0.5 * mean:
            continue
        dip_count += 1
        for j in range(i + 1, len(ordered)):
            if ordered[j].revenue_cents >= mean:
                total_recovery += j - i
                break
        else:
            total_recovery += last_index - i

    if dip_count == 0:
        return 0.8
    return 1.0 - clamp((total_recovery / dip_count) / 7)


def count_deficit_days(entries: Sequence[DailyEntry]) -> int:
    """Days where expenses exceeded revenue."""
    return sum(1 for e in entries if e.net_cents < 0)


# =============================================================================
# Extraction
# =============================================================================

def extract_features(
    entries: Sequence[DailyEntry],
    cash_estimate: Optional[CashEstimate],
    now: datetime,
    settings: ScoringSettings = scoring_settings,
) -> Optional[FeatureExtraction]:
    """
    Compute all six features and the signals needed downstream.

    Args:
        entries: All known entries for the user (filtered here)
        cash_estimate: The user's most recent cash estimate, if any
        now: Reference timestamp for windowing
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        FeatureExtraction, or None when the lookback window is empty
        (the caller applies the cold-start result).
    """
    window = lookback_window(entries, now, settings)
    if not window:
        return None

    recent, previous = trend_windows(entries, now, settings)

    submission_rate = calculate_submission_rate(window, settings)
    cv = calculate_revenue_cv(window)

    expense_pressure = calculate_expense_pressure(window, settings)
    has_expenses = expense_pressure is not None

    buffer_days = calculate_buffer_days(window, cash_estimate, now, settings)
    has_buffer = buffer_days is not None

    delta = calculate_trend_delta(recent, previous)

    features = FeatureVector(
        dd=score_data_discipline(submission_rate),
        rs=score_revenue_stability(cv),
        ep=expense_pressure if has_expenses else 0.5,
        bb=score_buffer_behavior(buffer_days) if has_buffer else 0.4,
        tm=score_trend_momentum(delta, has_recent=bool(recent)),
        sr=calculate_shock_recovery(window),
    )

    return FeatureExtraction(
        features=features,
        submission_rate=submission_rate,
        distinct_days=len({e.date for e in window}),
        cv=cv,
        delta=delta if delta is not None else 0.0,
        has_expenses=has_expenses,
        has_buffer=has_buffer,
        buffer_days=buffer_days if has_buffer else 0.0,
        has_previous_window=bool(previous),
        deficit_days_recent=count_deficit_days(recent),
    )
