"""
Unit Tests for the CredScore Behavioral Scoring Module.

These tests verify:
1. Windowing (lookback, recent and previous weeks)
2. Feature calculations and their defaults
3. Risk flags, confidence and band gating
4. Complete score computation, including cold start

Test Categories:
- Test*Window: windowing tests
- Test<Feature>: single feature tests
- TestEvaluateFlags / TestConfidence / TestAssignBand: composer tests
- TestComputeScore: end-to-end scenarios
"""

import pytest
from datetime import date, datetime, timedelta, timezone

from credscore.service.scoring.models import (
    Band,
    CashEstimate,
    COLD_START_FEATURES,
    DailyEntry,
    FeatureVector,
    RiskFlag,
)
from credscore.service.scoring.settings import ScoringSettings
from credscore.service.scoring.features import (
    calculate_buffer_days,
    calculate_expense_pressure,
    calculate_revenue_cv,
    calculate_shock_recovery,
    calculate_submission_rate,
    calculate_trend_delta,
    extract_features,
    is_cash_estimate_fresh,
    lookback_window,
    score_data_discipline,
    score_trend_momentum,
    trend_windows,
)
from credscore.service.scoring.composer import (
    assign_band,
    calculate_composite_score,
    calculate_confidence,
    compute_score,
    evaluate_flags,
    round_half_up,
)


NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Test Fixtures
# =============================================================================

def make_entry(days_ago: int, revenue_cents: int, expense_cents: int = 0) -> DailyEntry:
    """Helper to create entries relative to NOW."""
    return DailyEntry(
        date=NOW.date() - timedelta(days=days_ago),
        revenue_cents=revenue_cents,
        expense_cents=expense_cents,
    )


def make_cash(days_ago: int, cash_available_cents: int) -> CashEstimate:
    return CashEstimate(
        as_of_date=NOW.date() - timedelta(days=days_ago),
        cash_available_cents=cash_available_cents,
    )


def generate_steady_entries(num_days: int = 14) -> list[DailyEntry]:
    """Same revenue and expenses every day."""
    return [make_entry(d, 10000, 6000) for d in range(num_days)]


def generate_declining_entries() -> list[DailyEntry]:
    """Revenue drops from 200.00 to 50.00 a day halfway through the window."""
    previous_week = [make_entry(d, 20000) for d in range(7, 14)]
    recent_week = [make_entry(d, 5000) for d in range(7)]
    return previous_week + recent_week


# =============================================================================
# Windowing Tests
# =============================================================================

class TestLookbackWindow:
    """Tests for the 14-day lookback window."""

    def test_includes_today_and_last_fourteen_days(self):
        entries = [make_entry(d, 1000) for d in range(16)]

        window = lookback_window(entries, NOW)

        # Day 14 is 14.5 days old at noon, so days 0-13 remain
        assert len(window) == 14
        assert min(e.date for e in window) == NOW.date() - timedelta(days=13)

    def test_excludes_future_dates(self):
        entries = [make_entry(-1, 1000), make_entry(0, 1000)]

        window = lookback_window(entries, NOW)

        assert window == [entries[1]]

    def test_midnight_boundary_is_inclusive(self):
        midnight = datetime(2026, 3, 15, tzinfo=timezone.utc)
        entry = DailyEntry(date=date(2026, 3, 1), revenue_cents=1000)

        assert lookback_window([entry], midnight) == [entry]

    def test_naive_now_is_treated_as_utc(self):
        entries = [make_entry(d, 1000) for d in range(16)]

        aware = lookback_window(entries, NOW)
        naive = lookback_window(entries, NOW.replace(tzinfo=None))

        assert aware == naive


class TestTrendWindows:
    """Tests for the recent/previous week split."""

    def test_splits_at_seven_days(self):
        entries = [make_entry(d, 1000) for d in range(14)]

        recent, previous = trend_windows(entries, NOW)

        assert len(recent) == 7
        assert len(previous) == 7
        assert all(e.date >= NOW.date() - timedelta(days=6) for e in recent)


# =============================================================================
# Feature Tests
# =============================================================================

class TestDataDiscipline:
    """Tests for the submission rate and its step function."""

    def test_submission_rate_counts_distinct_days(self):
        entries = [make_entry(0, 1000), make_entry(0, 2000), make_entry(1, 1000)]

        assert calculate_submission_rate(entries) == pytest.approx(2 / 14)

    @pytest.mark.parametrize(
        "rate, expected",
        [
            (0.0, 0.1),
            (0.34, 0.1),
            (0.35, 0.4),
            (0.59, 0.4),
            (0.60, 0.7),
            (0.79, 0.7),
            (0.80, 1.0),
            (1.0, 1.0),
        ],
    )
    def test_step_boundaries(self, rate, expected):
        assert score_data_discipline(rate) == expected


class TestRevenueStability:
    """Tests for the coefficient of variation."""

    def test_constant_revenue_has_zero_cv(self):
        entries = [make_entry(d, 10000) for d in range(5)]

        assert calculate_revenue_cv(entries) == 0.0

    def test_zero_revenue_does_not_divide_by_zero(self):
        entries = [make_entry(d, 0) for d in range(5)]

        assert calculate_revenue_cv(entries) == 0.0

    def test_uses_population_standard_deviation(self):
        # mean 12500, population stddev 7500
        entries = generate_declining_entries()

        assert calculate_revenue_cv(entries) == pytest.approx(0.6)


class TestExpensePressure:
    """Tests for the margin-based expense feature."""

    def test_requires_seven_expense_days(self):
        entries = [make_entry(d, 10000, 6000) for d in range(6)]

        assert calculate_expense_pressure(entries) is None

    def test_healthy_margin_saturates(self):
        # 40% margin maps above the +30% ceiling
        assert calculate_expense_pressure(generate_steady_entries()) == 1.0

    def test_break_even_margin(self):
        entries = [make_entry(d, 10000, 10000) for d in range(7)]

        # margin 0 -> (0 + 0.10) / 0.40
        assert calculate_expense_pressure(entries) == pytest.approx(0.25)

    def test_deep_loss_clamps_to_zero(self):
        entries = [make_entry(d, 10000, 20000) for d in range(7)]

        assert calculate_expense_pressure(entries) == 0.0


class TestBufferBehavior:
    """Tests for cash estimate freshness and buffer days."""

    def test_missing_estimate_is_not_fresh(self):
        assert is_cash_estimate_fresh(None, NOW) is False

    @pytest.mark.parametrize("days_ago, fresh", [(0, True), (6, True), (7, False), (8, False)])
    def test_freshness_boundary(self, days_ago, fresh):
        # Ages are measured from 00:00 UTC, so at noon day 7 is 7.5 days old
        assert is_cash_estimate_fresh(make_cash(days_ago, 1000), NOW) is fresh

    def test_buffer_days_from_average_expense(self):
        entries = generate_steady_entries()

        buffer_days = calculate_buffer_days(entries, make_cash(0, 5000), NOW)

        assert buffer_days == pytest.approx(5000 / 6000)

    def test_burn_proxy_without_expenses(self):
        entries = [make_entry(d, 10000) for d in range(14)]

        buffer_days = calculate_buffer_days(entries, make_cash(0, 12000), NOW)

        # burn = 0.6 * (10000 / 14 distinct days)
        assert buffer_days == pytest.approx(12000 / (0.6 * 10000 / 14))

    def test_stale_estimate_gives_no_buffer(self):
        entries = generate_steady_entries()

        assert calculate_buffer_days(entries, make_cash(8, 500000), NOW) is None


class TestTrendMomentum:
    """Tests for the week-over-week trend."""

    def test_no_previous_week(self):
        recent = [make_entry(0, 10000)]

        assert calculate_trend_delta(recent, []) is None
        assert score_trend_momentum(None, has_recent=True) == 0.6
        assert score_trend_momentum(None, has_recent=False) == 0.5

    def test_flat_trend(self):
        assert score_trend_momentum(0.0, has_recent=True) == pytest.approx(1 / 3)

    def test_growth_saturates(self):
        assert score_trend_momentum(0.20, has_recent=True) == pytest.approx(1.0)
        assert score_trend_momentum(0.50, has_recent=True) == 1.0

    def test_empty_recent_week_counts_as_zero_revenue(self):
        previous = [make_entry(10, 10000)]

        assert calculate_trend_delta([], previous) == pytest.approx(-1.0)


class TestShockRecovery:
    """Tests for recovery after revenue dips."""

    def test_no_dips(self):
        entries = [make_entry(d, 10000) for d in range(7)]

        assert calculate_shock_recovery(entries) == 0.8

    def test_quick_recovery(self):
        # One dip followed immediately by an above-mean day
        entries = [
            make_entry(3, 10000),
            make_entry(2, 1000),
            make_entry(1, 12000),
            make_entry(0, 10000),
        ]

        assert calculate_shock_recovery(entries) == pytest.approx(1 - 1 / 7)

    def test_dip_on_last_day_costs_nothing(self):
        entries = [make_entry(d, 10000) for d in range(1, 7)] + [make_entry(0, 0)]

        assert calculate_shock_recovery(entries) == 1.0

    def test_unrecovered_dips_count_remaining_days(self):
        # Dips at positions 7-13 of 14 cost 6+5+...+0 = 21, averaged over 7
        assert calculate_shock_recovery(generate_declining_entries()) == pytest.approx(1 - 3 / 7)


class TestExtractFeatures:
    """Tests for the full extraction."""

    def test_empty_window_returns_none(self):
        assert extract_features([make_entry(20, 10000)], None, NOW) is None

    def test_defaults_without_expenses_or_cash(self):
        extraction = extract_features([make_entry(0, 10000)], None, NOW)

        assert extraction.features.ep == 0.5
        assert extraction.features.bb == 0.4
        assert extraction.has_expenses is False
        assert extraction.has_buffer is False
        assert extraction.has_previous_window is False
        assert extraction.delta == 0.0

    def test_all_features_bounded(self):
        entries = [make_entry(d, (d % 3) * 7000, (d % 2) * 9000) for d in range(14)]

        extraction = extract_features(entries, make_cash(1, 100), NOW)

        for value in extraction.features.as_tuple():
            assert 0.0 <= value <= 1.0


# =============================================================================
# Composer Tests
# =============================================================================

class TestRoundHalfUp:
    """Scores and percentages round .5 up, not to even."""

    @pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (554.5, 555), (2.49, 2)])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestCompositeScore:
    def test_all_ones_is_1000(self):
        features = FeatureVector(1.0, 1.0, 1.0, 1.0, 1.0, 1.0)

        assert calculate_composite_score(features) == 1000

    def test_cold_start_features(self):
        # 0.02 + 0 + 0.075 + 0.08 + 0.05 + 0.12
        assert calculate_composite_score(COLD_START_FEATURES) == 345

    def test_custom_weights(self):
        settings = ScoringSettings(
            weight_data_discipline=1.0,
            weight_revenue_stability=0.0,
            weight_expense_pressure=0.0,
            weight_buffer_behavior=0.0,
            weight_trend_momentum=0.0,
            weight_shock_recovery=0.0,
        )
        features = FeatureVector(0.7, 0.0, 0.0, 0.0, 0.0, 0.0)

        assert calculate_composite_score(features, settings) == 700


class TestEvaluateFlags:
    """Tests for R1-R5."""

    def test_low_reliability_boundary(self):
        seven_days = extract_features([make_entry(d, 10000) for d in range(7)], None, NOW)
        six_days = extract_features([make_entry(d, 10000) for d in range(6)], None, NOW)

        assert RiskFlag.LOW_RELIABILITY.value not in evaluate_flags(seven_days)
        assert RiskFlag.LOW_RELIABILITY.value in evaluate_flags(six_days)

    def test_sustained_deficit(self):
        entries = [
            make_entry(d, 10000, 12000 if d < 4 else 3000)
            for d in range(14)
        ]

        flags = evaluate_flags(extract_features(entries, None, NOW))

        assert flags == [RiskFlag.SUSTAINED_DEFICIT.value]

    def test_deficit_requires_expense_data(self):
        # Only 4 expense days: not enough to judge expenses at all
        entries = [make_entry(d, 10000, 12000 if d < 4 else 0) for d in range(14)]

        flags = evaluate_flags(extract_features(entries, None, NOW))

        assert RiskFlag.SUSTAINED_DEFICIT.value not in flags

    def test_high_volatility(self):
        entries = [make_entry(d, 20000 if d in (0, 7) else 0) for d in range(14)]

        extraction = extract_features(entries, None, NOW)

        assert extraction.cv > 0.9
        assert extraction.features.rs == 0.0
        assert RiskFlag.HIGH_VOLATILITY.value in evaluate_flags(extraction)

    def test_low_buffer(self):
        extraction = extract_features(generate_steady_entries(), make_cash(0, 5000), NOW)

        assert extraction.features.bb == pytest.approx((5000 / 6000) / 7)
        assert evaluate_flags(extraction) == [RiskFlag.LOW_BUFFER.value]

    def test_declining_revenue(self):
        extraction = extract_features(generate_declining_entries(), None, NOW)

        assert evaluate_flags(extraction) == [RiskFlag.DECLINING_REVENUE.value]

    def test_flags_keep_display_order(self):
        entries = [make_entry(8, 20000), make_entry(2, 0), make_entry(1, 0)]

        flags = evaluate_flags(extract_features(entries, None, NOW))

        assert flags == [
            RiskFlag.LOW_RELIABILITY.value,
            RiskFlag.HIGH_VOLATILITY.value,
            RiskFlag.DECLINING_REVENUE.value,
        ]


class TestConfidence:
    def test_distinct_days_only(self):
        assert round_half_up(calculate_confidence(5, False, False) * 100) == 65

    def test_extras_and_clamp(self):
        assert calculate_confidence(3, True, True) == pytest.approx(0.79)
        assert calculate_confidence(14, True, True) == 1.0


class TestAssignBand:
    """Band gating: first match wins."""

    def test_flags_veto_high_score(self):
        flags = ["R1", "R2", "R3", "R4"]

        assert assign_band(900, flags, 1.0) == Band.D

    def test_band_a_boundaries(self):
        assert assign_band(720, [], 0.70) == Band.A
        assert assign_band(720, [], 0.69) == Band.D

    def test_two_flags_block_band_a(self):
        assert assign_band(750, ["R1", "R2"], 0.9) == Band.D

    def test_band_b(self):
        assert assign_band(650, ["R1", "R2"], 0.65) == Band.B
        assert assign_band(719, [], 1.0) == Band.B

    def test_band_c_by_score(self):
        assert assign_band(520, ["R1", "R2", "R3", "R4", "R5"], 0.0) == Band.C
        assert assign_band(619, [], 0.5) == Band.C

    def test_band_c_by_three_flags(self):
        assert assign_band(650, ["R1", "R2", "R3"], 0.6) == Band.C
        assert assign_band(100, ["R1", "R2", "R3"], 0.6) == Band.C

    def test_band_d(self):
        assert assign_band(500, [], 0.9) == Band.D
        assert assign_band(650, ["R1", "R2", "R3"], 0.59) == Band.D


# =============================================================================
# End-to-End Tests
# =============================================================================

class TestComputeScore:
    """Complete score computation scenarios."""

    def test_cold_start(self):
        result = compute_score([], None, NOW)

        assert result.score == 0
        assert result.confidence == 50
        assert result.band == Band.D
        assert result.flags == ["R1 Low reliability"]
        assert result.feature_breakdown.to_dict() == {
            "dd": 0.1, "rs": 0.0, "ep": 0.5, "bb": 0.4, "tm": 0.5, "sr": 0.8,
        }

    def test_only_old_entries_is_cold_start(self):
        result = compute_score([make_entry(30, 10000)], make_cash(0, 10000), NOW)

        assert result.score == 0
        assert result.band == Band.D

    def test_steady_business(self):
        result = compute_score(generate_steady_entries(), make_cash(0, 100000), NOW)

        assert result.score == 903
        assert result.confidence == 100
        assert result.band == Band.A
        assert result.flags == []
        assert result.feature_breakdown.tm == pytest.approx(1 / 3)

    def test_sparse_reporting(self):
        entries = [make_entry(d, 10000) for d in range(3)]

        result = compute_score(entries, None, NOW)

        assert result.feature_breakdown == FeatureVector(0.1, 1.0, 0.5, 0.4, 0.6, 0.8)
        assert result.score == 555
        assert result.confidence == 59
        assert result.flags == ["R1 Low reliability"]
        assert result.band == Band.C

    def test_declining_revenue(self):
        result = compute_score(generate_declining_entries(), None, NOW)

        assert result.feature_breakdown.rs == pytest.approx(0.4)
        assert result.feature_breakdown.tm == 0.0
        assert result.score == 521
        assert result.confidence == 92
        assert result.flags == ["R5 Declining revenue"]
        assert result.band == Band.C

    def test_deterministic(self):
        entries = generate_declining_entries()
        cash = make_cash(2, 30000)

        first = compute_score(entries, cash, NOW)
        second = compute_score(list(entries), cash, NOW)

        assert first == second

    def test_bounds(self):
        entries = [make_entry(d, d * 3000, (13 - d) * 2500) for d in range(14)]

        result = compute_score(entries, make_cash(3, 1), NOW)

        assert 0 <= result.score <= 1000
        assert 0 <= result.confidence <= 100
        assert result.band in set(Band)
