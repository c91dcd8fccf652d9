"""
Scoring Settings for the CredScore behavioral scoring engine.

This module contains the parameters of the cashflow scoring model. The
defaults are the fixed constants of score v1; they are exposed as settings
so a deployment can pin or audit them, not so they can be fitted.

Environment variables use the SCORING_ prefix:
    SCORING_LOOKBACK_DAYS=14
    SCORING_WEIGHT_BUFFER_BEHAVIOR=0.20
    SCORING_BAND_A_MIN_SCORE=720

Usage:
    from credscore.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    days = scoring_settings.lookback_days

    # Or create custom settings for testing
    custom = ScoringSettings(band_a_min_score=700)
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the behavioral scoring algorithm.

    All settings can be overridden via environment variables with SCORING_ prefix.
    All feature values are 0-1, scores are 0-1000.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Windows ===
    lookback_days: int = Field(
        default=14,
        gt=0,
        description="Trailing window (days) over which all features are computed",
    )
    trend_window_days: int = Field(
        default=7,
        gt=0,
        description="Sub-window (days) compared against the previous one for trend momentum",
    )
    cash_estimate_max_age_days: int = Field(
        default=7,
        ge=0,
        description="Cash estimates older than this are treated as absent",
    )

    # === Feature Weights ===
    weight_data_discipline: float = Field(default=0.20, ge=0.0, le=1.0)
    weight_revenue_stability: float = Field(default=0.20, ge=0.0, le=1.0)
    weight_expense_pressure: float = Field(default=0.15, ge=0.0, le=1.0)
    weight_buffer_behavior: float = Field(default=0.20, ge=0.0, le=1.0)
    weight_trend_momentum: float = Field(default=0.10, ge=0.0, le=1.0)
    weight_shock_recovery: float = Field(default=0.15, ge=0.0, le=1.0)

    # === Feature Eligibility ===
    min_expense_days: int = Field(
        default=7,
        ge=0,
        description="Days with a non-zero expense required before expense pressure is computed",
    )
    burn_proxy_ratio: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Share of daily revenue assumed as burn when no expenses are reported",
    )

    # === Risk Flags ===
    low_reliability_rate: float = Field(
        default=0.50,
        description="Submission rate below this raises R1",
    )
    deficit_days_threshold: int = Field(
        default=4,
        description="Deficit days in the recent window at or above this raise R2",
    )
    high_volatility_cv: float = Field(
        default=0.9,
        description="Revenue coefficient of variation above this raises R3",
    )
    low_buffer_days: float = Field(
        default=2.0,
        description="Buffer days below this raise R4",
    )
    declining_revenue_delta: float = Field(
        default=-0.15,
        description="Week-over-week revenue delta below this raises R5",
    )

    # === Band Gates ===
    band_a_min_score: int = Field(default=720, ge=0, le=1000)
    band_a_max_flags: int = Field(default=1, ge=0)
    band_a_min_confidence: float = Field(default=0.70, ge=0.0, le=1.0)

    band_b_min_score: int = Field(default=620, ge=0, le=1000)
    band_b_max_flags: int = Field(default=2, ge=0)
    band_b_min_confidence: float = Field(default=0.65, ge=0.0, le=1.0)

    band_c_min_score: int = Field(default=520, ge=0, le=1000)
    band_c_flag_count: int = Field(
        default=3,
        ge=0,
        description="Exact flag count that qualifies for band C regardless of score",
    )
    band_c_min_confidence: float = Field(default=0.60, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_weights(self) -> "ScoringSettings":
        """Feature weights must sum to 1.0 so the score stays within 0-1000."""
        total = sum(self.weights)
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Feature weights must sum to 1.0, got {total:.4f}")
        if not self.band_c_min_score < self.band_b_min_score < self.band_a_min_score:
            raise ValueError("Band score gates must be strictly increasing from C to A")
        return self

    @property
    def weights(self) -> tuple[float, float, float, float, float, float]:
        """Weights in feature order (dd, rs, ep, bb, tm, sr)."""
        return (
            self.weight_data_discipline,
            self.weight_revenue_stability,
            self.weight_expense_pressure,
            self.weight_buffer_behavior,
            self.weight_trend_momentum,
            self.weight_shock_recovery,
        )


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
