"""
Read-only text tables for score explanations.

Every table is keyed by language and built once at import. Feature labels
are keyed by feature then sentiment; tips are an ordered tuple per feature
(the first tip is the primary one).
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class FeatureKey(str, Enum):
    """The six behavioral features, in the fixed explanation order."""
    DATA_DISCIPLINE = "data_discipline"
    REVENUE_STABILITY = "revenue_stability"
    EXPENSE_PRESSURE = "expense_pressure"
    BUFFER_BEHAVIOR = "buffer_behavior"
    TREND_MOMENTUM = "trend_momentum"
    SHOCK_RECOVERY = "shock_recovery"


FEATURE_KEYS: Tuple[FeatureKey, ...] = tuple(FeatureKey)


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Audience(str, Enum):
    ENTREPRENEUR = "entrepreneur"
    LENDER = "lender"


class Language(str, Enum):
    EN = "en"
    NL = "nl"


def _freeze(table: dict) -> Mapping:
    return MappingProxyType({
        key: MappingProxyType(value) if isinstance(value, dict) else value
        for key, value in table.items()
    })


def _labels(positive: str, neutral: str, negative: str) -> dict:
    return {
        Sentiment.POSITIVE: positive,
        Sentiment.NEUTRAL: neutral,
        Sentiment.NEGATIVE: negative,
    }


# =============================================================================
# Feature labels
# =============================================================================

FEATURE_LABELS_EN = _freeze({
    FeatureKey.DATA_DISCIPLINE: _labels(
        "Consistent daily data submission",
        "Irregular data submission pattern",
        "Insufficient data submission frequency",
    ),
    FeatureKey.REVENUE_STABILITY: _labels(
        "Revenue stream is stable",
        "Revenue shows moderate variability",
        "Revenue exhibits high day-to-day volatility",
    ),
    FeatureKey.EXPENSE_PRESSURE: _labels(
        "Expenses are well-proportioned relative to revenue",
        "Expenses occasionally pressure cashflow",
        "Expenses frequently exceed sustainable levels",
    ),
    FeatureKey.BUFFER_BEHAVIOR: _labels(
        "Adequate financial buffer maintained",
        "Limited cash reserves available",
        "Critically low cash buffer",
    ),
    FeatureKey.TREND_MOMENTUM: _labels(
        "Revenue trend is upward",
        "Revenue trend is flat",
        "Revenue trend is declining",
    ),
    FeatureKey.SHOCK_RECOVERY: _labels(
        "Quick recovery after revenue dips",
        "Average recovery time after setbacks",
        "Slow recovery following revenue disruptions",
    ),
})

FEATURE_LABELS_NL = _freeze({
    FeatureKey.DATA_DISCIPLINE: _labels(
        "Je vult je cijfers bijna elke dag in",
        "Je vult je cijfers onregelmatig in",
        "Je vult je cijfers te weinig in",
    ),
    FeatureKey.REVENUE_STABILITY: _labels(
        "Je omzet is stabiel",
        "Je omzet schommelt",
        "Je omzet wisselt sterk per dag",
    ),
    FeatureKey.EXPENSE_PRESSURE: _labels(
        "Je uitgaven zijn goed in verhouding tot je omzet",
        "Je uitgaven drukken soms op je cashflow",
        "Je uitgaven zijn vaak te hoog",
    ),
    FeatureKey.BUFFER_BEHAVIOR: _labels(
        "Je hebt een goede financiële buffer",
        "Je buffer is beperkt",
        "Je buffer is erg klein",
    ),
    FeatureKey.TREND_MOMENTUM: _labels(
        "Je omzettrend is stijgend",
        "Je omzet blijft ongeveer gelijk",
        "Je omzettrend is dalend",
    ),
    FeatureKey.SHOCK_RECOVERY: _labels(
        "Je herstelt snel na mindere dagen",
        "Je herstel na dips is gemiddeld",
        "Het duurt lang voordat je herstelt na een dip",
    ),
})


# =============================================================================
# Improvement tips
# =============================================================================

IMPROVEMENT_TIPS_EN = _freeze({
    FeatureKey.DATA_DISCIPLINE: (
        "Submit daily entries consistently, even on zero-revenue days",
        "Set a daily reminder to log financial data",
    ),
    FeatureKey.REVENUE_STABILITY: (
        "Diversify revenue sources to reduce volatility",
        "Identify peak days and replicate successful patterns",
    ),
    FeatureKey.EXPENSE_PRESSURE: (
        "Review largest expense categories for reduction opportunities",
        "Target expense-to-revenue ratio below 70%",
    ),
    FeatureKey.BUFFER_BEHAVIOR: (
        "Maintain at least 3 days of expenses as cash reserves",
        "Set aside a small amount weekly as emergency buffer",
    ),
    FeatureKey.TREND_MOMENTUM: (
        "Double down on activities that drove recent revenue growth",
        "Set incremental weekly revenue targets",
    ),
    FeatureKey.SHOCK_RECOVERY: (
        "Develop a contingency plan for low-revenue periods",
        "Build recurring customer relationships for income stability",
    ),
})

IMPROVEMENT_TIPS_NL = _freeze({
    FeatureKey.DATA_DISCIPLINE: (
        "Probeer elke dag je omzet in te voeren, ook als het R0 is",
        "Stel een dagelijkse herinnering in om je cijfers bij te werken",
    ),
    FeatureKey.REVENUE_STABILITY: (
        "Probeer je inkomstenbronnen te diversifiëren",
        "Analyseer welke dagen het beste presteren en waarom",
    ),
    FeatureKey.EXPENSE_PRESSURE: (
        "Bekijk je grootste uitgavenposten en kijk waar je kunt besparen",
        "Probeer je uitgaven op minder dan 70% van je omzet te houden",
    ),
    FeatureKey.BUFFER_BEHAVIOR: (
        "Probeer minimaal 3 dagen aan uitgaven als buffer aan te houden",
        "Leg elke week een klein bedrag opzij als noodreserve",
    ),
    FeatureKey.TREND_MOMENTUM: (
        "Focus op activiteiten die vorige week goed werkten",
        "Probeer je omzet week-over-week te verhogen met kleine stappen",
    ),
    FeatureKey.SHOCK_RECOVERY: (
        "Maak een noodplan voor dagen met lage omzet",
        "Bouw relaties op met klanten voor meer voorspelbare inkomsten",
    ),
})


# =============================================================================
# Headlines, headings and disclaimers
# =============================================================================

BAND_HEADLINES_EN = _freeze({
    "A": "Lower observed risk indicators",
    "B": "Moderate observed risk indicators",
    "C": "Elevated observed risk indicators",
    "D": "Higher observed risk indicators",
})

BAND_HEADLINES_NL = _freeze({
    "A": "Lagere waargenomen risico-indicatoren",
    "B": "Gematigde waargenomen risico-indicatoren",
    "C": "Verhoogde waargenomen risico-indicatoren",
    "D": "Hogere waargenomen risico-indicatoren",
})

DISCLAIMER_EN = (
    "This explanation is informational and descriptive only. It is not "
    "financial guidance and does not represent a credit decision. Score v1 "
    "is experimental and based on self-reported cashflow data."
)

DISCLAIMER_NL = (
    "Deze uitleg is alleen ter informatie en vormt geen financieel advies. "
    "Score v1 is experimenteel en gebaseerd op zelf-gerapporteerde cashflowdata."
)

SECTION_HEADINGS_EN = _freeze({
    "going_well": "What's going well:",
    "watch_for": "Watch for:",
    "tips": "Tips:",
    "assessment": "CREDIT ASSESSMENT",
    "positive_indicators": "Positive Indicators:",
    "risk_indicators": "Risk Indicators:",
    "risk_flags": "Active Risk Flags:",
    "insights": "Observed Data Insights:",
    "disclaimer": "DISCLAIMER",
})

SECTION_HEADINGS_NL = _freeze({
    "going_well": "Wat gaat goed:",
    "watch_for": "Aandachtspunten:",
    "tips": "Tips:",
    "assessment": "RISICOBEOORDELING",
    "positive_indicators": "Positieve indicatoren:",
    "risk_indicators": "Risico-indicatoren:",
    "risk_flags": "Actieve risicovlaggen:",
    "insights": "Waargenomen data-inzichten:",
    "disclaimer": "DISCLAIMER",
})


FEATURE_LABELS = MappingProxyType({
    Language.EN: FEATURE_LABELS_EN,
    Language.NL: FEATURE_LABELS_NL,
})
IMPROVEMENT_TIPS = MappingProxyType({
    Language.EN: IMPROVEMENT_TIPS_EN,
    Language.NL: IMPROVEMENT_TIPS_NL,
})
BAND_HEADLINES = MappingProxyType({
    Language.EN: BAND_HEADLINES_EN,
    Language.NL: BAND_HEADLINES_NL,
})
DISCLAIMERS = MappingProxyType({
    Language.EN: DISCLAIMER_EN,
    Language.NL: DISCLAIMER_NL,
})
SECTION_HEADINGS = MappingProxyType({
    Language.EN: SECTION_HEADINGS_EN,
    Language.NL: SECTION_HEADINGS_NL,
})


def lookback_text(language: Language, lookback_days: int) -> str:
    if language == Language.NL:
        return f"Gebaseerd op de laatste {lookback_days} dagen"
    return f"Based on the last {lookback_days} days"


def confidence_text(language: Language, confidence_pct: int) -> str:
    if language == Language.NL:
        return f"Betrouwbaarheid: {confidence_pct}%"
    return f"Data confidence: {confidence_pct}%"
