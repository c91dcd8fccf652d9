"""
Explainable breakdown of a score.

Turns a score, its band, confidence, features and flags into the
language-specific drivers, improvement tips and summary lines that both
renderings are built from. Identical input always yields identical output.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from credscore.service.scoring.composer import round_half_up
from credscore.service.scoring.models import Band, FeatureVector

from .labels import (
    BAND_HEADLINES,
    DISCLAIMERS,
    FEATURE_KEYS,
    FEATURE_LABELS,
    IMPROVEMENT_TIPS,
    FeatureKey,
    Language,
    Sentiment,
    confidence_text,
    lookback_text,
)
from .sentiment import classify_feature

MAX_POSITIVE_DRIVERS = 3
MAX_NEGATIVE_DRIVERS = 2
MAX_IMPROVEMENTS = 2


@dataclass(frozen=True)
class ExplanationContext:
    lookback_days: int = 14
    business_type: str = "general"


@dataclass(frozen=True)
class ExplainableBreakdown:
    """
    Language-specific explanation of one score.

    Attributes:
        headline: Band headline
        score_line: "Score: N/1000 (Band X). Based on the last N days."
        confidence_line: Confidence as a whole percentage
        positive_drivers: Labels of positive features (at most 3)
        negative_drivers: Labels of negative features, padded with neutral
            ones to 2 where possible (at most 2)
        improvements: Tips tied to the negative drivers (at most 2)
        disclaimer: The language's disclaimer sentence
        classified: Sentiment of every feature, keyed by feature name
    """
    headline: str
    score_line: str
    confidence_line: str
    positive_drivers: Tuple[str, ...]
    negative_drivers: Tuple[str, ...]
    improvements: Tuple[str, ...]
    disclaimer: str
    classified: Mapping[str, str]
    score: int
    band: str
    confidence: float
    flags: Tuple[str, ...] = field(default_factory=tuple)
    lookback_days: int = 14
    business_type: str = "general"
    language: Language = Language.EN

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "summary": {
                "headline": self.headline,
                "score_line": self.score_line,
                "confidence_line": self.confidence_line,
            },
            "drivers": {
                "positive": list(self.positive_drivers),
                "negative": list(self.negative_drivers),
            },
            "improvements": list(self.improvements),
            "disclaimer": self.disclaimer,
            "raw": {
                "classified": dict(self.classified),
                "score": self.score,
                "band": self.band,
                "confidence": self.confidence,
                "flags": list(self.flags),
                "lookback_days": self.lookback_days,
                "business_type": self.business_type,
            },
        }


def _band_value(band: Union[Band, str]) -> str:
    if isinstance(band, Band):
        return band.value
    return str(band)


def _named_features(features: Union[FeatureVector, Mapping[str, float]]) -> Mapping[str, float]:
    if isinstance(features, FeatureVector):
        return features.to_named()
    return features


def select_improvements(
    sources: Sequence[FeatureKey],
    tips: Mapping[FeatureKey, Sequence[str]],
    limit: int = MAX_IMPROVEMENTS,
) -> List[str]:
    """
    Pick improvement tips for the given feature sources.

    The first pass takes each source's primary tip; if that leaves room, a
    second pass takes each source's secondary tip. Duplicates are skipped.
    """
    improvements: List[str] = []
    for key in sources:
        if len(improvements) >= limit:
            break
        feature_tips = tips[key]
        if feature_tips and feature_tips[0] not in improvements:
            improvements.append(feature_tips[0])

    if len(improvements) < limit:
        for key in sources:
            if len(improvements) >= limit:
                break
            feature_tips = tips[key]
            if len(feature_tips) > 1 and feature_tips[1] not in improvements:
                improvements.append(feature_tips[1])

    return improvements


def build_explainable_breakdown(
    score: int,
    band: Union[Band, str],
    confidence: float,
    features: Union[FeatureVector, Mapping[str, float]],
    flags: Sequence[str],
    context: Optional[ExplanationContext] = None,
    language: Union[Language, str] = Language.EN,
) -> ExplainableBreakdown:
    """
    Build the explanation for a score.

    Args:
        score: Composite score (0-1000)
        band: Risk band; an unknown band uses the band D headline
        confidence: Data confidence from 0.0 to 1.0
        features: Feature values keyed by feature name, or a FeatureVector
        flags: Raised risk flags
        context: Lookback length and business type
        language: Output language

    Returns:
        ExplainableBreakdown with display caps applied
    """
    context = context or ExplanationContext()
    language = Language(language)
    labels = FEATURE_LABELS[language]
    tips = IMPROVEMENT_TIPS[language]
    values = _named_features(features)

    classified: Dict[FeatureKey, Sentiment] = {}
    positive_drivers: List[str] = []
    negative_drivers: List[str] = []
    negative_keys: List[FeatureKey] = []

    for key in FEATURE_KEYS:
        sentiment = classify_feature(values[key.value])
        classified[key] = sentiment
        if sentiment == Sentiment.POSITIVE:
            positive_drivers.append(labels[key][sentiment])
        elif sentiment == Sentiment.NEGATIVE:
            negative_drivers.append(labels[key][sentiment])
            negative_keys.append(key)

    # Neutral features stand in for missing negatives, in key order
    padded_keys: List[FeatureKey] = []
    for key in FEATURE_KEYS:
        if len(negative_drivers) >= MAX_NEGATIVE_DRIVERS:
            break
        if classified[key] == Sentiment.NEUTRAL:
            negative_drivers.append(labels[key][Sentiment.NEUTRAL])
            padded_keys.append(key)

    improvements = select_improvements(negative_keys + padded_keys, tips)

    band_value = _band_value(band)
    headlines = BAND_HEADLINES[language]
    headline = headlines.get(band_value, headlines["D"])

    score_line = (
        f"Score: {score}/1000 (Band {band_value}). "
        f"{lookback_text(language, context.lookback_days)}."
    )

    return ExplainableBreakdown(
        headline=headline,
        score_line=score_line,
        confidence_line=confidence_text(language, round_half_up(confidence * 100)),
        positive_drivers=tuple(positive_drivers[:MAX_POSITIVE_DRIVERS]),
        negative_drivers=tuple(negative_drivers[:MAX_NEGATIVE_DRIVERS]),
        improvements=tuple(improvements[:MAX_IMPROVEMENTS]),
        disclaimer=DISCLAIMERS[language],
        classified={key.value: sentiment.value for key, sentiment in classified.items()},
        score=score,
        band=band_value,
        confidence=confidence,
        flags=tuple(flags),
        lookback_days=context.lookback_days,
        business_type=context.business_type,
        language=language,
    )
