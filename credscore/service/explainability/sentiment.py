"""Sentiment buckets for feature values."""

from .labels import Sentiment

POSITIVE_THRESHOLD = 0.7
NEUTRAL_THRESHOLD = 0.4


def classify_feature(value: float) -> Sentiment:
    """
    Bucket a feature value. Same thresholds for every feature.

    - value >= 0.7: positive
    - 0.4 <= value < 0.7: neutral
    - below 0.4: negative
    """
    if value >= POSITIVE_THRESHOLD:
        return Sentiment.POSITIVE
    if value >= NEUTRAL_THRESHOLD:
        return Sentiment.NEUTRAL
    return Sentiment.NEGATIVE
