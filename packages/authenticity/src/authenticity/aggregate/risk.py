"""Sentiment and risk level mapping for monitoring queries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from authenticity.types import RiskLevel

Sentiment = Literal["positive", "negative", "neutral"]

_RISK_BY_SENTIMENT: dict[str, RiskLevel] = {
    "negative": "high",
    "neutral": "medium",
    "positive": "low",
}


def sentiment_from_label(label: str) -> Sentiment:
    """Normalize a classifier label ("POSITIVE", "label_negative", ...) to a sentiment."""
    lowered = label.lower()
    if "positive" in lowered:
        return "positive"
    if "negative" in lowered:
        return "negative"
    return "neutral"


def risk_level_for(sentiment: Sentiment | str) -> RiskLevel:
    """Negative -> high, neutral -> medium, positive -> low."""
    return _RISK_BY_SENTIMENT.get(sentiment, "medium")


def negativity_score(sentiment: Sentiment, score: float) -> float:
    """Turn a sentiment label and its probability into a 0-100 negativity signal."""
    if sentiment == "negative":
        return 100 * score
    if sentiment == "positive":
        return 100 * (1 - score)
    return 50.0
