"""Signal aggregation, reasons and risk levels."""

from authenticity.aggregate.aggregator import (
    INSUFFICIENT_SIGNAL_REASON,
    aggregate,
    aggregate_profile,
    build_reasons,
)
from authenticity.aggregate.risk import (
    Sentiment,
    negativity_score,
    risk_level_for,
    sentiment_from_label,
)

__all__ = [
    "INSUFFICIENT_SIGNAL_REASON",
    "Sentiment",
    "aggregate",
    "aggregate_profile",
    "build_reasons",
    "negativity_score",
    "risk_level_for",
    "sentiment_from_label",
]
