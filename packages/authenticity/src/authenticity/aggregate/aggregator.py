"""Weighted aggregation of signals into a ScoreResult."""

from __future__ import annotations

from typing import TYPE_CHECKING

from authenticity.types import ScoreResult

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from authenticity.config import ReasonRule, ScoringProfile
    from authenticity.types import RiskLevel

MAX_SCORE = 100.0

INSUFFICIENT_SIGNAL_REASON = "Insufficient signal to produce a score"


def aggregate(
    signals: Mapping[str, float | None],
    weights: Mapping[str, float],
    threshold: float,
    *,
    rules: Sequence[ReasonRule] = (),
    default_reason: str = "No suspicious signals detected",
    content_type: str = "generic",
    risk_level: RiskLevel | None = None,
    degraded: bool = False,
) -> ScoreResult:
    """Combine signals into a confidence, classification and reasons.

    Only signals that are present (not None) and carry a positive weight
    enter the weighted mean, in both numerator and denominator, so a signal
    that does not apply to a content type does not bias the result.

    Args:
        signals: Signal name -> score in [0, 100]; None marks it unknown.
        weights: Signal name -> weight.
        threshold: Classification is `confidence > threshold`.
        rules: Reason rules, evaluated in order.
        default_reason: Sole reason when no rule triggers.
        content_type: Label stored on the result.
        risk_level: Optional risk level to attach.
        degraded: Whether an external signal was unavailable.

    Returns:
        Immutable ScoreResult. All known signals are kept in `details`.
    """
    details = {str(name): float(value) for name, value in signals.items() if value is not None}
    used = {name: weights[name] for name in details if weights.get(name, 0) > 0}
    total_weight = sum(used.values())

    if total_weight <= 0:
        return ScoreResult(
            content_type=str(content_type),
            confidence=0.0,
            classification=False,
            risk_level=risk_level,
            reasons=[INSUFFICIENT_SIGNAL_REASON],
            details=details,
            degraded=degraded,
        )

    weighted = sum(details[name] * weight for name, weight in used.items())
    confidence = max(0.0, min(MAX_SCORE, weighted / total_weight))

    return ScoreResult(
        content_type=str(content_type),
        confidence=confidence,
        classification=confidence > threshold,
        risk_level=risk_level,
        reasons=build_reasons(details, rules, default_reason),
        details=details,
        degraded=degraded,
    )


def aggregate_profile(
    signals: Mapping[str, float | None],
    profile: ScoringProfile,
    *,
    content_type: str,
    risk_level: RiskLevel | None = None,
    degraded: bool = False,
) -> ScoreResult:
    """Aggregate with the weights, threshold and rules of a ScoringProfile."""
    return aggregate(
        signals,
        profile.weights,
        profile.threshold,
        rules=profile.rules,
        default_reason=profile.default_reason,
        content_type=content_type,
        risk_level=risk_level,
        degraded=degraded,
    )


def build_reasons(
    details: Mapping[str, float],
    rules: Sequence[ReasonRule],
    default_reason: str,
) -> list[str]:
    """Messages of triggered rules, in rule order, or the default reason."""
    reasons = [
        rule.message.format(value=details[rule.signal])
        for rule in rules
        if rule.signal in details and rule.triggered(details[rule.signal])
    ]
    return reasons or [default_reason]
