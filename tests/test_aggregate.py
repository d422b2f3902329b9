"""Tests for signal aggregation, reasons and risk levels."""

from __future__ import annotations

import pytest
from authenticity.aggregate import (
    INSUFFICIENT_SIGNAL_REASON,
    aggregate,
    aggregate_profile,
    negativity_score,
    risk_level_for,
    sentiment_from_label,
)
from authenticity.config import ReasonRule, default_config
from authenticity.types import ContentType


class TestAggregate:
    """Tests for aggregate."""

    def test_weighted_mean(self) -> None:
        """Test confidence is the weighted mean of present signals."""
        result = aggregate({"a": 80.0, "b": 20.0}, {"a": 3.0, "b": 1.0}, threshold=50.0)

        assert result.confidence == pytest.approx(65.0)
        assert result.classification is True

    def test_missing_signal_excluded(self) -> None:
        """Test None signals leave both numerator and denominator."""
        result = aggregate({"a": 40.0, "b": None}, {"a": 1.0, "b": 1.0}, threshold=50.0)

        assert result.confidence == 40.0
        assert result.details == {"a": 40.0}

    def test_unweighted_signal_kept_in_details(self) -> None:
        """Test signals without a weight are reported but not scored."""
        result = aggregate({"a": 100.0, "extra": 5.0}, {"a": 1.0}, threshold=50.0)

        assert result.confidence == 100.0
        assert result.details["extra"] == 5.0

    def test_threshold_equality_is_false(self) -> None:
        """Test confidence equal to the threshold does not classify."""
        result = aggregate({"a": 60.0}, {"a": 1.0}, threshold=60.0)

        assert result.confidence == 60.0
        assert result.classification is False

    def test_insufficient_signal(self) -> None:
        """Test no usable signal yields confidence 0 and the fixed reason."""
        result = aggregate({"a": None, "b": 90.0}, {"a": 1.0, "b": 0.0}, threshold=10.0)

        assert result.confidence == 0.0
        assert result.classification is False
        assert result.reasons == [INSUFFICIENT_SIGNAL_REASON]

    def test_enum_content_type_stored_as_plain_str(self) -> None:
        """Test enum content types are stored as plain strings on both branches."""
        scored = aggregate({"a": 50.0}, {"a": 1.0}, threshold=10.0, content_type=ContentType.IMAGE)
        empty = aggregate({"a": None}, {"a": 1.0}, threshold=10.0, content_type=ContentType.IMAGE)

        assert type(scored.content_type) is str
        assert type(empty.content_type) is str
        assert scored.content_type == empty.content_type == "image"

    def test_confidence_clamped(self) -> None:
        """Test out-of-range signals cannot push confidence past 100."""
        result = aggregate({"a": 150.0}, {"a": 1.0}, threshold=50.0)

        assert result.confidence == 100.0

    def test_order_independent(self) -> None:
        """Test signal order does not change the result."""
        weights = {"a": 0.2, "b": 0.5, "c": 0.3}
        forward = aggregate({"a": 10.0, "b": 70.0, "c": 35.0}, weights, threshold=50.0)
        backward = aggregate({"c": 35.0, "b": 70.0, "a": 10.0}, weights, threshold=50.0)

        assert forward.confidence == pytest.approx(backward.confidence)
        assert forward.classification == backward.classification

    def test_reasons_follow_rule_order(self) -> None:
        """Test triggered messages come out in rule order, formatted with the value."""
        rules = [
            ReasonRule(signal="b", threshold=50, message="B is {value:.0f}"),
            ReasonRule(signal="a", threshold=50, message="A high"),
            ReasonRule(signal="a", threshold=90, message="A extreme"),
            ReasonRule(signal="c", threshold=70, message="C low", comparison="below"),
        ]

        result = aggregate(
            {"a": 60.0, "b": 75.0, "c": 20.0},
            {"a": 1.0, "b": 1.0},
            threshold=50.0,
            rules=rules,
            default_reason="fine",
        )

        assert result.reasons == ["B is 75", "A high", "C low"]

    def test_default_reason(self) -> None:
        """Test the default reason stands alone when no rule fires."""
        rules = [ReasonRule(signal="a", threshold=50, message="A high")]

        result = aggregate({"a": 10.0}, {"a": 1.0}, threshold=50.0, rules=rules, default_reason="fine")

        assert result.reasons == ["fine"]


class TestAggregateProfile:
    """Tests for aggregate_profile with the default identifier profiles."""

    def test_twitter_human(self) -> None:
        """Test john_doe-like signals stay below the Twitter threshold."""
        profile = default_config().profile("identifier", "twitter")

        result = aggregate_profile(
            {"structure": 10.0, "linguistic": 0.0, "pattern": 0.0, "ai_model": None},
            profile,
            content_type="identifier",
        )

        assert result.confidence == pytest.approx(10 * 0.2 / 0.9)
        assert result.classification is False
        assert result.reasons == ["Username appears human-generated"]
        assert result.content_type == "identifier"


class TestRisk:
    """Tests for sentiment and risk mapping."""

    @pytest.mark.parametrize(
        ("label", "sentiment"),
        [("POSITIVE", "positive"), ("label_negative", "negative"), ("mixed", "neutral")],
    )
    def test_sentiment_from_label(self, label: str, sentiment: str) -> None:
        """Test classifier labels normalize to three sentiments."""
        assert sentiment_from_label(label) == sentiment

    def test_risk_levels(self) -> None:
        """Test negative is high risk, neutral medium, positive low."""
        assert risk_level_for("negative") == "high"
        assert risk_level_for("neutral") == "medium"
        assert risk_level_for("positive") == "low"

    def test_negativity_score(self) -> None:
        """Test negativity grows with negative confidence and shrinks with positive."""
        assert negativity_score("negative", 0.8) == pytest.approx(80.0)
        assert negativity_score("positive", 0.8) == pytest.approx(20.0)
        assert negativity_score("neutral", 0.99) == 50.0
