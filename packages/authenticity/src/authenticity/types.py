"""Shared scoring types with strict Pydantic validation."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import Field
from scorer_utils import StrictModel

# Signal name -> score in [0, 100]. None marks a signal as unknown.
FeatureVector = dict[str, float]

RiskLevel = Literal["low", "medium", "high"]


class Platform(StrEnum):
    """Supported social media platforms."""

    TELEGRAM = "telegram"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"


class Signal(StrEnum):
    """Names of the signals a FeatureVector may carry."""

    STRUCTURE = "structure"
    LINGUISTIC = "linguistic"
    PATTERN = "pattern"
    AI_MODEL = "ai_model"
    COMPRESSION = "compression"
    RESAMPLING = "resampling"
    EDGE_ANOMALY = "edge_anomaly"
    COLOR_ANOMALY = "color_anomaly"
    TEMPORAL_CONSISTENCY = "temporal_consistency"
    SUSPICIOUS_FRAMES = "suspicious_frames"
    SENTIMENT = "sentiment"


class ContentType(StrEnum):
    """Kinds of content the engine scores."""

    IDENTIFIER = "identifier"
    IMAGE = "image"
    VIDEO = "video"
    MONITORING = "monitoring"


class ScoreResult(StrictModel):
    """Final result of one scoring call."""

    content_type: str
    confidence: float = Field(ge=0, le=100)
    classification: bool
    risk_level: RiskLevel | None = None
    reasons: list[str]
    details: FeatureVector = Field(default_factory=dict)
    degraded: bool = Field(
        default=False,
        description="External classifier was configured but unavailable for this call",
    )
