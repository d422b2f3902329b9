"""Engine configuration: lexicons, validation rules and scoring profiles.

The configuration is plain data. It is built once (from the embedded
defaults or a JSON file), validated, frozen, and handed to the engine.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from scorer_utils import ConfigModel, get_logger

from authenticity.errors import ValidationError
from authenticity.types import ContentType, Platform

log = get_logger("authenticity.config")


def _check_patterns(patterns: list[str]) -> list[str]:
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            msg = f"Invalid regex {pattern!r}: {e}"
            raise ValueError(msg) from e
    return patterns


class PlatformLexicon(ConfigModel):
    """Keyword and regex lexicon for one platform."""

    bot_keywords: list[str] = Field(alias="botKeywords")
    human_keywords: list[str] = Field(alias="humanKeywords")
    suspicious_patterns: list[str] = Field(alias="suspiciousPatterns")

    @field_validator("suspicious_patterns")
    @classmethod
    def _compiles(cls, value: list[str]) -> list[str]:
        return _check_patterns(value)


class IdentifierRule(ConfigModel):
    """Allowed character class and minimum length for normalized identifiers."""

    allowed_pattern: str = Field(alias="allowedPattern")
    min_length: int = Field(default=1, ge=1, alias="minLength")
    description: str

    @field_validator("allowed_pattern")
    @classmethod
    def _compiles(cls, value: str) -> str:
        return _check_patterns([value])[0]


class ReasonRule(ConfigModel):
    """Appends `message` when `signal` crosses `threshold`."""

    signal: str
    threshold: float
    message: str
    comparison: Literal["above", "below"] = "above"

    def triggered(self, value: float) -> bool:
        """Check whether the rule fires for a signal value."""
        if self.comparison == "below":
            return value < self.threshold
        return value > self.threshold


class ScoringProfile(ConfigModel):
    """Weights, threshold and reason rules for one content type/platform."""

    weights: dict[str, float]
    threshold: float = Field(ge=0, le=100)
    rules: list[ReasonRule] = Field(default_factory=list)
    default_reason: str = Field(alias="defaultReason")

    @field_validator("weights")
    @classmethod
    def _non_negative(cls, value: dict[str, float]) -> dict[str, float]:
        negative = [name for name, weight in value.items() if weight < 0]
        if negative:
            msg = f"Negative weights for: {', '.join(negative)}"
            raise ValueError(msg)
        return value


class CoordinationConfig(ConfigModel):
    """Pairwise similarity and clustering settings."""

    similarity_threshold: float = Field(default=0.7, ge=0, le=1, alias="similarityThreshold")
    pair_weight: float = Field(default=10.0, ge=0, alias="pairWeight")
    clustering: Literal["similarity", "contiguous"] = "similarity"
    group_size: int = Field(default=3, ge=1, alias="groupSize")


class EngineConfig(ConfigModel):
    """Complete engine configuration."""

    lexicons: dict[Platform, PlatformLexicon]
    identifier_rules: dict[str, IdentifierRule] = Field(alias="identifierRules")
    profiles: dict[str, ScoringProfile]
    coordination: CoordinationConfig = Field(default_factory=CoordinationConfig)
    suspicious_frame_threshold: float = Field(
        default=60.0,
        ge=0,
        le=100,
        alias="suspiciousFrameThreshold",
    )

    def lexicon(self, platform: Platform | str) -> PlatformLexicon:
        """Get the lexicon for a platform."""
        try:
            return self.lexicons[Platform(platform)]
        except (KeyError, ValueError) as e:
            raise ValidationError.unknown_platform(str(platform)) from e

    def identifier_rule(self, platform: Platform | str | None) -> IdentifierRule:
        """Get the identifier validation rule ("generic" when platform is None)."""
        key = "generic" if platform is None else str(platform)
        try:
            return self.identifier_rules[key]
        except KeyError as e:
            raise ValidationError.unknown_platform(key) from e

    def profile(self, content_type: ContentType | str, platform: Platform | str | None = None) -> ScoringProfile:
        """Get the scoring profile for a content type (and platform, if any)."""
        key = str(content_type) if platform is None else f"{content_type}.{platform}"
        try:
            return self.profiles[key]
        except KeyError as e:
            raise ValidationError.unknown_platform(key) from e


_IDENTIFIER_RULES: list[dict[str, Any]] = [
    {"signal": "structure", "threshold": 50, "message": "Suspicious username structure detected"},
    {"signal": "linguistic", "threshold": 60, "message": "Bot-like linguistic patterns identified"},
    {"signal": "pattern", "threshold": 70, "message": "Matches known bot naming conventions"},
    {"signal": "ai_model", "threshold": 70, "message": "External classifier flags the username as automated"},
]

_MEDIA_RULES: list[dict[str, Any]] = [
    {"signal": "compression", "threshold": 50, "message": "Compression analysis reveals block-level inconsistencies"},
    {"signal": "resampling", "threshold": 40, "message": "Periodic resampling artifacts detected"},
    {"signal": "edge_anomaly", "threshold": 30, "message": "Edge detection shows splicing indicators"},
    {"signal": "color_anomaly", "threshold": 40, "message": "Color histogram contains unnatural spikes"},
    {"signal": "ai_model", "threshold": 70, "message": "AI model detected synthetic patterns"},
]

_MEDIA_WEIGHTS = {
    "compression": 0.2,
    "resampling": 0.2,
    "edge_anomaly": 0.2,
    "color_anomaly": 0.2,
    "ai_model": 0.2,
}

DEFAULTS: dict[str, Any] = {
    "lexicons": {
        "telegram": {
            "botKeywords": ["bot", "auto", "service", "support", "official", "team", "news", "channel", "update"],
            "humanKeywords": ["real", "person", "user", "me", "myself", "human", "individual", "genuine"],
            "suspiciousPatterns": [
                r"(?i)^(bot|auto|service)_",
                r"(?i)_bot$",
                r"^[a-z]+\d{3,}$",
                r"(?i)^(news|update|official)_",
            ],
        },
        "twitter": {
            "botKeywords": ["bot", "auto", "news", "updates", "crypto", "trading", "signals", "official"],
            "humanKeywords": ["real", "person", "human", "genuine", "authentic", "individual"],
            "suspiciousPatterns": [
                r"^[a-z]+\d{8,}$",
                r"(?i)_bot$",
                r"(?i)^(crypto|trading|news)_",
                r"(?i)^user\d+$",
            ],
        },
        "instagram": {
            "botKeywords": ["bot", "auto", "likes", "followers", "service", "shop", "store"],
            "humanKeywords": ["real", "person", "authentic", "genuine", "me", "myself"],
            "suspiciousPatterns": [
                r"^[a-z]+\d{6,}$",
                r"(?i)_bot$",
                r"(?i)^(auto|shop|store)_",
                r"(?i)\.(bot|service|shop)$",
            ],
        },
    },
    "identifierRules": {
        "telegram": {
            "allowedPattern": r"^[a-z0-9_]+$",
            "minLength": 2,
            "description": "letters, numbers and underscores, at least 2 characters",
        },
        "twitter": {
            "allowedPattern": r"^[a-z0-9_]+$",
            "description": "letters, numbers and underscores",
        },
        "instagram": {
            "allowedPattern": r"^[a-z0-9._]+$",
            "description": "letters, numbers, dots and underscores",
        },
        "generic": {
            "allowedPattern": r"^[a-z0-9._-]+$",
            "description": "letters, numbers, dots, dashes and underscores",
        },
    },
    "profiles": {
        "identifier.telegram": {
            "weights": {"structure": 0.3, "linguistic": 0.3, "pattern": 0.3, "ai_model": 0.1},
            "threshold": 55,
            "rules": _IDENTIFIER_RULES,
            "defaultReason": "Username appears human-generated",
        },
        "identifier.twitter": {
            "weights": {"structure": 0.2, "linguistic": 0.4, "pattern": 0.3, "ai_model": 0.1},
            "threshold": 60,
            "rules": _IDENTIFIER_RULES,
            "defaultReason": "Username appears human-generated",
        },
        "identifier.instagram": {
            "weights": {"structure": 0.25, "linguistic": 0.35, "pattern": 0.3, "ai_model": 0.1},
            "threshold": 58,
            "rules": _IDENTIFIER_RULES,
            "defaultReason": "Username appears human-generated",
        },
        "image": {
            "weights": _MEDIA_WEIGHTS,
            "threshold": 60,
            "rules": _MEDIA_RULES,
            "defaultReason": "No manipulation artifacts detected; image appears authentic",
        },
        "video": {
            "weights": _MEDIA_WEIGHTS,
            "threshold": 65,
            "rules": [
                *_MEDIA_RULES,
                {
                    "signal": "temporal_consistency",
                    "threshold": 70,
                    "comparison": "below",
                    "message": "Temporal inconsistencies detected across frames",
                },
                {
                    "signal": "suspicious_frames",
                    "threshold": 0,
                    "message": "Frame analysis flags {value:.0f}% of frames as suspicious",
                },
            ],
            "defaultReason": "Temporal consistency maintained throughout video",
        },
        "monitoring": {
            "weights": {"sentiment": 1.0},
            "threshold": 50,
            "rules": [
                {"signal": "sentiment", "threshold": 40, "message": "Moderate suspicious activity detected"},
                {"signal": "sentiment", "threshold": 60, "message": "Coordinated negative sentiment campaign detected"},
                {"signal": "sentiment", "threshold": 80, "message": "Artificial amplification of negative content"},
            ],
            "defaultReason": "No concerning sentiment detected",
        },
    },
}


def default_config() -> EngineConfig:
    """Build the embedded default configuration."""
    return EngineConfig.model_validate(DEFAULTS)


def load_config(path: Path | None = None) -> EngineConfig:
    """Load engine configuration from a JSON file, or the defaults.

    Args:
        path: JSON file with the full configuration. None uses the defaults.

    Returns:
        Validated, frozen EngineConfig.

    Raises:
        pydantic.ValidationError: If the file does not match the schema.
        OSError: If the file cannot be read.
    """
    if path is None:
        return default_config()

    log.info("loading_engine_config", path=str(path))
    return EngineConfig.model_validate_json(path.read_text(encoding="utf-8"))
