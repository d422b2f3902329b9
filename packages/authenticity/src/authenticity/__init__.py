"""Multi-signal authenticity scoring for social media identifiers and media."""

from authenticity.config import EngineConfig, default_config, load_config
from authenticity.coordination import CoordinationResult
from authenticity.engine import ScoringEngine
from authenticity.errors import (
    DecodeError,
    EmptyInputError,
    ErrorCode,
    InferenceUnavailableError,
    ScoringError,
    ValidationError,
)
from authenticity.inference import Classifier, InferenceResult
from authenticity.media import PixelBuffer, decode_image
from authenticity.types import ContentType, FeatureVector, Platform, RiskLevel, ScoreResult, Signal

__all__ = [
    "Classifier",
    "ContentType",
    "CoordinationResult",
    "DecodeError",
    "EmptyInputError",
    "EngineConfig",
    "ErrorCode",
    "FeatureVector",
    "InferenceResult",
    "InferenceUnavailableError",
    "PixelBuffer",
    "Platform",
    "RiskLevel",
    "ScoreResult",
    "ScoringEngine",
    "ScoringError",
    "Signal",
    "ValidationError",
    "decode_image",
    "default_config",
    "load_config",
]
