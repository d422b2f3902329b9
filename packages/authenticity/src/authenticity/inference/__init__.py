"""External inference adapters."""

from authenticity.inference.llm import LLMClassifier, parse_inference_reply
from authenticity.inference.registry import ModelConfig, ModelRegistry, Provider, get_registry
from authenticity.inference.runner import build_classifier, classify_all_with_timeout, classify_with_timeout
from authenticity.inference.types import Classifier, InferenceResult

__all__ = [
    "Classifier",
    "InferenceResult",
    "LLMClassifier",
    "ModelConfig",
    "ModelRegistry",
    "Provider",
    "build_classifier",
    "classify_all_with_timeout",
    "classify_with_timeout",
    "get_registry",
    "parse_inference_reply",
]
