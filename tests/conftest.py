"""Pytest fixtures and configuration for scoring engine tests."""

from __future__ import annotations

import os

# Set environment variables BEFORE any imports that might load settings
# This is necessary because settings are cached at import time
os.environ.setdefault("APP_MODE", "development")
os.environ.setdefault("LOG_LEVEL", "silent")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("GROQ_API_KEY", "test-groq-key")
os.environ.pop("INFERENCE_MODEL", None)
os.environ.pop("ENGINE_CONFIG_PATH", None)

import threading
from collections.abc import Callable, Iterator
from unittest.mock import MagicMock

import numpy as np
import pytest
from authenticity.engine import ScoringEngine
from authenticity.inference import InferenceResult
from authenticity.media import NullFaceDetector, PixelBuffer
from scorer_utils import Settings, get_settings


class SlowClassifier:
    """Classifier that blocks until released, to exercise inference timeouts."""

    def __init__(self) -> None:
        self.release = threading.Event()

    def classify(self, payload: object) -> InferenceResult:  # noqa: ARG002
        self.release.wait(5)
        return InferenceResult(label="bot", score=0.99)


@pytest.fixture
def make_gray_buffer() -> Callable[[np.ndarray], PixelBuffer]:
    """Build an RGBA buffer from an (H, W) array of grey levels."""

    def _make(levels: np.ndarray) -> PixelBuffer:
        rgb = np.repeat(np.asarray(levels, dtype=np.uint8)[..., None], 3, axis=2)
        return PixelBuffer.from_array(rgb)

    return _make


@pytest.fixture
def zero_buffer() -> PixelBuffer:
    """16x16 all-zero (black, transparent) buffer."""
    return PixelBuffer(width=16, height=16, data=bytes(16 * 16 * 4))


@pytest.fixture
def checkerboard_buffer(make_gray_buffer: Callable[[np.ndarray], PixelBuffer]) -> PixelBuffer:
    """16x16 single-pixel 0/255 checkerboard."""
    ys, xs = np.indices((16, 16))
    return make_gray_buffer(((xs + ys) % 2) * 255)


@pytest.fixture
def stripes_buffer(make_gray_buffer: Callable[[np.ndarray], PixelBuffer]) -> PixelBuffer:
    """20x20 vertical stripes, two columns black then two columns white."""
    _, xs = np.indices((20, 20))
    return make_gray_buffer(np.where(xs % 4 < 2, 0, 255))


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a small pool and a short inference timeout."""
    return get_settings().model_copy(
        update={"max_workers": 2, "inference_timeout": 0.2, "inference_model": None},
    )


@pytest.fixture
def engine(test_settings: Settings) -> Iterator[ScoringEngine]:
    """Engine with default config, no classifiers and no face detection."""
    with ScoringEngine(settings=test_settings, face_detector=NullFaceDetector()) as scoring_engine:
        yield scoring_engine


@pytest.fixture
def mock_classifier() -> MagicMock:
    """External classifier that flags everything as a bot with 0.9 probability."""
    classifier = MagicMock()
    classifier.classify.return_value = InferenceResult(label="bot", score=0.9)
    return classifier


@pytest.fixture
def slow_classifier() -> Iterator[SlowClassifier]:
    """Classifier that never answers within the test timeout."""
    classifier = SlowClassifier()
    yield classifier
    classifier.release.set()
