"""Tests for engine configuration loading."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest
from authenticity.config import DEFAULTS, EngineConfig, default_config, load_config
from authenticity.errors import ErrorCode, ValidationError
from authenticity.types import Platform
from pydantic import ValidationError as PydanticValidationError
from scorer_utils import Settings


class TestDefaultConfig:
    """Tests for the embedded default configuration."""

    def test_profiles(self) -> None:
        """Test every content type has a profile with its threshold."""
        config = default_config()

        assert config.profile("identifier", Platform.TELEGRAM).threshold == 55
        assert config.profile("identifier", Platform.TWITTER).threshold == 60
        assert config.profile("identifier", Platform.INSTAGRAM).threshold == 58
        assert config.profile("image").threshold == 60
        assert config.profile("video").threshold == 65
        assert config.profile("monitoring").threshold == 50

    def test_identifier_weights(self) -> None:
        """Test Twitter weights favour the linguistic signal."""
        weights = default_config().profile("identifier", "twitter").weights

        assert weights == {"structure": 0.2, "linguistic": 0.4, "pattern": 0.3, "ai_model": 0.1}

    def test_generic_identifier_rule(self) -> None:
        """Test None resolves to the generic identifier rule."""
        assert default_config().identifier_rule(None).allowed_pattern == r"^[a-z0-9._-]+$"

    def test_unknown_profile(self) -> None:
        """Test unknown profile keys raise an UNKNOWN_PLATFORM error."""
        with pytest.raises(ValidationError) as exc_info:
            default_config().profile("identifier", "myspace")

        assert exc_info.value.is_code(ErrorCode.UNKNOWN_PLATFORM)

    def test_unknown_lexicon(self) -> None:
        """Test unknown platforms have no lexicon."""
        with pytest.raises(ValidationError):
            default_config().lexicon("myspace")

    def test_frozen(self) -> None:
        """Test configuration cannot be mutated after construction."""
        config = default_config()

        with pytest.raises(PydanticValidationError):
            config.suspicious_frame_threshold = 10.0


class TestLoadConfig:
    """Tests for load_config."""

    def test_none_returns_defaults(self) -> None:
        """Test no path yields the embedded defaults."""
        assert load_config(None) == default_config()

    def test_override_file(self, tmp_path: Path) -> None:
        """Test a JSON file with camelCase keys is loaded and validated."""
        data = copy.deepcopy(DEFAULTS)
        data["profiles"]["image"]["threshold"] = 70
        data["coordination"] = {"similarityThreshold": 0.8, "clustering": "contiguous", "groupSize": 4}
        path = tmp_path / "engine.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        config = load_config(path)

        assert isinstance(config, EngineConfig)
        assert config.profile("image").threshold == 70
        assert config.coordination.similarity_threshold == 0.8
        assert config.coordination.clustering == "contiguous"
        assert config.coordination.group_size == 4

    def test_invalid_regex(self, tmp_path: Path) -> None:
        """Test lexicon patterns must compile."""
        data = copy.deepcopy(DEFAULTS)
        data["lexicons"]["twitter"]["suspiciousPatterns"] = ["(unclosed"]
        path = tmp_path / "engine.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(PydanticValidationError, match="Invalid regex"):
            load_config(path)

    def test_negative_weight(self) -> None:
        """Test profile weights cannot be negative."""
        data = copy.deepcopy(DEFAULTS)
        data["profiles"]["image"]["weights"]["compression"] = -0.5

        with pytest.raises(PydanticValidationError, match="Negative weights"):
            EngineConfig.model_validate(data)

    def test_unknown_field(self) -> None:
        """Test unknown top-level keys are rejected."""
        data = copy.deepcopy(DEFAULTS)
        data["surprise"] = True

        with pytest.raises(PydanticValidationError):
            EngineConfig.model_validate(data)


class TestSettings:
    """Tests for environment settings."""

    def test_silent_level(self) -> None:
        """Test the silent log level is recognized."""
        assert Settings(LOG_LEVEL="silent").is_silent is True
        assert Settings(LOG_LEVEL="DEBUG").is_silent is False

    def test_inference_timeout_positive(self) -> None:
        """Test a zero inference timeout is rejected."""
        with pytest.raises(PydanticValidationError):
            Settings(INFERENCE_TIMEOUT=0)
