"""Tests for the username feature extractors."""

from __future__ import annotations

import pytest
from authenticity.config import EngineConfig, default_config
from authenticity.heuristic import (
    analyze_linguistic,
    analyze_patterns,
    analyze_structure,
    shannon_entropy,
)
from authenticity.types import Platform


class TestAnalyzeStructure:
    """Tests for analyze_structure."""

    def test_human_handle(self) -> None:
        """Test a plain first_last handle only scores the underscore."""
        assert analyze_structure("john_doe", Platform.TWITTER) == 10.0

    def test_short_handle(self) -> None:
        """Test handles under four characters are penalized."""
        assert analyze_structure("abc", Platform.TWITTER) == 30.0

    def test_long_handle(self) -> None:
        """Test handles over twenty characters are penalized."""
        assert analyze_structure("averyveryverylonghandle", Platform.TWITTER) == 20.0

    def test_twitter_default_handle(self) -> None:
        """Test user + digits handles hit every digit rule plus the Twitter penalty."""
        # digit 15 + lowercase with digit 15 + random suffix 25 + default handle 35
        assert analyze_structure("user12345678", Platform.TWITTER) == 90.0

    def test_telegram_bot_suffix(self) -> None:
        """Test Telegram handles ending in "bot" get the platform penalty."""
        assert analyze_structure("support_bot", Platform.TELEGRAM) == 50.0
        assert analyze_structure("support_bot", Platform.TWITTER) == 10.0

    def test_instagram_commerce_suffix(self) -> None:
        """Test Instagram handles ending in .shop get the platform penalty."""
        assert analyze_structure("cool.shop", Platform.INSTAGRAM) == 30.0

    def test_score_is_capped(self) -> None:
        """Test the structural score never exceeds 100."""
        score = analyze_structure("aaaaaaaaaaaaaaaaaaaa_12345bot", Platform.TELEGRAM)

        assert score == 100.0

    def test_deterministic(self) -> None:
        """Test repeated calls give the same score."""
        assert analyze_structure("news_bot_24", "telegram") == analyze_structure("news_bot_24", "telegram")


class TestAnalyzeLinguistic:
    """Tests for analyze_linguistic."""

    @pytest.fixture
    def config(self) -> EngineConfig:
        return default_config()

    def test_no_keywords(self, config: EngineConfig) -> None:
        """Test a handle with no lexicon hits scores zero."""
        assert analyze_linguistic("john_doe", config.lexicon(Platform.TWITTER)) == 0.0

    def test_bot_keywords_and_patterns(self, config: EngineConfig) -> None:
        """Test bot keywords and suspicious patterns accumulate, capped at 100."""
        # bot, crypto, trading = 60; _bot$ and ^crypto_ = 50
        assert analyze_linguistic("crypto_trading_bot", config.lexicon(Platform.TWITTER)) == 100.0

    def test_human_keywords_subtract(self, config: EngineConfig) -> None:
        """Test human keywords offset bot keywords."""
        # bot (20) - real (15)
        assert analyze_linguistic("realbotfan", config.lexicon(Platform.TWITTER)) == 5.0

    def test_floor_at_zero(self, config: EngineConfig) -> None:
        """Test human-only handles never go negative."""
        assert analyze_linguistic("real_person", config.lexicon(Platform.TWITTER)) == 0.0

    def test_platform_lexicons_differ(self, config: EngineConfig) -> None:
        """Test the same handle scores per platform lexicon."""
        telegram = analyze_linguistic("news_channel", config.lexicon(Platform.TELEGRAM))
        instagram = analyze_linguistic("news_channel", config.lexicon(Platform.INSTAGRAM))

        # news, channel = 40; ^news_ = 25
        assert telegram == 65.0
        assert instagram == 0.0


class TestAnalyzePatterns:
    """Tests for analyze_patterns and shannon_entropy."""

    def test_entropy_empty(self) -> None:
        """Test entropy of an empty string is zero."""
        assert shannon_entropy("") == 0.0

    def test_entropy_uniform(self) -> None:
        """Test entropy of four distinct characters is two bits."""
        assert shannon_entropy("abcd") == pytest.approx(2.0)

    def test_human_handle(self) -> None:
        """Test a handle with mid-range entropy and no conventions scores zero."""
        assert analyze_patterns("john_doe") == 0.0

    def test_bot_conventions(self) -> None:
        """Test prefix and suffix conventions add 30 each."""
        assert analyze_patterns("crypto_trading_bot") == 60.0

    def test_low_entropy(self) -> None:
        """Test repetitive handles get the low-entropy bonus."""
        assert analyze_patterns("aaaa") == 20.0

    def test_numbered_handle(self) -> None:
        """Test word_digits handles match the numbering convention."""
        # ^[a-z]+_\d+$ = 30; entropy of "john_24" ~ 2.81 bits
        assert analyze_patterns("john_24") == 30.0
