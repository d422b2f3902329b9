"""Username feature extractors.

Three independent, deterministic signals over a normalized identifier:
structure (length and character composition), linguistic (platform
keyword lexicon) and pattern (generic bot-naming regexes plus entropy).
Each returns a score in [0, 100].
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import TYPE_CHECKING

from authenticity.types import Platform

if TYPE_CHECKING:
    from authenticity.config import PlatformLexicon

MAX_SCORE = 100.0

_RANDOM_SUFFIX = re.compile(r"^[a-z]+[0-9]{3,}$")
_TWITTER_DEFAULT_HANDLE = re.compile(r"^user[0-9]+$")
_INSTAGRAM_COMMERCE_SUFFIX = re.compile(r"\.(shop|store|bot)$")

COMMON_BOT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(auto|bot|service|support|official|news|update|crypto|trading)_", re.IGNORECASE),
    re.compile(r"_(bot|service|auto|news|official)$", re.IGNORECASE),
    re.compile(r"^[a-z]+_\d+$"),
    re.compile(r"^(user|account|profile)\d+$", re.IGNORECASE),
)

LOW_ENTROPY = 2.5
HIGH_ENTROPY = 4.5


def _clamp(score: float) -> float:
    return max(0.0, min(MAX_SCORE, float(score)))


def analyze_structure(identifier: str, platform: Platform | str) -> float:
    """Score how machine-made the shape of a username looks.

    Rules are additive and evaluated independently; the sum is clamped to
    [0, 100]. The length rules cannot both fire.

    Args:
        identifier: Normalized identifier.
        platform: Platform the identifier belongs to.

    Returns:
        Structural score in [0, 100].
    """
    score = 0

    if len(identifier) < 4:
        score += 30
    if len(identifier) > 20:
        score += 20

    has_digit = any(ch.isdigit() for ch in identifier)
    if has_digit:
        score += 15
    if "_" in identifier:
        score += 10
    if identifier == identifier.lower() and has_digit:
        score += 15
    if _RANDOM_SUFFIX.match(identifier):
        score += 25

    score += _platform_penalty(identifier, Platform(platform))

    return _clamp(score)


def _platform_penalty(identifier: str, platform: Platform) -> int:
    """Heavy penalty for naming schemes specific to one platform."""
    if platform == Platform.TELEGRAM and identifier.endswith("bot"):
        return 40
    if platform == Platform.TWITTER and _TWITTER_DEFAULT_HANDLE.match(identifier):
        return 35
    if platform == Platform.INSTAGRAM and _INSTAGRAM_COMMERCE_SUFFIX.search(identifier):
        return 30
    return 0


def analyze_linguistic(identifier: str, lexicon: PlatformLexicon) -> float:
    """Score keyword and regex matches against a platform lexicon.

    Bot keywords add 20 each, human keywords subtract 15 each, suspicious
    patterns add 25 each. The terms are summed before the floor at 0 and
    the cap at 100 are applied.
    """
    lowered = identifier.lower()

    bot_hits = sum(1 for keyword in lexicon.bot_keywords if keyword in lowered)
    human_hits = sum(1 for keyword in lexicon.human_keywords if keyword in lowered)
    pattern_hits = sum(1 for pattern in lexicon.suspicious_patterns if re.search(pattern, identifier))

    return _clamp(20 * bot_hits - 15 * human_hits + 25 * pattern_hits)


def shannon_entropy(text: str) -> float:
    """Shannon entropy (bits) of the character distribution of `text`."""
    if not text:
        return 0.0

    total = len(text)
    return -sum((count / total) * math.log2(count / total) for count in Counter(text).values())


def analyze_patterns(identifier: str) -> float:
    """Score generic bot-naming conventions and entropy outliers.

    Each matching convention adds 30. Entropy below 2.5 bits adds 20 and
    entropy above 4.5 bits adds 15; human handles sit in between.
    """
    score = 30 * sum(1 for pattern in COMMON_BOT_PATTERNS if pattern.search(identifier))

    entropy = shannon_entropy(identifier)
    if entropy < LOW_ENTROPY:
        score += 20
    elif entropy > HIGH_ENTROPY:
        score += 15

    return _clamp(score)
