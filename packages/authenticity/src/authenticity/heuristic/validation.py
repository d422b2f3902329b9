"""Identifier normalization, validation and profile URL parsing."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from authenticity.errors import ValidationError
from authenticity.types import Platform

if TYPE_CHECKING:
    from authenticity.config import EngineConfig

# Host -> platform for profile links. Only platforms the engine can score.
_PROFILE_HOSTS: dict[str, Platform] = {
    "twitter.com": Platform.TWITTER,
    "x.com": Platform.TWITTER,
    "instagram.com": Platform.INSTAGRAM,
    "t.me": Platform.TELEGRAM,
    "telegram.me": Platform.TELEGRAM,
}


def normalize_identifier(raw: str) -> str:
    """Strip whitespace and one leading "@", then lowercase."""
    text = raw.strip()
    if text.startswith("@"):
        text = text[1:]
    return text.lower()


def validate_identifier(
    raw: str,
    platform: Platform | str | None,
    config: EngineConfig,
) -> str:
    """Normalize an identifier and check it against the platform rule.

    Args:
        raw: Identifier as typed by the caller.
        platform: Target platform, or None for platform-agnostic batches.
        config: Engine configuration holding the character-class rules.

    Returns:
        The normalized identifier.

    Raises:
        ValidationError: If the identifier is empty, too short or contains
            characters outside the platform's allowed set.
    """
    rule = config.identifier_rule(platform)
    name = str(platform) if platform is not None else "generic"
    identifier = normalize_identifier(raw)

    if not identifier:
        raise ValidationError.invalid_identifier(raw, name, "identifier cannot be empty")
    if len(identifier) < rule.min_length:
        raise ValidationError.invalid_identifier(
            raw,
            name,
            f"must be at least {rule.min_length} characters long",
        )
    if not re.match(rule.allowed_pattern, identifier):
        raise ValidationError.invalid_identifier(raw, name, f"may only contain {rule.description}")

    return identifier


def parse_profile_url(url: str) -> tuple[Platform, str]:
    """Detect the platform and raw handle from a profile link.

    Accepts links with or without a scheme, e.g. "https://x.com/jack",
    "instagram.com/some.shop/" or "t.me/news_bot".

    Raises:
        ValidationError: If the host is not a supported platform or the
            path carries no handle.
    """
    text = url.strip()
    if "://" not in text:
        text = f"https://{text}"

    parsed = urlparse(text)
    host = (parsed.hostname or "").lower()
    host = host.removeprefix("www.").removeprefix("mobile.")

    platform = _PROFILE_HOSTS.get(host)
    segments = [segment for segment in parsed.path.split("/") if segment]
    if platform is None or not segments:
        raise ValidationError.invalid_url(url)

    return platform, segments[0]
