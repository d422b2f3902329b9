"""Deterministic username heuristics.

Structure, linguistic and pattern extractors plus identifier validation.
"""

from authenticity.heuristic.username import (
    analyze_linguistic,
    analyze_patterns,
    analyze_structure,
    shannon_entropy,
)
from authenticity.heuristic.validation import (
    normalize_identifier,
    parse_profile_url,
    validate_identifier,
)

__all__ = [
    "analyze_linguistic",
    "analyze_patterns",
    "analyze_structure",
    "normalize_identifier",
    "parse_profile_url",
    "shannon_entropy",
    "validate_identifier",
]
