"""Coordination detection result types."""

from __future__ import annotations

from pydantic import Field
from scorer_utils import StrictModel

# N x N, symmetric, diagonal None.
SimilarityMatrix = list[list[float | None]]


class SuspiciousPair(StrictModel):
    """Two identifiers whose similarity exceeds the coordination threshold."""

    left_index: int = Field(ge=0)
    right_index: int = Field(ge=0)
    left: str
    right: str
    similarity: float = Field(ge=0, le=1)

    def __str__(self) -> str:
        return f"{self.left} <-> {self.right}"


class Cluster(StrictModel):
    """Group of identifiers suspected of being operated together."""

    id: int
    members: list[str]
    suspicion_level: float = Field(ge=0, le=100)
    characteristics: list[str]


class CoordinationResult(StrictModel):
    """Result of scoring a batch of identifiers for coordination."""

    identifiers: list[str]
    coordination_score: float = Field(ge=0, le=100)
    clusters: list[Cluster]
    suspicious_pairs: list[SuspiciousPair]
    matrix: SimilarityMatrix

    @property
    def pair_labels(self) -> list[str]:
        """Suspicious pairs rendered as "left <-> right" strings."""
        return [str(pair) for pair in self.suspicious_pairs]
