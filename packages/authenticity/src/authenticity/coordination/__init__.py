"""Similarity and coordination detection across identifier batches."""

from authenticity.coordination.detector import detect_coordination
from authenticity.coordination.similarity import (
    levenshtein_distance,
    pairwise_similarities,
    similarity,
    similarity_matrix,
)
from authenticity.coordination.types import (
    Cluster,
    CoordinationResult,
    SimilarityMatrix,
    SuspiciousPair,
)

__all__ = [
    "Cluster",
    "CoordinationResult",
    "SimilarityMatrix",
    "SuspiciousPair",
    "detect_coordination",
    "levenshtein_distance",
    "pairwise_similarities",
    "similarity",
    "similarity_matrix",
]
