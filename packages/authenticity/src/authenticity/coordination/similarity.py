"""Edit-distance similarity between identifiers."""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Executor

    from authenticity.coordination.types import SimilarityMatrix


def levenshtein_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            substitution = previous[j - 1] + (char_a != char_b)
            current.append(min(substitution, previous[j] + 1, current[j - 1] + 1))
        previous = current

    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]: 1 - distance / longest length."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def _pair_similarity(pair: tuple[str, str]) -> float:
    return similarity(*pair)


def pairwise_similarities(
    identifiers: Sequence[str],
    executor: Executor | None = None,
) -> list[tuple[int, int, float]]:
    """Similarity of every unordered pair, as (i, j, score) with i < j.

    Pairs are independent, so they may run on an executor. `Executor.map`
    yields in submission order, which keeps the output sorted by (i, j)
    whatever order the work completes in.
    """
    index_pairs = list(combinations(range(len(identifiers)), 2))
    string_pairs = [(identifiers[i], identifiers[j]) for i, j in index_pairs]

    if executor is None:
        scores = map(_pair_similarity, string_pairs)
    else:
        scores = executor.map(_pair_similarity, string_pairs)

    return [(i, j, score) for (i, j), score in zip(index_pairs, scores, strict=True)]


def similarity_matrix(
    identifiers: Sequence[str],
    executor: Executor | None = None,
) -> SimilarityMatrix:
    """Symmetric N x N similarity table with an undefined (None) diagonal."""
    return matrix_from_pairs(len(identifiers), pairwise_similarities(identifiers, executor))


def matrix_from_pairs(size: int, pairs: list[tuple[int, int, float]]) -> SimilarityMatrix:
    matrix: SimilarityMatrix = [[None] * size for _ in range(size)]
    for i, j, score in pairs:
        matrix[i][j] = score
        matrix[j][i] = score
    return matrix
