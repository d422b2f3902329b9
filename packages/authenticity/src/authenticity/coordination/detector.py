"""Coordination detection over a batch of identifiers.

Near-duplicate handles ("news_bot_24", "news_bot_25") are typical of
accounts registered and operated by the same automation. Every pair above
the similarity threshold adds to the coordination score and is reported.
"""

from __future__ import annotations

from statistics import fmean
from typing import TYPE_CHECKING, Literal

from scorer_utils import get_logger

from authenticity.coordination.similarity import matrix_from_pairs, pairwise_similarities
from authenticity.coordination.types import Cluster, CoordinationResult, SuspiciousPair
from authenticity.errors import EmptyInputError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Executor

log = get_logger("authenticity.coordination.detector")

MAX_SCORE = 100.0

ClusteringStrategy = Literal["similarity", "contiguous"]


def detect_coordination(
    identifiers: Sequence[str],
    *,
    threshold: float = 0.7,
    pair_weight: float = 10.0,
    clustering: ClusteringStrategy = "similarity",
    group_size: int = 3,
    executor: Executor | None = None,
) -> CoordinationResult:
    """Detect coordinated naming across identifiers.

    Args:
        identifiers: Normalized identifiers, in caller order.
        threshold: Pairs with similarity strictly above this are suspicious.
        pair_weight: Score contributed by each suspicious pair (capped at 100).
        clustering: "similarity" groups connected suspicious pairs;
            "contiguous" partitions inputs in order into groups of `group_size`.
        group_size: Group size for contiguous clustering.
        executor: Optional executor for the pairwise comparisons.

    Returns:
        CoordinationResult with score, clusters, suspicious pairs and matrix.

    Raises:
        EmptyInputError: If `identifiers` is empty.
    """
    if not identifiers:
        raise EmptyInputError.for_batch("identifier")

    pairs = pairwise_similarities(identifiers, executor)
    matrix = matrix_from_pairs(len(identifiers), pairs)

    suspicious = [
        SuspiciousPair(
            left_index=i,
            right_index=j,
            left=identifiers[i],
            right=identifiers[j],
            similarity=score,
        )
        for i, j, score in pairs
        if score > threshold
    ]
    coordination_score = min(MAX_SCORE, pair_weight * len(suspicious))

    if clustering == "contiguous":
        groups = _contiguous_groups(len(identifiers), group_size)
    else:
        groups = _similarity_groups(len(identifiers), suspicious)

    clusters = [
        _build_cluster(cluster_id, members, identifiers, matrix)
        for cluster_id, members in enumerate(groups)
    ]

    log.info(
        "coordination_detected",
        identifiers=len(identifiers),
        suspicious_pairs=len(suspicious),
        clusters=len(clusters),
        score=coordination_score,
    )

    return CoordinationResult(
        identifiers=list(identifiers),
        coordination_score=coordination_score,
        clusters=clusters,
        suspicious_pairs=suspicious,
        matrix=matrix,
    )


def _contiguous_groups(size: int, group_size: int) -> list[list[int]]:
    """Partition indices in order into chunks of at most `group_size`."""
    return [list(range(start, min(start + group_size, size))) for start in range(0, size, group_size)]


def _similarity_groups(size: int, suspicious: list[SuspiciousPair]) -> list[list[int]]:
    """Connected components of the suspicious-pair graph, singletons dropped."""
    parent = list(range(size))

    def find(node: int) -> int:
        while parent[node] != node:
            parent[node] = parent[parent[node]]
            node = parent[node]
        return node

    for pair in suspicious:
        left, right = find(pair.left_index), find(pair.right_index)
        if left != right:
            # Lower index wins so roots are stable for a given input order
            parent[max(left, right)] = min(left, right)

    components: dict[int, list[int]] = {}
    for index in range(size):
        components.setdefault(find(index), []).append(index)

    # dict preserves insertion order: clusters come out by first member index
    return [members for members in components.values() if len(members) > 1]


def _build_cluster(
    cluster_id: int,
    members: list[int],
    identifiers: Sequence[str],
    matrix: list[list[float | None]],
) -> Cluster:
    """Describe one group with its mean internal similarity."""
    scores = [
        matrix[i][j]
        for offset, i in enumerate(members)
        for j in members[offset + 1 :]
        if matrix[i][j] is not None
    ]
    suspicion = fmean(scores) * 100 if scores else 0.0

    characteristics = []
    if suspicion > 70:
        characteristics.append("Similar naming patterns")
    if len({_stem(identifiers[i]) for i in members}) == 1 and len(members) > 1:
        characteristics.append("Shared name stem with varying suffix")

    return Cluster(
        id=cluster_id,
        members=[identifiers[i] for i in members],
        suspicion_level=min(MAX_SCORE, suspicion),
        characteristics=characteristics,
    )


def _stem(identifier: str) -> str:
    """Identifier with trailing digits and separators removed."""
    return identifier.rstrip("0123456789").rstrip("._-")
