"""Tests for similarity and coordination detection."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from authenticity.coordination import (
    detect_coordination,
    levenshtein_distance,
    pairwise_similarities,
    similarity,
    similarity_matrix,
)
from authenticity.errors import EmptyInputError


class TestSimilarity:
    """Tests for levenshtein_distance and similarity."""

    def test_levenshtein(self) -> None:
        """Test the classic kitten/sitting distance."""
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("same", "same") == 0

    def test_near_duplicates(self) -> None:
        """Test handles differing in one digit are highly similar."""
        assert similarity("news_bot_24", "news_bot_25") == pytest.approx(1 - 1 / 11)

    def test_symmetric(self) -> None:
        """Test similarity does not depend on argument order."""
        assert similarity("crypto_king", "kingcrypto") == similarity("kingcrypto", "crypto_king")

    def test_empty_strings(self) -> None:
        """Test two empty strings are identical."""
        assert similarity("", "") == 1.0

    def test_pairs_in_order_with_executor(self) -> None:
        """Test parallel pairwise comparison keeps (i, j) order."""
        identifiers = ["alpha", "alpha1", "beta", "gamma_2"]

        with ThreadPoolExecutor(max_workers=3) as executor:
            parallel = pairwise_similarities(identifiers, executor)

        assert parallel == pairwise_similarities(identifiers)
        assert [(i, j) for i, j, _ in parallel] == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_matrix(self) -> None:
        """Test the matrix is symmetric with an undefined diagonal."""
        matrix = similarity_matrix(["abc", "abd", "xyz"])

        assert matrix[0][0] is None
        assert matrix[0][1] == matrix[1][0] == pytest.approx(2 / 3)
        assert matrix[0][2] == 0.0


class TestDetectCoordination:
    """Tests for detect_coordination."""

    def test_suspicious_pair(self) -> None:
        """Test near-duplicate handles form a suspicious pair and cluster."""
        result = detect_coordination(["news_bot_24", "news_bot_25", "jane_smith"])

        assert result.coordination_score == 10.0
        assert result.pair_labels == ["news_bot_24 <-> news_bot_25"]
        assert len(result.clusters) == 1

        cluster = result.clusters[0]
        assert cluster.members == ["news_bot_24", "news_bot_25"]
        assert cluster.suspicion_level == pytest.approx(100 * (1 - 1 / 11))
        assert "Similar naming patterns" in cluster.characteristics
        assert "Shared name stem with varying suffix" in cluster.characteristics

    def test_no_coordination(self) -> None:
        """Test unrelated handles produce no pairs and no clusters."""
        result = detect_coordination(["john_doe", "alice", "quantum_physicist"])

        assert result.coordination_score == 0.0
        assert result.suspicious_pairs == []
        assert result.clusters == []

    def test_score_is_capped(self) -> None:
        """Test many suspicious pairs cap the score at 100."""
        identifiers = [f"bot_{i}" for i in range(6)]

        result = detect_coordination(identifiers)

        assert len(result.suspicious_pairs) == 15
        assert result.coordination_score == 100.0
        assert len(result.clusters) == 1

    def test_contiguous_clustering(self) -> None:
        """Test contiguous strategy partitions inputs in order."""
        identifiers = ["a1", "b2", "c3", "d4", "e5"]

        result = detect_coordination(identifiers, clustering="contiguous", group_size=2)

        assert [c.members for c in result.clusters] == [["a1", "b2"], ["c3", "d4"], ["e5"]]
        assert [c.id for c in result.clusters] == [0, 1, 2]

    def test_connected_pairs_merge(self) -> None:
        """Test connected suspicious pairs merge into one cluster in input order."""
        result = detect_coordination(["promo_bot_10", "unrelated", "promo_bot_11", "promo_bot_12"])

        assert [c.members for c in result.clusters] == [["promo_bot_10", "promo_bot_11", "promo_bot_12"]]

    def test_single_identifier(self) -> None:
        """Test one identifier yields an empty result, not an error."""
        result = detect_coordination(["solo"])

        assert result.coordination_score == 0.0
        assert result.matrix == [[None]]

    def test_empty_batch(self) -> None:
        """Test an empty batch raises EmptyInputError."""
        with pytest.raises(EmptyInputError):
            detect_coordination([])
