"""Tests for dovetail (overlap) alignment."""

import pytest

from seqtrace.alignment import Direction, ScoringParams, dovetail_alignment, global_alignment
from seqtrace.alignment.dovetail import best_overlap_end, initialize_free_ends


class TestOverlap:
    """Suffix of seq1 overlapping a prefix of seq2."""

    def test_overlap_score_ignores_overhangs(self, unit_scoring) -> None:
        result = dovetail_alignment("ACGTTT", "TTTGCA", unit_scoring)
        assert result.score == 3

    def test_overhangs_become_free_gaps(self, unit_scoring) -> None:
        result = dovetail_alignment("ACGTTT", "TTTGCA", unit_scoring)
        assert result.aligned_seq1 == "ACGTTT---"
        assert result.aligned_seq2 == "---TTTGCA"

    def test_path_includes_synthetic_runs(self, unit_scoring) -> None:
        result = dovetail_alignment("ACGTTT", "TTTGCA", unit_scoring)
        assert result.path == (
            (0, 0),
            (1, 0),
            (2, 0),
            (3, 0),
            (4, 1),
            (5, 2),
            (6, 3),
            (6, 4),
            (6, 5),
            (6, 6),
        )

    def test_full_containment(self, unit_scoring) -> None:
        result = dovetail_alignment("GGACGTGG", "ACGT", unit_scoring)
        assert result.score == 4
        assert result.aligned_seq1.replace("-", "") == "GGACGTGG"
        assert result.aligned_seq2.replace("-", "") == "ACGT"


class TestInitialization:
    def test_boundaries_are_free(self, unit_scoring) -> None:
        matrix = initialize_free_ends(4, 3, unit_scoring)
        assert [row[0].score for row in matrix] == [0, 0, 0, 0]
        assert [cell.score for cell in matrix[0]] == [0, 0, 0]
        assert matrix[2][0].direction is Direction.UP
        assert matrix[0][2].direction is Direction.LEFT

    def test_recurrence_is_not_floored(self, unit_scoring) -> None:
        result = dovetail_alignment("AAAA", "TTTT", unit_scoring)
        assert any(cell.score < 0 for row in result.matrix for cell in row)


class TestBestOverlapEnd:
    def test_corner_wins_ties(self, unit_scoring) -> None:
        result = dovetail_alignment("A", "A", unit_scoring)
        assert best_overlap_end(result.matrix) is result.matrix[1][1]

    def test_strictly_higher_cell_displaces_corner(self, unit_scoring) -> None:
        result = dovetail_alignment("ACGTTT", "TTTGCA", unit_scoring)
        assert best_overlap_end(result.matrix) is result.matrix[6][3]


class TestDovetailProperties:
    @pytest.mark.parametrize("gap", [-1, -2, -3])
    def test_never_below_global(self, random_dna_pairs, gap) -> None:
        params = ScoringParams(match=1, mismatch=-1, gap_penalty=gap)
        for seq1, seq2 in random_dna_pairs:
            assert dovetail_alignment(seq1, seq2, params).score >= global_alignment(seq1, seq2, params).score

    def test_path_reaches_origin_and_corner(self, random_dna_pairs, unit_scoring) -> None:
        for seq1, seq2 in random_dna_pairs:
            result = dovetail_alignment(seq1, seq2, unit_scoring)
            assert result.path[0] == (0, 0)
            assert result.path[-1] == (len(seq1), len(seq2))
            assert result.aligned_seq1.replace("-", "") == seq1
            assert result.aligned_seq2.replace("-", "") == seq2
