"""Tests for banded global alignment."""

import math

import pytest

from seqtrace.alignment import (
    Band,
    BandedParams,
    banded_alignment,
    effective_bandwidth,
    global_alignment,
    is_banded_suitable,
)
from seqtrace.alignment.banded import reachable_corner
from seqtrace.alignment.engine import blank_matrix


def banded(bandwidth: int, gap: float = -2) -> BandedParams:
    return BandedParams(match=1, mismatch=-1, gap_penalty=gap, bandwidth=bandwidth)


class TestBandwidth:
    """Effective bandwidth covers the length difference."""

    def test_effective_bandwidth_widens(self) -> None:
        assert effective_bandwidth("ACGTACGT", "ACG", 1) == 5
        assert effective_bandwidth("ACGT", "ACGA", 2) == 2

    def test_suitability(self) -> None:
        assert is_banded_suitable("ACGT", "ACG", 1)
        assert not is_banded_suitable("ACGTACGT", "ACG", 1)

    def test_result_reports_widened_bandwidth(self) -> None:
        result = banded_alignment("ACGTACGT", "ACG", banded(1))
        assert result.bandwidth == 5
        assert not math.isinf(result.score)
        assert result.path[0] == (0, 0)
        assert result.path[-1] == (8, 3)

    def test_widening_is_logged(self, caplog) -> None:
        with caplog.at_level("INFO", logger="seqtrace.alignment.banded"):
            banded_alignment("ACGTACGT", "ACG", banded(1))
        assert "Widened bandwidth from 1 to 5" in caplog.text

    def test_negative_bandwidth_rejected(self) -> None:
        with pytest.raises(ValueError, match="bandwidth must be >= 0"):
            banded(-1)


class TestBandedMatrix:
    def test_cells_outside_band_are_negative_infinity(self) -> None:
        result = banded_alignment("ACGTAC", "ACGTAC", banded(1))
        for row in result.matrix:
            for cell in row:
                if abs(cell.row - cell.col) > 1:
                    assert cell.score == -math.inf
                else:
                    assert cell.score > -math.inf

    def test_cells_outside_band_serialize_as_none(self) -> None:
        payload = banded_alignment("ACGTAC", "ACGTAC", banded(1)).to_dict()
        for row in payload["matrix"]:
            for cell in row:
                if abs(cell["row"] - cell["col"]) > 1:
                    assert cell["score"] is None
                else:
                    assert isinstance(cell["score"], (int, float))

    def test_only_band_cells_are_stepped(self) -> None:
        result = banded_alignment("ACGTAC", "ACGTAC", banded(1))
        cells = [(step.row, step.col) for step in result.steps]
        assert all(abs(i - j) <= 1 for i, j in cells)
        assert len(cells) == 6 + 2 * 5

    def test_out_of_band_neighbours_are_not_candidates(self) -> None:
        result = banded_alignment("ACGTAC", "ACGTAC", banded(1))
        step = next(step for step in result.steps if (step.row, step.col) == (2, 1))
        assert step.candidate("left") is None
        assert step.candidate("up") is not None
        assert step.explanation.endswith("(within band)")

    def test_unreachable_corner_raises(self) -> None:
        matrix = blank_matrix(4, 2, Band(0))
        with pytest.raises(RuntimeError, match="outside the computed band"):
            reachable_corner(matrix)


class TestAgainstGlobal:
    def test_wide_band_equals_global(self, random_dna_pairs) -> None:
        for seq1, seq2 in random_dna_pairs:
            width = max(len(seq1), len(seq2))
            result = banded_alignment(seq1, seq2, banded(width))
            expected = global_alignment(seq1, seq2, banded(width))
            assert result.score == expected.score
            assert result.path == expected.path

    @pytest.mark.parametrize("bandwidth", [0, 1, 2])
    def test_band_never_beats_global(self, random_dna_pairs, bandwidth) -> None:
        for seq1, seq2 in random_dna_pairs:
            result = banded_alignment(seq1, seq2, banded(bandwidth))
            assert result.score <= global_alignment(seq1, seq2, banded(bandwidth)).score
            assert result.aligned_seq1.replace("-", "") == seq1
            assert result.aligned_seq2.replace("-", "") == seq2
