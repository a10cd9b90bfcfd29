"""Banded global alignment.

Fills only the diagonal band ``|i - j| <= k`` of the Needleman-Wunsch matrix,
reducing the work from O(mn) to O(kn). Useful when the sequences are expected
to be similar, so the optimal path stays near the main diagonal.

The requested bandwidth is widened to ``|len(seq1) - len(seq2)|`` when needed
so the bottom-right corner lies inside the band. The result reports the
bandwidth that was actually used.
"""

from __future__ import annotations

import math

from seqtrace.alignment.engine import AlignmentVariant, Band
from seqtrace.alignment.global_alignment import initialize_with_gap_penalties
from seqtrace.alignment.traceback import walk_to_origin
from seqtrace.alignment.types import AlignmentResult, BandedParams, Matrix, MatrixCell
from seqtrace.utils.logging import get_logger

_LOGGER = get_logger("alignment.banded")


def effective_bandwidth(seq1: str, seq2: str, bandwidth: int) -> int:
    return max(bandwidth, abs(len(seq1) - len(seq2)))


def is_banded_suitable(seq1: str, seq2: str, bandwidth: int) -> bool:
    """Return ``True`` when ``bandwidth`` already covers the length difference."""
    return bandwidth >= abs(len(seq1) - len(seq2))


def reachable_corner(matrix: Matrix) -> MatrixCell:
    """Return the bottom-right cell, refusing to report an unreachable score."""
    corner = matrix[-1][-1]
    if math.isinf(corner.score):
        _LOGGER.error(
            "Bottom-right cell (%d, %d) was not reached inside the band",
            corner.row,
            corner.col,
        )
        msg = "Banded alignment failed: the final cell lies outside the computed band"
        raise RuntimeError(msg)
    return corner


BANDED = AlignmentVariant(
    name="banded",
    initialize=initialize_with_gap_penalties,
    select_start=reachable_corner,
    walk=walk_to_origin,
)


def banded_alignment(seq1: str, seq2: str, params: BandedParams) -> AlignmentResult:
    """Run global alignment restricted to a diagonal band."""
    width = effective_bandwidth(seq1, seq2, params.bandwidth)
    if width != params.bandwidth:
        _LOGGER.info("Widened bandwidth from %d to %d to reach the final cell", params.bandwidth, width)
    return BANDED.run(seq1, seq2, params, band=Band(width))
