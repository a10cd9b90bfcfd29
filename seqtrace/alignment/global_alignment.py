"""Needleman-Wunsch global alignment.

Aligns the full length of both sequences. Boundary cells accumulate gap
penalties (``F(i, 0) = i * gap``, ``F(0, j) = j * gap``), traceback starts at
the bottom-right corner and always ends at the origin.
"""

from __future__ import annotations

from seqtrace.alignment.engine import AlignmentVariant, Band, blank_matrix, bottom_right
from seqtrace.alignment.traceback import walk_to_origin
from seqtrace.alignment.types import AlignmentResult, Direction, Matrix, ScoringParams


def initialize_with_gap_penalties(
    rows: int,
    cols: int,
    params: ScoringParams,
    band: Band | None = None,
) -> Matrix:
    """Charge ``gap_penalty`` per leading gap along row 0 and column 0.

    With a band only the boundary cells inside it are initialized; the rest
    stay at ``-inf``.
    """
    matrix = blank_matrix(rows, cols, band)
    for j in range(1, cols):
        if band is not None and not band.contains(0, j):
            break
        matrix[0][j].score = j * params.gap_penalty
        matrix[0][j].direction = Direction.LEFT
    for i in range(1, rows):
        if band is not None and not band.contains(i, 0):
            break
        matrix[i][0].score = i * params.gap_penalty
        matrix[i][0].direction = Direction.UP
    return matrix


GLOBAL = AlignmentVariant(
    name="global",
    initialize=initialize_with_gap_penalties,
    select_start=bottom_right,
    walk=walk_to_origin,
)


def global_alignment(seq1: str, seq2: str, params: ScoringParams) -> AlignmentResult:
    """Align ``seq1`` and ``seq2`` end to end; the score is ``F(m, n)``."""
    return GLOBAL.run(seq1, seq2, params)
