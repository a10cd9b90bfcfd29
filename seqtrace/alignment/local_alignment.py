"""Smith-Waterman local alignment.

Finds the highest-scoring pair of substrings:

1. cells are floored at 0 (the reset has no pointer, which ends traceback),
2. traceback starts from the highest-scoring cell anywhere in the matrix,
3. traceback stops as soon as it reaches a zero cell, so the path need not
   reach the origin.
"""

from __future__ import annotations

from seqtrace.alignment.engine import AlignmentVariant, Band, blank_matrix
from seqtrace.alignment.traceback import walk_until_zero
from seqtrace.alignment.types import AlignmentResult, Matrix, MatrixCell, ScoringParams


def initialize_zeros(
    rows: int,
    cols: int,
    params: ScoringParams,  # noqa: ARG001
    band: Band | None = None,
) -> Matrix:
    return blank_matrix(rows, cols, band)


def highest_cell(matrix: Matrix) -> MatrixCell:
    """Return the maximum cell; the first one in row-major order wins ties."""
    best = matrix[0][0]
    for row in matrix:
        for cell in row:
            if cell.score > best.score:
                best = cell
    return best


LOCAL = AlignmentVariant(
    name="local",
    initialize=initialize_zeros,
    select_start=highest_cell,
    walk=walk_until_zero,
    floor_at_zero=True,
)


def local_alignment(seq1: str, seq2: str, params: ScoringParams) -> AlignmentResult:
    """Return the best local alignment; its score is never negative."""
    return LOCAL.run(seq1, seq2, params)
