"""Dovetail (semi-global / overlap) alignment.

Designed for overlapping reads, e.g. when assembling fragments: a suffix of
one sequence is aligned to a prefix of the other and overhanging ends cost
nothing.

- Row 0 and column 0 stay at 0, so leading gaps are free.
- The recurrence is not floored, unlike local alignment.
- Traceback begins at the best cell of the last row or last column; the gap
  runs that connect it to the corner and the final boundary run to the origin
  are synthesized without charging any penalty.
"""

from __future__ import annotations

from seqtrace.alignment.engine import AlignmentVariant, Band, blank_matrix
from seqtrace.alignment.traceback import walk_with_free_end_gaps
from seqtrace.alignment.types import AlignmentResult, Direction, Matrix, MatrixCell, ScoringParams


def initialize_free_ends(
    rows: int,
    cols: int,
    params: ScoringParams,  # noqa: ARG001
    band: Band | None = None,
) -> Matrix:
    """Zero boundaries that still point back toward the origin."""
    matrix = blank_matrix(rows, cols, band)
    for j in range(1, cols):
        matrix[0][j].direction = Direction.LEFT
    for i in range(1, rows):
        matrix[i][0].direction = Direction.UP
    return matrix


def best_overlap_end(matrix: Matrix) -> MatrixCell:
    """Pick the traceback start among the last row and last column.

    The bottom-right corner is the default. Only a strictly higher score
    displaces it: the last row is scanned left to right first, then the last
    column top to bottom, and the first maximum encountered is kept.
    """
    last_row = matrix[-1]
    best = last_row[-1]
    for cell in last_row:
        if cell.score > best.score:
            best = cell
    for row in matrix:
        cell = row[-1]
        if cell.score > best.score:
            best = cell
    return best


DOVETAIL = AlignmentVariant(
    name="dovetail",
    initialize=initialize_free_ends,
    select_start=best_overlap_end,
    walk=walk_with_free_end_gaps,
)


def dovetail_alignment(seq1: str, seq2: str, params: ScoringParams) -> AlignmentResult:
    """Return the best overlap alignment of ``seq1`` and ``seq2``."""
    return DOVETAIL.run(seq1, seq2, params)
