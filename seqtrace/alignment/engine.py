"""Parameterized dynamic-programming engine shared by all alignment variants.

Every variant uses the same recurrence

    F(i, j) = max(F(i-1, j-1) + S(x_i, y_j), F(i-1, j) + gap, F(i, j-1) + gap)

and differs only in a handful of policies:

- **initialization**: the boundary row/column scores and pointers,
- **floor**: whether ``0`` competes as a fourth candidate (local alignment),
- **band**: which cells are filled at all (banded alignment),
- **start cell**: where traceback begins,
- **walker**: how traceback turns pointers into aligned strings.

An :class:`AlignmentVariant` bundles those policies; ``run`` fills the matrix,
records one :class:`AlignmentStep` per filled cell in row-major order, and
hands the matrix to the walker.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from seqtrace.alignment.scoring import pair_label, pair_score
from seqtrace.alignment.traceback import Traceback
from seqtrace.alignment.types import (
    NEG_INF,
    AlignmentResult,
    AlignmentStep,
    CandidateScore,
    Direction,
    Matrix,
    MatrixCell,
    ScoringParams,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Band:
    """Diagonal band ``|row - col| <= width``."""

    width: int

    def contains(self, row: int, col: int) -> bool:
        return abs(row - col) <= self.width

    def columns(self, row: int, last_col: int) -> range:
        """Columns ``>= 1`` of ``row`` that fall inside the band."""
        return range(max(1, row - self.width), min(last_col, row + self.width) + 1)


Initializer = Callable[[int, int, ScoringParams, Band | None], Matrix]
StartSelector = Callable[[Matrix], MatrixCell]
Walker = Callable[[Matrix, str, str, MatrixCell], Traceback]


def blank_matrix(rows: int, cols: int, band: Band | None = None) -> Matrix:
    """Return a zero matrix; cells outside ``band`` start at ``-inf``."""
    return [
        [
            MatrixCell(
                score=0 if band is None or band.contains(i, j) else NEG_INF,
                direction=Direction.NONE,
                row=i,
                col=j,
            )
            for j in range(cols)
        ]
        for i in range(rows)
    ]


def format_score(value: float) -> str:
    if value == NEG_INF:
        return "-inf"
    return f"{value:g}"


def fill_matrix(
    matrix: Matrix,
    seq1: str,
    seq2: str,
    params: ScoringParams,
    *,
    floor_at_zero: bool = False,
    band: Band | None = None,
) -> list[AlignmentStep]:
    """Evaluate the recurrence for every fillable cell and log each decision.

    Ties resolve Diagonal > Up > Left > reset-to-zero. With a band, neighbours
    outside it contribute ``-inf`` and are left out of the step's candidates.
    """
    steps: list[AlignmentStep] = []
    last_col = len(matrix[0]) - 1

    for i in range(1, len(matrix)):
        columns = range(1, last_col + 1) if band is None else band.columns(i, last_col)
        for j in columns:
            char1 = seq1[i - 1]
            char2 = seq2[j - 1]
            substitution = pair_score(char1, char2, params)
            label = pair_label(char1, char2)

            candidates: list[CandidateScore] = []
            diagonal = up = left = NEG_INF

            diag_cell = matrix[i - 1][j - 1]
            if band is None or band.contains(i - 1, j - 1):
                diagonal = diag_cell.score + substitution
                candidates.append(
                    CandidateScore(
                        source="diagonal",
                        value=diagonal,
                        operation=f"{format_score(diag_cell.score)} + {format_score(substitution)} ({label})",
                    )
                )

            up_cell = matrix[i - 1][j]
            if band is None or band.contains(i - 1, j):
                up = up_cell.score + params.gap_penalty
                candidates.append(
                    CandidateScore(
                        source="up",
                        value=up,
                        operation=f"{format_score(up_cell.score)} + {format_score(params.gap_penalty)} (gap in seq2)",
                    )
                )

            left_cell = matrix[i][j - 1]
            if band is None or band.contains(i, j - 1):
                left = left_cell.score + params.gap_penalty
                candidates.append(
                    CandidateScore(
                        source="left",
                        value=left,
                        operation=f"{format_score(left_cell.score)} + {format_score(params.gap_penalty)} (gap in seq1)",
                    )
                )

            best = max(diagonal, up, left)
            if best == diagonal:
                direction = Direction.DIAGONAL
            elif best == up:
                direction = Direction.UP
            else:
                direction = Direction.LEFT

            explanation = f"Comparing {char1} with {char2}: {label.capitalize()}"
            if floor_at_zero:
                candidates.append(CandidateScore(source="zero", value=0, operation="Reset to 0 (local alignment)"))
                if best < 0:
                    best = 0
                    direction = Direction.NONE
                    explanation += " (reset to 0)"
            if band is not None:
                explanation += " (within band)"

            cell = matrix[i][j]
            cell.score = best
            cell.direction = direction

            steps.append(
                AlignmentStep(
                    row=i,
                    col=j,
                    score=best,
                    direction=direction,
                    explanation=explanation,
                    candidates=tuple(candidates),
                )
            )

    return steps


def bottom_right(matrix: Matrix) -> MatrixCell:
    return matrix[-1][-1]


@dataclass(frozen=True, slots=True)
class AlignmentVariant:
    """Policy bundle describing one alignment algorithm."""

    name: str
    initialize: Initializer
    select_start: StartSelector
    walk: Walker
    floor_at_zero: bool = False

    def run(
        self,
        seq1: str,
        seq2: str,
        params: ScoringParams,
        *,
        band: Band | None = None,
    ) -> AlignmentResult:
        rows = len(seq1) + 1
        cols = len(seq2) + 1
        _LOGGER.debug("Running %s alignment on %dx%d matrix", self.name, rows, cols)

        matrix = self.initialize(rows, cols, params, band)
        steps = fill_matrix(
            matrix,
            seq1,
            seq2,
            params,
            floor_at_zero=self.floor_at_zero,
            band=band,
        )
        start = self.select_start(matrix)
        traced = self.walk(matrix, seq1, seq2, start)

        return AlignmentResult(
            algorithm=self.name,
            matrix=matrix,
            aligned_seq1=traced.aligned_seq1,
            aligned_seq2=traced.aligned_seq2,
            score=start.score,
            path=traced.path,
            steps=tuple(steps),
            bandwidth=band.width if band is not None else None,
        )
