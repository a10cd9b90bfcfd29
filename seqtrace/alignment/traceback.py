"""Traceback walkers that turn DP pointers into aligned strings and a path."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from seqtrace.alignment.types import Direction, Matrix, MatrixCell

_LOGGER = logging.getLogger(__name__)

GAP = "-"


@dataclass(frozen=True, slots=True)
class Traceback:
    aligned_seq1: str
    aligned_seq2: str
    path: tuple[tuple[int, int], ...]


class _Builder:
    """Accumulates columns and path cells from the end of the alignment backwards."""

    def __init__(self, matrix: Matrix, seq1: str, seq2: str) -> None:
        self._matrix = matrix
        self._seq1 = seq1
        self._seq2 = seq2
        self._top: list[str] = []
        self._bottom: list[str] = []
        self._path: list[tuple[int, int]] = []

    def visit(self, row: int, col: int) -> None:
        self._path.append((row, col))
        self._matrix[row][col].is_on_path = True

    def step(self, row: int, col: int, direction: Direction) -> tuple[int, int]:
        """Emit the column for ``direction`` at ``(row, col)`` and return the next cell."""
        if direction is Direction.DIAGONAL:
            self._top.append(self._seq1[row - 1])
            self._bottom.append(self._seq2[col - 1])
            return row - 1, col - 1
        if direction is Direction.UP:
            self._top.append(self._seq1[row - 1])
            self._bottom.append(GAP)
            return row - 1, col
        if direction is Direction.LEFT:
            self._top.append(GAP)
            self._bottom.append(self._seq2[col - 1])
            return row, col - 1
        msg = f"Cell ({row}, {col}) has no traceback pointer"
        raise ValueError(msg)

    def build(self) -> Traceback:
        return Traceback(
            aligned_seq1="".join(reversed(self._top)),
            aligned_seq2="".join(reversed(self._bottom)),
            path=tuple(reversed(self._path)),
        )


def walk_to_origin(matrix: Matrix, seq1: str, seq2: str, start: MatrixCell) -> Traceback:
    """Follow pointers from ``start`` until ``(0, 0)`` (global and banded)."""
    builder = _Builder(matrix, seq1, seq2)
    row, col = start.row, start.col
    while row > 0 or col > 0:
        builder.visit(row, col)
        direction = matrix[row][col].direction
        if direction is Direction.NONE:
            _LOGGER.error("Traceback stalled at (%d, %d) before reaching the origin", row, col)
            msg = f"Traceback stalled at ({row}, {col}); the matrix was not fully filled"
            raise RuntimeError(msg)
        row, col = builder.step(row, col, direction)
    builder.visit(0, 0)
    return builder.build()


def walk_until_zero(matrix: Matrix, seq1: str, seq2: str, start: MatrixCell) -> Traceback:
    """Follow pointers from ``start`` while cells stay positive (local).

    Stops at the first cell with a non-positive score or no pointer, or at a
    boundary. The path holds only the walked cells, so it need not reach the
    origin.
    """
    builder = _Builder(matrix, seq1, seq2)
    row, col = start.row, start.col
    while row > 0 and col > 0:
        cell = matrix[row][col]
        if cell.score <= 0 or cell.direction is Direction.NONE:
            break
        builder.visit(row, col)
        row, col = builder.step(row, col, cell.direction)
    return builder.build()


def walk_with_free_end_gaps(matrix: Matrix, seq1: str, seq2: str, start: MatrixCell) -> Traceback:
    """Dovetail traceback with uncharged trailing and leading gap runs.

    The trailing run connects the bottom-right corner to ``start`` along the
    last column or last row. After the pointer walk reaches row 0 or column 0,
    the leading run follows the boundary to the origin.
    """
    builder = _Builder(matrix, seq1, seq2)
    last_row = len(matrix) - 1
    last_col = len(matrix[0]) - 1

    for row in range(last_row, start.row, -1):
        builder.visit(row, last_col)
        builder.step(row, last_col, Direction.UP)
    for col in range(last_col, start.col, -1):
        builder.visit(last_row, col)
        builder.step(last_row, col, Direction.LEFT)

    row, col = start.row, start.col
    while row > 0 and col > 0:
        builder.visit(row, col)
        row, col = builder.step(row, col, matrix[row][col].direction)

    while row > 0:
        builder.visit(row, 0)
        row, col = builder.step(row, 0, Direction.UP)
    while col > 0:
        builder.visit(0, col)
        row, col = builder.step(0, col, Direction.LEFT)

    builder.visit(0, 0)
    return builder.build()
