"""Shared alignment datatypes.

The matrix, path and step log of an :class:`AlignmentResult` are the complete
contract handed to a visualization layer; nothing else about a run is exposed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

NEG_INF = -math.inf


def json_score(value: float) -> float | None:
    """Render a score for JSON, mapping the out-of-band ``-inf`` to ``None``."""
    return value if math.isfinite(value) else None


class Direction(Enum):
    """Traceback pointer stored in every DP cell."""

    NONE = "none"
    DIAGONAL = "diagonal"
    UP = "up"
    LEFT = "left"


@dataclass(frozen=True, slots=True)
class ScoringParams:
    match: float
    mismatch: float
    gap_penalty: float

    def as_dict(self) -> dict[str, float]:
        return {"match": self.match, "mismatch": self.mismatch, "gap_penalty": self.gap_penalty}


@dataclass(frozen=True, slots=True)
class BandedParams(ScoringParams):
    bandwidth: int

    def __post_init__(self) -> None:
        if self.bandwidth < 0:
            raise ValueError(f"bandwidth must be >= 0, got {self.bandwidth}")

    def as_dict(self) -> dict[str, float]:
        return {**ScoringParams.as_dict(self), "bandwidth": self.bandwidth}


@dataclass(slots=True)
class MatrixCell:
    """One DP cell. ``score`` may be ``-inf`` for cells outside a band."""

    score: float
    direction: Direction
    row: int
    col: int
    is_on_path: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "score": json_score(self.score),
            "direction": self.direction.value,
            "row": self.row,
            "col": self.col,
            "is_on_path": self.is_on_path,
        }


Matrix = list[list[MatrixCell]]


@dataclass(frozen=True, slots=True)
class CandidateScore:
    """A candidate value weighed while filling a cell."""

    source: str
    value: float
    operation: str

    def to_dict(self) -> dict[str, object]:
        return {"source": self.source, "value": json_score(self.value), "operation": self.operation}


@dataclass(frozen=True, slots=True)
class AlignmentStep:
    """Replay record for a single filled cell, in row-major fill order."""

    row: int
    col: int
    score: float
    direction: Direction
    explanation: str
    candidates: tuple[CandidateScore, ...]

    def candidate(self, source: str) -> CandidateScore | None:
        for entry in self.candidates:
            if entry.source == source:
                return entry
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "row": self.row,
            "col": self.col,
            "score": json_score(self.score),
            "direction": self.direction.value,
            "explanation": self.explanation,
            "candidates": [entry.to_dict() for entry in self.candidates],
        }


@dataclass(frozen=True, slots=True)
class AlignmentResult:
    """Final alignment with its matrix, traceback path and fill trace.

    ``bandwidth`` is the effective bandwidth used by banded alignment (which
    may be wider than requested) and ``None`` for the unbanded variants.
    """

    algorithm: str
    matrix: Matrix
    aligned_seq1: str
    aligned_seq2: str
    score: float
    path: tuple[tuple[int, int], ...]
    steps: tuple[AlignmentStep, ...]
    bandwidth: int | None = field(default=None)

    def score_array(self) -> np.ndarray:
        """Return the DP scores as a float array (``-inf`` outside a band)."""
        return np.array([[cell.score for cell in row] for row in self.matrix], dtype=np.float64)

    def to_dict(self, *, include_trace: bool = True) -> dict[str, object]:
        payload: dict[str, object] = {
            "algorithm": self.algorithm,
            "aligned_seq1": self.aligned_seq1,
            "aligned_seq2": self.aligned_seq2,
            "score": self.score,
            "path": [list(cell) for cell in self.path],
        }
        if self.bandwidth is not None:
            payload["bandwidth"] = self.bandwidth
        if include_trace:
            payload["matrix"] = [[cell.to_dict() for cell in row] for row in self.matrix]
            payload["steps"] = [step.to_dict() for step in self.steps]
        return payload
