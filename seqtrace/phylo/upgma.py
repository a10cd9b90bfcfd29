"""UPGMA clustering of a distance matrix with a per-merge trace.

The closest pair is merged at half its distance, distances to the new
cluster are size-weighted averages, and the merged cluster becomes row 0 of
the reduced matrix.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

import numpy as np

from seqtrace.utils.logging import get_logger

_LOGGER = get_logger("phylo.upgma")

SYMMETRY_TOLERANCE: Final = 1e-3


@dataclass(frozen=True, slots=True)
class UpgmaStep:
    step_number: int
    title: str
    description: str
    matrix: tuple[tuple[float, ...], ...]
    labels: tuple[str, ...]
    explanation: str
    merged_pair: tuple[str, str] | None = None
    new_cluster: str | None = None
    cluster_height: float | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "step_number": self.step_number,
            "title": self.title,
            "description": self.description,
            "matrix": [list(row) for row in self.matrix],
            "labels": list(self.labels),
            "merged_pair": list(self.merged_pair) if self.merged_pair else None,
            "new_cluster": self.new_cluster,
            "cluster_height": self.cluster_height,
            "explanation": self.explanation,
        }


@dataclass(frozen=True, slots=True)
class UpgmaResult:
    labels: tuple[str, ...]
    steps: tuple[UpgmaStep, ...]
    root: str

    @property
    def newick(self) -> str:
        return f"{self.root};"

    @property
    def merge_heights(self) -> dict[str, float]:
        """Height of every internal cluster keyed by its label."""
        return {
            step.new_cluster: step.cluster_height
            for step in self.steps
            if step.new_cluster is not None and step.cluster_height is not None
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "labels": list(self.labels),
            "root": self.root,
            "newick": self.newick,
            "steps": [step.to_dict() for step in self.steps],
        }


def validate_distance_matrix(labels: Sequence[str], distances: Sequence[Sequence[float]]) -> np.ndarray:
    """Check shape, diagonal and symmetry and return the matrix as ``float64``.

    Raises
    ------
    ValueError
        On fewer than two labels, a non-square matrix, a label/row count
        mismatch, a non-zero diagonal or an asymmetric entry.
    """
    if len(labels) < 2:
        msg = "labels must contain at least 2 taxa"
        raise ValueError(msg)
    if len(set(labels)) != len(labels):
        msg = "labels must be unique"
        raise ValueError(msg)
    if len(distances) != len(labels):
        msg = f"distances must have {len(labels)} rows to match the labels, got {len(distances)}"
        raise ValueError(msg)
    for index, row in enumerate(distances):
        if len(row) != len(labels):
            msg = f"row {index + 1} must have {len(labels)} values, got {len(row)}"
            raise ValueError(msg)
    matrix = np.asarray(distances, dtype=np.float64)
    if not np.all(np.isfinite(matrix)):
        msg = "distances must be finite numbers"
        raise ValueError(msg)
    if np.any(np.diag(matrix) != 0):
        msg = "distances must have a zero diagonal"
        raise ValueError(msg)
    if not np.allclose(matrix, matrix.T, rtol=0.0, atol=SYMMETRY_TOLERANCE):
        msg = "distances must be symmetric"
        raise ValueError(msg)
    return matrix


def closest_pair(matrix: np.ndarray) -> tuple[int, int]:
    """First minimum of the strict upper triangle in row-major order."""
    rows, cols = np.triu_indices(matrix.shape[0], k=1)
    flat = int(np.argmin(matrix[rows, cols]))
    return int(rows[flat]), int(cols[flat])


def _snapshot(matrix: np.ndarray) -> tuple[tuple[float, ...], ...]:
    return tuple(tuple(float(value) for value in row) for row in np.round(matrix, 2))


def run_upgma(labels: Sequence[str], distances: Sequence[Sequence[float]]) -> UpgmaResult:
    """Cluster ``labels`` until a single root cluster remains."""
    matrix = validate_distance_matrix(labels, distances)
    current = list(labels)
    sizes = {label: 1 for label in current}
    _LOGGER.info("UPGMA over %d taxa", len(current))

    steps = [
        UpgmaStep(
            step_number=0,
            title="Initial Distance Matrix",
            description="Starting with the original pairwise distance matrix between all taxa.",
            matrix=_snapshot(matrix),
            labels=tuple(current),
            explanation=(
                f"We begin with {len(current)} taxa: {', '.join(current)}. "
                "UPGMA iteratively merges the closest pair until only one cluster remains."
            ),
        )
    ]

    step_number = 1
    while len(current) > 1:
        i, j = closest_pair(matrix)
        distance = float(matrix[i, j])
        first, second = current[i], current[j]
        merged = f"({first},{second})"
        height = distance / 2
        size_a, size_b = sizes[first], sizes[second]

        keep = [k for k in range(len(current)) if k not in (i, j)]
        averaged = (size_a * matrix[i, keep] + size_b * matrix[j, keep]) / (size_a + size_b)
        reduced = np.zeros((len(keep) + 1, len(keep) + 1), dtype=np.float64)
        reduced[0, 1:] = averaged
        reduced[1:, 0] = averaged
        reduced[1:, 1:] = matrix[np.ix_(keep, keep)]

        current = [merged] + [current[k] for k in keep]
        sizes[merged] = size_a + size_b
        matrix = reduced

        steps.append(
            UpgmaStep(
                step_number=step_number,
                title=f"Step {step_number}: Merge {first} and {second}",
                description=f"Merging the closest pair with distance {distance:.2f}.",
                matrix=_snapshot(matrix),
                labels=tuple(current),
                explanation=(
                    f"The minimum distance is {distance:.2f} between {first} and {second}. "
                    f"They merge into {merged} at height {height:.2f}; distances to it are "
                    f"({size_a} x d({first}, X) + {size_b} x d({second}, X)) / {size_a + size_b}."
                ),
                merged_pair=(first, second),
                new_cluster=merged,
                cluster_height=height,
            )
        )
        _LOGGER.debug("Merged %s and %s at height %.3f", first, second, height)
        step_number += 1

    return UpgmaResult(labels=tuple(labels), steps=tuple(steps), root=current[0])
