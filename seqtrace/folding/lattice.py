"""2-D square-lattice geometry and the hydrophobic contact energy model."""

from __future__ import annotations

from typing import Final

from seqtrace.folding.types import Move, Point

HYDROPHOBIC: Final[frozenset[str]] = frozenset("AVILMFYW")

ORIGIN: Final = Point(0, 0)

# Headings clockwise from north.
_STEPS: Final[tuple[Point, ...]] = (Point(0, 1), Point(1, 0), Point(0, -1), Point(-1, 0))


def rotate(heading: int, move: Move) -> int:
    """Return the heading index after applying ``move``."""
    if move is Move.LEFT:
        return (heading + 3) % 4
    if move is Move.RIGHT:
        return (heading + 1) % 4
    return heading


def advance(point: Point, heading: int) -> Point:
    step = _STEPS[heading]
    return Point(point.x + step.x, point.y + step.y)


def trace_walk(moves: tuple[Move, ...] | list[Move]) -> tuple[tuple[Point, ...], bool]:
    """Lay ``moves`` on the lattice starting at the origin, heading north.

    Returns
    -------
    tuple[tuple[Point, ...], bool]
        Positions visited and a validity flag. On the first revisited
        coordinate the walk stops and the positions placed so far are
        returned with ``False``.
    """
    positions = [ORIGIN]
    visited = {ORIGIN}
    heading = 0
    for move in moves:
        heading = rotate(heading, move)
        nxt = advance(positions[-1], heading)
        if nxt in visited:
            return tuple(positions), False
        positions.append(nxt)
        visited.add(nxt)
    return tuple(positions), True


def hydrophobic_mask(sequence: str) -> list[bool]:
    return [residue in HYDROPHOBIC for residue in sequence]


def _contact_pairs(sequence: str, positions: tuple[Point, ...]):
    mask = hydrophobic_mask(sequence)
    for i, first in enumerate(positions):
        if not mask[i]:
            continue
        for j in range(i + 2, len(positions)):
            if not mask[j]:
                continue
            second = positions[j]
            if abs(first.x - second.x) + abs(first.y - second.y) == 1:
                yield i, j


def count_hh_contacts(sequence: str, positions: tuple[Point, ...]) -> int:
    """Count non-consecutive hydrophobic pairs at lattice distance 1."""
    return sum(1 for _ in _contact_pairs(sequence, positions))


def residue_contributions(sequence: str, positions: tuple[Point, ...]) -> list[int]:
    """Per-residue share of the H-H contacts (each contact credits both ends)."""
    contributions = [0] * len(sequence)
    for i, j in _contact_pairs(sequence, positions):
        contributions[i] += 1
        contributions[j] += 1
    return contributions
