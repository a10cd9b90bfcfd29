"""Shared folding datatypes (surfaces)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class Move(Enum):
    """Turn instruction relative to the current heading."""

    LEFT = "L"
    FORWARD = "F"
    RIGHT = "R"


MOVES: tuple[Move, ...] = (Move.LEFT, Move.FORWARD, Move.RIGHT)


class Point(NamedTuple):
    x: int
    y: int


def moves_to_string(moves: tuple[Move, ...] | list[Move]) -> str:
    return "".join(move.value for move in moves)


def moves_from_string(text: str) -> tuple[Move, ...]:
    return tuple(Move(char) for char in text.upper())


@dataclass(frozen=True, slots=True)
class Candidate:
    """A lattice conformation: moves, derived coordinates and H-H contact count.

    ``positions`` starts at the origin, holds one point per residue and never
    repeats a coordinate.
    """

    moves: tuple[Move, ...]
    positions: tuple[Point, ...]
    fitness: int

    @property
    def path(self) -> str:
        return moves_to_string(self.moves)


@dataclass(frozen=True, slots=True)
class FoldingMetric:
    label: str
    value: str | int | float
    hint: str | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"label": self.label, "value": self.value}
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


@dataclass(frozen=True, slots=True)
class FoldingStep:
    """Replay record for one generation, iteration or residue.

    ``positions`` carries the lattice conformation shown by the step for the
    search drivers and is ``None`` for Chou-Fasman.
    """

    title: str
    description: str
    structure_preview: str = ""
    metrics: tuple[FoldingMetric, ...] = ()
    note: str | None = None
    positions: tuple[Point, ...] | None = None

    def metric(self, label: str) -> str | int | float | None:
        for entry in self.metrics:
            if entry.label == label:
                return entry.value
        return None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "title": self.title,
            "description": self.description,
            "structure_preview": self.structure_preview,
            "metrics": [entry.to_dict() for entry in self.metrics],
        }
        if self.note is not None:
            payload["note"] = self.note
        if self.positions is not None:
            payload["positions"] = [list(point) for point in self.positions]
        return payload


@dataclass(frozen=True, slots=True)
class UniqueConformation:
    path: str
    fitness: int
    contacts: int
    is_elite: bool = False
    positions: tuple[Point, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "fitness": self.fitness,
            "contacts": self.contacts,
            "is_elite": self.is_elite,
            "positions": [list(point) for point in self.positions],
        }


@dataclass(frozen=True, slots=True)
class FoldingResult:
    """Outcome of a folding run.

    ``final_structure`` is a move string for the lattice drivers and an
    ``H``/``E``/``C`` string for Chou-Fasman. ``converged`` is only set by
    hill climbing.
    """

    algorithm: str
    final_structure: str
    stability_score: float
    summary: str
    steps: tuple[FoldingStep, ...]
    unique_conformations: tuple[UniqueConformation, ...] | None = None
    positions: tuple[Point, ...] | None = None
    converged: bool | None = None
    params: dict[str, object] = field(default_factory=dict)

    def to_dict(self, *, include_trace: bool = True) -> dict[str, object]:
        payload: dict[str, object] = {
            "algorithm": self.algorithm,
            "final_structure": self.final_structure,
            "stability_score": self.stability_score,
            "summary": self.summary,
            "params": dict(self.params),
        }
        if self.positions is not None:
            payload["positions"] = [list(point) for point in self.positions]
        if self.converged is not None:
            payload["converged"] = self.converged
        if include_trace:
            payload["steps"] = [step.to_dict() for step in self.steps]
            if self.unique_conformations is not None:
                payload["unique_conformations"] = [entry.to_dict() for entry in self.unique_conformations]
        return payload
