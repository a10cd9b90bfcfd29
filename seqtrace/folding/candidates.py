"""Candidate construction shared by the lattice search drivers.

Random walks are produced by :class:`WalkGenerator`, a two-state machine:
it stays in ``ATTEMPTING`` while the retry budget lasts and moves to
``FALLBACK`` (the always-valid straight walk) once the budget is spent.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from seqtrace.folding.lattice import ORIGIN, advance, count_hh_contacts, rotate, trace_walk
from seqtrace.folding.types import MOVES, Candidate, Move
from seqtrace.utils.logging import get_logger

_LOGGER = get_logger("folding.candidates")

MAX_WALK_ATTEMPTS: Final = 20
MAX_REPAIR_ATTEMPTS: Final = 5


class WalkState(Enum):
    ATTEMPTING = "attempting"
    FALLBACK = "fallback"


def straight_walk(length: int) -> tuple[Move, ...]:
    """All-forward moves for ``length`` residues; never self-intersects."""
    return (Move.FORWARD,) * max(0, length - 1)


@dataclass(slots=True)
class WalkGenerator:
    """Randomized self-avoiding walk with a bounded retry budget.

    Each attempt grows the walk one residue at a time, trying the three
    moves in a shuffled order and keeping the first that lands on a free
    cell. An attempt that boxes itself in is discarded.
    """

    length: int
    rng: random.Random
    max_attempts: int = MAX_WALK_ATTEMPTS
    state: WalkState = field(default=WalkState.ATTEMPTING, init=False)
    attempts: int = field(default=0, init=False)

    def generate(self) -> tuple[Move, ...]:
        if self.length <= 1:
            return ()
        while self.state is WalkState.ATTEMPTING:
            if self.attempts >= self.max_attempts:
                self.state = WalkState.FALLBACK
                break
            self.attempts += 1
            moves = self._attempt()
            if moves is not None:
                return moves
        _LOGGER.debug("No self-avoiding walk after %d attempts; using straight walk", self.attempts)
        return straight_walk(self.length)

    def _attempt(self) -> tuple[Move, ...] | None:
        moves: list[Move] = []
        heading = 0
        current = ORIGIN
        visited = {ORIGIN}
        for _ in range(self.length - 1):
            order = list(MOVES)
            self.rng.shuffle(order)
            for move in order:
                next_heading = rotate(heading, move)
                nxt = advance(current, next_heading)
                if nxt not in visited:
                    moves.append(move)
                    heading, current = next_heading, nxt
                    visited.add(nxt)
                    break
            else:
                return None
        return tuple(moves)


def generate_walk(length: int, rng: random.Random) -> tuple[Move, ...]:
    return WalkGenerator(length, rng).generate()


def evaluate_candidate(sequence: str, moves: Sequence[Move], rng: random.Random) -> Candidate:
    """Score ``moves``, regenerating them if they collide.

    Up to :data:`MAX_REPAIR_ATTEMPTS` replacement walks are tried before the
    straight walk is used.
    """
    attempt = tuple(moves)
    for _ in range(MAX_REPAIR_ATTEMPTS):
        positions, valid = trace_walk(attempt)
        if valid and len(positions) == len(sequence):
            return Candidate(attempt, positions, count_hh_contacts(sequence, positions))
        attempt = generate_walk(len(sequence), rng)
    _LOGGER.debug("Repair budget exhausted for %s; using straight walk", sequence)
    fallback = straight_walk(len(sequence))
    positions, _ = trace_walk(fallback)
    return Candidate(fallback, positions, count_hh_contacts(sequence, positions))


def random_candidate(sequence: str, rng: random.Random) -> Candidate:
    return evaluate_candidate(sequence, generate_walk(len(sequence), rng), rng)


def mutate_moves(moves: Sequence[Move], rng: random.Random) -> tuple[Move, ...]:
    """Replace one uniformly chosen move with one of the two other moves."""
    if not moves:
        return tuple(moves)
    mutated = list(moves)
    index = rng.randrange(len(mutated))
    options = [move for move in MOVES if move is not mutated[index]]
    mutated[index] = rng.choice(options)
    return tuple(mutated)


def weighted_index(weights: Sequence[float], rng: random.Random) -> int:
    """Draw an index with probability proportional to ``max(0, weight)``.

    Falls back to a uniform draw when no weight is positive.
    """
    if not weights:
        msg = "weights must be non-empty"
        raise ValueError(msg)
    clipped = [max(0.0, float(weight)) for weight in weights]
    total = sum(clipped)
    if total <= 0:
        _LOGGER.debug("All %d weights are zero; sampling uniformly", len(clipped))
        return rng.randrange(len(clipped))
    pick = rng.random() * total
    cumulative = 0.0
    last_positive = 0
    for index, weight in enumerate(clipped):
        if weight == 0:
            continue
        last_positive = index
        cumulative += weight
        if pick < cumulative:
            return index
    return last_positive


def select_parent(population: Sequence[Candidate], rng: random.Random) -> Candidate:
    return population[weighted_index([candidate.fitness for candidate in population], rng)]
