"""Lattice folding search and secondary-structure classification."""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from typing import Any, Final

from seqtrace.folding.annealing import metropolis_accept, run_simulated_annealing_folding
from seqtrace.folding.candidates import WalkGenerator, WalkState, evaluate_candidate, generate_walk
from seqtrace.folding.chou_fasman import run_chou_fasman
from seqtrace.folding.genetic import run_genetic_folding
from seqtrace.folding.hill_climbing import run_hill_climbing_folding
from seqtrace.folding.lattice import count_hh_contacts, residue_contributions, trace_walk
from seqtrace.folding.rng import LatticeRandom, seed_from_text
from seqtrace.folding.types import (
    Candidate,
    FoldingMetric,
    FoldingResult,
    FoldingStep,
    Move,
    Point,
    UniqueConformation,
)
from seqtrace.utils.config import (
    AnnealingConfig,
    ChouFasmanConfig,
    GeneticConfig,
    HillClimbConfig,
    config_from_mapping,
)

FoldingRunner = Callable[..., FoldingResult]

_REGISTRY: Final[dict[str, tuple[FoldingRunner, type]]] = {
    "genetic": (run_genetic_folding, GeneticConfig),
    "hill-climb": (run_hill_climbing_folding, HillClimbConfig),
    "simulated-annealing": (run_simulated_annealing_folding, AnnealingConfig),
    "chou-fasman": (run_chou_fasman, ChouFasmanConfig),
}

_STOCHASTIC: Final = frozenset({"genetic", "hill-climb", "simulated-annealing"})


def folding_from_name(name: str) -> tuple[FoldingRunner, type]:
    """Return ``(runner, config_class)`` for a folding algorithm.

    Raises KeyError for unknown algorithms.
    """
    key = name.lower().replace("_", "-")
    if key not in _REGISTRY:
        raise KeyError(f"Unknown folding algorithm: {name}. Available: {list(_REGISTRY.keys())}")
    return _REGISTRY[key]


def run_folding(
    name: str,
    sequence: str,
    params: Mapping[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
) -> FoldingResult:
    """Look up ``name``, build its config from ``params`` and run it."""
    runner, config_cls = folding_from_name(name)
    config = config_from_mapping(config_cls, params)
    if name.lower().replace("_", "-") in _STOCHASTIC:
        return runner(sequence, config, rng=rng)
    return runner(sequence, config)


__all__ = [
    "folding_from_name",
    "run_folding",
    "run_genetic_folding",
    "run_hill_climbing_folding",
    "run_simulated_annealing_folding",
    "run_chou_fasman",
    "metropolis_accept",
    "WalkGenerator",
    "WalkState",
    "evaluate_candidate",
    "generate_walk",
    "count_hh_contacts",
    "residue_contributions",
    "trace_walk",
    "LatticeRandom",
    "seed_from_text",
    "Candidate",
    "FoldingMetric",
    "FoldingResult",
    "FoldingStep",
    "Move",
    "Point",
    "UniqueConformation",
]
