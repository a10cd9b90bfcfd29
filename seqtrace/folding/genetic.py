"""Genetic search over lattice conformations.

Each generation breeds a full brood of children from fitness-proportional
parents using a structure-aware crossover, then selects survivors from
parents and children combined: the top elites are kept unconditionally and
the remaining slots are filled by fitness-weighted sampling without
replacement. Non-elite survivors mutate at a low rate.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from seqtrace.folding.candidates import (
    evaluate_candidate,
    generate_walk,
    mutate_moves,
    random_candidate,
    select_parent,
    weighted_index,
)
from seqtrace.folding.lattice import residue_contributions, trace_walk
from seqtrace.folding.rng import make_rng
from seqtrace.folding.types import (
    Candidate,
    FoldingMetric,
    FoldingResult,
    FoldingStep,
    Move,
    UniqueConformation,
    moves_to_string,
)
from seqtrace.utils.config import GeneticConfig
from seqtrace.utils.logging import get_logger

_LOGGER = get_logger("folding.genetic")

SUMMARY = (
    "Genetic search builds self-avoiding lattice conformations, rewards hydrophobic contacts, "
    "and evolves them with strategic crossover, elitist selection, and rare mutations."
)


def crossover_point(parent_a: Candidate, parent_b: Candidate, sequence: str) -> int:
    """Cut where the parents' per-residue contact contributions differ the most.

    Only interior residues ``1..n-2`` are considered and the first maximal gap
    wins. Without any gap the midpoint is used. The result is clamped to
    ``[0, n - 2]``.
    """
    contrib_a = residue_contributions(sequence, parent_a.positions)
    contrib_b = residue_contributions(sequence, parent_b.positions)
    best_index = len(sequence) // 2
    best_gap = 0
    for i in range(1, len(sequence) - 1):
        gap = abs(contrib_a[i] - contrib_b[i])
        if gap > best_gap:
            best_gap = gap
            best_index = i
    return min(max(0, len(sequence) - 2), max(0, best_index))


def strategic_crossover(
    parent_a: Candidate,
    parent_b: Candidate,
    sequence: str,
    rng: random.Random,
) -> tuple[Move, ...]:
    """Splice the parent with the stronger prefix onto the other's suffix.

    Fallback order on self-collision: reversed splice, a mutation of the
    fitter parent, a fresh random walk.
    """
    pivot = crossover_point(parent_a, parent_b, sequence)
    front_a = sum(residue_contributions(sequence, parent_a.positions)[: pivot + 1])
    front_b = sum(residue_contributions(sequence, parent_b.positions)[: pivot + 1])
    head, tail = (parent_a, parent_b) if front_a >= front_b else (parent_b, parent_a)
    prefix = head.moves[:pivot]
    suffix = tail.moves[pivot:]

    child = prefix + suffix
    if trace_walk(child)[1]:
        return child
    flipped = suffix + prefix
    if trace_walk(flipped)[1]:
        return flipped
    fitter = parent_a if parent_a.fitness >= parent_b.fitness else parent_b
    mutated = mutate_moves(fitter.moves, rng)
    if trace_walk(mutated)[1]:
        return mutated
    return generate_walk(len(sequence), rng)


def elite_count(size: int, fraction: float) -> int:
    return max(1, math.floor(size * fraction))


def select_survivors(
    combined: list[Candidate],
    population_size: int,
    rng: random.Random,
    elite_fraction: float = 0.05,
) -> tuple[list[Candidate], int]:
    """Return ``(survivors, elites)``; the first ``elites`` survivors are the elites."""
    ranked = sorted(combined, key=lambda candidate: candidate.fitness, reverse=True)
    elites = elite_count(len(ranked), elite_fraction)
    survivors = ranked[:elites]
    pool = ranked[elites:]
    while len(survivors) < population_size and pool:
        pick = weighted_index([candidate.fitness for candidate in pool], rng)
        survivors.append(pool.pop(pick))
    # Only reachable when parents + children cannot fill the population.
    while len(survivors) < population_size and len(survivors) < len(ranked):
        survivors.append(ranked[len(survivors)])
    return survivors, elites


def _fittest(population: list[Candidate]) -> Candidate:
    best = population[0]
    for candidate in population:
        if candidate.fitness > best.fitness:
            best = candidate
    return best


def _diversity(population: list[Candidate]) -> int:
    return len({candidate.path for candidate in population})


def unique_conformations(population: list[Candidate], elites: int) -> tuple[UniqueConformation, ...]:
    """Deduplicate by move string, keeping the fittest copy and any elite flag."""
    unique: dict[str, UniqueConformation] = {}
    for idx, candidate in enumerate(population):
        is_elite = idx < elites
        path = candidate.path
        entry = unique.get(path)
        if entry is None or candidate.fitness > entry.fitness:
            unique[path] = UniqueConformation(
                path=path,
                fitness=candidate.fitness,
                contacts=candidate.fitness,
                is_elite=is_elite or (entry is not None and entry.is_elite),
                positions=candidate.positions,
            )
        elif is_elite and not entry.is_elite:
            unique[path] = UniqueConformation(
                path=entry.path,
                fitness=entry.fitness,
                contacts=entry.contacts,
                is_elite=True,
                positions=entry.positions,
            )
    return tuple(sorted(unique.values(), key=lambda entry: entry.fitness, reverse=True))


@dataclass(slots=True)
class _Generation:
    population: list[Candidate]
    elites: int
    mutations: int


def _evolve(
    population: list[Candidate],
    sequence: str,
    config: GeneticConfig,
    rng: random.Random,
) -> _Generation:
    children: list[Candidate] = []
    while len(children) < config.population_size:
        parent_a = select_parent(population, rng)
        parent_b = select_parent(population, rng)
        child_moves = strategic_crossover(parent_a, parent_b, sequence, rng)
        children.append(evaluate_candidate(sequence, child_moves, rng))

    survivors, elites = select_survivors(
        population + children, config.population_size, rng, config.elite_fraction
    )

    mutations = 0
    next_population: list[Candidate] = []
    for idx, candidate in enumerate(survivors):
        if idx >= elites and rng.random() < config.mutation_rate:
            mutations += 1
            candidate = evaluate_candidate(sequence, mutate_moves(candidate.moves, rng), rng)
        next_population.append(candidate)
    return _Generation(next_population, elites, mutations)


def run_genetic_folding(
    sequence: str,
    config: GeneticConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> FoldingResult:
    """Fold ``sequence`` with the genetic search.

    Parameters
    ----------
    sequence : str
        Validated protein sequence.
    config : GeneticConfig | None
        Search parameters; defaults when omitted.
    rng : random.Random | None
        Random source. Defaults to a generator seeded from ``sequence``.

    Returns
    -------
    FoldingResult
        Best conformation ever seen, the step trace and the distinct
        conformations of the final population.
    """
    config = config or GeneticConfig()
    rng = make_rng(sequence, rng=rng)
    _LOGGER.info(
        "Genetic folding of %d residues: population=%d generations=%d",
        len(sequence),
        config.population_size,
        config.generations,
    )

    population = [random_candidate(sequence, rng) for _ in range(config.population_size)]
    global_best = _fittest(population)
    last_elites = 0

    steps = [
        FoldingStep(
            title="Population Initialization",
            description=(
                f"Created {config.population_size} random self-avoiding conformations to seed the search."
            ),
            structure_preview=population[0].path,
            metrics=(
                FoldingMetric("Initial Diversity", _diversity(population)),
                FoldingMetric("Best H-H Contacts", global_best.fitness),
            ),
            note="Random diversity provides the genetic material for crossover and mutation.",
            positions=population[0].positions,
        )
    ]

    for gen in range(config.generations):
        generation = _evolve(population, sequence, config, rng)
        population = generation.population
        last_elites = generation.elites

        generation_best = _fittest(population)
        if generation_best.fitness > global_best.fitness:
            global_best = generation_best
        average = sum(candidate.fitness for candidate in population) / len(population)

        steps.append(
            FoldingStep(
                title=f"Generation {gen + 1}",
                description="Population, reproduction, selection and mutation cycle completed.",
                structure_preview=generation_best.path,
                metrics=(
                    FoldingMetric("Best H-H Contacts", generation_best.fitness),
                    FoldingMetric("Average Fitness", f"{average:.2f}"),
                    FoldingMetric("Unique Conformations", _diversity(population)),
                    FoldingMetric("Elites Preserved", generation.elites),
                    FoldingMetric("Mutations Applied", generation.mutations),
                ),
                note=(
                    "Elites are kept unconditionally, fitness-proportional selection keeps promising "
                    "diversity, and rare mutations help escape local optima."
                ),
                positions=generation_best.positions,
            )
        )
        _LOGGER.debug(
            "Generation %d: best=%d average=%.2f mutations=%d",
            gen + 1,
            generation_best.fitness,
            average,
            generation.mutations,
        )

    steps.append(
        FoldingStep(
            title="Final Selection",
            description="Returning the conformation with the most H-H contacts discovered.",
            structure_preview=global_best.path,
            metrics=(
                FoldingMetric("Stability (H-H contacts)", global_best.fitness),
                FoldingMetric("Generations", config.generations),
                FoldingMetric("Population Size", config.population_size),
            ),
            note="Higher H-H contacts indicate tighter hydrophobic packing and a more compact fold.",
            positions=global_best.positions,
        )
    )

    _LOGGER.info("Genetic folding finished with %d H-H contacts", global_best.fitness)
    return FoldingResult(
        algorithm="genetic",
        final_structure=moves_to_string(global_best.moves),
        stability_score=global_best.fitness,
        summary=SUMMARY,
        steps=tuple(steps),
        unique_conformations=unique_conformations(population, last_elites),
        positions=global_best.positions,
        params=config.as_dict(),
    )
