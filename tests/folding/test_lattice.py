"""Tests for lattice geometry, contact counting and candidate construction."""

import random

import pytest

from seqtrace.folding.candidates import (
    WalkGenerator,
    WalkState,
    evaluate_candidate,
    generate_walk,
    mutate_moves,
    straight_walk,
    weighted_index,
)
from seqtrace.folding.lattice import count_hh_contacts, residue_contributions, rotate, trace_walk
from seqtrace.folding.rng import LatticeRandom, make_rng, seed_from_text
from seqtrace.folding.types import Move, Point, moves_from_string, moves_to_string


class TestTraceWalk:
    def test_forward_heads_north(self) -> None:
        positions, valid = trace_walk(moves_from_string("FF"))
        assert valid
        assert positions == (Point(0, 0), Point(0, 1), Point(0, 2))

    def test_right_turns_clockwise(self) -> None:
        positions, valid = trace_walk(moves_from_string("RRR"))
        assert valid
        assert positions == (Point(0, 0), Point(1, 0), Point(1, -1), Point(0, -1))

    def test_left_turns_counter_clockwise(self) -> None:
        positions, _ = trace_walk(moves_from_string("L"))
        assert positions[-1] == Point(-1, 0)

    def test_collision_stops_walk(self) -> None:
        positions, valid = trace_walk(moves_from_string("RRRR"))
        assert not valid
        assert len(positions) == 4

    def test_rotation_wraps(self) -> None:
        assert rotate(0, Move.LEFT) == 3
        assert rotate(3, Move.RIGHT) == 0
        assert rotate(2, Move.FORWARD) == 2

    def test_move_string_round_trip(self) -> None:
        assert moves_to_string(moves_from_string("lfr")) == "LFR"


class TestContacts:
    """H-H contacts count non-consecutive hydrophobic neighbours."""

    def test_square_fold_has_one_contact(self) -> None:
        positions, _ = trace_walk(moves_from_string("RRR"))
        assert count_hh_contacts("VKKV", positions) == 1
        assert count_hh_contacts("VKKK", positions) == 0
        assert count_hh_contacts("VVVV", positions) == 1

    def test_consecutive_residues_do_not_count(self) -> None:
        positions, _ = trace_walk(straight_walk(5))
        assert count_hh_contacts("VVVVV", positions) == 0

    def test_contributions_credit_both_ends(self) -> None:
        positions, _ = trace_walk(moves_from_string("RRR"))
        contributions = residue_contributions("VKKV", positions)
        assert contributions == [1, 0, 0, 1]
        assert sum(contributions) == 2 * count_hh_contacts("VKKV", positions)


class TestWalkGenerator:
    def test_single_residue_has_no_moves(self) -> None:
        assert generate_walk(1, random.Random(0)) == ()

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_generated_walks_are_self_avoiding(self, seed) -> None:
        moves = generate_walk(40, random.Random(seed))
        positions, valid = trace_walk(moves)
        assert valid
        assert len(positions) == 40
        assert len(set(positions)) == 40

    def test_exhausted_budget_falls_back_to_straight_walk(self) -> None:
        generator = WalkGenerator(6, random.Random(0), max_attempts=0)
        assert generator.generate() == straight_walk(6)
        assert generator.state is WalkState.FALLBACK

    def test_successful_attempt_stays_attempting(self) -> None:
        generator = WalkGenerator(6, random.Random(0))
        generator.generate()
        assert generator.state is WalkState.ATTEMPTING
        assert 1 <= generator.attempts <= 20


class TestCandidateRepair:
    def test_valid_moves_are_kept(self) -> None:
        candidate = evaluate_candidate("VKKV", moves_from_string("RRR"), random.Random(0))
        assert candidate.path == "RRR"
        assert candidate.fitness == 1

    def test_colliding_moves_are_replaced(self) -> None:
        candidate = evaluate_candidate("VKKVK", moves_from_string("RRRR"), random.Random(0))
        assert len(candidate.positions) == 5
        assert len(set(candidate.positions)) == 5

    def test_wrong_length_is_replaced(self) -> None:
        candidate = evaluate_candidate("VKKVKV", moves_from_string("FF"), random.Random(0))
        assert len(candidate.moves) == 5


class TestMutationAndSelection:
    def test_mutation_flips_exactly_one_move(self) -> None:
        rng = random.Random(5)
        original = straight_walk(12)
        for _ in range(50):
            mutated = mutate_moves(original, rng)
            assert sum(a is not b for a, b in zip(original, mutated)) == 1

    def test_mutation_of_empty_moves(self) -> None:
        assert mutate_moves((), random.Random(0)) == ()

    def test_zero_weights_never_chosen(self) -> None:
        rng = random.Random(11)
        picks = {weighted_index([0, 3, 0, 1], rng) for _ in range(500)}
        assert picks == {1, 3}

    def test_all_zero_weights_fall_back_to_uniform(self) -> None:
        rng = random.Random(11)
        picks = {weighted_index([0, 0, 0], rng) for _ in range(200)}
        assert picks == {0, 1, 2}

    def test_negative_weights_count_as_zero(self) -> None:
        rng = random.Random(3)
        assert {weighted_index([-5, 2], rng) for _ in range(100)} == {1}

    def test_empty_weights_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            weighted_index([], random.Random(0))


class TestLatticeRandom:
    def test_text_hash(self) -> None:
        assert seed_from_text("") == 0
        assert seed_from_text("ab") == 97 * 31 + 98

    def test_first_draw_from_zero_seed(self) -> None:
        assert LatticeRandom(0).random() == 1013904223 / 2**32

    def test_same_seed_same_stream(self) -> None:
        first = LatticeRandom("MKV")
        second = LatticeRandom("MKV")
        assert [first.random() for _ in range(20)] == [second.random() for _ in range(20)]

    def test_draws_stay_in_unit_interval(self) -> None:
        rng = LatticeRandom(123)
        assert all(0.0 <= rng.random() < 1.0 for _ in range(1000))

    def test_helpers_cover_small_ranges(self) -> None:
        rng = LatticeRandom("coverage")
        assert {rng.randrange(2) for _ in range(200)} == {0, 1}
        assert {rng.choice("LFR") for _ in range(200)} == {"L", "F", "R"}

    def test_state_round_trip(self) -> None:
        rng = LatticeRandom(42)
        state = rng.getstate()
        first = rng.random()
        rng.setstate(state)
        assert rng.random() == first

    def test_make_rng_prefers_injected_generator(self) -> None:
        injected = random.Random(1)
        assert make_rng("ACD", "hill", injected) is injected
        salted = make_rng("ACD", "hill")
        assert salted.random() == LatticeRandom("ACDhill").random()
