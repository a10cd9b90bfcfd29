"""Tests for the Chou-Fasman secondary-structure classifier."""

import pytest

from seqtrace.folding import run_chou_fasman, run_folding
from seqtrace.folding.chou_fasman import (
    HELIX_PROPENSITY,
    PENDING,
    assign_structure,
    mean_propensity,
    stability_score,
    window_bounds,
)
from seqtrace.utils.config import ChouFasmanConfig


class TestChouFasman:
    def test_full_alphabet_structure(self, all_amino_acids) -> None:
        result = run_chou_fasman(all_amino_acids)
        assert len(result.final_structure) == 20
        assert set(result.final_structure) <= {"H", "E", "C"}
        assert result.final_structure[0] == "H"
        assert result.final_structure[-1] == "E"

    def test_is_deterministic(self, all_amino_acids) -> None:
        first = run_chou_fasman(all_amino_acids)
        second = run_chou_fasman(all_amino_acids)
        assert first.final_structure == second.final_structure
        assert first.to_dict() == second.to_dict()

    def test_one_step_per_residue(self, all_amino_acids) -> None:
        result = run_chou_fasman(all_amino_acids)
        assert len(result.steps) == 20
        assert result.steps[0].title == "Residue 1: A"
        assert result.steps[0].structure_preview == result.final_structure[0] + PENDING * 19
        assert result.steps[-1].structure_preview == result.final_structure
        assert result.steps[0].metric("Helix Propensity") == "1.08"
        assert result.steps[0].metric("Decision") == "Helix"

    def test_stability_score_matches_structure(self, all_amino_acids) -> None:
        result = run_chou_fasman(all_amino_acids)
        assert result.stability_score == stability_score(result.final_structure)

    def test_thresholds_change_assignment(self, all_amino_acids) -> None:
        strict = run_chou_fasman(all_amino_acids, ChouFasmanConfig(helix_threshold=5.0, sheet_threshold=5.0))
        assert strict.final_structure == "C" * 20
        assert strict.stability_score == 0.6

    def test_runs_through_registry(self, all_amino_acids) -> None:
        result = run_folding("chou-fasman", all_amino_acids, {"window-size": 4})
        assert result.params["window_size"] == 4
        assert result.algorithm == "chou-fasman"


class TestHelpers:
    @pytest.mark.parametrize(
        ("index", "window", "expected"),
        [(0, 6, (0, 3)), (10, 6, (7, 13)), (19, 6, (16, 20)), (10, 5, (8, 13)), (0, 1, (0, 1))],
    )
    def test_window_bounds(self, index, window, expected) -> None:
        assert window_bounds(index, 20, window) == expected

    def test_assignment_rules(self) -> None:
        assert assign_structure(1.1, 1.1, 1.03, 1.0) == "H"
        assert assign_structure(1.0, 1.2, 1.03, 1.0) == "E"
        assert assign_structure(1.2, 1.3, 1.03, 1.0) == "E"
        assert assign_structure(0.9, 0.95, 1.03, 1.0) == "C"

    def test_unknown_residue_uses_default(self) -> None:
        assert mean_propensity("X", HELIX_PROPENSITY) == pytest.approx(0.8)

    def test_stability_weights(self) -> None:
        assert stability_score("HEC") == 0.9
        assert stability_score("HHHH") == 1.1
        assert stability_score("") == 0.0
