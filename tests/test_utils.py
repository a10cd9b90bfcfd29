import logging

import pytest

from seqtrace.utils import (
    AnnealingConfig,
    ChouFasmanConfig,
    GeneticConfig,
    HillClimbConfig,
    config_from_mapping,
    detect_sequence_kind,
    ensure_sequence,
    get_logger,
    set_verbosity,
)


def test_ensure_sequence_normalizes_case_and_whitespace():
    assert ensure_sequence(" mkv lai\n", "protein") == "MKVLAI"


def test_ensure_sequence_rejects_invalid_tokens():
    with pytest.raises(ValueError, match="invalid dna characters"):
        ensure_sequence("ACGU", "dna")


def test_ensure_sequence_rejects_empty_input():
    with pytest.raises(ValueError, match="seq1 must not be empty"):
        ensure_sequence("   ", "dna", label="seq1")


def test_ensure_sequence_rejects_unknown_kind():
    with pytest.raises(ValueError, match="Unknown sequence kind"):
        ensure_sequence("ACGT", "rna")


def test_detect_sequence_kind():
    assert detect_sequence_kind("gattaca") == "dna"
    assert detect_sequence_kind("MKVLAIWF") == "protein"


class TestConfigs:
    """Config dataclasses validate their fields on construction."""

    def test_defaults(self) -> None:
        assert GeneticConfig().as_dict() == {
            "population_size": 18,
            "generations": 12,
            "mutation_rate": 0.001,
            "elite_fraction": 0.05,
        }
        assert HillClimbConfig().iterations == 30
        assert AnnealingConfig().cooling_rate == 0.9
        assert ChouFasmanConfig().window_size == 6

    @pytest.mark.parametrize(
        ("factory", "message"),
        [
            (lambda: GeneticConfig(population_size=0), "population_size must be >= 1"),
            (lambda: GeneticConfig(mutation_rate=1.5), "mutation_rate must be in"),
            (lambda: HillClimbConfig(iterations=-1), "iterations must be >= 0"),
            (lambda: AnnealingConfig(cooling_rate=1.0), "cooling_rate must be in"),
            (lambda: AnnealingConfig(start_temperature=-2), "start_temperature must be >= 0"),
            (lambda: ChouFasmanConfig(window_size=0), "window_size must be >= 1"),
        ],
    )
    def test_invalid_values(self, factory, message) -> None:
        with pytest.raises(ValueError, match=message):
            factory()

    def test_from_mapping_accepts_kebab_case(self) -> None:
        config = config_from_mapping(AnnealingConfig, {"start-temperature": "3.5", "iterations": 10})
        assert config.start_temperature == 3.5
        assert config.iterations == 10

    def test_from_mapping_rejects_fractional_counts(self) -> None:
        with pytest.raises(ValueError, match="GeneticConfig.generations must be an integer"):
            config_from_mapping(GeneticConfig, {"generations": 2.7})

    def test_from_mapping_accepts_integral_values(self) -> None:
        config = config_from_mapping(GeneticConfig, {"generations": 3.0, "population-size": "7"})
        assert config.generations == 3
        assert isinstance(config.generations, int)
        assert config.population_size == 7

    def test_from_mapping_empty_gives_defaults(self) -> None:
        assert config_from_mapping(HillClimbConfig, None) == HillClimbConfig()

    def test_from_mapping_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="Unknown option for GeneticConfig"):
            config_from_mapping(GeneticConfig, {"population": 4})


def test_get_logger_installs_single_handler():
    get_logger("one")
    get_logger("two")
    assert len(logging.getLogger("seqtrace").handlers) == 1
    assert get_logger("folding").name == "seqtrace.folding"


def test_set_verbosity():
    root = logging.getLogger("seqtrace")
    previous = root.level
    try:
        set_verbosity("DEBUG")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
