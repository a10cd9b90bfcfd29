"""Shared test fixtures and configuration for seqtrace tests."""

import random

import pytest

from seqtrace.alignment import ScoringParams


@pytest.fixture
def textbook_pair():
    """Classic Needleman-Wunsch teaching example."""
    return "GCATGCG", "GATTACA"


@pytest.fixture
def unit_scoring():
    """Match +1, mismatch -1, gap -2."""
    return ScoringParams(match=1, mismatch=-1, gap_penalty=-2)


@pytest.fixture
def protein_sequence():
    """Short protein with a mix of hydrophobic and polar residues."""
    return "MKVLAIWFGHKLVAYI"


@pytest.fixture
def all_amino_acids():
    """Standard protein alphabet in one-letter order."""
    return "ACDEFGHIKLMNPQRSTVWY"


@pytest.fixture
def random_dna_pairs():
    """Seeded random DNA pairs of uneven lengths."""
    rng = random.Random(2024)
    pairs = []
    for _ in range(12):
        first = "".join(rng.choice("ACGT") for _ in range(rng.randint(1, 12)))
        second = "".join(rng.choice("ACGT") for _ in range(rng.randint(1, 12)))
        pairs.append((first, second))
    return pairs
