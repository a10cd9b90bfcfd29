"""Validation helpers for callers of the core algorithms.

The alignment and folding functions assume well-formed input. Outer surfaces
(the CLI, notebooks, a web layer) run their raw strings through these helpers
first.
"""

from __future__ import annotations

from typing import Final, Literal

DNA_ALPHABET: Final = frozenset("ACGT")
PROTEIN_ALPHABET: Final = frozenset("ACDEFGHIKLMNPQRSTVWY")

SequenceKind = Literal["dna", "protein"]

_ALPHABETS: Final[dict[str, frozenset[str]]] = {
    "dna": DNA_ALPHABET,
    "protein": PROTEIN_ALPHABET,
}


def ensure_sequence(raw: str, kind: SequenceKind = "protein", *, label: str = "sequence") -> str:
    """Normalize ``raw`` to upper case and check it against the ``kind`` alphabet."""
    if kind not in _ALPHABETS:
        msg = f"Unknown sequence kind: {kind}"
        raise ValueError(msg)
    candidate = "".join(str(raw).split()).upper()
    if not candidate:
        msg = f"{label} must not be empty"
        raise ValueError(msg)
    invalid = {char for char in candidate if char not in _ALPHABETS[kind]}
    if invalid:
        msg = f"{label} contains invalid {kind} characters: {sorted(invalid)}"
        raise ValueError(msg)
    return candidate


def detect_sequence_kind(raw: str) -> SequenceKind:
    """Guess whether ``raw`` is DNA or protein from its composition."""
    upper = "".join(str(raw).split()).upper()
    if not upper:
        return "protein"
    dna_count = sum(1 for char in upper if char in DNA_ALPHABET)
    return "dna" if dna_count / len(upper) > 0.9 else "protein"
