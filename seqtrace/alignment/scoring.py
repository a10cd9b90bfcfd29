"""Match/mismatch lookup shared by every alignment variant."""

from __future__ import annotations

from seqtrace.alignment.types import ScoringParams


def pair_score(char1: str, char2: str, params: ScoringParams) -> float:
    return params.match if char1 == char2 else params.mismatch


def pair_label(char1: str, char2: str) -> str:
    return "match" if char1 == char2 else "mismatch"
