"""Minimal example comparing the four alignment variants on one pair."""

from __future__ import annotations

from seqtrace.alignment import BandedParams, ScoringParams, aligner_from_name


def main() -> None:
    seq1, seq2 = "GCATGCG", "GATTACA"
    scoring = ScoringParams(match=1, mismatch=-1, gap_penalty=-1)

    for name in ("global", "local", "dovetail"):
        result = aligner_from_name(name)(seq1, seq2, scoring)
        print(f"{name:>9}: score={result.score:g}")
        print(f"           {result.aligned_seq1}")
        print(f"           {result.aligned_seq2}")

    banded = aligner_from_name("banded")(seq1, seq2, BandedParams(1, -1, -1, bandwidth=2))
    print(f"   banded: score={banded.score:g} bandwidth={banded.bandwidth}")

    # Replay the first few fill decisions.
    result = aligner_from_name("global")(seq1, seq2, scoring)
    for step in result.steps[:5]:
        options = ", ".join(f"{c.source}={c.value:g}" for c in step.candidates)
        print(f"({step.row}, {step.col}) {step.explanation}: {options} -> {step.direction.value}")


if __name__ == "__main__":
    main()
