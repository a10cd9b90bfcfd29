"""Alignment and folding micro benchmarks."""

from time import perf_counter

from seqtrace.alignment import BandedParams, ScoringParams, banded_alignment, global_alignment
from seqtrace.folding import run_folding

SEQ1 = "ACGTTGCATGCATGCAGTCAGTCGATCGATGCTAGCTAGCTAGCATCGA" * 2
SEQ2 = "ACGTTGCTTGCATGCAGTCAGTCGAACGATGCTAGCTCGCTAGCATCGA" * 2
PROTEIN = "MKTAYIAKQRQISFVKSHFSRQDILDLQY"


def time_call(fn, repeats: int = 5) -> float:
    start = perf_counter()
    for _ in range(repeats):
        fn()
    return (perf_counter() - start) / repeats


if __name__ == "__main__":
    scoring = ScoringParams(match=1, mismatch=-1, gap_penalty=-2)
    cases = {
        "global": lambda: global_alignment(SEQ1, SEQ2, scoring),
        "banded(k=4)": lambda: banded_alignment(SEQ1, SEQ2, BandedParams(1, -1, -2, bandwidth=4)),
        "genetic": lambda: run_folding("genetic", PROTEIN),
        "hill-climb": lambda: run_folding("hill-climb", PROTEIN),
        "simulated-annealing": lambda: run_folding("simulated-annealing", PROTEIN),
        "chou-fasman": lambda: run_folding("chou-fasman", PROTEIN),
    }
    for name, fn in cases.items():
        print(f"{name}: {time_call(fn):.6f}s")
