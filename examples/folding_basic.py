"""Run every folding algorithm on one protein and print its trace summary."""

from __future__ import annotations

from seqtrace.folding import run_folding
from seqtrace.utils import set_verbosity


def main() -> None:
    set_verbosity("INFO")
    sequence = "MKVLAIWFGHKLVAYI"

    for name in ("genetic", "hill-climb", "simulated-annealing", "chou-fasman"):
        result = run_folding(name, sequence)
        print(f"\n{name}: {result.final_structure} (stability {result.stability_score})")
        for step in result.steps[-3:]:
            metrics = ", ".join(f"{m.label}={m.value}" for m in step.metrics)
            print(f"  {step.title}: {metrics}")
        if result.converged is not None:
            print(f"  converged early: {result.converged}")
        if result.unique_conformations:
            print(f"  distinct final conformations: {len(result.unique_conformations)}")


if __name__ == "__main__":
    main()
