"""seqtrace public interface.

Pairwise alignment lives under ``seqtrace.alignment`` and lattice folding
under ``seqtrace.folding``. Every entry point returns its result together
with a step-by-step trace.
"""

from __future__ import annotations

from .alignment import BandedParams, ScoringParams, aligner_from_name
from .folding import folding_from_name, run_folding

__all__ = [
    "BandedParams",
    "ScoringParams",
    "aligner_from_name",
    "folding_from_name",
    "run_folding",
]

__version__ = "0.1.0"
