"""Pairwise alignment surfaces.

Provides the four DP variants and a small factory to obtain one by name.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

from seqtrace.alignment.banded import banded_alignment, effective_bandwidth, is_banded_suitable
from seqtrace.alignment.dovetail import dovetail_alignment
from seqtrace.alignment.engine import AlignmentVariant, Band, fill_matrix
from seqtrace.alignment.global_alignment import global_alignment
from seqtrace.alignment.local_alignment import local_alignment
from seqtrace.alignment.types import (
    AlignmentResult,
    AlignmentStep,
    BandedParams,
    CandidateScore,
    Direction,
    MatrixCell,
    ScoringParams,
)

Aligner = Callable[..., AlignmentResult]

_REGISTRY: Final[dict[str, Aligner]] = {
    "global": global_alignment,
    "local": local_alignment,
    "dovetail": dovetail_alignment,
    "banded": banded_alignment,
}


def aligner_from_name(name: str) -> Aligner:
    """Return an alignment function from the registry.

    Raises KeyError for unknown algorithms.

    Parameters
    ----------
    name : str
        Algorithm name: "global", "local", "dovetail", "banded"

    Returns
    -------
    Aligner
        Function taking ``(seq1, seq2, params)``. ``banded`` expects
        :class:`BandedParams`; the others take :class:`ScoringParams`.
    """
    key = name.lower()
    if key not in _REGISTRY:
        raise KeyError(f"Unknown alignment algorithm: {name}. Available: {list(_REGISTRY.keys())}")
    return _REGISTRY[key]


__all__ = [
    "aligner_from_name",
    "global_alignment",
    "local_alignment",
    "dovetail_alignment",
    "banded_alignment",
    "effective_bandwidth",
    "is_banded_suitable",
    "AlignmentVariant",
    "Band",
    "fill_matrix",
    "AlignmentResult",
    "AlignmentStep",
    "BandedParams",
    "CandidateScore",
    "Direction",
    "MatrixCell",
    "ScoringParams",
]
