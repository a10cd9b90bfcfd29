"""Utility exports."""

from .config import (
    AnnealingConfig,
    ChouFasmanConfig,
    GeneticConfig,
    HillClimbConfig,
    config_from_mapping,
)
from .logging import get_logger, set_verbosity
from .validation import detect_sequence_kind, ensure_sequence

__all__ = [
    "AnnealingConfig",
    "ChouFasmanConfig",
    "GeneticConfig",
    "HillClimbConfig",
    "config_from_mapping",
    "get_logger",
    "set_verbosity",
    "detect_sequence_kind",
    "ensure_sequence",
]
