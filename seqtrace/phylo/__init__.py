"""Distance-based tree building."""

from .upgma import UpgmaResult, UpgmaStep, closest_pair, run_upgma, validate_distance_matrix

__all__ = ["UpgmaResult", "UpgmaStep", "closest_pair", "run_upgma", "validate_distance_matrix"]
