"""Core package for CNIS rules and contribution time arithmetic."""

from .contribution_time import (
    combine_durations,
    compute_bond_time,
    compute_contribution_time,
    summarize_contribution_time,
)

__all__ = [
    "combine_durations",
    "compute_bond_time",
    "compute_contribution_time",
    "summarize_contribution_time",
]
