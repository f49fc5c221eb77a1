"""Pydantic models for CNIS extracts and contribution time results."""

from .cnis import (
    ActivityType,
    Bond,
    BondCategory,
    CnisDocument,
    ContributionDuration,
    ContributionMonth,
    ContributionSummary,
    EndDateSource,
    Gender,
    SubjectProfile,
)

__all__ = [
    "ActivityType",
    "Bond",
    "BondCategory",
    "CnisDocument",
    "ContributionDuration",
    "ContributionMonth",
    "ContributionSummary",
    "EndDateSource",
    "Gender",
    "SubjectProfile",
]
