"""Export payload for the contribution-time report."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.contribution_time import summarize_contribution_time
from models.cnis import Bond, CnisDocument, ContributionDuration, ContributionSummary, Gender


def _duration_dict(duration: ContributionDuration) -> dict[str, int]:
    return duration.model_dump(mode="json")


def _bond_row(bond: Bond, duration: ContributionDuration) -> dict[str, Any]:
    return {
        "sequence": bond.sequence,
        "origin": bond.origin,
        "category": bond.category.value,
        "activity_type": bond.activity_type.value,
        "start_date": bond.start_date.isoformat() if bond.start_date else None,
        "end_date": bond.end_date.isoformat() if bond.end_date else None,
        "end_date_source": bond.end_date_source.value,
        "duration": _duration_dict(duration),
        "contribution_count": bond.contribution_count,
        "indicators": list(bond.indicators),
        "concurrent": bond.concurrent,
        "included": bond.included,
    }


@dataclass(slots=True)
class CnisReportExport:
    """Serializable view of a parsed extract and its computed durations."""

    document: CnisDocument
    summary: ContributionSummary

    @classmethod
    def from_document(
        cls,
        document: CnisDocument,
        summary: ContributionSummary | None = None,
        *,
        gender: Gender | str | None = None,
    ) -> "CnisReportExport":
        """Wrap ``document``, computing the summary when none is given."""

        if summary is None:
            summary = summarize_contribution_time(
                document.bonds, gender=gender or document.profile.gender
            )
        return cls(document=document, summary=summary)

    def to_dict(self) -> dict[str, Any]:
        """Return the payload as a JSON-serialisable dictionary."""

        zero = ContributionDuration.zero()
        return {
            "profile": self.document.profile.model_dump(mode="json"),
            "total": _duration_dict(self.summary.total),
            "qualifying_months": self.summary.qualifying_months,
            "bond_count": len(self.document.bonds),
            "bonds": [
                _bond_row(bond, self.summary.per_bond.get(bond.sequence, zero))
                for bond in self.document.bonds
            ],
        }


__all__ = ["CnisReportExport"]
