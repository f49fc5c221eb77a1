"""Pydantic models for CNIS extracts and contribution time results."""

from __future__ import annotations

from datetime import date
from enum import StrEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Gender(StrEnum):
    """Subject gender as used by the special-time conversion table."""

    MALE = "M"
    FEMALE = "F"

    @classmethod
    def parse(cls, value: object) -> "Gender | None":
        """Return a :class:`Gender` for loose inputs such as ``"f"`` or ``"Feminino"``."""

        if isinstance(value, Gender):
            return value
        if not isinstance(value, str):
            return None
        candidate = value.strip().upper()[:1]
        if candidate == "M":
            return cls.MALE
        if candidate == "F":
            return cls.FEMALE
        return None


class BondCategory(StrEnum):
    """Affiliation category printed for a bond."""

    EMPLOYEE = "employee"
    INDIVIDUAL_CONTRIBUTOR = "individual_contributor"
    VOLUNTARY = "voluntary"
    RURAL_WORKER = "rural_worker"
    SPECIAL_INSURED = "special_insured"
    TEMPORARY_WORKER = "temporary_worker"
    DOMESTIC_WORKER = "domestic_worker"
    APPRENTICE = "apprentice"
    BENEFIT = "benefit"
    INDETERMINATE = "indeterminate"


class ActivityType(StrEnum):
    """Activity classification that selects the time multiplier."""

    COMMON = "common"
    SPECIAL_25 = "special_25"
    SPECIAL_20 = "special_20"
    SPECIAL_15 = "special_15"


class EndDateSource(StrEnum):
    """Where a bond's end date came from."""

    HEADER = "header"
    LAST_REMUNERATION_LABEL = "last_remuneration_label"
    HEADER_MONTH = "header_month"
    REMUNERATION = "remuneration"
    NONE = "none"


class SubjectProfile(BaseModel):
    """Identity of the insured person as printed in the extract."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    tax_id: Optional[str] = None
    nit: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    mother_name: Optional[str] = None


class ContributionMonth(BaseModel):
    """One competence entry of a bond's remuneration table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900, le=2999)
    amount: float = Field(ge=0)
    indicators: List[str] = Field(default_factory=list)

    @property
    def competence(self) -> str:
        """Return the competence in the document's ``mm/yyyy`` form."""

        return f"{self.month:02d}/{self.year:04d}"

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.year, self.month)


class Bond(BaseModel):
    """One employment, contribution or benefit period of the extract."""

    model_config = ConfigDict(extra="forbid")

    sequence: int = Field(ge=1)
    registration_id: Optional[str] = None
    employer_code: Optional[str] = None
    origin: str
    category: BondCategory = BondCategory.INDETERMINATE
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    end_date_source: EndDateSource = EndDateSource.NONE
    indicators: List[str] = Field(default_factory=list)
    contributions: List[ContributionMonth] = Field(default_factory=list)
    activity_type: ActivityType = ActivityType.COMMON
    concurrent: bool = False
    included: bool = True

    @field_validator("origin")
    @classmethod
    def _require_origin(cls, value: str) -> str:
        """Keep the origin label non-empty for display and sorting."""

        cleaned = " ".join(value.split())
        if not cleaned:
            raise ValueError("origin must not be empty")
        return cleaned

    @model_validator(mode="after")
    def _check_period(self) -> "Bond":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError(
                f"bond {self.sequence}: end date {self.end_date} precedes start date {self.start_date}"
            )
        return self

    @property
    def contribution_count(self) -> int:
        return len(self.contributions)


class CnisDocument(BaseModel):
    """Result of parsing one CNIS text."""

    model_config = ConfigDict(extra="forbid")

    profile: SubjectProfile = Field(default_factory=SubjectProfile)
    bonds: List[Bond] = Field(default_factory=list)

    def bond(self, sequence: int) -> Bond | None:
        """Return the bond printed with ``sequence`` or ``None``."""

        for bond in self.bonds:
            if bond.sequence == sequence:
                return bond
        return None


class ContributionDuration(BaseModel):
    """Adjusted day count decomposed into years, months and days."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    years: int = 0
    months: int = 0
    days: int = 0
    total_days: int = 0

    @classmethod
    def zero(cls) -> "ContributionDuration":
        return cls()


class ContributionSummary(BaseModel):
    """Aggregate contribution time plus the per-bond figures behind it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total: ContributionDuration = Field(default_factory=ContributionDuration)
    per_bond: dict[int, ContributionDuration] = Field(default_factory=dict)
    included_sequences: List[int] = Field(default_factory=list)
    qualifying_months: int = 0


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
