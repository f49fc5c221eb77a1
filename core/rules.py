"""Static lookup tables used by the CNIS heuristics and the time calculator."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Final, Mapping

from models.cnis import ActivityType, BondCategory, Gender

# Ordered longest-first: "Empregado Doméstico" must win over "Empregado" when both
# start at the same position.
CATEGORY_VOCABULARY: Final[tuple[tuple[str, BondCategory], ...]] = (
    ("Empregado Doméstico", BondCategory.DOMESTIC_WORKER),
    ("Empregado Domestico", BondCategory.DOMESTIC_WORKER),
    ("Empregado Rural", BondCategory.RURAL_WORKER),
    ("Trabalhador Rural", BondCategory.RURAL_WORKER),
    ("Contribuinte Individual", BondCategory.INDIVIDUAL_CONTRIBUTOR),
    ("Trabalhador Avulso", BondCategory.TEMPORARY_WORKER),
    ("Segurado Especial", BondCategory.SPECIAL_INSURED),
    ("Menor Aprendiz", BondCategory.APPRENTICE),
    ("Facultativo", BondCategory.VOLUNTARY),
    ("Benefício", BondCategory.BENEFIT),
    ("Beneficio", BondCategory.BENEFIT),
    ("Doméstico", BondCategory.DOMESTIC_WORKER),
    ("Domestico", BondCategory.DOMESTIC_WORKER),
    ("Empregado", BondCategory.EMPLOYEE),
)


def _keyword_pattern(keyword: str) -> str:
    words = [re.escape(word) for word in keyword.split()]
    return r"\b" + r"\s+".join(words) + r"\b"


CATEGORY_RE: Final[re.Pattern[str]] = re.compile(
    "|".join(_keyword_pattern(keyword) for keyword, _category in CATEGORY_VOCABULARY),
    re.IGNORECASE,
)
"""Alternation over :data:`CATEGORY_VOCABULARY`; earliest position wins."""

_CATEGORY_LOOKUP: Final[dict[str, BondCategory]] = {
    " ".join(keyword.casefold().split()): category for keyword, category in CATEGORY_VOCABULARY
}


def category_for_keyword(keyword: str) -> BondCategory:
    """Return the category for a matched vocabulary ``keyword``."""

    return _CATEGORY_LOOKUP.get(" ".join(keyword.casefold().split()), BondCategory.INDETERMINATE)


SELF_REMITTANCE_CATEGORIES: Final[frozenset[BondCategory]] = frozenset(
    {BondCategory.INDIVIDUAL_CONTRIBUTOR, BondCategory.VOLUNTARY}
)

REMUNERATION_SECTION_MARKERS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"Remunera[cç][oõ]es", re.IGNORECASE),
    re.compile(r"Contribui[cç][oõ]es", re.IGNORECASE),
)
"""Section titles that open the monthly table of a bond."""

ORIGIN_BOILERPLATE: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"\bou\s+Agente\s+P[uú]blico\b", re.IGNORECASE),
    re.compile(r"\bOrigem\s+do\s+V[ií]nculo\b", re.IGNORECASE),
    re.compile(r"\bC[oó]digo\s+Emp\.?", re.IGNORECASE),
)

ORIGIN_NOISE_CHARS: Final[str] = " \t\r\n-–—:;,.|/()[]*"

OWN_REMITTANCE_LABEL: Final[str] = "own remittance"
BENEFIT_LABEL: Final[str] = "benefit"
UNNAMED_BOND_LABEL: Final[str] = "bond without name"

DAYS_PER_YEAR: Final[Decimal] = Decimal("365.25")
DAYS_PER_MONTH: Final[Decimal] = Decimal("30.44")

TIME_MULTIPLIERS: Final[Mapping[ActivityType, Mapping[Gender, Decimal]]] = {
    ActivityType.COMMON: {Gender.MALE: Decimal("1.00"), Gender.FEMALE: Decimal("1.00")},
    ActivityType.SPECIAL_25: {Gender.MALE: Decimal("1.40"), Gender.FEMALE: Decimal("1.20")},
    ActivityType.SPECIAL_20: {Gender.MALE: Decimal("1.75"), Gender.FEMALE: Decimal("1.50")},
    ActivityType.SPECIAL_15: {Gender.MALE: Decimal("2.33"), Gender.FEMALE: Decimal("2.00")},
}


def multiplier_for(activity_type: ActivityType, gender: Gender) -> Decimal:
    """Return the conversion factor for ``activity_type`` and ``gender``."""

    return TIME_MULTIPLIERS[ActivityType(activity_type)][Gender(gender)]


__all__ = [
    "BENEFIT_LABEL",
    "CATEGORY_RE",
    "CATEGORY_VOCABULARY",
    "DAYS_PER_MONTH",
    "DAYS_PER_YEAR",
    "ORIGIN_BOILERPLATE",
    "ORIGIN_NOISE_CHARS",
    "OWN_REMITTANCE_LABEL",
    "REMUNERATION_SECTION_MARKERS",
    "SELF_REMITTANCE_CATEGORIES",
    "TIME_MULTIPLIERS",
    "UNNAMED_BOND_LABEL",
    "category_for_keyword",
    "multiplier_for",
]
