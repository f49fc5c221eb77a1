"""Unit tests for the CNIS lookup tables."""

from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.rules import (  # noqa: E402
    CATEGORY_RE,
    TIME_MULTIPLIERS,
    category_for_keyword,
    multiplier_for,
)
from models.cnis import ActivityType, BondCategory, Gender  # noqa: E402


def test_multiplier_table_covers_every_activity_and_gender() -> None:
    for activity in ActivityType:
        for gender in Gender:
            assert multiplier_for(activity, gender) >= Decimal("1.00")
    assert set(TIME_MULTIPLIERS) == set(ActivityType)


def test_multiplier_accepts_raw_values() -> None:
    assert multiplier_for("special_20", "F") == Decimal("1.50")
    with pytest.raises(ValueError):
        multiplier_for("special_30", "M")


@pytest.mark.parametrize(
    ("text", "keyword", "category"),
    [
        ("CASA Empregado Doméstico 01/01/2000", "Empregado Doméstico", BondCategory.DOMESTIC_WORKER),
        ("FAZENDA Empregado   Rural", "Empregado   Rural", BondCategory.RURAL_WORKER),
        ("EMPREGADO 01/01/2000", "EMPREGADO", BondCategory.EMPLOYEE),
        ("Menor Aprendiz", "Menor Aprendiz", BondCategory.APPRENTICE),
        ("Benefício 91 - AUXILIO ACIDENTE EMPREGADO", "Benefício", BondCategory.BENEFIT),
        ("BENEFICIO 31", "BENEFICIO", BondCategory.BENEFIT),
    ],
)
def test_category_keyword_prefers_longest_form(text: str, keyword: str, category: BondCategory) -> None:
    match = CATEGORY_RE.search(text)
    assert match is not None
    assert match.group(0) == keyword
    assert category_for_keyword(match.group(0)) is category


def test_keyword_must_be_a_whole_word() -> None:
    assert CATEGORY_RE.search("DESEMPREGADOS LTDA") is None
    assert category_for_keyword("Gerente") is BondCategory.INDETERMINATE
