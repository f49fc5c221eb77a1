from datetime import date

import pytest
from pydantic import ValidationError

from models.cnis import Bond, CnisDocument, ContributionMonth, Gender


def test_bond_rejects_blank_origin() -> None:
    with pytest.raises(ValidationError):
        Bond(sequence=1, origin="   ")


def test_bond_rejects_end_before_start() -> None:
    with pytest.raises(ValidationError):
        Bond(sequence=1, origin="EMPRESA", start_date=date(2020, 2, 1), end_date=date(2020, 1, 31))


def test_bond_origin_whitespace_is_collapsed() -> None:
    bond = Bond(sequence=2, origin="  EMPRESA   ALFA ")
    assert bond.origin == "EMPRESA ALFA"
    assert bond.included is True
    assert bond.concurrent is False


def test_contribution_month_bounds() -> None:
    entry = ContributionMonth(month=3, year=2010, amount=1500.0)
    assert entry.competence == "03/2010"
    assert entry.sort_key == (2010, 3)
    with pytest.raises(ValidationError):
        ContributionMonth(month=0, year=2010, amount=1.0)
    with pytest.raises(ValidationError):
        ContributionMonth(month=1, year=2010, amount=-1.0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("M", Gender.MALE),
        ("f", Gender.FEMALE),
        ("Feminino", Gender.FEMALE),
        (" masculino ", Gender.MALE),
        ("", None),
        ("X", None),
        (None, None),
        (Gender.FEMALE, Gender.FEMALE),
    ],
)
def test_gender_parse(value: object, expected: Gender | None) -> None:
    assert Gender.parse(value) is expected


def test_document_lookup_by_sequence() -> None:
    document = CnisDocument(bonds=[Bond(sequence=3, origin="A"), Bond(sequence=5, origin="B")])
    assert document.bond(5).origin == "B"
    assert document.bond(4) is None
