from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ingest.personal import extract_personal_data  # noqa: E402


def test_fields_sharing_one_line(cnis_text: str) -> None:
    profile = extract_personal_data(cnis_text)

    assert profile.name == "MARIA APARECIDA DA SILVA"
    assert profile.tax_id == "123.456.789-09"
    assert profile.nit == "123.45678.90-1"
    assert profile.birth_date == date(1968, 4, 15)
    assert profile.mother_name == "JOANA DA SILVA"
    assert profile.gender is None


def test_name_is_not_read_from_mother_label() -> None:
    profile = extract_personal_data("Nome da mãe: ANA PEREIRA\nNome: JOSE PEREIRA   CPF: 987.654.321-00")
    assert profile.name == "JOSE PEREIRA"
    assert profile.mother_name == "ANA PEREIRA"
    assert profile.tax_id == "987.654.321-00"


def test_missing_labels_leave_fields_empty() -> None:
    profile = extract_personal_data("1 123.45678.90-1 EMPRESA 01/01/2000")
    assert profile.name is None
    assert profile.tax_id is None
    assert profile.birth_date is None
    assert extract_personal_data("").name is None


def test_invalid_birth_date_is_ignored() -> None:
    profile = extract_personal_data("Nome: FULANO DE TAL\nData de nascimento: 31/02/1970")
    assert profile.name == "FULANO DE TAL"
    assert profile.birth_date is None


def test_labels_close_values_when_page_is_one_line(cnis_text: str) -> None:
    profile = extract_personal_data(" ".join(cnis_text.split("\n")))

    assert profile.name == "MARIA APARECIDA DA SILVA"
    assert profile.mother_name == "JOANA DA SILVA"
    assert profile.birth_date == date(1968, 4, 15)


def test_bond_table_header_closes_name() -> None:
    profile = extract_personal_data("Nome: JOAO SILVA Seq. NIT Código Emp.\n1 123.45678.90-1 EMPRESA")
    assert profile.name == "JOAO SILVA"
