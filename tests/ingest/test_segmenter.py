from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ingest.segmenter import find_bond_anchors, segment_bonds  # noqa: E402


def test_two_anchors_yield_two_segments_that_rebuild_the_text() -> None:
    text = (
        "Extrato Previdenciário Nome: FULANO\n"
        "1 123.45678.90-1 EMPRESA A 01/01/2000 31/12/2001 Empregado\n"
        "01/2000 900,00\n"
        "2 123.45678.90-1 12.345.678/0001-90 EMPRESA B 01/01/2002 Empregado\n"
    )
    segments = segment_bonds(text)

    assert [segment.sequence for segment in segments] == [1, 2]
    first_anchor = text.index("1 123.45678.90-1")
    assert "".join(segment.text for segment in segments) == text[first_anchor:]
    assert segments[0].offset == first_anchor
    assert segments[1].text.startswith("2 123.45678.90-1")


def test_company_code_anchor_is_recognized() -> None:
    text = "7 12.345.678/0001-90 EMPRESA 01/01/2000 Empregado\n8 12.345.67890/12 OBRA 02/02/2002"
    segments = segment_bonds(text)
    assert [segment.sequence for segment in segments] == [7, 8]


def test_no_anchor_yields_no_segments() -> None:
    assert segment_bonds("Texto qualquer sem vínculos 01/2020 1.000,00") == []
    assert segment_bonds("") == []


def test_amount_digits_are_not_mistaken_for_sequence_numbers() -> None:
    text = "1 123.45678.90-1 EMPRESA 01/2000 1.500,00 2 123.45678.90-1 OUTRA"
    anchors = find_bond_anchors(text)
    assert [sequence for _offset, sequence in anchors] == [1, 2]


def test_identification_header_is_not_an_anchor() -> None:
    text = "NIT: 123.45678.90-1 CPF: 123.456.789-09\n3 123.45678.90-1 EMPRESA"
    assert [segment.sequence for segment in segment_bonds(text)] == [3]


def test_repeated_sequence_stays_inside_previous_segment() -> None:
    text = "1 123.45678.90-1 EMPRESA A\n1 123.45678.90-1 repetido\n2 123.45678.90-1 EMPRESA B"
    segments = segment_bonds(text)
    assert [segment.sequence for segment in segments] == [1, 2]
    assert "repetido" in segments[0].text


def test_extra_whitespace_between_sequence_and_registration() -> None:
    text = "12 \n\t 123.45678.90-1   EMPRESA"
    segments = segment_bonds(text)
    assert len(segments) == 1
    assert segments[0].sequence == 12
