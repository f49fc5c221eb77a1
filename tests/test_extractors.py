import io
import sys
import types

import pytest
from pypdf import PdfWriter

import config
from ingest.extractors import extract_text_from_file


def test_extract_txt() -> None:
    f = io.BytesIO(b"1 123.45678.90-1 EMPRESA")
    f.name = "a.txt"
    assert extract_text_from_file(f) == "1 123.45678.90-1 EMPRESA"


def test_extract_txt_latin1_and_line_endings() -> None:
    data = ("Extrato Previdenciário\r\nRelações Previdenciárias\r\n" * 20).encode("latin-1")
    f = io.BytesIO(data)
    f.name = "b.txt"
    text = extract_text_from_file(f)
    assert "\r" not in text
    assert text.startswith("Extrato Previdenci")
    assert text.count("\n") == 40


def _blank_pdf() -> io.BytesIO:
    writer = PdfWriter()
    writer.add_blank_page(width=10, height=10)
    buf = io.BytesIO()
    writer.write(buf)
    buf.seek(0)
    buf.name = "c.pdf"
    return buf


def test_extract_pdf_with_ocr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "CNIS_OCR_ENABLED", True)
    pdf2image = types.SimpleNamespace(convert_from_bytes=lambda *a, **k: [object()])
    pytesseract = types.SimpleNamespace(image_to_string=lambda img, lang=None: "OCR TEXT")
    monkeypatch.setitem(sys.modules, "pdf2image", pdf2image)
    monkeypatch.setitem(sys.modules, "pytesseract", pytesseract)
    assert extract_text_from_file(_blank_pdf()) == "OCR TEXT"


def test_pdf_without_text_layer_and_ocr_disabled() -> None:
    with pytest.raises(ValueError, match="possibly scanned PDF"):
        extract_text_from_file(_blank_pdf())


def test_extract_empty_file() -> None:
    f = io.BytesIO(b"")
    f.name = "d.txt"
    with pytest.raises(ValueError, match="empty file"):
        extract_text_from_file(f)


def test_extract_unsupported_type() -> None:
    f = io.BytesIO(b"data")
    f.name = "e.png"
    with pytest.raises(ValueError, match="unsupported file type"):
        extract_text_from_file(f)


def test_extract_file_too_large(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "CNIS_MAX_FILE_MB", 1)
    f = io.BytesIO(b"a" * (1024 * 1024 + 1))
    f.name = "big.txt"
    with pytest.raises(ValueError, match="file too large"):
        extract_text_from_file(f)


def test_stream_is_rewound_after_reading() -> None:
    f = io.BytesIO(b"texto")
    f.name = "g.txt"
    extract_text_from_file(f)
    assert f.read() == b"texto"
