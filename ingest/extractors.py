"""Text extraction for uploaded CNIS files.

PDF pages are read with ``pypdf`` and joined in reading order, one page per
line block. Pages without a text layer fall back to OCR when ``pdf2image`` and
``pytesseract`` are installed (``ocr`` extra).
"""

import io
import logging
import re
from pathlib import Path

import chardet

import config

logger = logging.getLogger(__name__)

_TEXT_SUFFIXES = {".txt", ".text", ".csv", ".md"}
_OCR_HELP = (
    "scanned PDF extraction requires OCR support. Install pdf2image, "
    "pytesseract, and the Tesseract OCR engine, then retry."
)


def extract_text_from_file(file) -> str:
    """Extract the text of an uploaded CNIS file.

    Args:
        file: File-like object supporting ``read`` and ``seek``; its ``name``
            attribute selects the format.

    Returns:
        The concatenated text of all pages.

    Raises:
        ValueError: If the file is empty, too large, has an unsupported
            extension or cannot be read.
    """
    name = getattr(file, "name", "").lower()
    data = file.read()
    file.seek(0)
    if not data:
        raise ValueError("empty file")

    if len(data) > config.max_file_bytes():
        raise ValueError("file too large")

    suffix = Path(name).suffix.lower()
    if suffix == ".pdf":
        try:
            return _extract_pdf(io.BytesIO(data), name)
        except ValueError:
            raise
        except Exception as exc:  # pragma: no cover - pypdf internals
            logger.exception("Failed to extract text from %s", name or "<upload>")
            raise ValueError("file could not be read") from exc
    if suffix and suffix not in _TEXT_SUFFIXES:
        raise ValueError(f"unsupported file type: {suffix}")

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        detected = chardet.detect(data)
        enc = detected["encoding"] or "latin-1"
        try:
            text = data.decode(enc, errors="ignore")
        except LookupError:
            text = data.decode("latin-1", errors="ignore")
    return re.sub(r"\r\n?", "\n", text)


def _ocr_page(data: bytes, page_number: int) -> str:
    try:
        from pdf2image import convert_from_bytes
        import pytesseract
    except ImportError as err:  # pragma: no cover - optional OCR
        raise ValueError(_OCR_HELP) from err
    try:
        images = convert_from_bytes(data, fmt="png", first_page=page_number, last_page=page_number)
        return "\n".join(pytesseract.image_to_string(img, lang="por") for img in images)
    except Exception as err:  # pragma: no cover - OCR failure
        raise ValueError(f"{_OCR_HELP} ({err!s})") from err


def _extract_pdf(buf: io.BytesIO, name: str) -> str:
    from pypdf import PdfReader
    from pypdf.errors import PdfReadError

    try:
        reader = PdfReader(buf)
    except PdfReadError as exc:  # pragma: no cover - invalid PDFs
        raise ValueError("invalid pdf") from exc

    pages: list[str] = []
    for idx, page in enumerate(reader.pages, start=1):
        page_text = page.extract_text() or ""
        if not page_text.strip() and config.CNIS_OCR_ENABLED:
            logger.info("Page %s of %s has no text layer; running OCR", idx, name or "<upload>")
            page_text = _ocr_page(buf.getvalue(), idx)
        pages.append(page_text.strip())
    text = "\n".join(page for page in pages if page)
    if not text and pages:
        raise ValueError("File could not be read, possibly scanned PDF")
    return text
