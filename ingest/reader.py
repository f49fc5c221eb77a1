"""Read and normalize CNIS text from files or pasted snippets."""

from __future__ import annotations

import re
from pathlib import Path

from ingest.extractors import extract_text_from_file

_INLINE_SPACE_RE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def clean_cnis_text(text: str) -> str:
    """Normalize line endings and inline whitespace of ``text``.

    Line breaks are kept because some labels are only delimited by them.
    """

    if not text:
        return ""
    normalized = (
        text.replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\u00a0", " ")
        .replace("\ufeff", "")
    )
    lines = [_INLINE_SPACE_RE.sub(" ", line).strip() for line in normalized.split("\n")]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def read_cnis_text(files: list[str] | None = None, pasted: str | None = None) -> str:
    """Merge the text of ``files`` and ``pasted`` into one cleaned string.

    Raises:
        ValueError: If a file cannot be read; the message names the file.
    """

    parts: list[str] = []
    for name in files or []:
        path = Path(name)
        if not path.exists():
            raise ValueError(f"{path.name}: file not found.")
        try:
            with path.open("rb") as handle:
                text = extract_text_from_file(handle)
        except ValueError as exc:
            message = str(exc).strip()
            if "unsupported file type" in message.lower():
                raise ValueError(
                    f"{path.name}: unsupported file type – upload a PDF or text file."
                ) from exc
            detail = f" ({message})" if message else ""
            raise ValueError(f"{path.name}: failed to read file.{detail}") from exc
        parts.append(clean_cnis_text(text))

    if pasted:
        parts.append(clean_cnis_text(pasted))

    return "\n".join(part for part in parts if part)
