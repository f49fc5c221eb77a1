"""Identification fields from the CNIS header."""

from __future__ import annotations

import logging
import re
from datetime import date

from models.cnis import SubjectProfile

logger = logging.getLogger(__name__)

# Labels that close a value when several fields share one extracted line.
_NEXT_LABEL = (
    r"(?=\s+(?:(?:Nome\s+da\s+m[aã]e|Nome|Data\s+de\s+nascimento|CPF|NIT|P[aá]gina)\b"
    r"|Seq\.|Rela[cç][oõ]es\s+Previdenci[aá]rias)"
    r"|\s*$)"
)

_NAME_RE = re.compile(rf"\bNome:\s*(?P<value>[^\n]+?){_NEXT_LABEL}", re.MULTILINE)
_MOTHER_RE = re.compile(
    rf"\bNome\s+da\s+m[aã]e:\s*(?P<value>[^\n]+?){_NEXT_LABEL}", re.MULTILINE
)
_CPF_RE = re.compile(r"\bCPF:\s*(?P<value>\d[\d.\-]*\d)")
_NIT_RE = re.compile(r"\bNIT:\s*(?P<value>\d[\d.\-]*\d)")
_BIRTH_RE = re.compile(
    r"\bData\s+de\s+nascimento:\s*(?P<day>\d{2})/(?P<month>\d{2})/(?P<year>\d{4})",
    re.IGNORECASE,
)


def _clean(value: str) -> str | None:
    cleaned = " ".join(value.split()).strip(" :;,")
    return cleaned or None


def _parse_birth_date(text: str) -> date | None:
    match = _BIRTH_RE.search(text)
    if not match:
        return None
    try:
        return date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError:
        logger.warning("Ignoring invalid birth date %s", match.group(0))
        return None


def extract_personal_data(text: str) -> SubjectProfile:
    """Return the identification fields found in ``text``.

    Missing labels leave the corresponding field as ``None``; the caller
    decides whether an incomplete profile is acceptable.
    """

    if not text:
        return SubjectProfile()

    fields: dict[str, object] = {}
    for field, pattern in (
        ("name", _NAME_RE),
        ("mother_name", _MOTHER_RE),
        ("tax_id", _CPF_RE),
        ("nit", _NIT_RE),
    ):
        match = pattern.search(text)
        if match:
            value = _clean(match["value"])
            if value:
                fields[field] = value
    birth_date = _parse_birth_date(text)
    if birth_date:
        fields["birth_date"] = birth_date

    logger.debug("Personal data fields found: %s", sorted(fields))
    return SubjectProfile(**fields)
