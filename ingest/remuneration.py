"""Monthly contribution salaries of a bond block."""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable

from pydantic import ValidationError

from core.regexes import INDICATOR_CODE_RE, REMUNERATION_ROW_RE
from models.cnis import ContributionMonth

logger = logging.getLogger(__name__)


def parse_amount(raw: str) -> float:
    """Convert a ``1.234,56`` style amount into a float.

    Raises:
        ValueError: If ``raw`` is not a number after normalisation.
    """

    normalized = raw.strip().replace(".", "").replace(",", ".")
    try:
        value = Decimal(normalized)
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {raw!r}") from exc
    return float(value)


def sort_contributions(entries: Iterable[ContributionMonth]) -> list[ContributionMonth]:
    """Return ``entries`` ordered by competence; equal competences keep their order."""

    return sorted(entries, key=lambda entry: entry.sort_key)


def _split_indicators(raw: str | None) -> list[str]:
    if not raw:
        return []
    return INDICATOR_CODE_RE.findall(raw)


def _entry_from_match(match: re.Match[str]) -> ContributionMonth:
    return ContributionMonth(
        month=int(match["month"]),
        year=int(match["year"]),
        amount=parse_amount(match["amount"]),
        indicators=_split_indicators(match["indicators"]),
    )


def extract_remunerations(text: str) -> list[ContributionMonth]:
    """Return every contribution row found anywhere in ``text``.

    Rows that fail to convert (an impossible month, a malformed amount) are
    skipped with a warning; the remaining rows are still returned, sorted
    ascending by ``(year, month)``.
    """

    entries: list[ContributionMonth] = []
    for match in REMUNERATION_ROW_RE.finditer(text or ""):
        try:
            entries.append(_entry_from_match(match))
        except (ValueError, ValidationError) as exc:
            logger.warning("Skipping contribution row %r: %s", match.group(0).strip(), exc)
    logger.debug("Extracted %d contribution row(s)", len(entries))
    return sort_contributions(entries)
