"""End-date inference for bonds whose header prints only a start date."""

from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Sequence

from core.regexes import BARE_COMPETENCE_RE, LAST_REMUNERATION_RE
from ingest.bonds import BondFields, log_fallback
from models.cnis import ContributionMonth, EndDateSource

logger = logging.getLogger(__name__)


def last_day_of_month(year: int, month: int) -> date:
    """Return the last calendar day of ``month``/``year``.

    Raises:
        ValueError: If ``month`` or ``year`` is out of range.
    """

    return date(year, month, calendar.monthrange(year, month)[1])


def _from_tokens(year: str, month: str) -> date | None:
    try:
        return last_day_of_month(int(year), int(month))
    except ValueError:
        logger.warning("Ignoring invalid competence %s/%s", month, year)
        return None


def _last_remuneration_label(text: str) -> date | None:
    match = LAST_REMUNERATION_RE.search(text)
    if not match:
        return None
    return _from_tokens(match["year"], match["month"])


def _header_month(header: str, start_date_end: int | None) -> date | None:
    if start_date_end is None:
        return None
    for match in BARE_COMPETENCE_RE.finditer(header, start_date_end):
        inferred = _from_tokens(match["year"], match["month"])
        if inferred:
            return inferred
    return None


def _last_contribution(contributions: Sequence[ContributionMonth]) -> date | None:
    if not contributions:
        return None
    last = max(contributions, key=lambda entry: entry.sort_key)
    return last_day_of_month(last.year, last.month)


def infer_end_date(
    fields: BondFields,
    contributions: Sequence[ContributionMonth],
    *,
    block_text: str | None = None,
) -> tuple[date | None, EndDateSource]:
    """Return the end date of a bond and where it came from.

    An explicit header date always wins. Otherwise the first hit of the
    fallback chain is used: an ``Últ. Remun.`` label, the first bare
    ``mm/yyyy`` after the start date in the header, then the latest
    contribution row. Month-precision results resolve to the last day of the
    month. With nothing to go on the end date stays ``None``.
    """

    if fields.end_date is not None:
        return fields.end_date, EndDateSource.HEADER

    candidates = (
        (EndDateSource.LAST_REMUNERATION_LABEL, lambda: _last_remuneration_label(block_text or fields.header)),
        (EndDateSource.HEADER_MONTH, lambda: _header_month(fields.header, fields.start_date_end)),
        (EndDateSource.REMUNERATION, lambda: _last_contribution(contributions)),
    )
    for source, resolve in candidates:
        inferred = resolve()
        if inferred is None:
            continue
        if fields.start_date and inferred < fields.start_date:
            logger.warning(
                "Bond %s: inferred end date %s precedes start date %s (rule: %s)",
                fields.sequence,
                inferred,
                fields.start_date,
                source.value,
            )
            continue
        log_fallback("end_date", source.value, sequence=fields.sequence, detail=inferred.isoformat())
        return inferred, source

    return None, EndDateSource.NONE
