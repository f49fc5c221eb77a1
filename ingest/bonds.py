"""Heuristics for the header fields of a single bond block."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Iterator

import config
from core.regexes import (
    BENEFIT_BARE_NUMBER_RE,
    BENEFIT_MARKER_RE,
    BENEFIT_NUMBER_RE,
    COMPANY_CODE_RE,
    FULL_DATE_RE,
    HEADER_INDICATORS_RE,
    INDICATOR_CODE_RE,
    NIT_RE,
    REMUNERATION_ROW_RE,
)
from core.rules import (
    BENEFIT_LABEL,
    CATEGORY_RE,
    ORIGIN_BOILERPLATE,
    ORIGIN_NOISE_CHARS,
    OWN_REMITTANCE_LABEL,
    REMUNERATION_SECTION_MARKERS,
    SELF_REMITTANCE_CATEGORIES,
    UNNAMED_BOND_LABEL,
    category_for_keyword,
)
from ingest.segmenter import BondSegment
from models.cnis import BondCategory

logger = logging.getLogger(__name__)

HEURISTICS_LOGGER = logging.getLogger("cnis.heuristics")

_LEADING_SEQUENCE_RE = re.compile(r"\s*(?P<seq>\d+)")


def log_fallback(field: str, rule: str, *, sequence: int | None, detail: str | None = None) -> None:
    """Emit a structured log entry describing a documented-default fallback."""

    message = f"Bond {sequence if sequence is not None else '?'}: {field} resolved by fallback"
    if detail:
        message = f"{message} {detail}"
    message = f"{message} (rule: {rule})"
    extra: dict[str, object] = {
        "heuristic_field": field,
        "heuristic_rule": rule,
        "bond_sequence": sequence,
    }
    if detail:
        extra["heuristic_detail"] = detail
    HEURISTICS_LOGGER.info(message, extra=extra)


@dataclass(slots=True)
class BondFields:
    """Header fields recovered from one bond block."""

    sequence: int
    registration_id: str | None
    employer_code: str | None
    origin: str
    category: BondCategory
    start_date: date | None
    end_date: date | None
    indicators: list[str] = field(default_factory=list)
    header: str = ""
    """Header region the fields were read from."""
    start_date_end: int | None = None
    """Offset in ``header`` right after the start date, when one was found."""


def header_region(text: str, *, limit: int | None = None) -> str:
    """Return the part of a bond block that precedes its monthly table.

    The region ends at the first remuneration section title. Without one it is
    capped at ``limit`` characters (``CNIS_HEADER_CHAR_LIMIT`` by default). In
    both cases it never extends past the first remuneration row.
    """

    if not text:
        return ""
    cap = config.CNIS_HEADER_CHAR_LIMIT if limit is None else limit
    cut = len(text)
    for marker in REMUNERATION_SECTION_MARKERS:
        match = marker.search(text)
        if match:
            cut = min(cut, match.start())
    if cut == len(text):
        cut = min(cut, max(cap, 0))
    row = REMUNERATION_ROW_RE.search(text, 0, cut)
    if row:
        cut = row.start()
    return text[:cut]


def detect_category(header: str) -> BondCategory:
    """Return the first category keyword of ``header``.

    ``Benefício`` is itself a keyword. Blocks without any keyword that still
    carry an ``NB`` marker are classified as :attr:`BondCategory.BENEFIT`;
    anything else is indeterminate.
    """

    match = CATEGORY_RE.search(header or "")
    if match:
        return category_for_keyword(match.group(0))
    if BENEFIT_MARKER_RE.search(header or ""):
        return BondCategory.BENEFIT
    return BondCategory.INDETERMINATE


def _iter_header_dates(header: str) -> Iterator[tuple[date, int]]:
    for match in FULL_DATE_RE.finditer(header):
        try:
            parsed = date(int(match["year"]), int(match["month"]), int(match["day"]))
        except ValueError:
            logger.warning("Skipping invalid date %s in bond header", match.group(0))
            continue
        yield parsed, match.end()


def _name_after(header: str, position: int) -> str:
    """Return the cleaned text between ``position`` and the next keyword or date."""

    rest = header[position:]
    stops = [len(rest)]
    for pattern in (CATEGORY_RE, FULL_DATE_RE, HEADER_INDICATORS_RE):
        match = pattern.search(rest)
        if match:
            stops.append(match.start())
    candidate = rest[: min(stops)]
    for boilerplate in ORIGIN_BOILERPLATE:
        candidate = boilerplate.sub(" ", candidate)
    return " ".join(candidate.split()).strip(ORIGIN_NOISE_CHARS)


def _benefit_label(header: str) -> str:
    match = BENEFIT_NUMBER_RE.search(header) or BENEFIT_BARE_NUMBER_RE.search(header)
    if match:
        return f"{BENEFIT_LABEL} {match['number']}"
    return BENEFIT_LABEL


def extract_origin(
    header: str,
    *,
    employer_code: str | None,
    registration_id: str | None,
    category: BondCategory,
    sequence: int | None = None,
) -> str:
    """Return the origin (employer) name of a bond, never an empty string.

    The name follows the company code when the code appears in ``header``.
    Otherwise the category default applies (own remittance or the benefit
    label), then the text after the NIT, then :data:`UNNAMED_BOND_LABEL`.
    """

    code_position = header.find(employer_code) if employer_code else -1
    if code_position >= 0:
        name = _name_after(header, code_position + len(employer_code))
        if name:
            return name
        log_fallback("origin", "empty_after_company_code", sequence=sequence)

    if category in SELF_REMITTANCE_CATEGORIES:
        log_fallback("origin", "self_remittance", sequence=sequence, detail=category.value)
        return OWN_REMITTANCE_LABEL
    if category is BondCategory.BENEFIT or BENEFIT_MARKER_RE.search(header):
        label = _benefit_label(header)
        log_fallback("origin", "benefit_marker", sequence=sequence, detail=label)
        return label
    if registration_id and code_position < 0:
        position = header.find(registration_id)
        if position >= 0:
            name = _name_after(header, position + len(registration_id))
            if name:
                return name
    log_fallback("origin", "unnamed", sequence=sequence)
    return UNNAMED_BOND_LABEL


def extract_header_indicators(header: str) -> list[str]:
    """Return indicator codes listed after an ``Indicadores:`` label in ``header``."""

    match = HEADER_INDICATORS_RE.search(header or "")
    if not match:
        return []
    codes: list[str] = []
    for code in INDICATOR_CODE_RE.findall(match["codes"]):
        if code not in codes:
            codes.append(code)
    return codes


def extract_sequence(text: str, default: int | None = None) -> int | None:
    """Return the leading integer of a bond block."""

    match = _LEADING_SEQUENCE_RE.match(text or "")
    if match:
        return int(match["seq"])
    return default


def extract_bond_fields(segment: BondSegment) -> BondFields:
    """Read the header fields of ``segment``.

    Every field degrades to a documented default instead of raising. The end
    date is left as ``None`` when the header holds fewer than two dates.
    """

    text = segment.text
    sequence = extract_sequence(text, default=segment.sequence)

    nit_match = NIT_RE.search(text)
    registration_id = nit_match.group(0) if nit_match else None
    code_match = COMPANY_CODE_RE.search(text)
    employer_code = code_match.group(0) if code_match else None

    header = header_region(text)
    category = detect_category(header)
    if category is BondCategory.INDETERMINATE:
        log_fallback("category", "no_keyword", sequence=sequence)

    origin = extract_origin(
        header,
        employer_code=employer_code,
        registration_id=registration_id,
        category=category,
        sequence=sequence,
    )

    dates = list(_iter_header_dates(header))
    start_date: date | None = None
    end_date: date | None = None
    start_date_end: int | None = None
    if dates:
        start_date, start_date_end = dates[0]
    if len(dates) > 1:
        end_date = dates[1][0]
        if start_date and end_date < start_date:
            logger.warning(
                "Bond %s: discarding end date %s before start date %s",
                sequence,
                end_date,
                start_date,
            )
            end_date = None

    return BondFields(
        sequence=sequence,
        registration_id=registration_id,
        employer_code=employer_code,
        origin=origin,
        category=category,
        start_date=start_date,
        end_date=end_date,
        indicators=extract_header_indicators(header),
        header=header,
        start_date_end=start_date_end,
    )
