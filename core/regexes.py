"""Shared regular expressions for CNIS heuristics."""

from __future__ import annotations

import re

NIT_PATTERN = r"\d{3}\.\d{5}\.\d{2}-\d"
"""Individual contributor registration (NIT/PIS), e.g. ``123.45678.90-1``."""

CNPJ_PATTERN = r"\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}"
CEI_PATTERN = r"\d{2}\.\d{3}\.\d{5}/\d{2}"
COMPANY_CODE_PATTERN = rf"(?:{CNPJ_PATTERN}|{CEI_PATTERN})"

NIT_RE = re.compile(rf"(?<![\d.]){NIT_PATTERN}(?!\d)")
COMPANY_CODE_RE = re.compile(rf"(?<![\d.]){COMPANY_CODE_PATTERN}(?!\d)")

BOND_ANCHOR_RE = re.compile(
    rf"(?<!\S)(?P<seq>\d{{1,3}})\s+(?P<registration>{NIT_PATTERN}|{COMPANY_CODE_PATTERN})(?!\d)"
)
"""Start of a bond record: the printed sequence number followed by a registration."""

FULL_DATE_RE = re.compile(r"(?<![\d/])(?P<day>\d{2})/(?P<month>\d{2})/(?P<year>\d{4})(?![\d/])")
"""``dd/mm/yyyy`` dates as printed in the bond header."""

BARE_COMPETENCE_RE = re.compile(r"(?<![\d/])(?P<month>\d{2})/(?P<year>\d{4})(?![\d/])")
"""``mm/yyyy`` tokens that are not part of a full date."""

AMOUNT_PATTERN = r"(?:\d{1,3}(?:\.\d{3})+|\d+),\d{2}"
INDICATOR_CODE_PATTERN = r"[A-Z][A-Z0-9]{2,}(?:-[A-Z0-9]+)*"

REMUNERATION_ROW_RE = re.compile(
    rf"""
    (?<![\d/])(?P<month>\d{{2}})/(?P<year>\d{{4}})(?![\d/])
    \s+(?:(?P<paid_on>\d{{2}}/\d{{2}}/\d{{4}})\s+(?:(?P<paid>{AMOUNT_PATTERN})\s+)?)?
    (?P<amount>{AMOUNT_PATTERN})(?![\d,])
    (?:[ \t]+(?P<indicators>{INDICATOR_CODE_PATTERN}(?:\s*,\s*{INDICATOR_CODE_PATTERN})*)(?![\w-]))?
    """,
    re.VERBOSE,
)
"""One contribution row: competence, amount and optional indicators.

Individual contributor tables insert the payment date and the paid contribution
before the contribution salary; ``amount`` always captures the salary.
"""

INDICATOR_CODE_RE = re.compile(rf"(?<![\w-]){INDICATOR_CODE_PATTERN}(?![\w-])")

HEADER_INDICATORS_RE = re.compile(
    rf"Indicadores\s*:\s*(?P<codes>{INDICATOR_CODE_PATTERN}(?:[\s,]+{INDICATOR_CODE_PATTERN})*)"
)
"""Explicit ``Indicadores:`` label followed by one or more codes."""

LAST_REMUNERATION_RE = re.compile(
    r"[UÚ]lt(?:\.|ima)?\s*Remun(?:\.|era[cç][aã]o)?\s*:?\s*"
    r"(?<![\d/])(?P<month>\d{2})/(?P<year>\d{4})(?![\d/])",
    re.IGNORECASE,
)
"""``Últ. Remun. 06/2010`` style markers."""

BENEFIT_MARKER_RE = re.compile(r"\bBenef[ií]cio\b|\bNB\b", re.IGNORECASE)
BENEFIT_NUMBER_RE = re.compile(
    r"(?:\bNB\b|Benef[ií]cio)\s*(?:n[º°o.]*)?\s*:?\s*(?P<number>\d[\d.\-/]{5,}\d)",
    re.IGNORECASE,
)
BENEFIT_BARE_NUMBER_RE = re.compile(r"(?<![\d./-])(?P<number>\d{10})(?![\d./-])")
