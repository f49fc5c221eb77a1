"""Contribution time arithmetic for parsed bonds.

Day spans are inclusive (a bond that starts and ends on the same day counts as
one day). The raw span is multiplied by the special-activity factor of
:data:`core.rules.TIME_MULTIPLIERS` and floored. Adjusted days are decomposed
with the domain convention of 365.25-day years and 30.44-day months, not
calendar month lengths.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Sequence

import config
from core.rules import DAYS_PER_MONTH, DAYS_PER_YEAR, multiplier_for
from models.cnis import ActivityType, Bond, ContributionDuration, ContributionSummary, Gender

logger = logging.getLogger(__name__)

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


def _coerce_date(value: date | str | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        candidate = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(candidate, fmt).date()
            except ValueError:
                continue
    return None


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def decompose_days(total_days: int) -> ContributionDuration:
    """Split ``total_days`` into years, months and days."""

    if total_days <= 0:
        return ContributionDuration.zero()
    total = Decimal(total_days)
    years = _floor(total / DAYS_PER_YEAR)
    remainder = total % DAYS_PER_YEAR
    months = _floor(remainder / DAYS_PER_MONTH)
    days = _floor(remainder % DAYS_PER_MONTH)
    return ContributionDuration(years=years, months=months, days=days, total_days=total_days)


def resolve_gender(gender: Gender | str | None) -> Gender:
    """Return ``gender`` or the configured default when it is missing."""

    parsed = Gender.parse(gender)
    if parsed is not None:
        return parsed
    fallback = Gender.parse(config.CNIS_DEFAULT_GENDER)
    return fallback or Gender.MALE


def compute_contribution_time(
    start: date | str | None,
    end: date | str | None,
    activity_type: ActivityType | str = ActivityType.COMMON,
    gender: Gender | str | None = None,
) -> ContributionDuration:
    """Return the adjusted contribution time between ``start`` and ``end``.

    Missing or unparseable dates, and periods that end before they start,
    yield the zero duration.
    """

    start_date = _coerce_date(start)
    end_date = _coerce_date(end)
    if start_date is None or end_date is None:
        return ContributionDuration.zero()
    raw_days = (end_date - start_date).days + 1
    if raw_days <= 0:
        logger.warning("Period %s to %s ends before it starts; counting zero days", start_date, end_date)
        return ContributionDuration.zero()
    factor = multiplier_for(ActivityType(activity_type), resolve_gender(gender))
    adjusted = _floor(Decimal(raw_days) * factor)
    return decompose_days(adjusted)


def compute_bond_time(bond: Bond, gender: Gender | str | None = None) -> ContributionDuration:
    """Return the adjusted contribution time of a single bond."""

    return compute_contribution_time(bond.start_date, bond.end_date, bond.activity_type, gender)


def combine_durations(durations: Iterable[ContributionDuration]) -> ContributionDuration:
    """Sum adjusted days of ``durations`` and decompose the total again."""

    return decompose_days(sum(duration.total_days for duration in durations))


def summarize_contribution_time(
    bonds: Sequence[Bond],
    *,
    gender: Gender | str | None = None,
) -> ContributionSummary:
    """Aggregate the contribution time of every bond flagged as included.

    Per-bond durations are returned for all bonds, keyed by sequence number,
    so excluded bonds can still be shown next to the total.
    """

    resolved = resolve_gender(gender)
    per_bond = {bond.sequence: compute_bond_time(bond, resolved) for bond in bonds}
    included = [bond for bond in bonds if bond.included]
    total = combine_durations(per_bond[bond.sequence] for bond in included)
    logger.debug(
        "Aggregated %d of %d bond(s) into %d adjusted day(s)",
        len(included),
        len(bonds),
        total.total_days,
    )
    return ContributionSummary(
        total=total,
        per_bond=per_bond,
        included_sequences=[bond.sequence for bond in included],
        qualifying_months=sum(bond.contribution_count for bond in included),
    )
