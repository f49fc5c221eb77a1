"""CLI for parsing a CNIS extract and computing contribution time locally."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence


def _parse_activity(values: Sequence[str]) -> dict[int, str]:
    overrides: dict[int, str] = {}
    for raw in values:
        sequence, sep, activity = raw.partition("=")
        if not sep or not sequence.strip().isdigit():
            raise SystemExit(f"Invalid --activity value '{raw}'; expected SEQ=TYPE.")
        overrides[int(sequence)] = activity.strip()
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CNIS contribution time calculator")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", help="Path to the CNIS extract (PDF or text)")
    source.add_argument("--stdin", action="store_true", help="Read the extract text from stdin")
    parser.add_argument("--gender", choices=["M", "F"], help="Subject gender for special-time factors")
    parser.add_argument(
        "--exclude",
        type=int,
        action="append",
        default=[],
        metavar="SEQ",
        help="Sequence number of a bond to leave out of the total (repeatable)",
    )
    parser.add_argument(
        "--activity",
        action="append",
        default=[],
        metavar="SEQ=TYPE",
        help="Activity type for a bond: common, special_25, special_20 or special_15",
    )
    parser.add_argument(
        "--concurrent",
        type=int,
        action="append",
        default=[],
        metavar="SEQ",
        help="Mark a bond as concurrent with another bond (repeatable)",
    )
    parser.add_argument("--log-level", help="Logging level (defaults to LOG_LEVEL)")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and print the report payload as JSON to stdout.

    Example::

        python -m cli.analyze --file extrato.pdf --gender F --exclude 3 --activity 2=special_25
    """

    args = build_parser().parse_args(argv)

    import config
    from core.errors import ExtractionError
    from exports.models import CnisReportExport
    from ingest.parser import parse_cnis
    from ingest.reader import clean_cnis_text, read_cnis_text
    from models.cnis import ActivityType
    from utils.logging_context import configure_logging

    configure_logging(level=(args.log_level or config.LOG_LEVEL).upper())
    logger = logging.getLogger("cli.analyze")

    try:
        if args.stdin:
            text = clean_cnis_text(sys.stdin.read())
            source = "<stdin>"
        else:
            text = read_cnis_text([args.file])
            source = args.file
    except ValueError as exc:
        raise SystemExit(str(exc))

    try:
        document = parse_cnis(text, source=source)
    except ExtractionError as exc:
        raise SystemExit(str(exc))

    activities = _parse_activity(args.activity)
    excluded = set(args.exclude)
    concurrent = set(args.concurrent)
    bonds = []
    for bond in document.bonds:
        update: dict[str, object] = {}
        if bond.sequence in excluded:
            update["included"] = False
        if bond.sequence in concurrent:
            update["concurrent"] = True
        if bond.sequence in activities:
            try:
                update["activity_type"] = ActivityType(activities[bond.sequence])
            except ValueError:
                raise SystemExit(f"Unknown activity type '{activities[bond.sequence]}'.")
        bonds.append(bond.model_copy(update=update) if update else bond)

    unknown = (excluded | concurrent | set(activities)) - {bond.sequence for bond in bonds}
    if unknown:
        logger.warning("Ignoring overrides for unknown bond(s): %s", sorted(unknown))

    document = document.model_copy(update={"bonds": bonds})
    export = CnisReportExport.from_document(document, gender=args.gender)
    print(json.dumps(export.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":  # pragma: no cover
    main()
