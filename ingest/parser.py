"""Turn CNIS text into a :class:`~models.cnis.CnisDocument`."""

from __future__ import annotations

import logging

from core.errors import DocumentNotRecognizedError, EmptyDocumentError
from ingest.bonds import extract_bond_fields
from ingest.end_dates import infer_end_date
from ingest.personal import extract_personal_data
from ingest.remuneration import extract_remunerations
from ingest.segmenter import BondSegment, segment_bonds
from models.cnis import Bond, CnisDocument
from utils.logging_context import log_context

logger = logging.getLogger(__name__)


def parse_bond(segment: BondSegment) -> Bond:
    """Build a :class:`Bond` from one segment."""

    with log_context(bond=str(segment.sequence)):
        fields = extract_bond_fields(segment)
        contributions = extract_remunerations(segment.text)
        end_date, end_source = infer_end_date(fields, contributions, block_text=segment.text)
        return Bond(
            sequence=fields.sequence,
            registration_id=fields.registration_id,
            employer_code=fields.employer_code,
            origin=fields.origin,
            category=fields.category,
            start_date=fields.start_date,
            end_date=end_date,
            end_date_source=end_source,
            indicators=fields.indicators,
            contributions=contributions,
        )


def parse_cnis(text: str, *, source: str | None = None) -> CnisDocument:
    """Parse the full text of a CNIS extract.

    Args:
        text: Concatenated text of all pages in reading order.
        source: Optional document name bound to the log context.

    Returns:
        The subject profile and the bonds in document order.

    Raises:
        EmptyDocumentError: If ``text`` is blank.
        DocumentNotRecognizedError: If no bond record can be located.
    """

    with log_context(document=source):
        if not text or not text.strip():
            raise EmptyDocumentError()

        with log_context(stage="personal"):
            profile = extract_personal_data(text)

        with log_context(stage="segment"):
            segments = segment_bonds(text)
        if not segments:
            logger.warning("No bond anchors found in %d characters of text", len(text))
            raise DocumentNotRecognizedError(text_length=len(text))

        with log_context(stage="bonds"):
            bonds = [parse_bond(segment) for segment in segments]

        logger.info(
            "Parsed CNIS with %d bond(s) and %d contribution row(s)",
            len(bonds),
            sum(bond.contribution_count for bond in bonds),
        )
        return CnisDocument(profile=profile, bonds=bonds)
