"""Split CNIS text into one substring per bond."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.regexes import BOND_ANCHOR_RE

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class BondSegment:
    """Substring of the extract that belongs to a single bond."""

    sequence: int
    """Sequence number exactly as printed in the document."""

    text: str
    """Text from this bond's anchor up to the next anchor (or the end)."""

    offset: int
    """Position of the anchor within the full text."""


def find_bond_anchors(text: str) -> list[tuple[int, int]]:
    """Return ``(offset, sequence)`` pairs for every bond boundary in ``text``.

    An anchor is a short integer followed by an NIT or company registration.
    A sequence number already seen earlier in the text is not a new boundary,
    so a stray match stays inside the preceding bond.
    """

    anchors: list[tuple[int, int]] = []
    seen: set[int] = set()
    for match in BOND_ANCHOR_RE.finditer(text or ""):
        sequence = int(match["seq"])
        if sequence < 1 or sequence in seen:
            logger.debug("Skipping repeated or invalid anchor %r at %s", match.group(0), match.start())
            continue
        seen.add(sequence)
        anchors.append((match.start(), sequence))
    return anchors


def segment_bonds(text: str) -> list[BondSegment]:
    """Split ``text`` into :class:`BondSegment` objects in document order.

    Joining the returned segment texts reproduces ``text`` from the first
    anchor onward. No anchors yield an empty list; deciding whether that is a
    recognition failure is left to the caller.
    """

    anchors = find_bond_anchors(text)
    segments: list[BondSegment] = []
    for index, (offset, sequence) in enumerate(anchors):
        end = anchors[index + 1][0] if index + 1 < len(anchors) else len(text)
        segments.append(BondSegment(sequence=sequence, text=text[offset:end], offset=offset))
    logger.debug("Segmented %d bond(s)", len(segments))
    return segments
