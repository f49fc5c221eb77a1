"""Utilities for ingesting CNIS extracts."""

from .bonds import BondFields, extract_bond_fields
from .end_dates import infer_end_date
from .extractors import extract_text_from_file
from .parser import parse_bond, parse_cnis
from .personal import extract_personal_data
from .reader import clean_cnis_text, read_cnis_text
from .remuneration import extract_remunerations
from .segmenter import BondSegment, segment_bonds

__all__ = [
    "parse_cnis",
    "parse_bond",
    "extract_personal_data",
    "segment_bonds",
    "extract_bond_fields",
    "extract_remunerations",
    "infer_end_date",
    "extract_text_from_file",
    "clean_cnis_text",
    "read_cnis_text",
    "BondFields",
    "BondSegment",
]
