"""Manufacturing documents derived from a pattern IR."""

from __future__ import annotations

from .bom import generate_bom, yards_for_area
from .construction_notes import generate_construction_notes
from .spec_sheet import generate_spec_sheet

__all__ = [
    "generate_bom",
    "generate_construction_notes",
    "generate_spec_sheet",
    "yards_for_area",
]
