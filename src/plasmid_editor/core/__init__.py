"""Core processing modules for Plasmid Editor.

The GenBank reader and writer build on :mod:`plasmid_editor.record` and
are imported from their own modules.
"""

from .enzymes import COMMON_ENZYMES, IUPAC_CODES, build_catalog, load_enzyme_file
from .matcher import PatternMatcher
from .analysis import (
    gc_content, molecular_weight, complement, reverse_complement,
    translate, six_frame_translation, normalize_bases,
)

__all__ = [
    "COMMON_ENZYMES",
    "IUPAC_CODES",
    "build_catalog",
    "load_enzyme_file",
    "PatternMatcher",
    "gc_content",
    "molecular_weight",
    "complement",
    "reverse_complement",
    "translate",
    "six_frame_translation",
    "normalize_bases",
]
