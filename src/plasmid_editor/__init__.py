"""Plasmid Editor.

Annotated DNA sequence records: a forgiving GenBank reader, restriction
site detection over linear and circular sequences, sequence edits that
keep derived sites current, and GenBank/FASTA writers.
"""

__version__ = "1.0.0"

from .config import ToolkitConfig
from .models import Feature, Primer, RestrictionSite, Strand
from .record import SequenceRecord
from .core import (
    COMMON_ENZYMES,
    PatternMatcher,
    gc_content, molecular_weight, reverse_complement, translate,
)
from .core.genbank_parser import GenBankParser, parse_genbank
from .core.genbank_writer import GenBankWriter, FastaWriter, to_genbank, to_fasta

__all__ = [
    "__version__",
    "ToolkitConfig",
    "Feature",
    "Primer",
    "RestrictionSite",
    "Strand",
    "SequenceRecord",
    "COMMON_ENZYMES",
    "PatternMatcher",
    "gc_content",
    "molecular_weight",
    "reverse_complement",
    "translate",
    "GenBankParser",
    "parse_genbank",
    "GenBankWriter",
    "FastaWriter",
    "to_genbank",
    "to_fasta",
]
