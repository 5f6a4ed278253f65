"""Data models for plasmid editor."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, Optional


class Strand(Enum):
    """Strand an annotation lies on."""
    FORWARD = "forward"
    REVERSE = "reverse"
    BOTH = "both"

    def flipped(self) -> "Strand":
        """Strand after the record is reverse-complemented."""
        if self is Strand.FORWARD:
            return Strand.REVERSE
        if self is Strand.REVERSE:
            return Strand.FORWARD
        return self


# Display colors by feature type
FEATURE_COLORS: Dict[str, str] = {
    "gene": "#FF6B6B",
    "CDS": "#4ECDC4",
    "exon": "#45B7D1",
    "intron": "#96CEB4",
    "promoter": "#FFEAA7",
    "terminator": "#DDA0DD",
    "rep_origin": "#98D8C8",
    "primer_bind": "#F7DC6F",
    "misc_feature": "#BB8FCE",
    "misc_binding": "#85C1E9",
    "LTR": "#F8C471",
    "repeat_region": "#82E0AA",
    "stem_loop": "#F1948A",
    "protein_bind": "#85C1E9",
    "sig_peptide": "#F7DC6F",
    "mat_peptide": "#BB8FCE",
    "source": "#D5DBDB",
    "D-loop": "#AED6F1",
    "C_region": "#A9DFBF",
    "V_region": "#F9E79F",
    "J_region": "#D7BDE2",
    "N_region": "#F5B7B1",
    "S_region": "#A3E4D7",
    "variation": "#FAD7A0",
    "5'UTR": "#AED6F1",
    "3'UTR": "#A9DFBF",
    "enhancer": "#F9E79F",
    "attenuator": "#D7BDE2",
    "RBS": "#F5B7B1",
    "polyA_signal": "#A3E4D7",
    "polyA_site": "#FAD7A0",
    "prim_transcript": "#AED6F1",
    "tRNA": "#A9DFBF",
    "rRNA": "#F9E79F",
    "mRNA": "#D7BDE2",
    "ncRNA": "#F5B7B1",
    "miRNA": "#A3E4D7",
    "snRNA": "#FAD7A0",
    "snoRNA": "#AED6F1",
}

DEFAULT_FEATURE_COLOR = "#BB8FCE"


def feature_color(feature_type: str) -> str:
    """Get display color for a feature type."""
    return FEATURE_COLORS.get(feature_type, DEFAULT_FEATURE_COLOR)


@dataclass
class Feature:
    """Annotated region of a sequence record."""

    id: str
    type: str
    start: int  # 1-based, inclusive
    end: int  # 1-based, inclusive
    strand: Strand = Strand.FORWARD
    name: str = ""
    label: str = ""
    note: str = ""
    frame: Optional[int] = None  # reading frame offset, CDS only
    qualifiers: Dict[str, str] = field(default_factory=dict)

    @property
    def display_label(self) -> str:
        """Label shown to users, falling back to the name."""
        return self.label or self.name

    @property
    def color(self) -> str:
        """Display color for this feature type."""
        return feature_color(self.type)

    @property
    def length(self) -> int:
        """Get feature length in residues."""
        return self.end - self.start + 1

    def contains(self, position: int) -> bool:
        """Check whether a 1-based position falls inside the feature."""
        return self.start <= position <= self.end

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['strand'] = self.strand.value  # Convert enum to string
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Feature":
        """Create from dictionary."""
        data = dict(data)
        if isinstance(data.get('strand'), str):
            data['strand'] = Strand(data['strand'])
        return cls(**data)


@dataclass
class RestrictionSite:
    """Recognition site of a catalogued enzyme."""

    name: str
    pattern_sequence: str
    position: int  # 1-based start of the match

    @property
    def id(self) -> str:
        """Identifier derived from enzyme name and position."""
        return f"enzyme-{self.name}-{self.position}"

    @property
    def length(self) -> int:
        """Get recognition sequence length."""
        return len(self.pattern_sequence)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['id'] = self.id
        return data


@dataclass
class Primer:
    """Primer attached to a sequence record."""

    id: str
    name: str = ""
    sequence: str = ""
    start: int = 0
    end: int = 0
    strand: Strand = Strand.FORWARD

    @property
    def length(self) -> int:
        """Get primer length."""
        return len(self.sequence)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        data = asdict(self)
        data['strand'] = self.strand.value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Primer":
        """Create from dictionary."""
        data = dict(data)
        if isinstance(data.get('strand'), str):
            data['strand'] = Strand(data['strand'])
        return cls(**data)
