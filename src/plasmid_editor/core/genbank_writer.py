"""GenBank and FASTA writers for sequence records."""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..exceptions import OutputError
from ..models import Feature, Strand
from ..record import SequenceRecord

MONTHS = ["JAN", "FEB", "MAR", "APR", "MAY", "JUN",
          "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]

GENBANK_DATE = re.compile(r'^\d{2}-(JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)-\d{4}$')

HEADER_WIDTH = 12
QUALIFIER_PREFIX = " " * 21
LINE_WIDTH = 79
RESIDUES_PER_LINE = 60
RESIDUES_PER_BLOCK = 10
PLACEHOLDER = "unknown"


def format_genbank_date(day: Optional[date] = None) -> str:
    """Format a date as DD-MON-YYYY."""
    day = day or date.today()
    return f"{day.day:02d}-{MONTHS[day.month - 1]}-{day.year}"


class GenBankWriter:
    """Serialize a record to GenBank flat-file text."""

    def __init__(self, today: Optional[date] = None):
        """
        Initialize writer.

        Args:
            today: Date stamped on records without a valid date of their own
        """
        self.today = today

    def format(self, record: SequenceRecord) -> str:
        lines = self._header_lines(record)
        lines.append("FEATURES             Location/Qualifiers")
        for feature in record.features:
            lines.extend(self._feature_lines(feature))
        lines.append("ORIGIN")
        lines.extend(self._origin_lines(record.residues))
        lines.append("//")
        return "\n".join(lines) + "\n"

    def write(self, record: SequenceRecord, output_file: Path) -> Path:
        output_file = Path(output_file)
        _write_text(self.format(record), output_file)
        logger.info(f"Wrote GenBank record {record.name or PLACEHOLDER} to {output_file}")
        return output_file

    def _header_lines(self, record: SequenceRecord) -> List[str]:
        name = re.sub(r'\s+', '_', record.name.strip()) or PLACEHOLDER
        topology = "circular" if record.is_circular else "linear"
        stamp = record.date.upper() if GENBANK_DATE.match(record.date.upper()) else format_genbank_date(self.today)

        locus = f"LOCUS       {name:<16} {record.length:>11} bp    DNA     {topology:<8}"
        if record.division:
            locus += f" {record.division}"
        locus += f" {stamp}"

        accession = record.accession or PLACEHOLDER
        organism = record.organism or PLACEHOLDER
        lines = [locus]
        lines.extend(_wrap_header("DEFINITION", record.description or record.name or "."))
        lines.append(_header("ACCESSION", accession))
        lines.append(_header("VERSION", record.version or f"{accession}.1"))
        lines.append(_header("KEYWORDS", record.keywords or "."))
        lines.append(_header("SOURCE", record.source or organism))
        lines.append(_header("  ORGANISM", organism))
        lines.append(" " * HEADER_WIDTH + ".")
        return lines

    def _feature_lines(self, feature: Feature) -> List[str]:
        location = f"{feature.start}..{feature.end}"
        if feature.strand is Strand.REVERSE:
            location = f"complement({location})"

        lines = [f"     {feature.type:<15} {location}"]
        if feature.name:
            lines.extend(_qualifier("gene", feature.name))
        if feature.label and feature.label != feature.name:
            lines.extend(_qualifier("label", feature.label))
        if feature.note:
            lines.extend(_qualifier("note", feature.note))
        if feature.type == "CDS" and feature.frame is not None:
            lines.append(f"{QUALIFIER_PREFIX}/codon_start={feature.frame + 1}")
        if feature.strand is Strand.BOTH:
            lines.append(f"{QUALIFIER_PREFIX}/direction=BOTH")
        return lines

    @staticmethod
    def _origin_lines(residues: str) -> List[str]:
        residues = residues.lower()
        lines = []
        for i in range(0, len(residues), RESIDUES_PER_LINE):
            row = residues[i:i + RESIDUES_PER_LINE]
            blocks = [row[j:j + RESIDUES_PER_BLOCK] for j in range(0, len(row), RESIDUES_PER_BLOCK)]
            lines.append(f"{i + 1:>9} " + " ".join(blocks))
        return lines


class FastaWriter:
    """Serialize a record to FASTA text."""

    def __init__(self, width: int = RESIDUES_PER_LINE):
        if width <= 0:
            raise ValueError(f"FASTA line width must be positive, got {width}")
        self.width = width

    def format(self, record: SequenceRecord) -> str:
        header = f">{record.name} {record.description}".rstrip()
        residues = record.residues
        lines = [header]
        lines.extend(residues[i:i + self.width] for i in range(0, len(residues), self.width))
        return "\n".join(lines) + "\n"

    def write(self, record: SequenceRecord, output_file: Path) -> Path:
        output_file = Path(output_file)
        _write_text(self.format(record), output_file)
        logger.info(f"Wrote FASTA record {record.name} to {output_file}")
        return output_file


def _wrap(text: str, width: int) -> List[str]:
    """
    Split text into lines of at most ``width`` characters.

    Breaks fall only on a single space between two non-whitespace characters
    and that space is dropped: the lines joined with one space give back the
    text. A run with no such break stays on one overlong line.
    """
    lines = []
    while len(text) > width:
        breaks = [
            i for i in range(1, len(text) - 1)
            if text[i] == ' ' and not text[i - 1].isspace() and not text[i + 1].isspace()
        ]
        if not breaks:
            break
        fitting = [i for i in breaks if i <= width]
        cut = fitting[-1] if fitting else breaks[0]
        lines.append(text[:cut])
        text = text[cut + 1:]
    lines.append(text)
    return lines


def _header(keyword: str, value: str) -> str:
    return f"{keyword:<{HEADER_WIDTH}}{value}"


def _wrap_header(keyword: str, value: str) -> List[str]:
    wrapped = _wrap(value, LINE_WIDTH - HEADER_WIDTH)
    lines = [_header(keyword, wrapped[0])]
    lines.extend(" " * HEADER_WIDTH + part for part in wrapped[1:])
    return lines


def _qualifier(key: str, value: str) -> List[str]:
    text = f'/{key}="{value.replace(chr(34), chr(34) * 2)}"'
    wrapped = _wrap(text, LINE_WIDTH - len(QUALIFIER_PREFIX))
    return [QUALIFIER_PREFIX + part for part in wrapped]


def _write_text(text: str, output_file: Path) -> None:
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(text)
    except IOError as e:
        raise OutputError(str(e), output_file=str(output_file)) from e


def to_genbank(record: SequenceRecord, today: Optional[date] = None) -> str:
    """Encode a record as GenBank text."""
    return GenBankWriter(today).format(record)


def to_fasta(record: SequenceRecord, width: int = RESIDUES_PER_LINE) -> str:
    """Encode a record as FASTA text."""
    return FastaWriter(width).format(record)


def write_genbank(record: SequenceRecord, output_file: Path) -> Path:
    return GenBankWriter().write(record, output_file)


def write_fasta(record: SequenceRecord, output_file: Path, width: int = RESIDUES_PER_LINE) -> Path:
    return FastaWriter(width).write(record, output_file)
