"""GenBank flat-file parser.

A forgiving line-oriented reader for the subset of the GenBank format used
by plasmid editors: LOCUS and the common header keywords, the feature
table and the ORIGIN block. Content it does not understand is skipped;
coercions it had to make are recorded on ``record.parse_warnings``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger

from ..exceptions import ParseError
from ..models import Feature, Strand
from ..record import SequenceRecord
from .analysis import normalize_bases
from .matcher import PatternMatcher


class ParserState(Enum):
    """Section of the record being read."""
    HEADER = "header"
    FEATURES = "features"
    SEQUENCE = "sequence"
    DONE = "done"


HEADER_KEYWORDS = ("DEFINITION", "ACCESSION", "VERSION", "KEYWORDS", "SOURCE")

ORGANISM_PREFIX = "  ORGANISM"

RANGE_PATTERN = re.compile(r'<?(\d+)\s*\.\.\s*>?(\d+)')
NUMBER_PATTERN = re.compile(r'(\d+)')
QUALIFIER_PATTERN = re.compile(r'^/([^=\s]+)(?:=(.*))?$', re.DOTALL)
SEQUENCE_LINE_PATTERN = re.compile(r'^\s*(\d+)\s+(.*)$')
DATE_PATTERN = re.compile(r'^\d{1,2}-[A-Za-z]{3}-\d{4}$')
DIVISION_PATTERN = re.compile(r'^[A-Z]{3}$')

# Feature-table columns
FEATURE_INDENT = " " * 5
QUALIFIER_INDENT = " " * 6


@dataclass
class _PendingFeature:
    """Raw lines of a feature that has not been finalized yet."""
    type: str
    location_lines: List[str]
    qualifier_lines: List[str] = field(default_factory=list)


# Qualifier handlers: (feature, value) -> None

# Raw qualifiers are stored on the feature before its handler runs, so
# /gene and /label can see each other: an explicit /gene keeps the name and
# an explicit /label keeps the label, whatever their order.

def _set_gene(feature: Feature, value: str) -> None:
    feature.name = value
    if "label" not in feature.qualifiers:
        feature.label = value


def _set_label(feature: Feature, value: str) -> None:
    feature.label = value
    if "gene" not in feature.qualifiers:
        feature.name = value


def _set_note(feature: Feature, value: str) -> None:
    feature.note = value


def _set_name_if_missing(feature: Feature, value: str) -> None:
    if not feature.name:
        feature.name = value


def _set_label_if_missing(feature: Feature, value: str) -> None:
    if not feature.label:
        feature.label = value


def _set_frame(feature: Feature, value: str) -> None:
    if feature.type == "CDS" and value.strip().isdigit():
        frame = int(value) - 1
        if frame in (0, 1, 2):
            feature.frame = frame


def _set_direction(feature: Feature, value: str) -> None:
    if value.strip().upper() == "BOTH":
        feature.strand = Strand.BOTH


QUALIFIER_HANDLERS: Dict[str, Callable[[Feature, str], None]] = {
    "gene": _set_gene,
    "label": _set_label,
    "note": _set_note,
    "locus_tag": _set_name_if_missing,
    "product": _set_label_if_missing,
    "codon_start": _set_frame,
    "direction": _set_direction,
}


def parse_location(location: str) -> Tuple[Optional[int], Optional[int], Strand]:
    """
    Parse a feature location expression.

    Returns:
        (start, end, strand); start and end are None when the expression
        holds no number at all
    """
    strand = Strand.REVERSE if "complement" in location else Strand.FORWARD

    ranges = [(int(a), int(b)) for a, b in RANGE_PATTERN.findall(location)]
    if ranges:
        start, end = ranges[0][0], ranges[-1][1]
        if start > end:
            # Origin-spanning join: keep the first segment
            start, end = ranges[0]
        return start, end, strand

    single = NUMBER_PATTERN.search(location)
    if single:
        position = int(single.group(1))
        return position, position, strand

    return None, None, strand


def _unquote(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
        if value.endswith('"'):
            value = value[:-1]
    return value.replace('""', '"')


def _join_qualifier_lines(lines: List[str]) -> List[str]:
    """Merge wrapped qualifier lines into one string per qualifier."""
    qualifiers: List[str] = []
    for line in lines:
        open_quote = bool(qualifiers) and qualifiers[-1].count('"') % 2 == 1
        if line.startswith('/') and not open_quote:
            qualifiers.append(line)
        elif qualifiers:
            qualifiers[-1] = f"{qualifiers[-1]} {line}"
    return qualifiers


class GenBankParser:
    """Parser for GenBank flat files."""

    def __init__(self, matcher: Optional[PatternMatcher] = None):
        """Initialize parser; ``matcher`` is handed to the records it builds."""
        self.matcher = matcher

    def parse_file(self, input_file: Path) -> SequenceRecord:
        """Read and parse a GenBank file."""
        input_file = Path(input_file)
        if not input_file.exists():
            raise ParseError("Input file not found", input_file=str(input_file))

        logger.info(f"Parsing GenBank file: {input_file}")

        try:
            with open(input_file, 'r', encoding='utf-8') as f:
                text = f.read()
        except (IOError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to read input file: {e}", input_file=str(input_file)) from e

        record = self.parse_text(text)
        logger.info(
            f"Parsed {record.name or input_file.name}: {record.length} bp, "
            f"{len(record.features)} features"
        )
        return record

    def parse_text(self, text: str) -> SequenceRecord:
        """Parse GenBank text into a record; never raises on content."""
        record = SequenceRecord(matcher=self.matcher)
        metadata: Dict[str, str] = {}
        features: List[Feature] = []
        residues: List[str] = []
        warnings: List[str] = []

        state = ParserState.HEADER
        last_keyword: Optional[str] = None
        pending: Optional[_PendingFeature] = None

        for line_number, line in enumerate(text.splitlines(), start=1):
            if state is ParserState.DONE:
                break

            if line.rstrip() == "//":
                state = ParserState.DONE
                continue

            if line.startswith("ORIGIN"):
                state = ParserState.SEQUENCE
                continue

            if state is ParserState.HEADER:
                if line.startswith("FEATURES"):
                    state = ParserState.FEATURES
                    continue
                last_keyword = self._parse_header_line(line, metadata, last_keyword)

            elif state is ParserState.FEATURES:
                if not line.strip():
                    continue
                if line.startswith(FEATURE_INDENT) and not line.startswith(QUALIFIER_INDENT):
                    if pending is not None:
                        features.append(self._finalize_feature(pending, len(features), warnings))
                    parts = line.strip().split(None, 1)
                    pending = _PendingFeature(
                        type=parts[0],
                        location_lines=[parts[1]] if len(parts) > 1 else [],
                    )
                elif line.startswith(QUALIFIER_INDENT) and pending is not None:
                    content = line.strip()
                    if pending.qualifier_lines or content.startswith('/'):
                        pending.qualifier_lines.append(content)
                    elif content:
                        pending.location_lines.append(content)

            elif state is ParserState.SEQUENCE:
                match = SEQUENCE_LINE_PATTERN.match(line)
                if match:
                    chunk = re.sub(r'\s', '', match.group(2)).upper()
                    bases = normalize_bases(chunk)
                    if len(bases) != len(chunk):
                        warnings.append(
                            f"Line {line_number}: dropped {len(chunk) - len(bases)} non-ACGT characters"
                        )
                    residues.append(bases)

        if pending is not None:
            features.append(self._finalize_feature(pending, len(features), warnings))

        record.name = metadata.get("name", "")
        record.description = metadata.get("DEFINITION", "")
        record.accession = metadata.get("ACCESSION", "")
        record.version = metadata.get("VERSION", "")
        record.keywords = metadata.get("KEYWORDS", "")
        record.source = metadata.get("SOURCE", "")
        record.organism = metadata.get("ORGANISM", "")
        record.molecule_type = metadata.get("molecule_type", "")
        record.division = metadata.get("division", "")
        record.date = metadata.get("date", "")
        record.id = record.accession or record.name
        record.is_circular = metadata.get("topology") == "circular"
        record.features = features
        record.residues = "".join(residues)
        record.parse_warnings = warnings

        for warning in warnings:
            logger.warning(warning)

        record.refresh_restriction_sites()
        return record

    def _parse_header_line(self, line: str, metadata: Dict[str, str], last_keyword: Optional[str]) -> Optional[str]:
        """Store one header line; returns the keyword continuation lines belong to."""
        if line.startswith("LOCUS"):
            self._parse_locus(line, metadata)
            return "LOCUS"

        for keyword in HEADER_KEYWORDS:
            if line.startswith(keyword):
                metadata[keyword] = line[len(keyword):].strip()
                return keyword

        if line.startswith(ORGANISM_PREFIX):
            metadata["ORGANISM"] = line[len(ORGANISM_PREFIX):].strip()
            return "ORGANISM"

        # Wrapped definition text
        if last_keyword == "DEFINITION" and line.startswith(" ") and line.strip():
            metadata["DEFINITION"] = f"{metadata['DEFINITION']} {line.strip()}".strip()
            return last_keyword

        if line.strip() and not line.startswith(" "):
            return None
        return last_keyword

    @staticmethod
    def _parse_locus(line: str, metadata: Dict[str, str]) -> None:
        tokens = line[len("LOCUS"):].split()
        if not tokens:
            return

        metadata["name"] = tokens[0]
        metadata["topology"] = "linear"

        for index, token in enumerate(tokens[1:], start=1):
            lowered = token.lower()
            if lowered == "circular":
                metadata["topology"] = "circular"
            elif lowered in ("bp", "aa") and index + 1 < len(tokens):
                candidate = tokens[index + 1]
                if candidate.lower() not in ("circular", "linear"):
                    metadata["molecule_type"] = candidate
            elif DATE_PATTERN.match(token):
                metadata["date"] = token.upper()
            elif DIVISION_PATTERN.match(token) and token not in ("DNA", "RNA"):
                metadata["division"] = token

    def _finalize_feature(self, pending: _PendingFeature, index: int, warnings: List[str]) -> Feature:
        location = "".join(pending.location_lines)
        start, end, strand = parse_location(location)
        if start is None:
            warnings.append(
                f"Feature {pending.type}: unparseable location {location!r}, defaulting to 1..1"
            )
            start = end = 1

        feature = Feature(
            id=f"feature-{index}",
            type=pending.type,
            start=start,
            end=end,
            strand=strand,
        )

        for raw in _join_qualifier_lines(pending.qualifier_lines):
            match = QUALIFIER_PATTERN.match(raw)
            if not match:
                continue
            key, value = match.group(1), _unquote(match.group(2) or "")
            feature.qualifiers[key] = value
            handler = QUALIFIER_HANDLERS.get(key)
            if handler is not None:
                handler(feature, value)

        if not feature.name:
            feature.name = f"{feature.type}_{feature.start}"
        return feature


def parse_genbank(text: str, matcher: Optional[PatternMatcher] = None) -> SequenceRecord:
    """Decode GenBank text into a :class:`SequenceRecord`."""
    return GenBankParser(matcher).parse_text(text)
