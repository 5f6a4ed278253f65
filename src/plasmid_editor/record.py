"""Sequence record model and edit operations.

A :class:`SequenceRecord` owns the residue string, its annotations and the
restriction sites derived from it. Sites are never stored independently:
every residue edit marks them dirty and the next read rescans the sequence.

Edit offsets are 0-based positions into the residue string and ranges are
half-open, matching Python slicing. Feature and primer coordinates stay
1-based and inclusive.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from loguru import logger

from .core import analysis
from .core.matcher import PatternMatcher
from .models import Feature, Primer, RestrictionSite, Strand

_DEFAULT_MATCHER: Optional[PatternMatcher] = None


def default_matcher() -> PatternMatcher:
    """Matcher over the common enzyme catalog, built on first use."""
    global _DEFAULT_MATCHER
    if _DEFAULT_MATCHER is None:
        _DEFAULT_MATCHER = PatternMatcher()
    return _DEFAULT_MATCHER


def _as_strand(strand: Union[Strand, str]) -> Strand:
    return strand if isinstance(strand, Strand) else Strand(strand)


def _shift_for_insert(position: int, offset: int, size: int) -> int:
    # Residue at 1-based `position` sits at 0-based position - 1
    return position + size if position > offset else position


def _remap_span_for_delete(start: int, end: int, del_start: int, del_end: int) -> Optional[Tuple[int, int]]:
    """Collapse a 1-based inclusive span around a deleted [del_start, del_end)."""
    size = del_end - del_start

    def shift(position: int) -> int:
        return position - size if position > del_end else position

    new_start = del_start + 1 if del_start < start <= del_end else shift(start)
    new_end = del_start if del_start < end <= del_end else shift(end)
    if new_start > new_end:
        return None
    return new_start, new_end


class SequenceRecord:
    """Annotated DNA sequence with derived restriction sites."""

    def __init__(
        self,
        residues: str = "",
        is_circular: bool = False,
        id: str = "",
        name: str = "",
        description: str = "",
        organism: str = "",
        accession: str = "",
        date: str = "",
        version: str = "",
        keywords: str = "",
        source: str = "",
        molecule_type: str = "",
        division: str = "",
        features: Optional[Iterable[Feature]] = None,
        primers: Optional[Iterable[Primer]] = None,
        matcher: Optional[PatternMatcher] = None,
    ):
        self._lock = threading.RLock()
        self.id = id
        self.name = name
        self.description = description
        self.organism = organism
        self.accession = accession
        self.date = date
        self.version = version
        self.keywords = keywords
        self.source = source
        self.molecule_type = molecule_type
        self.division = division
        self.is_circular = is_circular
        self.features: List[Feature] = list(features or [])
        self.primers: List[Primer] = list(primers or [])
        self.parse_warnings: List[str] = []
        self.matcher = matcher or default_matcher()

        self._residues = analysis.normalize_bases(residues)
        self._sites: List[RestrictionSite] = []
        self._sites_dirty = True

    @classmethod
    def from_raw(
        cls,
        name: str,
        raw_sequence: str,
        is_circular: bool = False,
        matcher: Optional[PatternMatcher] = None,
    ) -> "SequenceRecord":
        """Create a record from user-supplied text, dropping non-ACGT noise."""
        record = cls(residues=raw_sequence, is_circular=is_circular, id=name, name=name, matcher=matcher)
        record.refresh_restriction_sites()
        return record

    create_from_raw = from_raw

    # ------------------------------------------------------------------
    # Residues and derived sites
    # ------------------------------------------------------------------

    @property
    def residues(self) -> str:
        return self._residues

    @residues.setter
    def residues(self, value: str) -> None:
        with self._lock:
            self._residues = analysis.normalize_bases(value)
            self._sites_dirty = True

    @property
    def sequence(self) -> str:
        """Alias of :attr:`residues`."""
        return self._residues

    @property
    def length(self) -> int:
        return len(self._residues)

    def __len__(self) -> int:
        return len(self._residues)

    @property
    def is_circular(self) -> bool:
        return self._is_circular

    @is_circular.setter
    def is_circular(self, value: bool) -> None:
        # Topology changes which windows are scanned
        with self._lock:
            self._is_circular = bool(value)
            self._sites_dirty = True

    @property
    def restriction_sites(self) -> List[RestrictionSite]:
        """Complete sorted site list for the current residues."""
        with self._lock:
            if self._sites_dirty:
                self._sites = self._scan()
                self._sites_dirty = False
            return list(self._sites)

    def refresh_restriction_sites(self) -> List[RestrictionSite]:
        """Rescan now instead of on the next read."""
        with self._lock:
            self._sites_dirty = True
            return self.restriction_sites

    def _scan(self) -> List[RestrictionSite]:
        catalog = self.matcher.catalog
        return [
            RestrictionSite(name=name, pattern_sequence=catalog[name], position=position)
            for name, position in self.matcher.scan(self._residues, self._is_circular)
        ]

    def cut_counts(self) -> Dict[str, int]:
        """Number of sites per enzyme present in the record."""
        counts: Dict[str, int] = {}
        for site in self.restriction_sites:
            counts[site.name] = counts.get(site.name, 0) + 1
        return counts

    def unique_cutters(self) -> List[str]:
        """Enzymes with exactly one site, alphabetically."""
        return sorted(name for name, count in self.cut_counts().items() if count == 1)

    def search_sites(self, term: str) -> List[RestrictionSite]:
        """Sites whose enzyme name or pattern contains ``term`` (case-insensitive)."""
        term = term.lower()
        return [
            site for site in self.restriction_sites
            if term in site.name.lower() or term in site.pattern_sequence.lower()
        ]

    # ------------------------------------------------------------------
    # Edit operations
    # ------------------------------------------------------------------

    def _clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self._residues)))

    def insert_residues(self, position: int, bases: str, remap_annotations: bool = True) -> int:
        """
        Insert bases before 0-based ``position``.

        Args:
            position: 0-based offset; clamped to [0, length]
            bases: Bases to insert; non-ACGT characters are dropped
            remap_annotations: Shift features and primers downstream of
                the insertion

        Returns:
            Number of bases actually inserted
        """
        inserted = analysis.normalize_bases(bases)
        with self._lock:
            position = self._clamp(position)
            self._residues = self._residues[:position] + inserted + self._residues[position:]
            self._sites_dirty = True
            if remap_annotations and inserted:
                self._remap_insert(position, len(inserted))
        logger.debug(f"Inserted {len(inserted)} bp at {position} in {self.name or 'record'}")
        return len(inserted)

    def delete_residues(self, start: int, end: int, remap_annotations: bool = True) -> int:
        """
        Delete the half-open range [start, end).

        Annotations entirely inside the range are dropped when remapping.

        Returns:
            Number of bases removed
        """
        with self._lock:
            start, end = self._clamp(start), self._clamp(end)
            if end <= start:
                return 0
            self._residues = self._residues[:start] + self._residues[end:]
            self._sites_dirty = True
            if remap_annotations:
                self._remap_delete(start, end)
        logger.debug(f"Deleted {end - start} bp at {start} in {self.name or 'record'}")
        return end - start

    def replace_residues(self, start: int, end: int, bases: str, remap_annotations: bool = True) -> None:
        """Replace [start, end) with ``bases``: a delete followed by an insert at ``start``."""
        with self._lock:
            self.delete_residues(start, end, remap_annotations=remap_annotations)
            self.insert_residues(start, bases, remap_annotations=remap_annotations)

    def reverse_complement(self, remap_annotations: bool = True) -> None:
        """Reverse-complement the whole record in place.

        With remapping, annotation spans are reflected and forward/reverse
        strands swap.
        """
        with self._lock:
            self._residues = analysis.reverse_complement(self._residues)
            self._sites_dirty = True
            if remap_annotations:
                self._remap_reflect()

    def _remap_insert(self, offset: int, size: int) -> None:
        for item in [*self.features, *self.primers]:
            item.start = _shift_for_insert(item.start, offset, size)
            item.end = _shift_for_insert(item.end, offset, size)

    def _remap_delete(self, del_start: int, del_end: int) -> None:
        def keep(items):
            kept = []
            for item in items:
                span = _remap_span_for_delete(item.start, item.end, del_start, del_end)
                if span is None:
                    logger.debug(f"Dropping {item.id}: span deleted")
                    continue
                item.start, item.end = span
                kept.append(item)
            return kept

        self.features = keep(self.features)
        self.primers = keep(self.primers)

    def _remap_reflect(self) -> None:
        total = len(self._residues)
        for item in [*self.features, *self.primers]:
            item.start, item.end = total - item.end + 1, total - item.start + 1
            item.strand = item.strand.flipped()

    # ------------------------------------------------------------------
    # Features and primers
    # ------------------------------------------------------------------

    def _next_id(self, prefix: str, existing: Iterable[str]) -> str:
        taken = set(existing)
        index = len(taken)
        while f"{prefix}-{index}" in taken:
            index += 1
        return f"{prefix}-{index}"

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        for feature in self.features:
            if feature.id == feature_id:
                return feature
        return None

    def add_feature(
        self,
        type: str,
        start: int,
        end: int,
        strand: Union[Strand, str] = Strand.FORWARD,
        name: str = "",
        label: str = "",
        note: str = "",
        frame: Optional[int] = None,
    ) -> Feature:
        """Add a feature and return it with a freshly assigned id."""
        with self._lock:
            feature = Feature(
                id=self._next_id("feature", (f.id for f in self.features)),
                type=type,
                start=start,
                end=end,
                strand=_as_strand(strand),
                name=name or f"{type}_{start}",
                label=label,
                note=note,
                frame=frame,
            )
            self.features.append(feature)
        return feature

    def remove_feature(self, feature_id: str) -> bool:
        """Remove a feature; returns False if no feature has that id."""
        with self._lock:
            before = len(self.features)
            self.features = [f for f in self.features if f.id != feature_id]
            return len(self.features) != before

    def update_feature(self, feature_id: str, **changes) -> Optional[Feature]:
        """Apply field changes to a feature; the id cannot be changed."""
        changes.pop('id', None)
        if 'strand' in changes:
            changes['strand'] = _as_strand(changes['strand'])
        with self._lock:
            feature = self.get_feature(feature_id)
            if feature is None:
                return None
            for key, value in changes.items():
                if not hasattr(feature, key):
                    raise AttributeError(f"Feature has no field {key!r}")
                setattr(feature, key, value)
            return feature

    def features_at(self, position: int) -> List[Feature]:
        """Features covering a 1-based position."""
        return [f for f in self.features if f.contains(position)]

    def search_features(self, term: str) -> List[Feature]:
        """Features whose name, type or label contains ``term`` (case-insensitive)."""
        term = term.lower()
        return [
            f for f in self.features
            if term in f.name.lower() or term in f.type.lower() or term in f.label.lower()
        ]

    def add_primer(
        self,
        name: str,
        sequence: str,
        start: int,
        end: int,
        strand: Union[Strand, str] = Strand.FORWARD,
    ) -> Primer:
        with self._lock:
            primer = Primer(
                id=self._next_id("primer", (p.id for p in self.primers)),
                name=name,
                sequence=sequence.upper(),
                start=start,
                end=end,
                strand=_as_strand(strand),
            )
            self.primers.append(primer)
        return primer

    def remove_primer(self, primer_id: str) -> bool:
        with self._lock:
            before = len(self.primers)
            self.primers = [p for p in self.primers if p.id != primer_id]
            return len(self.primers) != before

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    def gc_content(self) -> float:
        return analysis.gc_content(self._residues)

    def molecular_weight(self) -> float:
        return analysis.molecular_weight(self._residues)

    def subsequence(self, start: int, end: int) -> str:
        """
        Residues between 1-based inclusive positions.

        On a circular record ``start > end`` reads across the origin.
        """
        if start <= end:
            return self._residues[max(start, 1) - 1:end]
        if self._is_circular:
            return self._residues[start - 1:] + self._residues[:end]
        return ""

    def reverse_complement_range(self, start: int, end: int) -> str:
        """Reverse complement of [start, end) without changing the record."""
        return analysis.reverse_complement(self._residues[self._clamp(start):self._clamp(end)])

    def translate(self, frame: int = 0) -> str:
        return analysis.translate(self._residues, frame)

    def six_frame_translation(self) -> Dict[str, str]:
        return analysis.six_frame_translation(self._residues)

    def translate_feature(self, feature_id: str) -> str:
        """Translate a feature in its own reading frame and strand."""
        feature = self.get_feature(feature_id)
        if feature is None:
            raise KeyError(feature_id)
        region = self.subsequence(feature.start, feature.end)
        if feature.strand is Strand.REVERSE:
            region = analysis.reverse_complement(region)
        return analysis.translate(region, feature.frame or 0)

    def summary(self) -> Mapping[str, object]:
        """Headline numbers for display."""
        return {
            "name": self.name,
            "length": self.length,
            "topology": "circular" if self._is_circular else "linear",
            "gc_content": round(self.gc_content(), 2),
            "molecular_weight": round(self.molecular_weight(), 2),
            "features": len(self.features),
            "primers": len(self.primers),
            "restriction_sites": len(self.restriction_sites),
        }

    def __repr__(self) -> str:
        topology = "circular" if self._is_circular else "linear"
        return f"SequenceRecord(name={self.name!r}, length={self.length}, {topology})"
