"""Restriction site detection.

Each catalogued recognition pattern is compared against every start offset
of the sequence. Ambiguity codes are resolved through a per-symbol
compatibility table rather than compiled regular expressions.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Mapping, Optional, Tuple

from loguru import logger

from .enzymes import COMMON_ENZYMES, IUPAC_CODES


class PatternMatcher:
    """Multi-pattern search over linear or circular DNA."""

    def __init__(self, catalog: Optional[Mapping[str, str]] = None):
        """
        Initialize matcher.

        Args:
            catalog: Enzyme name to recognition pattern; the common
                catalog when omitted
        """
        self.catalog = COMMON_ENZYMES if catalog is None else catalog
        # Pattern symbols resolved to allowed base sets once
        self._compiled: Dict[str, Tuple[frozenset, ...]] = {
            name: self._compile(pattern) for name, pattern in self.catalog.items()
        }

    @staticmethod
    def _compile(pattern: str) -> Tuple[frozenset, ...]:
        empty = frozenset()
        return tuple(IUPAC_CODES.get(symbol, empty) for symbol in pattern.upper())

    def scan(self, residues: str, is_circular: bool = False) -> List[Tuple[str, int]]:
        """
        Find every catalogued recognition site.

        Args:
            residues: Sequence to search
            is_circular: Also test windows that wrap past the origin

        Returns:
            (enzyme name, 1-based position) pairs sorted by position, then name
        """
        sequence = residues.upper()
        hits: List[Tuple[str, int]] = []
        if not sequence:
            return hits

        for name, allowed in self._compiled.items():
            for offset in self._match_offsets(sequence, allowed, is_circular):
                hits.append((name, offset + 1))

        hits.sort(key=lambda hit: (hit[1], hit[0]))
        logger.debug(f"Scanned {len(sequence)} bp against {len(self._compiled)} enzymes: {len(hits)} sites")
        return hits

    def find_pattern(self, residues: str, pattern: str, is_circular: bool = False) -> List[int]:
        """Find 1-based positions of a single pattern."""
        allowed = self._compile(pattern)
        return [offset + 1 for offset in self._match_offsets(residues.upper(), allowed, is_circular)]

    def cut_counts(self, residues: str, is_circular: bool = False) -> Dict[str, int]:
        """Count sites per enzyme; enzymes without a site are left out."""
        return dict(Counter(name for name, _ in self.scan(residues, is_circular)))

    @staticmethod
    def _match_offsets(sequence: str, allowed: Tuple[frozenset, ...], is_circular: bool) -> List[int]:
        """0-based offsets where every pattern position accepts the residue."""
        seq_len = len(sequence)
        pat_len = len(allowed)
        if pat_len == 0 or pat_len > seq_len:
            return []

        # Wrapping windows never reuse a residue, hence pat_len <= seq_len
        last_start = seq_len if is_circular else seq_len - pat_len + 1

        offsets = []
        for start in range(last_start):
            for i in range(pat_len):
                if sequence[(start + i) % seq_len] not in allowed[i]:
                    break
            else:
                offsets.append(start)
        return offsets
