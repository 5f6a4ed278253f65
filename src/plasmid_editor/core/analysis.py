"""
Sequence analysis helpers.

Pure functions over residue strings: composition, weight, complements
and codon translation. None of them modify a record.
"""

import re
from typing import Dict


# Average single-stranded nucleotide weights (Da)
NUCLEOTIDE_WEIGHTS = {"A": 313.21, "T": 304.2, "C": 289.18, "G": 329.21}

# Water lost when the terminal phosphodiester bonds form
TERMINAL_WATER_LOSS = 61.96

COMPLEMENT_MAP = {
    "a": "t", "t": "a", "g": "c", "c": "g",
    "A": "T", "T": "A", "G": "C", "C": "G",
    "r": "y", "y": "r", "s": "s", "w": "w",
    "k": "m", "m": "k", "b": "v", "v": "b",
    "d": "h", "h": "d", "n": "n",
    "R": "Y", "Y": "R", "S": "S", "W": "W",
    "K": "M", "M": "K", "B": "V", "V": "B",
    "D": "H", "H": "D", "N": "N"
}

CODON_TABLE = {
    'TTT': 'F', 'TTC': 'F', 'TTA': 'L', 'TTG': 'L',
    'TCT': 'S', 'TCC': 'S', 'TCA': 'S', 'TCG': 'S',
    'TAT': 'Y', 'TAC': 'Y', 'TAA': '*', 'TAG': '*',
    'TGT': 'C', 'TGC': 'C', 'TGA': '*', 'TGG': 'W',
    'CTT': 'L', 'CTC': 'L', 'CTA': 'L', 'CTG': 'L',
    'CCT': 'P', 'CCC': 'P', 'CCA': 'P', 'CCG': 'P',
    'CAT': 'H', 'CAC': 'H', 'CAA': 'Q', 'CAG': 'Q',
    'CGT': 'R', 'CGC': 'R', 'CGA': 'R', 'CGG': 'R',
    'ATT': 'I', 'ATC': 'I', 'ATA': 'I', 'ATG': 'M',
    'ACT': 'T', 'ACC': 'T', 'ACA': 'T', 'ACG': 'T',
    'AAT': 'N', 'AAC': 'N', 'AAA': 'K', 'AAG': 'K',
    'AGT': 'S', 'AGC': 'S', 'AGA': 'R', 'AGG': 'R',
    'GTT': 'V', 'GTC': 'V', 'GTA': 'V', 'GTG': 'V',
    'GCT': 'A', 'GCC': 'A', 'GCA': 'A', 'GCG': 'A',
    'GAT': 'D', 'GAC': 'D', 'GAA': 'E', 'GAG': 'E',
    'GGT': 'G', 'GGC': 'G', 'GGA': 'G', 'GGG': 'G',
}

UNKNOWN_AMINO_ACID = '?'

_NON_ACGT = re.compile(r'[^ACGT]')


def normalize_bases(bases: str) -> str:
    """Uppercase a base string and drop anything that is not A/C/G/T."""
    return _NON_ACGT.sub('', bases.upper())


def gc_content(seq: str) -> float:
    """Calculate GC content as a percentage (0.0 to 100.0).

    An empty sequence has a GC content of 0.0.
    """
    if not seq:
        return 0.0
    seq = seq.upper()
    gc = sum(1 for base in seq if base in 'GC')
    return gc / len(seq) * 100


def molecular_weight(seq: str) -> float:
    """Estimate single-stranded DNA molecular weight in Daltons.

    Sums average nucleotide weights and subtracts one water for the
    terminal bonds. Unknown symbols weigh nothing; an empty sequence
    weighs 0.0.
    """
    if not seq:
        return 0.0
    total = sum(NUCLEOTIDE_WEIGHTS.get(base, 0.0) for base in seq.upper())
    return total - TERMINAL_WATER_LOSS


def complement(seq: str) -> str:
    """Return the base-wise complement, keeping orientation."""
    return ''.join(COMPLEMENT_MAP.get(base, base) for base in seq)


def reverse_complement(seq: str) -> str:
    """Return reverse complement of DNA sequence."""
    return ''.join(COMPLEMENT_MAP.get(base, base) for base in reversed(seq))


def translate_codon(codon: str) -> str:
    """Translate a single codon; incomplete or unknown codons give '?'."""
    return CODON_TABLE.get(codon.upper(), UNKNOWN_AMINO_ACID)


def translate(seq: str, frame: int = 0) -> str:
    """
    Translate DNA to a one-letter protein string.

    Args:
        seq: DNA sequence
        frame: Reading frame offset (0, 1 or 2)

    Returns:
        Amino acids with '*' for stop codons; a trailing partial codon
        is reported as '?'
    """
    if frame not in (0, 1, 2):
        raise ValueError(f"Reading frame must be 0, 1 or 2, got {frame}")
    return ''.join(
        translate_codon(seq[i:i + 3]) for i in range(frame, len(seq), 3)
    )


def six_frame_translation(seq: str) -> Dict[str, str]:
    """Translate all three frames of both strands.

    Keys are '+1', '+2', '+3' for the given strand and '-1', '-2', '-3'
    for its reverse complement.
    """
    rc = reverse_complement(seq)
    translations = {}
    for frame in range(3):
        translations[f"+{frame + 1}"] = translate(seq, frame)
    for frame in range(3):
        translations[f"-{frame + 1}"] = translate(rc, frame)
    return translations
