"""Restriction enzyme catalog.

Recognition patterns are written 5'->3' over A/C/G/T plus the IUPAC
ambiguity codes. The default catalog is read-only and shared by every
record; extra enzymes can be merged in from a tab-delimited file.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from loguru import logger

from ..exceptions import EnzymeCatalogError


# IUPAC code -> concrete bases it stands for
IUPAC_CODES: Mapping[str, frozenset] = MappingProxyType({
    "A": frozenset("A"), "C": frozenset("C"),
    "G": frozenset("G"), "T": frozenset("T"),
    "R": frozenset("AG"), "Y": frozenset("CT"),
    "S": frozenset("CG"), "W": frozenset("AT"),
    "K": frozenset("GT"), "M": frozenset("AC"),
    "B": frozenset("CGT"), "D": frozenset("AGT"),
    "H": frozenset("ACT"), "V": frozenset("ACG"),
    "N": frozenset("ACGT"),
})


_COMMON_ENZYMES: Dict[str, str] = {
    "EcoRI": "GAATTC",
    "BamHI": "GGATCC",
    "HindIII": "AAGCTT",
    "XhoI": "CTCGAG",
    "XbaI": "TCTAGA",
    "KpnI": "GGTACC",
    "SacI": "GAGCTC",
    "PstI": "CTGCAG",
    "SmaI": "CCCGGG",
    "SalI": "GTCGAC",
    "SphI": "GCATGC",
    "NotI": "GCGGCCGC",
    "XmaI": "CCCGGG",
    "NcoI": "CCATGG",
    "BglII": "AGATCT",
    "ClaI": "ATCGAT",
    "DraI": "TTTAAA",
    "EcoRV": "GATATC",
    "HincII": "GTYRAC",
    "HpaI": "GTTAAC",
    "KasI": "GGCGCC",
    "MfeI": "CAATTG",
    "NdeI": "CATATG",
    "NheI": "GCTAGC",
    "NsiI": "ATGCAT",
    "PacI": "TTAATTAA",
    "PmeI": "GTTTAAAC",
    "PvuI": "CGATCG",
    "PvuII": "CAGCTG",
    "SacII": "CCGCGG",
    "ScaI": "AGTACT",
    "SnaBI": "TACGTA",
    "SpeI": "ACTAGT",
    "SrfI": "GCCCAGGC",
    "SwaI": "ATTTAAAT",
    "Tth111I": "GACNNNGTC",
    "AfeI": "AGCGCT",
    "AflII": "CTTAAG",
    "AgeI": "ACCGGT",
    "ApaI": "GGGCCC",
    "ApaLI": "GTGCAC",
    "AscI": "GGCGCGCC",
    "AseI": "ATTAAT",
    "BbvCI": "CCTCAGC",
    "BlpI": "GCTNAGC",
    "BmtI": "GCTAGC",
    "BsaI": "GGTCTC",
    "BsiEI": "CGRYCG",
    "BsiWI": "CGTACG",
    "BspEI": "TCCGGA",
    "BsrGI": "TGTACA",
    "BssHII": "GCGCGC",
    "BstBI": "TTCGAA",
    "BstZ17I": "GTATAC",
    "CspCI": "CAGNAG",
    "EagI": "CGGCCG",
    "Eco53kI": "GAGCTC",
    "FseI": "GGCCGGCC",
    "FspI": "TGCGCA",
    "HpaII": "CCGG",
    "MluI": "ACGCGT",
    "MscI": "TGGCCA",
    "MspA1I": "CMGCKG",
    "NaeI": "GCCGGC",
    "NarI": "GGCGCC",
    "NgoMIV": "GCCGGC",
    "NruI": "TCGCGA",
    "PflMI": "CCANNNNNTGG",
    "PmlI": "CACGTG",
    "PshAI": "GACNNNGTC",
    "RsrII": "CGGWCCG",
    "SbfI": "CCTGCAGG",
    "SfcI": "CTRYAG",
    "SfoI": "GGCGCC",
    "SgrAI": "CRCCGGYG",
    "SmlI": "CTYRAG",
    "TliI": "GACNNNGTC",
    "Tsp509I": "AATT",
    "TspRI": "CASTGNN",
    "BspHI": "TCATGA",
    "BsrFI": "RCCGGY",
    "Bst1107I": "GTATAC",
    "BstEII": "GGTNACC",
    "BstUI": "CGCG",
    "Bsu36I": "CCTNAGG",
    "Cfr10I": "RCCGGY",
    "CfrI": "YGGCCR",
    "DsaI": "CCRYGG",
    "Ecl136II": "GAGCTC",
    "EcoNI": "CCTNNNNNAGG",
    "EcoO109I": "RGGNCCY",
    "GdiII": "CGGCCG",
    "HaeII": "RGCGCY",
    "HaeIII": "GGCC",
    "HgiAI": "GWGCWC",
    "HgiCI": "GGYRCC",
    "HgiEII": "GGCC",
    "HhaI": "GCGC",
    "Hin1I": "GRCGYC",
    "Hin1II": "CATG",
    "HinfI": "GANTC",
    "Hsp92I": "GRCGYC",
    "Hsp92II": "CATG",
    "KspI": "CCGCGG",
    "MaeI": "CTAG",
    "MaeII": "ACGT",
    "MaeIII": "GTNAC",
    "MamI": "GATNNNNATC",
    "MboI": "GATC",
    "MboII": "GAAGA",
    "McrI": "CGRYCG",
    "MflI": "RGATCY",
    "MnlI": "CCTC",
    "MroI": "TCCGGA",
    "MseI": "TTAA",
    "MslI": "CAYNNNNRTG",
    "MspI": "CCGG",
    "MstI": "TGCGA",
    "MvaI": "CCWGG",
    "MvnI": "CGCG",
    "NciI": "CCSGG",
    "NdeII": "GATC",
    "NgoAIV": "GCCGGC",
    "NlaIII": "CATG",
    "NlaIV": "GGNNCC",
    "NspI": "RCATGY",
    "NspII": "GDGCHC",
    "NspBII": "CMGCKG",
    "OliI": "CACNNNNGTG",
    "PaeR7I": "CTCGAG",
    "PagI": "TCATGA",
    "Ppu10I": "AATT",
    "PpuMI": "RGGWCCY",
    "PsiI": "TTATAA",
    "Psp1406I": "AACGTT",
    "Psp5II": "RGGWCCY",
    "PspAI": "CCCGGG",
    "PspEI": "GGTNACC",
    "PspGI": "CCWGG",
    "PspLI": "CGTACG",
    "PspOMI": "GGGCCC",
    "PspPI": "GGCC",
    "PsrI": "GAACNNNNNNTAC",
    "PssI": "RGGNCCY",
    "PstNI": "CAGNNNCTG",
    "PsyI": "GATNNNNATC",
    "RsaI": "GTAC",
    "RseI": "GACNNNGTC",
    "Rsr2I": "CGGWCCG",
    "SanDI": "GGGWCCC",
    "SapI": "GCTCTTC",
    "Sau3AI": "GATC",
    "Sau96I": "GGNCC",
    "SchI": "GAGTC",
    "SciI": "CTCGAG",
    "ScrFI": "CCNGG",
    "SduI": "GDGCHC",
    "SecI": "CCNNGG",
    "SexAI": "ACCWGGT",
    "SfaNI": "GCATC",
    "SfeI": "CTRYAG",
    "SfiI": "GGCCNNNNNGGCC",
    "Sfr274I": "CTCGAG",
    "Sfr303I": "CCCGGG",
    "SfuI": "TTCGAA",
    "SgfI": "GCGATCGC",
    "SgrBI": "CCGCAG",
    "SgrDI": "CGTCGACG",
    "SgsI": "GGCGCGCC",
    "SimI": "GGGTC",
    "SlaI": "CTCGAG",
    "SnoI": "GTGCAC",
    "Sse8387I": "CCTGCAGG",
    "SseBI": "AGGCCT",
    "SsiI": "CCGC",
    "SspI": "AATATT",
    "SspD5I": "GGTGA",
    "SstI": "GAGCTC",
    "SstII": "CCGCGG",
    "StuI": "AGGCCT",
    "StyI": "CCWWGG",
    "StyD4I": "CCNGG",
    "TaaI": "ACNGT",
    "TaiI": "ACGT",
    "TaqI": "TCGA",
    "TaqII": "GACCGA",
    "TatI": "WGTACW",
    "TauI": "GCSGC",
    "TfiI": "GAWTC",
    "Tru1I": "TTAA",
    "Tru9I": "TTAA",
    "TscI": "ACGT",
    "TseI": "GCWGC",
    "TsoI": "TARCCA",
    "Tsp45I": "GTSAC",
    "Tsp4CI": "ACNGT",
    "TspDTI": "ATGAA",
    "TspGWI": "AACGAG",
    "TspMI": "CAGCTG",
    "Tth111II": "CAARCA",
    "Van91I": "CCANNNNNTGG",
    "VneI": "GTGCAC",
    "VpaK11AI": "GGWCC",
    "VspI": "ATTAAT",
    "XagI": "CCTNNNNNAGG",
    "XapI": "RAATTY",
    "XceI": "RCATGY",
    "XcmI": "CCANNNNNNNNNTGG",
    "XhoII": "RGATCY",
    "XmaIII": "CGGCCG",
    "XmaCI": "CCCGGG",
    "XmaJI": "CCTAGG",
    "XmiI": "GTMKAC",
    "XmnI": "GAANNNNTTC",
    "XspI": "CTAG",
    "ZraI": "GACGTC",
    "ZrmI": "AGTACT",
    "Zsp2I": "ATGCAT",
}

COMMON_ENZYMES: Mapping[str, str] = MappingProxyType(_COMMON_ENZYMES)


def validate_pattern(pattern: str) -> str:
    """Normalize a recognition pattern and check it uses IUPAC symbols only.

    Returns:
        The uppercased pattern

    Raises:
        EnzymeCatalogError: If the pattern is empty or has unknown symbols
    """
    normalized = pattern.strip().upper()
    if not normalized:
        raise EnzymeCatalogError("Empty recognition sequence")

    unknown = sorted(set(normalized) - set(IUPAC_CODES))
    if unknown:
        raise EnzymeCatalogError(
            f"Invalid symbols in recognition sequence {pattern!r}: {''.join(unknown)}"
        )
    return normalized


def load_enzyme_file(enzyme_file: Path) -> Dict[str, str]:
    """Load restriction enzymes from a tab-delimited file.

    Each line is ``Name<TAB>SEQUENCE``; the name column may carry extra
    comma-separated fields (``EcoRI,50``), only the first is used.
    Blank lines, comments and lines without two columns are skipped.

    Args:
        enzyme_file: Path to the enzyme file

    Returns:
        Dictionary of enzyme name to recognition pattern
    """
    enzyme_file = Path(enzyme_file)
    if not enzyme_file.exists():
        raise EnzymeCatalogError("Enzyme file not found", source_file=str(enzyme_file))

    enzymes: Dict[str, str] = {}
    try:
        with open(enzyme_file, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith('#'):
                    continue

                parts = line.split('\t')
                if len(parts) != 2:
                    logger.debug(f"Skipping malformed enzyme line {line_number}: {line}")
                    continue

                enzyme_info, sequence = parts
                enzyme_name = enzyme_info.split(',')[0].strip()
                if not enzyme_name:
                    continue

                try:
                    enzymes[enzyme_name] = validate_pattern(sequence)
                except EnzymeCatalogError as e:
                    raise EnzymeCatalogError(
                        str(e), enzyme_name=enzyme_name, source_file=str(enzyme_file)
                    ) from e

    except IOError as e:
        raise EnzymeCatalogError(f"Failed to read enzyme file: {e}") from e

    logger.info(f"Loaded {len(enzymes)} enzymes from {enzyme_file}")
    return enzymes


def build_catalog(extra: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """Merge extra enzymes over the common catalog.

    Entries in ``extra`` replace common entries of the same name.
    """
    if not extra:
        return COMMON_ENZYMES

    merged = dict(_COMMON_ENZYMES)
    for name, pattern in extra.items():
        merged[name] = validate_pattern(pattern)
    return MappingProxyType(merged)
