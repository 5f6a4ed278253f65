#!/usr/bin/env python3
"""
Shared fixtures for plasmid editor tests.
"""

import pytest
from pathlib import Path


SAMPLE_GENBANK = """\
LOCUS       pTest                     60 bp    DNA     circular SYN 01-JAN-2020
DEFINITION  Test plasmid for
            parser checks.
ACCESSION   TST001
VERSION     TST001.1
KEYWORDS    test.
SOURCE      synthetic DNA construct
  ORGANISM  synthetic DNA construct
            other sequences; artificial sequences.
FEATURES             Location/Qualifiers
     source          1..60
                     /organism="synthetic DNA construct"
     promoter        3..20
                     /gene="lacP"
                     /note="a long note that
                     continues here"
     CDS             complement(25..48)
                     /locus_tag="b0001"
                     /product="test protein"
                     /codon_start=2
     misc_feature    join(50..55,57..59)
                     /label=site
     rep_origin      bogus
ORIGIN
        1 gaattcaaaa ccccggggtt ttaaaccccg ggatccaaaa tttttaaagg gcccaattga
//
"""


@pytest.fixture
def sample_text():
    """Annotated circular GenBank record."""
    return SAMPLE_GENBANK


@pytest.fixture
def sample_file(tmp_path):
    """Sample record written to disk."""
    path = tmp_path / "pTest.gb"
    path.write_text(SAMPLE_GENBANK)
    return path


@pytest.fixture
def enzyme_file(tmp_path):
    """Tab-delimited file with one custom enzyme."""
    path = tmp_path / "enzymes.txt"
    path.write_text("MyEnzI,10\tCCCCGGGGTT\n\nbroken line\n")
    return path
