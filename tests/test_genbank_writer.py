#!/usr/bin/env python3
"""
Tests for the GenBank and FASTA writers.
"""

from datetime import date

import pytest

from plasmid_editor.core.genbank_writer import (
    FastaWriter, GenBankWriter, format_genbank_date,
    to_fasta, to_genbank, write_fasta, write_genbank,
)
from plasmid_editor.exceptions import OutputError
from plasmid_editor.models import Strand
from plasmid_editor.record import SequenceRecord


@pytest.fixture
def record():
    record = SequenceRecord.from_raw("pDemo", "A" * 65, is_circular=True)
    record.description = "demo plasmid"
    return record


def test_format_genbank_date():
    assert format_genbank_date(date(2024, 3, 5)) == "05-MAR-2024"


def test_locus_line(record):
    text = to_genbank(record, today=date(2024, 3, 5))
    locus = text.splitlines()[0]
    assert locus.startswith("LOCUS       pDemo")
    assert locus.split()[1:] == ["pDemo", "65", "bp", "DNA", "circular", "05-MAR-2024"]


def test_locus_keeps_record_date_and_division(record):
    record.date = "01-JAN-2020"
    record.division = "SYN"
    record.is_circular = False
    locus = to_genbank(record).splitlines()[0]
    assert locus.split()[5:] == ["linear", "SYN", "01-JAN-2020"]


def test_placeholders_for_missing_metadata():
    record = SequenceRecord.from_raw("", "ATGC")
    lines = to_genbank(record).splitlines()
    assert lines[0].split()[1] == "unknown"
    assert "DEFINITION  ." in lines
    assert "ACCESSION   unknown" in lines
    assert "VERSION     unknown.1" in lines
    assert "KEYWORDS    ." in lines
    assert "SOURCE      unknown" in lines
    assert "  ORGANISM  unknown" in lines


def test_origin_layout(record):
    lines = to_genbank(record).splitlines()
    origin = lines.index("ORIGIN")
    assert lines[origin + 1] == "        1 " + " ".join(["aaaaaaaaaa"] * 6)
    assert lines[origin + 2] == "       61 aaaaa"
    assert lines[origin + 3] == "//"
    assert lines[-1] == "//"


def test_empty_sequence_origin():
    record = SequenceRecord.from_raw("empty", "")
    lines = to_genbank(record).splitlines()
    assert lines[-2:] == ["ORIGIN", "//"]


def test_feature_lines(record):
    record.add_feature("CDS", 3, 10, strand=Strand.REVERSE, name="geneA", label="Gene A",
                       note="first", frame=2)
    record.add_feature("misc_feature", 20, 30, strand="both", name="m", label="m")
    lines = to_genbank(record).splitlines()
    start = lines.index("FEATURES             Location/Qualifiers")

    assert lines[start + 1] == "     CDS             complement(3..10)"
    assert lines[start + 2] == '                     /gene="geneA"'
    assert lines[start + 3] == '                     /label="Gene A"'
    assert lines[start + 4] == '                     /note="first"'
    assert lines[start + 5] == "                     /codon_start=3"
    assert lines[start + 6] == "     misc_feature    20..30"
    assert lines[start + 7] == '                     /gene="m"'
    assert lines[start + 8] == "                     /direction=BOTH"
    assert lines[start + 9] == "ORIGIN"


def test_long_note_is_wrapped(record):
    note = " ".join(["word"] * 40)
    record.add_feature("misc_feature", 1, 5, name="n", note=note)
    lines = to_genbank(record).splitlines()
    assert all(len(line) <= 79 for line in lines)
    note_lines = [line for line in lines if line.startswith(" " * 21) and "word" in line]
    assert len(note_lines) > 1


def test_quotes_are_escaped(record):
    record.add_feature("misc_feature", 1, 5, name="n", note='say "hi"')
    assert '/note="say ""hi"""' in to_genbank(record)


def test_fasta(record):
    text = to_fasta(record)
    lines = text.splitlines()
    assert lines[0] == ">pDemo demo plasmid"
    assert lines[1] == "A" * 60
    assert lines[2] == "A" * 5
    assert text.endswith("\n")


def test_fasta_without_description_and_custom_width():
    record = SequenceRecord.from_raw("seq1", "ATGCATGCAT")
    lines = FastaWriter(width=4).format(record).splitlines()
    assert lines == [">seq1", "ATGC", "ATGC", "AT"]


def test_fasta_invalid_width():
    with pytest.raises(ValueError):
        FastaWriter(width=0)


def test_write_files(record, tmp_path):
    gb_path = write_genbank(record, tmp_path / "out" / "demo.gb")
    fa_path = write_fasta(record, tmp_path / "out" / "demo.fa")
    assert gb_path.read_text().startswith("LOCUS")
    assert fa_path.read_text().startswith(">pDemo")


def test_write_error_is_wrapped(record, tmp_path):
    with pytest.raises(OutputError):
        GenBankWriter().write(record, tmp_path)
