#!/usr/bin/env python3
"""
Tests for the GenBank parser.
"""

import pytest

from plasmid_editor.core.genbank_parser import GenBankParser, parse_genbank, parse_location
from plasmid_editor.core.matcher import PatternMatcher
from plasmid_editor.exceptions import ParseError
from plasmid_editor.models import Strand


class TestSampleRecord:
    """Parse the annotated sample record."""

    @pytest.fixture
    def record(self, sample_text):
        return parse_genbank(sample_text)

    def test_header(self, record):
        assert record.name == "pTest"
        assert record.id == "TST001"
        assert record.accession == "TST001"
        assert record.version == "TST001.1"
        assert record.keywords == "test."
        assert record.description == "Test plasmid for parser checks."
        assert record.source == "synthetic DNA construct"
        assert record.organism == "synthetic DNA construct"
        assert record.molecule_type == "DNA"
        assert record.division == "SYN"
        assert record.date == "01-JAN-2020"
        assert record.is_circular is True

    def test_sequence(self, record):
        assert record.length == 60
        assert record.residues.startswith("GAATTCAAAACCCCGGGG")
        assert record.residues == record.residues.upper()

    def test_feature_count_and_types(self, record):
        assert [f.type for f in record.features] == [
            "source", "promoter", "CDS", "misc_feature", "rep_origin"
        ]
        assert [f.id for f in record.features] == [f"feature-{i}" for i in range(5)]

    def test_source_feature_gets_synthesized_name(self, record):
        source = record.features[0]
        assert (source.start, source.end) == (1, 60)
        assert source.name == "source_1"
        assert source.qualifiers["organism"] == "synthetic DNA construct"

    def test_multiline_note(self, record):
        promoter = record.features[1]
        assert (promoter.start, promoter.end, promoter.strand) == (3, 20, Strand.FORWARD)
        assert promoter.name == "lacP"
        assert promoter.label == "lacP"
        assert promoter.note == "a long note that continues here"

    def test_complement_cds(self, record):
        cds = record.features[2]
        assert (cds.start, cds.end, cds.strand) == (25, 48, Strand.REVERSE)
        assert cds.name == "b0001"
        assert cds.label == "test protein"
        assert cds.frame == 1

    def test_join_spans_segments(self, record):
        misc = record.features[3]
        assert (misc.start, misc.end) == (50, 59)
        assert misc.name == "site"
        assert misc.label == "site"

    def test_unparseable_location_defaults(self, record):
        origin = record.features[4]
        assert (origin.start, origin.end) == (1, 1)
        assert origin.name == "rep_origin_1"
        assert any("unparseable location" in w for w in record.parse_warnings)

    def test_restriction_sites(self, record):
        found = {(s.name, s.position) for s in record.restriction_sites}
        assert ("EcoRI", 1) in found
        assert ("BamHI", 31) in found
        assert [(s.name, s.position) for s in record.restriction_sites] == \
            PatternMatcher().scan(record.residues, True)


def test_minimal_record():
    record = parse_genbank("LOCUS ...\nORIGIN\n     1 atgc\n//")
    assert record.residues == "ATGC"
    assert record.features == []
    assert record.description == ""
    assert record.organism == ""
    assert record.accession == ""
    assert record.is_circular is False


def test_empty_input():
    record = parse_genbank("")
    assert record.residues == ""
    assert record.name == ""
    assert record.features == []
    assert record.restriction_sites == []


def test_no_features_section_and_blank_lines():
    text = (
        "LOCUS       short   12 bp    DNA     linear\r\n"
        "\r\n"
        "DEFINITION  Short one.\r\n"
        "\r\n"
        "ORIGIN\r\n"
        "\r\n"
        "        1 aagaat   tcaa\r\n"
        "       11 cc\r\n"
        "//\r\n"
    )
    record = parse_genbank(text)
    assert record.name == "short"
    assert record.description == "Short one."
    assert record.residues == "AAGAATTCAACC"
    assert [s.position for s in record.restriction_sites if s.name == "EcoRI"] == [3]


def test_lines_after_terminator_are_ignored():
    text = "LOCUS       a 4 bp DNA linear\nORIGIN\n        1 atgc\n//\nLOCUS       b\nORIGIN\n        1 gggg\n//\n"
    record = parse_genbank(text)
    assert record.name == "a"
    assert record.residues == "ATGC"


def test_non_acgt_residues_dropped_with_warning():
    record = parse_genbank("LOCUS x\nORIGIN\n        1 atgn ccgg\n//\n")
    assert record.residues == "ATGCCGG"
    assert len(record.parse_warnings) == 1


def test_linear_topology_when_absent():
    record = parse_genbank("LOCUS       x 4 bp DNA\nORIGIN\n        1 atgc\n//\n")
    assert record.is_circular is False
    record = parse_genbank("LOCUS       x 4 bp DNA CIRCULAR\nORIGIN\n        1 atgc\n//\n")
    assert record.is_circular is True


def test_qualifier_precedence():
    text = (
        "LOCUS       x 20 bp DNA linear\n"
        "FEATURES             Location/Qualifiers\n"
        "     gene            1..10\n"
        "                     /locus_tag=\"tag1\"\n"
        "                     /gene=\"abc\"\n"
        "     CDS             2..9\n"
        "                     /label=\"first\"\n"
        "                     /gene=\"second\"\n"
        "                     /note=\"say \"\"hi\"\"\"\n"
        "     misc_feature    5\n"
        "                     /product=\"prod\"\n"
        "                     /locus_tag=\"lt\"\n"
        "                     /direction=BOTH\n"
        "ORIGIN\n"
        "        1 aaaaaaaaaa aaaaaaaaaa\n"
        "//\n"
    )
    record = parse_genbank(text)
    gene, cds, misc = record.features

    assert gene.name == "abc"
    assert gene.label == "abc"

    assert cds.name == "second"
    assert cds.label == "first"
    assert cds.note == 'say "hi"'
    assert cds.frame is None

    assert (misc.start, misc.end) == (5, 5)
    assert misc.name == "lt"
    assert misc.label == "prod"
    assert misc.strand is Strand.BOTH


def test_wrapped_location():
    text = (
        "LOCUS       x 300 bp DNA linear\n"
        "FEATURES             Location/Qualifiers\n"
        "     CDS             join(1..50,\n"
        "                     100..200)\n"
        "                     /gene=\"w\"\n"
        "ORIGIN\n"
        "//\n"
    )
    feature = parse_genbank(text).features[0]
    assert (feature.start, feature.end) == (1, 200)
    assert feature.name == "w"


def test_blank_lines_in_feature_table():
    text = (
        "LOCUS       x 8 bp DNA linear\n"
        "FEATURES             Location/Qualifiers\n"
        "     gene            1..4\n"
        "     \n"
        "                     /gene=\"a\"\n"
        "\n"
        "     CDS             5..8   \n"
        "          \t\n"
        "ORIGIN\n"
        "        1 acgtacgt\n"
        "//\n"
    )
    record = parse_genbank(text)
    assert [(f.type, f.start, f.end, f.name) for f in record.features] == [
        ("gene", 1, 4, "a"),
        ("CDS", 5, 8, "CDS_5"),
    ]
    assert record.residues == "ACGTACGT"


class TestParseLocation:

    def test_range(self):
        assert parse_location("10..20") == (10, 20, Strand.FORWARD)

    def test_partial_markers(self):
        assert parse_location("complement(<1..>200)") == (1, 200, Strand.REVERSE)

    def test_single_base(self):
        assert parse_location("42") == (42, 42, Strand.FORWARD)

    def test_origin_spanning_join_keeps_first_segment(self):
        assert parse_location("join(2600..2686,1..100)") == (2600, 2686, Strand.FORWARD)

    def test_no_numbers(self):
        assert parse_location("bogus") == (None, None, Strand.FORWARD)


class TestParseFile:

    def test_parse_file(self, sample_file):
        record = GenBankParser().parse_file(sample_file)
        assert record.name == "pTest"
        assert record.length == 60

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError) as exc_info:
            GenBankParser().parse_file(tmp_path / "missing.gb")
        assert exc_info.value.input_file == str(tmp_path / "missing.gb")

    def test_custom_matcher(self, sample_file):
        matcher = PatternMatcher({"MyEnzI": "CCCCGGGGTT"})
        record = GenBankParser(matcher).parse_file(sample_file)
        assert [(s.name, s.position) for s in record.restriction_sites] == [("MyEnzI", 11)]
