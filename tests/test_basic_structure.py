"""Basic tests to verify project structure."""

import pytest


def test_package_imports():
    """Test that basic package imports work."""
    from plasmid_editor import __version__, SequenceRecord, ToolkitConfig, parse_genbank

    assert __version__ == "1.0.0"
    assert SequenceRecord is not None
    assert ToolkitConfig is not None
    assert parse_genbank is not None


def test_exceptions():
    """Test that custom exceptions work."""
    from plasmid_editor.exceptions import (
        ToolkitError, ParseError, EnzymeCatalogError, OutputError, ConfigurationError
    )

    with pytest.raises(ToolkitError):
        raise ParseError("Parse error")

    err = ParseError("Input file not found", input_file="x.gb")
    assert str(err) == "Input file not found (file: x.gb)"
    assert err.input_file == "x.gb"

    err = ConfigurationError("bad value", config_file="c.yaml", parameter="fasta_width")
    assert "c.yaml" in str(err)
    assert "fasta_width" in str(err)

    assert issubclass(EnzymeCatalogError, ToolkitError)
    assert issubclass(OutputError, ToolkitError)


def test_models():
    """Test basic model functionality."""
    from plasmid_editor.models import Feature, Primer, RestrictionSite, Strand

    feature = Feature(id="feature-0", type="CDS", start=10, end=39, name="lacZ")
    assert feature.display_label == "lacZ"
    assert feature.length == 30
    assert feature.contains(10) and feature.contains(39)
    assert not feature.contains(40)
    assert feature.color == "#4ECDC4"

    # Test serialization
    data = feature.to_dict()
    assert data["strand"] == "forward"
    assert Feature.from_dict(data) == feature

    site = RestrictionSite(name="EcoRI", pattern_sequence="GAATTC", position=7)
    assert site.id == "enzyme-EcoRI-7"
    assert site.to_dict()["id"] == "enzyme-EcoRI-7"

    primer = Primer(id="primer-0", name="fw", sequence="ATGC", start=1, end=4, strand=Strand.REVERSE)
    assert Primer.from_dict(primer.to_dict()) == primer


def test_unknown_feature_type_color():
    from plasmid_editor.models import Feature, DEFAULT_FEATURE_COLOR

    feature = Feature(id="f", type="oddity", start=1, end=1)
    assert feature.color == DEFAULT_FEATURE_COLOR


def test_strand_flip():
    from plasmid_editor.models import Strand

    assert Strand.FORWARD.flipped() is Strand.REVERSE
    assert Strand.REVERSE.flipped() is Strand.FORWARD
    assert Strand.BOTH.flipped() is Strand.BOTH
