"""Tests for sequence analysis helpers."""

import pytest

from plasmid_editor.core.analysis import (
    complement, gc_content, molecular_weight, normalize_bases,
    reverse_complement, six_frame_translation, translate, translate_codon,
)


def test_gc_content():
    assert gc_content("GCGC") == 100.0
    assert gc_content("ATAT") == 0.0
    assert gc_content("") == 0.0
    assert gc_content("atgc") == 50.0


def test_molecular_weight():
    assert molecular_weight("A") == pytest.approx(251.25)
    assert molecular_weight("") == 0.0
    assert molecular_weight("ATCG") == pytest.approx(313.21 + 304.2 + 289.18 + 329.21 - 61.96)


def test_reverse_complement():
    assert reverse_complement("ATCG") == "CGAT"
    assert reverse_complement("atcg") == "cgat"
    assert reverse_complement("GTYRAC") == "GTYRAC"
    # Unknown symbols pass through
    assert reverse_complement("A-T") == "A-T"


def test_complement():
    assert complement("ATCG") == "TAGC"


def test_normalize_bases():
    assert normalize_bases("at-gc nx") == "ATGC"
    assert normalize_bases("") == ""


def test_translate():
    assert translate("ATGAAATAA") == "MK*"
    assert translate("ATGAAATAA", frame=1) == "*N?"
    assert translate("ATGA") == "M?"
    assert translate("") == ""


def test_translate_invalid_frame():
    with pytest.raises(ValueError):
        translate("ATG", frame=3)


def test_translate_codon():
    assert translate_codon("tga") == "*"
    assert translate_codon("NNN") == "?"


def test_six_frame_translation():
    frames = six_frame_translation("ATGAAATAA")
    assert set(frames) == {"+1", "+2", "+3", "-1", "-2", "-3"}
    assert frames["+1"] == "MK*"
    assert frames["-1"] == translate("TTATTTCAT")
