# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the plate-appearance result catalog."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

import catalog
from catalog import RESULT_GROUPS, STRIKEOUT_CODES, catalog_to_dict, lookup
from models import ResultCategory


class TestLookup:
    def test_unknown_code_returns_none(self):
        assert lookup("XYZ") is None
        assert lookup("") is None

    @pytest.mark.parametrize("code,bases", [
        ("H1-L", 1), ("H1-IN", 1), ("H2-C", 2), ("H3-R", 3), ("HR-L", 4),
    ])
    def test_hits_carry_bases(self, code, bases):
        option = lookup(code)
        assert option.category == ResultCategory.HIT
        assert option.hit_bases == bases
        assert option.is_at_bat
        assert not option.is_out

    def test_fielded_outs(self):
        for code in ("GO-6", "FO-8", "LO-4"):
            option = lookup(code)
            assert option.category == ResultCategory.OUT
            assert option.is_out and option.is_at_bat

    def test_groundouts_stop_at_shortstop(self):
        assert lookup("GO-6") is not None
        assert lookup("GO-7") is None
        assert lookup("FO-9") is not None

    def test_strikeouts(self):
        for code in STRIKEOUT_CODES:
            option = lookup(code)
            assert option.is_out and option.is_at_bat

    def test_walk_and_hbp_are_not_at_bats(self):
        assert not lookup("BB").is_at_bat
        assert not lookup("HBP").is_at_bat
        assert lookup("HBP").category == ResultCategory.HIT_BY_PITCH

    def test_sacrifices_are_outs_but_not_at_bats(self):
        for code in ("SAC", "SF"):
            option = lookup(code)
            assert option.is_out
            assert not option.is_at_bat

    def test_errors_are_at_bats_not_outs(self):
        option = lookup("E-6")
        assert option.category == ResultCategory.ERROR
        assert option.is_at_bat
        assert not option.is_out
        assert "short" in option.label

    def test_fielders_choice_and_interference(self):
        assert lookup("FC").is_at_bat
        assert not lookup("INT").is_at_bat
        assert lookup("INT").category == ResultCategory.INTERFERENCE


class TestGroups:
    def test_group_ids(self):
        assert [g.id for g in RESULT_GROUPS] == [
            "hit", "groundout", "flyout", "lineout", "strikeout",
            "walk", "sacrifice", "error", "fc", "interference",
        ]

    def test_codes_are_unique(self):
        codes = [o.code for g in RESULT_GROUPS for o in g.options]
        assert len(codes) == len(set(codes))
        assert all(lookup(code) is not None for code in codes)

    def test_catalog_to_dict_wire_shape(self):
        groups = catalog_to_dict()
        hit = groups[0]
        assert hit["id"] == "hit"
        first = hit["options"][0]
        assert set(first) == {"code", "label", "category", "hitBases", "isOut", "isAtBat"}
        assert first["category"] == "hit"

    def test_options_are_immutable(self):
        option = lookup("K")
        with pytest.raises(AttributeError):
            option.is_out = False
        assert catalog.lookup("K").is_out
