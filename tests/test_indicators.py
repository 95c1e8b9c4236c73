"""Tests for the indicator catalog, matcher and colour lookup."""

import pytest

from burette.chemistry.indicators import (
    INDICATORS,
    PH_COLORS,
    Indicator,
    appropriate_indicators,
    get_indicator,
    indicator_color,
    is_indicator_appropriate,
    ph_color,
)
from burette.errors import PreconditionViolation


class TestMatcher:
    """An indicator is appropriate when its interval brackets the pH."""

    def test_phenolphthalein_for_ethanoic_acid(self):
        assert is_indicator_appropriate("phenolphthalein", 8.72)

    def test_methyl_orange_misses_basic_equivalence(self):
        assert not is_indicator_appropriate("methyl-orange", 8.72)

    @pytest.mark.parametrize("ph", [8.3, 10.0])
    def test_interval_is_closed(self, ph):
        assert is_indicator_appropriate("phenolphthalein", ph)

    def test_unknown_indicator_is_never_appropriate(self):
        assert not is_indicator_appropriate("litmus", 7.0)
        assert not is_indicator_appropriate(None, 7.0)

    def test_appropriate_indicators_lists_all_brackets(self):
        assert appropriate_indicators(8.72) == ["phenolphthalein", "thymol-blue"]
        assert appropriate_indicators(7.0) == ["bromothymol-blue"]
        assert appropriate_indicators(12.4) == []


class TestColours:
    """Flask and pH-meter colours."""

    def test_acidic_below_interval(self):
        assert indicator_color("bromothymol-blue", 5.0) == "#fbbf24"

    def test_basic_inside_and_above_interval(self):
        assert indicator_color("bromothymol-blue", 6.8) == "#3b82f6"
        assert indicator_color("bromothymol-blue", 9.0) == "#3b82f6"

    def test_phenolphthalein_is_colourless_in_acid(self):
        assert indicator_color("phenolphthalein", 4.0) == "transparent"

    def test_unknown_indicator_is_transparent(self):
        assert indicator_color("litmus", 4.0) == "transparent"

    def test_ph_color_is_clamped(self):
        assert ph_color(-2.0) == PH_COLORS[0]
        assert ph_color(7.5) == PH_COLORS[7]
        assert ph_color(20.0) == PH_COLORS[14]


class TestCatalog:
    """Indicator definitions are validated at construction."""

    def test_five_indicators(self):
        assert [i.id for i in INDICATORS] == [
            "methyl-orange",
            "methyl-red",
            "bromothymol-blue",
            "phenolphthalein",
            "thymol-blue",
        ]

    def test_get_indicator(self):
        assert get_indicator("methyl-red").ph_range == (4.4, 6.2)

    def test_get_unknown_indicator_raises(self):
        with pytest.raises(KeyError, match="litmus"):
            get_indicator("litmus")

    @pytest.mark.parametrize("ph_range", [(7.0, 7.0), (9.0, 8.0)])
    def test_empty_interval_rejected(self, ph_range):
        with pytest.raises(PreconditionViolation, match="low < high"):
            Indicator("bad", "Bad", ph_range, "#000000", "#ffffff")
