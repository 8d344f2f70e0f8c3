"""
Tests for ingredient name normalization, list parsing and rule matching.

Run with:
    PYTHONPATH=src python -m pytest tests/unit/test_ingredient_parsing.py -v
"""

import pytest

from scoring.matching import RuleMatch, match_rules
from scoring.models import IngredientRule
from scoring.normalizer import normalize_ingredient_name, parse_ingredient_names


def _rule(name, **scores):
    return IngredientRule(normalized_name=name, confidence=1.0, **scores)


# ============================================================
# normalize_ingredient_name
# ============================================================

class TestNormalizeIngredientName:

    @pytest.mark.parametrize("raw,expected", [
        ("Water", "water"),
        ("  Aqua (Water)* ", "aqua water"),
        ("Shea Butter (Organic)", "shea butter organic"),
        ("Fragrance*", "fragrance"),
        ("PEG-40 Hydrogenated Castor Oil", "peg-40 hydrogenated castor oil"),
        ("Cetearyl Alcohol.", "cetearyl alcohol"),
        ("Vitamin E/Tocopherol", "vitamin etocopherol"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_ingredient_name(raw) == expected

    def test_idempotent(self):
        for raw in ["Aqua (Water)*", "Parfum/Fragrance", "  Glycerin  ", "ÉTHANOL 96%"]:
            once = normalize_ingredient_name(raw)
            assert normalize_ingredient_name(once) == once

    def test_only_punctuation_becomes_empty(self):
        assert normalize_ingredient_name("***") == ""

    def test_non_ascii_letters_dropped(self):
        assert normalize_ingredient_name("Crème") == "crme"


# ============================================================
# parse_ingredient_names
# ============================================================

class TestParseIngredientNames:

    def test_raw_text_split_on_commas(self):
        names = parse_ingredient_names(None, "Water, Glycerin ,Shea Butter")
        assert names == ["Water", "Glycerin", "Shea Butter"]

    def test_raw_text_empty_pieces_dropped(self):
        assert parse_ingredient_names(None, "Water,, ,Glycerin,") == ["Water", "Glycerin"]

    def test_raw_text_only_separators(self):
        assert parse_ingredient_names(None, " , , ") == []

    def test_structured_list_preferred_over_raw_text(self):
        parsed = [{"name": "Aloe Vera"}, {"name": " Water "}]
        names = parse_ingredient_names(parsed, "Glycerin, Fragrance")
        assert names == ["Aloe Vera", "Water"]

    def test_structured_plain_strings(self):
        assert parse_ingredient_names(["Water", "Glycerin"], None) == ["Water", "Glycerin"]

    def test_structured_entries_without_name_skipped(self):
        parsed = [{"name": "Water"}, {"inci": "x"}, {"name": ""}, 42, {"name": "Glycerin"}]
        assert parse_ingredient_names(parsed, None) == ["Water", "Glycerin"]

    def test_empty_structured_list_wins(self):
        assert parse_ingredient_names([], "Water, Glycerin") == []

    def test_non_list_structured_falls_back_to_raw(self):
        assert parse_ingredient_names({"name": "Water"}, "Glycerin") == ["Glycerin"]

    def test_nothing_available(self):
        assert parse_ingredient_names(None, None) == []
        assert parse_ingredient_names(None, "") == []

    def test_duplicates_kept_in_order(self):
        assert parse_ingredient_names(None, "Water, Glycerin, Water") == ["Water", "Glycerin", "Water"]


# ============================================================
# match_rules
# ============================================================

class TestMatchRules:

    def test_reorders_to_list_order(self):
        rules = [_rule("glycerin"), _rule("water"), _rule("aloe")]
        match = match_rules(["water", "aloe", "glycerin"], rules)

        assert [r.normalized_name for r in match.ordered_rules] == ["water", "aloe", "glycerin"]
        assert match.missing == []

    def test_partitions_missing_in_order(self):
        match = match_rules(
            ["water", "shea butter organic", "glycerin", "fragrance"],
            [_rule("glycerin"), _rule("water")],
        )

        assert [r.normalized_name for r in match.ordered_rules] == ["water", "glycerin"]
        assert match.missing == ["shea butter organic", "fragrance"]

    def test_partition_sizes_add_up(self):
        names = ["a", "b", "c", "a", "d"]
        match = match_rules(names, [_rule("a"), _rule("c")])

        assert len(match.ordered_rules) + len(match.missing) == len(names)

    def test_duplicate_name_matches_twice(self):
        water = _rule("water")
        match = match_rules(["water", "glycerin", "water"], [water])

        assert match.ordered_rules == [water, water]
        assert match.missing == ["glycerin"]

    def test_duplicate_missing_kept(self):
        match = match_rules(["x", "x"], [])
        assert match.missing == ["x", "x"]

    def test_first_rule_wins_on_duplicate_names(self):
        first = _rule("water", moisture_score=1)
        second = _rule("water", moisture_score=5)

        match = match_rules(["water"], [first, second])

        assert match.ordered_rules == [first]

    def test_extra_rules_ignored(self):
        match = match_rules(["water"], [_rule("water"), _rule("silicone")])

        assert [r.normalized_name for r in match.ordered_rules] == ["water"]

    def test_exact_match_only(self):
        match = match_rules(["aqua water"], [_rule("water"), _rule("aqua")])

        assert match.ordered_rules == []
        assert match.missing == ["aqua water"]

    def test_returns_rule_match(self):
        assert isinstance(match_rules([], []), RuleMatch)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
