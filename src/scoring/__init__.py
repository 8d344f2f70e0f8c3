"""
Ingredient Compatibility Scoring.

Pure, I/O-free scoring components: normalize ingredient names, join them
against rule records, and score the matched rules against a hair profile.

Quick start::

    from scoring import (
        CompatibilityScorer, HairProfile, IngredientRule,
        match_rules, normalize_ingredient_name,
    )

    names = [normalize_ingredient_name(n) for n in ingredient_names]
    match = match_rules(names, [IngredientRule.from_row(r) for r in rows])

    result = CompatibilityScorer().score(
        HairProfile.from_row(profile_row),
        match.ordered_rules,
        len(names),
        missing_ingredients=match.missing,
    )
"""

from scoring.calculator import CompatibilityScorer
from scoring.matching import RuleMatch, match_rules
from scoring.models import (
    HairProfile,
    IngredientRule,
    RiskSummary,
    ScoreBreakdown,
    ScoreResult,
)
from scoring.normalizer import normalize_ingredient_name, parse_ingredient_names
from scoring.weights import DEFAULT_WEIGHTS, CompatibilityWeights

__all__ = [
    "CompatibilityScorer",
    "CompatibilityWeights",
    "DEFAULT_WEIGHTS",
    "HairProfile",
    "IngredientRule",
    "RiskSummary",
    "ScoreBreakdown",
    "ScoreResult",
    "RuleMatch",
    "match_rules",
    "normalize_ingredient_name",
    "parse_ingredient_names",
]
