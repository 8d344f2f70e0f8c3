"""
Per-rule profile fit selectors.

Each selector picks (or averages) the rule fields relevant to one profile
dimension. They return raw rule-scale values; weighting and normalization
happen in the calculator.
"""

from typing import Iterable, Tuple

from scoring.constants.profile_buckets import (
    CLIMATE_FIELDS,
    CONCERN_IMPACT_FIELDS,
    DEFAULT_DENSITY_FIELD,
    DEFAULT_POROSITY_FIELD,
    DENSITY_FIELDS,
    POROSITY_FIELDS,
)
from scoring.models import IngredientRule


def porosity_fit(rule: IngredientRule, porosity: str) -> float:
    """Rule score for the profile's porosity bucket (unknown -> medium)."""
    field_name = POROSITY_FIELDS.get(porosity.lower(), DEFAULT_POROSITY_FIELD)
    return getattr(rule, field_name)


def density_fit(rule: IngredientRule, density: str) -> float:
    """Rule score for the profile's density bucket (unknown -> medium)."""
    field_name = DENSITY_FIELDS.get(density.lower(), DEFAULT_DENSITY_FIELD)
    return getattr(rule, field_name)


def climate_modifier(rule: IngredientRule, climate: str) -> float:
    """Humid/tropical or dry/arid modifier; 0 for any other climate."""
    c = climate.lower()
    for keywords, field_name in CLIMATE_FIELDS:
        if any(k in c for k in keywords):
            return getattr(rule, field_name)
    return 0.0


def concern_fields(concerns: Iterable[str]) -> Tuple[str, ...]:
    """
    Rule fields addressed by the profile's concern tags.

    Each tag adds one entry per matching keyword group, so a tag like
    "heat damage" counts once and two tags hitting the same group count
    twice.
    """
    matched = []
    for concern in concerns:
        c = concern.lower()
        for keywords, field_name in CONCERN_IMPACT_FIELDS:
            if any(k in c for k in keywords):
                matched.append(field_name)
    return tuple(matched)


def concern_impact(rule: IngredientRule, concerns: Iterable[str]) -> float:
    """Average impact over matched concern fields; 0 when nothing matches."""
    return average_impact(rule, concern_fields(concerns))


def average_impact(rule: IngredientRule, field_names: Tuple[str, ...]) -> float:
    if not field_names:
        return 0.0
    return sum(getattr(rule, f) for f in field_names) / len(field_names)
