"""
Join an ordered ingredient list against looked-up rules.

The rule store returns matches in no particular order; scoring depends on
concentration order, so rules are re-sequenced to follow the ingredient
list. Matching is exact on the normalized name.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from scoring.models import IngredientRule


@dataclass(frozen=True)
class RuleMatch:
    """
    Outcome of matching one ingredient list.

    ``ordered_rules`` is compacted (misses removed, list order kept);
    ``missing`` holds the normalized names with no rule, in list order.
    """
    ordered_rules: List[IngredientRule]
    missing: List[str]


def match_rules(
    normalized_names: Sequence[str],
    rules: Iterable[IngredientRule],
) -> RuleMatch:
    """
    Re-order ``rules`` to follow ``normalized_names``.

    A name listed twice matches twice. Rules whose name is not in the list
    are ignored; if two rules share a name the first one wins.
    """
    by_name: Dict[str, IngredientRule] = {}
    for rule in rules:
        by_name.setdefault(rule.normalized_name, rule)

    ordered: List[IngredientRule] = []
    missing: List[str] = []
    for name in normalized_names:
        rule = by_name.get(name)
        if rule is None:
            missing.append(name)
        else:
            ordered.append(rule)

    return RuleMatch(ordered_rules=ordered, missing=missing)
