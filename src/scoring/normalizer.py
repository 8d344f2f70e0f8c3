"""
Ingredient name normalization and ingredient list extraction.

The normalized name is the join key between a product's ingredient list and
the ``ingredient_rules`` table; both sides must go through the same
function or matching silently fails.
"""

import re
from typing import Any, List, Optional

_DISALLOWED = re.compile(r"[^a-z0-9\s\-]")


def normalize_ingredient_name(name: str) -> str:
    """
    Lowercase, drop every character outside ``[a-z0-9\\s-]``, trim.

    >>> normalize_ingredient_name("  Aqua (Water)* ")
    'aqua water'
    """
    return _DISALLOWED.sub("", name.lower()).strip()


def parse_ingredient_names(
    parsed_ingredients: Optional[Any],
    raw_text: Optional[str],
) -> List[str]:
    """
    Ordered ingredient names for a product, highest concentration first.

    Structured ``parsed_ingredients`` (a list of ``{"name": ...}`` entries or
    plain strings) wins when present; otherwise the raw text is split on
    commas. Names are trimmed and empties dropped.
    """
    if isinstance(parsed_ingredients, list):
        names = []
        for entry in parsed_ingredients:
            if isinstance(entry, dict):
                entry = entry.get("name")
            if isinstance(entry, str) and entry.strip():
                names.append(entry.strip())
        return names

    if raw_text:
        return [part.strip() for part in raw_text.split(",") if part.strip()]

    return []
