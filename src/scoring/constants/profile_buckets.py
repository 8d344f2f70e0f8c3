"""
Profile vocabulary -> ingredient rule field lookup tables.

Closed-world tables: a profile value that is not listed here falls back to
the medium bucket (porosity, density) or contributes nothing (climate,
concerns).
"""

from typing import Dict, Tuple


# ── Porosity ───────────────────────────────────────────────────────
POROSITY_FIELDS: Dict[str, str] = {
    "low": "porosity_low_score",
    "medium": "porosity_medium_score",
    "normal": "porosity_medium_score",
    "high": "porosity_high_score",
}
DEFAULT_POROSITY_FIELD = "porosity_medium_score"


# ── Density ────────────────────────────────────────────────────────
DENSITY_FIELDS: Dict[str, str] = {
    "thin": "density_thin_score",
    "fine": "density_thin_score",
    "medium": "density_medium_score",
    "thick": "density_thick_score",
    "coarse": "density_thick_score",
}
DEFAULT_DENSITY_FIELD = "density_medium_score"


# ── Climate (substring match, checked in order) ───────────────────
CLIMATE_FIELDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("humid", "tropical"), "humid_climate_modifier"),
    (("dry", "arid"), "dry_climate_modifier"),
)


# ── Concerns (substring match, every matching entry counts) ───────
# "thin" also matches "thinning"; "damage" also matches "heat damage".
CONCERN_IMPACT_FIELDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("breakage", "breaking"), "breakage_impact"),
    (("thinning", "thin"), "thinning_impact"),
    (("dandruff", "flak"), "dandruff_impact"),
    (("color", "dye"), "color_treated_impact"),
    (("heat", "damage"), "heat_damage_impact"),
)
