"""
Domain types for ingredient compatibility scoring.

HairProfile and IngredientRule are built once per request from Supabase
rows and passed, read-only, through the scorer. ScoreResult is what the
scorer returns and what the API serializes.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class HairProfile:
    """A user's hair profile. ``hair_type`` is informational only."""
    porosity: str = ""
    density: str = ""
    concerns: Tuple[str, ...] = ()
    scalp_condition: str = ""
    climate: str = ""
    hair_type: Optional[str] = None
    profile_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "HairProfile":
        """Build from a ``hair_profiles`` row; nulls become empty values."""
        concerns = row.get("hair_concerns") or []
        if isinstance(concerns, str):
            concerns = [concerns]
        return cls(
            porosity=row.get("hair_porosity") or "",
            density=row.get("hair_density") or "",
            concerns=tuple(c for c in concerns if isinstance(c, str)),
            scalp_condition=row.get("scalp_condition") or "",
            climate=row.get("climate") or "",
            hair_type=row.get("hair_type"),
            profile_id=row.get("id"),
        )


@dataclass(frozen=True)
class IngredientRule:
    """
    Per-ingredient scoring record, keyed by ``normalized_name``.

    Impact/fit fields are on -5..+5, risk fields on 0..5, confidence on [0, 1].
    """
    normalized_name: str
    moisture_score: float = 0.0
    protein_score: float = 0.0
    scalp_health_score: float = 0.0
    curl_definition_score: float = 0.0
    frizz_control_score: float = 0.0
    porosity_low_score: float = 0.0
    porosity_medium_score: float = 0.0
    porosity_high_score: float = 0.0
    density_thin_score: float = 0.0
    density_medium_score: float = 0.0
    density_thick_score: float = 0.0
    buildup_risk: float = 0.0
    drying_risk: float = 0.0
    irritation_risk: float = 0.0
    breakage_impact: float = 0.0
    thinning_impact: float = 0.0
    dandruff_impact: float = 0.0
    color_treated_impact: float = 0.0
    heat_damage_impact: float = 0.0
    humid_climate_modifier: float = 0.0
    dry_climate_modifier: float = 0.0
    confidence: float = 0.0
    category: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "IngredientRule":
        """Build from an ``ingredient_rules`` row; missing numbers read as 0."""
        values: Dict[str, Any] = {
            "normalized_name": row.get("normalized_name") or "",
            "category": row.get("category"),
        }
        for f in _NUMERIC_RULE_FIELDS:
            raw = row.get(f)
            values[f] = float(raw) if raw is not None else 0.0
        return cls(**values)


_NUMERIC_RULE_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(IngredientRule)
    if f.name not in ("normalized_name", "category")
)


@dataclass(frozen=True)
class RiskSummary:
    """Position-weighted risk totals as a percentage of the maximum."""
    buildup: int
    drying: int
    irritation: int


@dataclass(frozen=True)
class ScoreBreakdown:
    coverage_ratio: int                # % of ingredients with a rule
    avg_confidence: int                # % mean rule confidence
    matched_count: int
    total_count: int
    risk_summary: RiskSummary


@dataclass(frozen=True)
class ScoreResult:
    """Full compatibility result. Every score is an integer in [0, 100]."""
    overall_score: int
    moisture_score: int
    scalp_care_score: int
    curl_definition_score: int
    frizz_control_score: int
    strength_repair_score: int
    ingredient_safety_score: int
    goal_alignment_score: int
    performance_score: int
    score_breakdown: ScoreBreakdown
    score_explanation: str
    missing_ingredients: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_row(self, user_id: str, product_id: str, hair_profile_id: Optional[str]) -> Dict[str, Any]:
        """Row for the ``compatibility_scores`` upsert (missing list is not stored)."""
        row = self.to_dict()
        row.pop("missing_ingredients")
        row.update({
            "user_id": user_id,
            "product_id": product_id,
            "hair_profile_id": hair_profile_id or "",
        })
        return row
