"""
CompatibilityScorer -- deterministic ingredient compatibility scoring.

Scores a product's matched ingredient rules against a user's hair profile
and produces an overall 0-100 score plus eight sub-scores.

Algorithm:
  1. Position weight per matched rule: ``max(floor, 1 - i/total * decay)``
     where ``i`` is the index in the *compacted* matched sequence and
     ``total`` the length of the *original* ingredient list.
  2. Confidence-weighted sums (``w = position_weight * confidence``) of the
     five impact fields and the four fit terms (porosity, density, climate,
     concerns). Risk fields are summed with the plain position weight.
  3. ``norm(raw) = clamp(50 + raw / (5n) * 50)``, ``n = max(1, matched)``,
     so an all-zero accumulator lands on the neutral 50.
  4. Safety = 100 minus the risk share of the 50-point penalty span.
  5. Goal alignment = norm(porosity + density + concern + climate).
  6. Performance = fixed blend of moisture/curl/frizz/strength/scalp.
  7. Coverage penalty below 50% rule coverage.
  8. Overall = fixed blend of safety/goal/performance/moisture/scalp
     minus the coverage penalty.
  9. Rule-based explanation text.

Scores are rounded half-up to integers as soon as they are computed; the
composite scores are blended from the rounded sub-scores.

Usage::

    from scoring.calculator import CompatibilityScorer

    scorer = CompatibilityScorer()
    result = scorer.score(profile, match.ordered_rules, len(ingredient_names))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from scoring.fit import (
    climate_modifier,
    concern_impact,
    density_fit,
    porosity_fit,
)
from scoring.models import (
    HairProfile,
    IngredientRule,
    RiskSummary,
    ScoreBreakdown,
    ScoreResult,
)
from scoring.weights import DEFAULT_WEIGHTS, CompatibilityWeights

MIN_SCORE = 0
MAX_SCORE = 100

SAFE_EXPLANATION = "Ingredients are generally safe for your hair type."
UNSAFE_EXPLANATION = "Some ingredients may be problematic — check buildup and drying risks."
ALIGNED_EXPLANATION = "Good match for your porosity, density, and concerns."
MISALIGNED_EXPLANATION = "This product may not align well with your hair profile."
LOW_COVERAGE_EXPLANATION = (
    "Only {percent}% of ingredients have been analyzed. Score confidence is lower."
)


def round_half_up(value: float) -> int:
    """Round .5 away from the floor (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, lo: int = MIN_SCORE, hi: int = MAX_SCORE) -> int:
    return round_half_up(max(lo, min(hi, value)))


@dataclass
class _Totals:
    """Raw accumulators for one scoring run."""
    moisture: float = 0.0
    protein: float = 0.0
    scalp_health: float = 0.0
    curl_definition: float = 0.0
    frizz_control: float = 0.0
    porosity_fit: float = 0.0
    density_fit: float = 0.0
    climate_fit: float = 0.0
    concern_fit: float = 0.0
    buildup: float = 0.0
    drying: float = 0.0
    irritation: float = 0.0
    confidence: float = 0.0
    position_weights: List[float] = field(default_factory=list)

    @property
    def goal(self) -> float:
        return self.porosity_fit + self.density_fit + self.concern_fit + self.climate_fit

    @property
    def risk(self) -> float:
        return self.buildup + self.drying + self.irritation


class CompatibilityScorer:
    """
    Scores matched ingredient rules against a hair profile.

    Stateless and free of I/O; one instance can serve every request.
    """

    def __init__(self, weights: Optional[CompatibilityWeights] = None) -> None:
        self.weights = weights or DEFAULT_WEIGHTS

    # ── Public API ────────────────────────────────────────────────

    def score(
        self,
        profile: HairProfile,
        ordered_rules: Sequence[IngredientRule],
        total_ingredient_count: int,
        missing_ingredients: Optional[List[str]] = None,
    ) -> ScoreResult:
        """
        Compute the full compatibility result.

        Args:
            profile: The user's hair profile.
            ordered_rules: Matched rules in ingredient-list order, misses
                removed.
            total_ingredient_count: Length of the original ingredient list,
                unmatched entries included.
            missing_ingredients: Normalized names without a rule, copied
                into the result.

        Raises:
            ValueError: If the total count is below 1 or below the number
                of matched rules.
        """
        self._check_counts(ordered_rules, total_ingredient_count)
        w = self.weights
        totals = self._accumulate(profile, ordered_rules, total_ingredient_count)

        matched = len(ordered_rules)
        n = max(1, matched)
        max_raw = w.rule_scale * n
        max_risk = w.risk_scale * n

        def norm(raw: float) -> int:
            return clamp_score(w.neutral_score + (raw / max_raw) * w.normalization_span)

        moisture = norm(totals.moisture)
        strength_repair = norm(totals.protein)
        scalp_care = norm(totals.scalp_health)
        curl_definition = norm(totals.curl_definition)
        frizz_control = norm(totals.frizz_control)

        safety_penalty = (totals.risk / (3 * max_risk)) * w.safety_penalty_span
        safety = clamp_score(MAX_SCORE - safety_penalty)

        goal_alignment = norm(totals.goal)

        performance = clamp_score(
            moisture * w.performance_moisture
            + curl_definition * w.performance_curl_definition
            + frizz_control * w.performance_frizz_control
            + strength_repair * w.performance_strength_repair
            + scalp_care * w.performance_scalp_care
        )

        coverage_ratio = matched / total_ingredient_count
        penalty = self.coverage_penalty(coverage_ratio)

        overall = clamp_score(
            safety * w.overall_safety
            + goal_alignment * w.overall_goal_alignment
            + performance * w.overall_performance
            + moisture * w.overall_moisture
            + scalp_care * w.overall_scalp_care
            - penalty
        )

        breakdown = ScoreBreakdown(
            coverage_ratio=round_half_up(coverage_ratio * 100),
            avg_confidence=round_half_up(totals.confidence / n * 100),
            matched_count=matched,
            total_count=total_ingredient_count,
            risk_summary=RiskSummary(
                buildup=round_half_up(totals.buildup / max_risk * 100),
                drying=round_half_up(totals.drying / max_risk * 100),
                irritation=round_half_up(totals.irritation / max_risk * 100),
            ),
        )

        return ScoreResult(
            overall_score=overall,
            moisture_score=moisture,
            scalp_care_score=scalp_care,
            curl_definition_score=curl_definition,
            frizz_control_score=frizz_control,
            strength_repair_score=strength_repair,
            ingredient_safety_score=safety,
            goal_alignment_score=goal_alignment,
            performance_score=performance,
            score_breakdown=breakdown,
            score_explanation=self.build_explanation(safety, goal_alignment, coverage_ratio),
            missing_ingredients=list(missing_ingredients or []),
        )

    def position_weight(self, index: int, total_ingredient_count: int) -> float:
        """Decay factor for the rule at ``index`` of the matched sequence."""
        w = self.weights
        return max(
            w.min_position_weight,
            1.0 - (index / total_ingredient_count) * w.position_decay,
        )

    def coverage_penalty(self, coverage_ratio: float) -> float:
        """Points taken off the overall score for low rule coverage."""
        w = self.weights
        if coverage_ratio < w.coverage_threshold:
            return (1 - coverage_ratio) * w.coverage_penalty_scale
        return 0.0

    def build_explanation(self, safety: int, goal_alignment: int, coverage_ratio: float) -> str:
        w = self.weights
        sentences = []

        if safety >= w.safe_threshold:
            sentences.append(SAFE_EXPLANATION)
        elif safety < w.unsafe_threshold:
            sentences.append(UNSAFE_EXPLANATION)

        if goal_alignment >= w.aligned_threshold:
            sentences.append(ALIGNED_EXPLANATION)
        elif goal_alignment < w.misaligned_threshold:
            sentences.append(MISALIGNED_EXPLANATION)

        if coverage_ratio < w.coverage_threshold:
            sentences.append(
                LOW_COVERAGE_EXPLANATION.format(percent=round_half_up(coverage_ratio * 100))
            )

        return " ".join(sentences)

    def explain(
        self,
        profile: HairProfile,
        ordered_rules: Sequence[IngredientRule],
        total_ingredient_count: int,
    ) -> Dict[str, Any]:
        """Return the raw accumulators behind a score for debugging / admin UI."""
        self._check_counts(ordered_rules, total_ingredient_count)
        totals = self._accumulate(profile, ordered_rules, total_ingredient_count)
        coverage_ratio = len(ordered_rules) / total_ingredient_count

        return {
            "position_weights": [round(pw, 4) for pw in totals.position_weights],
            "raw": {
                "moisture": round(totals.moisture, 4),
                "protein": round(totals.protein, 4),
                "scalp_health": round(totals.scalp_health, 4),
                "curl_definition": round(totals.curl_definition, 4),
                "frizz_control": round(totals.frizz_control, 4),
                "porosity_fit": round(totals.porosity_fit, 4),
                "density_fit": round(totals.density_fit, 4),
                "climate_fit": round(totals.climate_fit, 4),
                "concern_fit": round(totals.concern_fit, 4),
                "buildup": round(totals.buildup, 4),
                "drying": round(totals.drying, 4),
                "irritation": round(totals.irritation, 4),
            },
            "coverage_ratio": round(coverage_ratio, 4),
            "coverage_penalty": round(self.coverage_penalty(coverage_ratio), 4),
            "matched_rules": [r.normalized_name for r in ordered_rules],
        }

    # ── Internals ─────────────────────────────────────────────────

    @staticmethod
    def _check_counts(ordered_rules: Sequence[IngredientRule], total_ingredient_count: int) -> None:
        if total_ingredient_count < 1:
            raise ValueError("total_ingredient_count must be at least 1")
        if len(ordered_rules) > total_ingredient_count:
            raise ValueError(
                f"{len(ordered_rules)} matched rules exceed "
                f"total_ingredient_count={total_ingredient_count}"
            )

    def _accumulate(
        self,
        profile: HairProfile,
        ordered_rules: Sequence[IngredientRule],
        total_ingredient_count: int,
    ) -> _Totals:
        totals = _Totals()

        for i, rule in enumerate(ordered_rules):
            position_weight = self.position_weight(i, total_ingredient_count)
            w = position_weight * rule.confidence
            totals.position_weights.append(position_weight)

            totals.moisture += rule.moisture_score * w
            totals.protein += rule.protein_score * w
            totals.scalp_health += rule.scalp_health_score * w
            totals.curl_definition += rule.curl_definition_score * w
            totals.frizz_control += rule.frizz_control_score * w
            totals.porosity_fit += porosity_fit(rule, profile.porosity) * w
            totals.density_fit += density_fit(rule, profile.density) * w
            totals.climate_fit += climate_modifier(rule, profile.climate) * w
            totals.concern_fit += concern_impact(rule, profile.concerns) * w

            totals.buildup += rule.buildup_risk * position_weight
            totals.drying += rule.drying_risk * position_weight
            totals.irritation += rule.irritation_risk * position_weight

            totals.confidence += rule.confidence

        return totals
