"""
Weights and thresholds for ingredient compatibility scoring.

Every numeric constant the calculator uses lives here so the algorithm can
be audited in one place and perturbed in tests.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompatibilityWeights:
    """
    Constants for CompatibilityScorer.

    Rule impact fields are on a -RULE_SCALE..+RULE_SCALE scale and risk
    fields on 0..RISK_SCALE.
    """

    # Position decay: first ingredient = 1.0, later ones decay to the floor
    position_decay: float = 0.7
    min_position_weight: float = 0.3

    rule_scale: float = 5.0
    risk_scale: float = 5.0

    # Neutral midpoint and half-span of the 0-100 normalization
    neutral_score: float = 50.0
    normalization_span: float = 50.0

    # Safety: full risk on every ingredient removes this many points
    safety_penalty_span: float = 50.0

    # Performance blend (sums to 1.0)
    performance_moisture: float = 0.25
    performance_curl_definition: float = 0.20
    performance_frizz_control: float = 0.15
    performance_strength_repair: float = 0.20
    performance_scalp_care: float = 0.20

    # Overall blend (sums to 1.0)
    overall_safety: float = 0.25
    overall_goal_alignment: float = 0.25
    overall_performance: float = 0.30
    overall_moisture: float = 0.10
    overall_scalp_care: float = 0.10

    # Coverage penalty applies strictly below the threshold
    coverage_threshold: float = 0.5
    coverage_penalty_scale: float = 10.0

    # Explanation thresholds
    safe_threshold: float = 80.0
    unsafe_threshold: float = 50.0
    aligned_threshold: float = 75.0
    misaligned_threshold: float = 50.0


DEFAULT_WEIGHTS = CompatibilityWeights()
