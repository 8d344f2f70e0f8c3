"""
Application constants.

Values that don't change based on environment but are referenced across
the codebase: Supabase table names, column selections and the rule
discovery contract.
"""


# =============================================================================
# Supabase tables
# =============================================================================

HAIR_PROFILES_TABLE = "hair_profiles"
PRODUCT_INGREDIENTS_TABLE = "product_ingredients"
INGREDIENT_RULES_TABLE = "ingredient_rules"
COMPATIBILITY_SCORES_TABLE = "compatibility_scores"

HAIR_PROFILE_COLUMNS = (
    "id, hair_porosity, hair_density, hair_concerns, "
    "scalp_condition, climate, hair_type"
)
PRODUCT_INGREDIENT_COLUMNS = "raw_ingredients_text, parsed_ingredients"

SCORE_COLUMNS = (
    "product_id, overall_score, moisture_score, scalp_care_score, "
    "curl_definition_score, frizz_control_score, strength_repair_score, "
    "ingredient_safety_score, goal_alignment_score, performance_score, "
    "score_breakdown, score_explanation, updated_at"
)

# Unique key of compatibility_scores; upserts replace the whole row.
SCORE_CONFLICT_KEY = "user_id,product_id"


# =============================================================================
# Rule discovery
# =============================================================================

DISCOVERY_FUNCTION_PATH = "/functions/v1/discover-ingredient-rules"
MAX_DISCOVERY_BATCH = 20


# =============================================================================
# Saved score listing
# =============================================================================

DEFAULT_SAVED_SCORES_LIMIT = 5
MAX_SAVED_SCORES_LIMIT = 50
