"""
Supabase-backed data access for compatibility scoring.

Covers the four collaborators the scoring request touches:
- latest hair profile for a user
- a product's ingredient data
- batched ingredient rule lookup by normalized name
- the ``compatibility_scores`` upsert (one row per user/product)

Read failures propagate unchanged; a failed upsert is raised as
PersistenceFailure so ScoringService can treat it as non-fatal.
"""

from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from config.constants import (
    COMPATIBILITY_SCORES_TABLE,
    HAIR_PROFILE_COLUMNS,
    HAIR_PROFILES_TABLE,
    INGREDIENT_RULES_TABLE,
    PRODUCT_INGREDIENT_COLUMNS,
    PRODUCT_INGREDIENTS_TABLE,
    SCORE_COLUMNS,
    SCORE_CONFLICT_KEY,
)
from config.database import get_supabase_client
from core.errors import PersistenceFailure


class ScoringRepository:
    """Thin wrapper over the Supabase tables used by scoring."""

    def __init__(self, supabase: Optional[Client] = None) -> None:
        self.supabase = supabase or get_supabase_client()

    # ---------------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------------

    def get_latest_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Most recently created hair profile for the user, or None."""
        result = (
            self.supabase
            .table(HAIR_PROFILES_TABLE)
            .select(HAIR_PROFILE_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def get_product_ingredients(self, product_id: str) -> Optional[Dict[str, Any]]:
        """``raw_ingredients_text`` / ``parsed_ingredients`` for a product, or None."""
        result = (
            self.supabase
            .table(PRODUCT_INGREDIENTS_TABLE)
            .select(PRODUCT_INGREDIENT_COLUMNS)
            .eq("product_id", product_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def lookup_rules(self, normalized_names: Iterable[str]) -> List[Dict[str, Any]]:
        """
        Rule rows whose ``normalized_name`` is in the given set.

        One batched query; the result order is whatever the store returns.
        """
        names = sorted(set(normalized_names))
        if not names:
            return []

        result = (
            self.supabase
            .table(INGREDIENT_RULES_TABLE)
            .select("*")
            .in_("normalized_name", names)
            .execute()
        )
        return result.data or []

    def get_score(self, user_id: str, product_id: str) -> Optional[Dict[str, Any]]:
        result = (
            self.supabase
            .table(COMPATIBILITY_SCORES_TABLE)
            .select(SCORE_COLUMNS)
            .eq("user_id", user_id)
            .eq("product_id", product_id)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None

    def list_scores(self, user_id: str, limit: int) -> List[Dict[str, Any]]:
        """The user's saved scores, best overall score first."""
        result = (
            self.supabase
            .table(COMPATIBILITY_SCORES_TABLE)
            .select(SCORE_COLUMNS)
            .eq("user_id", user_id)
            .order("overall_score", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data or []

    # ---------------------------------------------------------------------
    # Writes
    # ---------------------------------------------------------------------

    def upsert_score(self, row: Dict[str, Any]) -> None:
        """
        Replace the (user_id, product_id) score row. Last write wins.

        Raises:
            PersistenceFailure: If the upsert fails for any reason.
        """
        try:
            (
                self.supabase
                .table(COMPATIBILITY_SCORES_TABLE)
                .upsert(row, on_conflict=SCORE_CONFLICT_KEY, ignore_duplicates=False)
                .execute()
            )
        except Exception as e:
            raise PersistenceFailure(f"{type(e).__name__}: {e}") from e
