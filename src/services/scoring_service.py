"""
Product compatibility scoring orchestration.

Runs one scoring request end to end and stops at the first error:

  validate product_id -> load latest profile -> load product ingredients
  -> parse + normalize names -> batched rule lookup -> order/partition
  -> CompatibilityScorer -> upsert (best effort) -> discovery for misses
  (fire and forget) -> result

Holds no state between requests; two concurrent rescorings of the same
user/product simply race to the same upsert key.
"""

from typing import Any, Dict, List, Optional

from config.constants import DEFAULT_SAVED_SCORES_LIMIT
from core.errors import InvalidInput, NotFound, PersistenceFailure
from core.logging import LoggerMixin
from scoring.calculator import CompatibilityScorer
from scoring.matching import match_rules
from scoring.models import HairProfile, IngredientRule, ScoreResult
from scoring.normalizer import normalize_ingredient_name, parse_ingredient_names
from services.discovery import DiscoveryDispatcher
from services.repository import ScoringRepository


PROFILE_MISSING = "No hair profile found. Complete the questionnaire first."
INGREDIENTS_MISSING = "No ingredients data for this product."
NO_PARSEABLE_INGREDIENTS = "No parseable ingredients found for this product."
PRODUCT_ID_REQUIRED = "product_id is required"
SCORE_MISSING = "No saved score for this product."


class ScoringService(LoggerMixin):
    """
    Scores products for a user and manages their saved scores.

    Usage:
        service = ScoringService(ScoringRepository(), build_dispatcher())
        result = service.score_product(user.id, "prod-123")
    """

    def __init__(
        self,
        repository: ScoringRepository,
        dispatcher: DiscoveryDispatcher,
        scorer: Optional[CompatibilityScorer] = None,
    ) -> None:
        self.repository = repository
        self.dispatcher = dispatcher
        self.scorer = scorer or CompatibilityScorer()

    def score_product(self, user_id: str, product_id: Optional[str]) -> ScoreResult:
        """
        Score ``product_id`` against the user's most recent hair profile.

        Raises:
            InvalidInput: product_id missing, or no parseable ingredients.
            NotFound: no hair profile, or no ingredient data for the product.
        """
        if not isinstance(product_id, str) or not product_id:
            raise InvalidInput(PRODUCT_ID_REQUIRED)

        profile_row = self.repository.get_latest_profile(user_id)
        if not profile_row:
            raise NotFound(PROFILE_MISSING)

        ingredient_row = self.repository.get_product_ingredients(product_id)
        if not ingredient_row:
            raise NotFound(INGREDIENTS_MISSING)

        ingredient_names = parse_ingredient_names(
            ingredient_row.get("parsed_ingredients"),
            ingredient_row.get("raw_ingredients_text"),
        )
        if not ingredient_names:
            raise InvalidInput(NO_PARSEABLE_INGREDIENTS)

        profile = HairProfile.from_row(profile_row)
        normalized = [normalize_ingredient_name(n) for n in ingredient_names]

        rule_rows = self.repository.lookup_rules(set(normalized))
        match = match_rules(normalized, [IngredientRule.from_row(r) for r in rule_rows])

        result = self.scorer.score(
            profile,
            match.ordered_rules,
            len(ingredient_names),
            missing_ingredients=match.missing,
        )

        self._save(result, user_id, product_id, profile.profile_id)

        if match.missing:
            self.dispatcher.dispatch(match.missing)

        self.logger.info(
            "Scored product",
            product_id=product_id,
            user_id=user_id,
            overall_score=result.overall_score,
            matched=len(match.ordered_rules),
            total=len(ingredient_names),
        )
        return result

    def get_saved_score(self, user_id: str, product_id: str) -> Dict[str, Any]:
        row = self.repository.get_score(user_id, product_id)
        if not row:
            raise NotFound(SCORE_MISSING)
        return row

    def list_saved_scores(self, user_id: str, limit: int = DEFAULT_SAVED_SCORES_LIMIT) -> List[Dict[str, Any]]:
        return self.repository.list_scores(user_id, limit)

    def _save(self, result: ScoreResult, user_id: str, product_id: str, profile_id: Optional[str]) -> None:
        """Upsert the result; a failed save is logged and the scores still returned."""
        try:
            self.repository.upsert_score(result.to_row(user_id, product_id, profile_id))
        except PersistenceFailure as e:
            self.logger.error(
                "Failed to save score",
                error=str(e),
                product_id=product_id,
                user_id=user_id,
            )
