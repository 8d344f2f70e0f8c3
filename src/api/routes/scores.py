"""
Compatibility score routes.

All endpoints require JWT authentication; scores are always computed
against the caller's most recent hair profile.

Endpoints:
- POST /api/scores/score-product   - (Re)score a product, persist, return scores
- GET  /api/scores/{product_id}    - Saved score for one product
- GET  /api/scores                 - Caller's saved scores, best first
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from pydantic import BaseModel, Field, ValidationError

from config.constants import DEFAULT_SAVED_SCORES_LIMIT, MAX_SAVED_SCORES_LIMIT
from core.auth import require_auth, SupabaseUser
from core.errors import InvalidInput
from services.discovery import build_dispatcher
from services.repository import ScoringRepository
from services.scoring_service import ScoringService


router = APIRouter(prefix="/api/scores", tags=["Scores"])


# =============================================================================
# Service wiring
# =============================================================================

_repository: Optional[ScoringRepository] = None


def get_repository() -> ScoringRepository:
    """Get or create the shared repository."""
    global _repository
    if _repository is None:
        _repository = ScoringRepository()
    return _repository


def get_scoring_service(background_tasks: BackgroundTasks) -> ScoringService:
    """Per-request service; discovery runs as a background task after the response."""
    return ScoringService(
        repository=get_repository(),
        dispatcher=build_dispatcher(submit=background_tasks.add_task),
    )


# =============================================================================
# Request/Response Models
# =============================================================================

class ScoreProductRequest(BaseModel):
    """Request to score one product for the caller."""
    product_id: Optional[str] = Field(default=None, description="Product UUID")


class RiskSummaryResponse(BaseModel):
    buildup: int
    drying: int
    irritation: int


class ScoreBreakdownResponse(BaseModel):
    coverage_ratio: int = Field(..., description="Percent of ingredients with a rule")
    avg_confidence: int = Field(..., description="Mean rule confidence, percent")
    matched_count: int
    total_count: int
    risk_summary: RiskSummaryResponse


class ScoreResponse(BaseModel):
    """Compatibility scores, each an integer 0-100."""
    overall_score: int
    moisture_score: int
    scalp_care_score: int
    curl_definition_score: int
    frizz_control_score: int
    strength_repair_score: int
    ingredient_safety_score: int
    goal_alignment_score: int
    performance_score: int
    score_breakdown: ScoreBreakdownResponse
    score_explanation: str
    missing_ingredients: List[str] = Field(default_factory=list)


class SavedScoresResponse(BaseModel):
    scores: List[Dict[str, Any]]


async def read_score_request(
    request: Request,
    user: SupabaseUser = Depends(require_auth),
) -> ScoreProductRequest:
    """Parse the score-product body only after require_auth has passed."""
    raw = await request.body()
    try:
        return ScoreProductRequest.model_validate_json(raw or b"{}")
    except ValidationError as e:
        errors = e.errors()
        detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        raise InvalidInput(f"Invalid request: {detail}")


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "/score-product",
    response_model=ScoreResponse,
    summary="Score a product against the caller's hair profile",
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ScoreProductRequest.model_json_schema()}},
        },
    },
)
def score_product(
    request: ScoreProductRequest = Depends(read_score_request),
    user: SupabaseUser = Depends(require_auth),
    service: ScoringService = Depends(get_scoring_service),
) -> Dict[str, Any]:
    """
    Compute and persist the compatibility score for ``product_id``.

    Ingredients without a rule are listed in ``missing_ingredients`` and
    queued for rule discovery in the background.
    """
    result = service.score_product(user.id, request.product_id)
    return result.to_dict()


@router.get(
    "",
    response_model=SavedScoresResponse,
    summary="List the caller's saved scores",
)
def list_scores(
    limit: int = Query(DEFAULT_SAVED_SCORES_LIMIT, ge=1, le=MAX_SAVED_SCORES_LIMIT),
    user: SupabaseUser = Depends(require_auth),
    service: ScoringService = Depends(get_scoring_service),
) -> Dict[str, Any]:
    return {"scores": service.list_saved_scores(user.id, limit)}


@router.get(
    "/{product_id}",
    summary="Saved score for one product",
)
def get_score(
    product_id: str,
    user: SupabaseUser = Depends(require_auth),
    service: ScoringService = Depends(get_scoring_service),
) -> Dict[str, Any]:
    return service.get_saved_score(user.id, product_id)
