"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Dict, Any
from fastapi import APIRouter

from config.constants import INGREDIENT_RULES_TABLE
from config.settings import get_settings
from config.database import get_supabase_client_optional


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "compatibility-scoring-api",
    }


@router.get("/health/detailed")
async def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check with dependency status.

    Checks that the rule table is reachable and whether discovery is on.
    """
    settings = get_settings()

    supabase_status = "unknown"
    supabase_error = None
    try:
        client = get_supabase_client_optional()
        if client:
            result = client.table(INGREDIENT_RULES_TABLE).select("normalized_name").limit(1).execute()
            supabase_status = "connected" if result.data else "empty"
        else:
            supabase_status = "not_configured"
    except Exception as e:
        supabase_status = "error"
        supabase_error = str(e)

    return {
        "status": "healthy" if supabase_status == "connected" else "degraded",
        "service": "compatibility-scoring-api",
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "supabase": {
                "status": supabase_status,
                "error": supabase_error,
            },
            "rule_discovery": "enabled" if settings.rule_discovery_enabled else "disabled",
        },
    }


@router.get("/ready")
async def readiness_check() -> Dict[str, str]:
    """Kubernetes-style readiness probe."""
    client = get_supabase_client_optional()
    if client is None:
        return {"status": "not_ready", "reason": "database_not_configured"}

    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """Kubernetes-style liveness probe."""
    return {"status": "alive"}
