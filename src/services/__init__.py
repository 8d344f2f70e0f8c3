"""
Services module for business logic.

Provides the Supabase scoring repository, the rule discovery dispatcher and
the ScoringService that ties them to the pure scoring engine.
"""

from services.discovery import DiscoveryDispatcher, RuleDiscoveryClient, build_dispatcher
from services.repository import ScoringRepository
from services.scoring_service import ScoringService

__all__ = [
    "DiscoveryDispatcher",
    "RuleDiscoveryClient",
    "build_dispatcher",
    "ScoringRepository",
    "ScoringService",
]
