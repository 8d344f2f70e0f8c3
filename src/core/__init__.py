"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
- Authentication utilities
- The request error taxonomy
"""

from core.logging import configure_logging, get_logger
from core.auth import require_auth, SupabaseUser
from core.errors import (
    DiscoveryDispatchError,
    InvalidInput,
    NotFound,
    PersistenceFailure,
    ScoringError,
    Unauthorized,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "require_auth",
    "SupabaseUser",
    "ScoringError",
    "Unauthorized",
    "NotFound",
    "InvalidInput",
    "PersistenceFailure",
    "DiscoveryDispatchError",
]
