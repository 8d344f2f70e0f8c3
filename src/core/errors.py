"""
Error taxonomy for the scoring request path.

Errors that abort a request carry the HTTP status the API layer should
answer with. Persistence and discovery failures are raised by the adapters
but are logged and swallowed by ScoringService; they never reach a client.
"""

from typing import Optional


class ScoringError(Exception):
    """Base class for errors surfaced to the caller as ``{"error": message}``."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class Unauthorized(ScoringError):
    """No or invalid caller identity."""
    status_code = 401


class NotFound(ScoringError):
    """Profile, product ingredients or saved score absent."""
    status_code = 404


class InvalidInput(ScoringError):
    """Missing request field or no parseable ingredients."""
    status_code = 400


class PersistenceFailure(RuntimeError):
    """Saving a computed score failed."""


class DiscoveryDispatchError(RuntimeError):
    """The rule discovery endpoint rejected or failed a request."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
