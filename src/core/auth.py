"""
Supabase JWT Authentication.

Every scoring endpoint runs as the user identified by the Bearer token; the
hair profile used for scoring is always that user's most recent one.

Usage:
    from core.auth import require_auth, SupabaseUser

    @router.post("/score-product")
    def score(user: SupabaseUser = Depends(require_auth)):
        user_id = user.id  # Verified user ID from JWT
"""

from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import get_settings
from core.errors import Unauthorized


security = HTTPBearer(
    scheme_name="Supabase JWT",
    description="JWT token from Supabase Auth.",
    auto_error=False,  # missing credentials are reported as Unauthorized below
)


@dataclass
class SupabaseUser:
    """
    Authenticated user from a Supabase JWT.

    Attributes:
        id: User's UUID (from 'sub' claim)
        email: User's email address
        role: Postgres role (usually 'authenticated')
        session_id: Current session UUID
        is_anonymous: True if anonymous auth
    """
    id: str
    email: Optional[str] = None
    role: str = "authenticated"
    session_id: Optional[str] = None
    is_anonymous: bool = False


def verify_jwt(token: str) -> dict:
    """
    Verify and decode a Supabase JWT token.

    Raises:
        Unauthorized: If the token is invalid, expired, or malformed
    """
    settings = get_settings()

    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience="authenticated",
            options={
                "verify_exp": True,
                "verify_aud": True,
                "require": ["sub", "exp", "aud"],
            },
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidAudienceError:
        raise Unauthorized("Invalid token audience")
    except jwt.InvalidTokenError as e:
        raise Unauthorized(f"Invalid token: {e}")


def extract_user(payload: dict) -> SupabaseUser:
    """Build a SupabaseUser from a verified JWT payload."""
    return SupabaseUser(
        id=payload["sub"],
        email=payload.get("email"),
        role=payload.get("role", "authenticated"),
        session_id=payload.get("session_id"),
        is_anonymous=payload.get("is_anonymous", False),
    )


async def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> SupabaseUser:
    """
    FastAPI dependency that requires authentication.

    Raises Unauthorized (401) if no valid token is provided.
    """
    if not credentials:
        raise Unauthorized("Authorization header required")

    if not credentials.credentials:
        raise Unauthorized("Token required")

    payload = verify_jwt(credentials.credentials)
    return extract_user(payload)
