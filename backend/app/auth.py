"""
Bearer Token Check
==================
FastAPI dependency that turns ``Authorization: Bearer <token>`` into an
``AuthenticatedUser``. Token verification is delegated to Supabase Auth;
the subject id it returns is the only value ever trusted as an owner id.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import Header

from app.db.supabase import get_supabase_client
from app.errors import AuthenticationError, InfrastructureError
from app.models.user import AuthenticatedUser

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the raw token from an Authorization header value."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise AuthenticationError("No token provided", code="auth_required")

    token = authorization.removeprefix(_BEARER_PREFIX).strip()
    if not token:
        raise AuthenticationError("Empty bearer token", code="auth_required")
    return token


def verify_token(token: str) -> AuthenticatedUser:
    """Ask the identity provider who *token* belongs to."""
    db = get_supabase_client()

    try:
        auth_response = db.auth.get_user(token)
    except httpx.TransportError as exc:
        logger.error("Identity provider unreachable: %s", exc)
        raise InfrastructureError("Authentication service unavailable") from exc
    except Exception as exc:
        logger.warning("Auth token verification failed: %s", exc)
        raise AuthenticationError("Invalid token") from exc

    if not auth_response or not auth_response.user:
        raise AuthenticationError("User not found for token")

    return AuthenticatedUser(
        id=str(auth_response.user.id),
        email=auth_response.user.email,
    )


def get_current_user(
    authorization: Optional[str] = Header(
        default=None, description="Bearer token from Supabase Auth"
    ),
) -> AuthenticatedUser:
    return verify_token(extract_bearer_token(authorization))
