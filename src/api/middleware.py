"""Bearer-token authentication for FastAPI routes."""

from __future__ import annotations

from fastapi import Request

from src.core.constants import MSG_TOKEN_MISSING
from src.core.exceptions import MissingTokenError
from src.core.logging import get_logger
from src.saas.tokens import JWTManager, TokenClaims

log = get_logger(__name__)


def get_jwt_manager(request: Request) -> JWTManager:
    """The token manager built by the application factory."""
    return request.app.state.jwt


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def get_current_user(request: Request) -> TokenClaims:
    """Extract and verify the bearer token.

    Raises MissingTokenError (401) without a token and InvalidTokenError
    (403) when verification fails.
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    if token is None:
        raise MissingTokenError(MSG_TOKEN_MISSING)

    return get_jwt_manager(request).verify_token(token)
