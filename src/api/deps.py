"""FastAPI dependency injection — shared instances for routes."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine

from src.api.db.api_keys import ApiKeyRepository
from src.api.db.projects import ProjectRepository
from src.api.db.users import UserRepository
from src.api.middleware import get_current_user
from src.saas.quota import QuotaPolicy
from src.saas.tokens import TokenClaims
from src.saas.vault import SecretCipher

# ── Application state ─────────────────────────────────────────────


def get_db_engine(request: Request) -> AsyncEngine:
    """Provide the engine created in the application lifespan."""
    return request.app.state.engine


def get_quota_policy(request: Request) -> QuotaPolicy:
    return request.app.state.quota


def get_cipher(request: Request) -> SecretCipher:
    return request.app.state.cipher


# ── Repositories ──────────────────────────────────────────────────


def get_user_repo(
    engine: AsyncEngine = Depends(get_db_engine),
    quota: QuotaPolicy = Depends(get_quota_policy),
) -> UserRepository:
    """Provide a UserRepository instance."""
    return UserRepository(engine, quota)


def get_project_repo(
    engine: AsyncEngine = Depends(get_db_engine),
    quota: QuotaPolicy = Depends(get_quota_policy),
) -> ProjectRepository:
    return ProjectRepository(engine, quota)


def get_api_key_repo(
    engine: AsyncEngine = Depends(get_db_engine),
    cipher: SecretCipher = Depends(get_cipher),
) -> ApiKeyRepository:
    return ApiKeyRepository(engine, cipher)


# ── Auth dependency ───────────────────────────────────────────────


async def require_auth(claims: TokenClaims = Depends(get_current_user)) -> int:
    """Return the user_id of the authenticated caller."""
    return claims.user_id
