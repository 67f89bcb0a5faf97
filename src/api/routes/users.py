"""User routes — profile and third-party API key management."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from src.api.db.api_keys import ApiKeyRepository
from src.api.db.users import UserRepository
from src.api.deps import get_api_key_repo, get_user_repo, require_auth
from src.api.models.schemas import (
    ApiKeySave,
    ApiKeyStatus,
    MessageResponse,
    ProfileOut,
    ProfileUpdate,
    UserStats,
)
from src.core.constants import (
    MSG_API_KEY_SAVE_FAILED,
    MSG_API_KEY_SAVED,
    MSG_API_KEY_STATUS_FAILED,
    MSG_PROFILE_FAILED,
    MSG_PROFILE_UPDATE_FAILED,
    MSG_PROFILE_UPDATED,
    MSG_USER_NOT_FOUND,
)
from src.core.exceptions import NotFoundError, PersistenceError
from src.core.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/profile", response_model=ProfileOut)
async def get_profile(
    user_id: int = Depends(require_auth),
    repo: UserRepository = Depends(get_user_repo),
) -> ProfileOut:
    """Return the caller's profile with project and backlink counts."""
    try:
        user = await repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError(MSG_USER_NOT_FOUND, context={"user_id": user_id})
        stats = await repo.get_stats(user_id)
    except SQLAlchemyError as exc:
        log.error("profile_error", user_id=user_id, error=str(exc))
        raise PersistenceError(MSG_PROFILE_FAILED) from exc

    return ProfileOut(
        id=user.id,
        name=user.name,
        email=user.email,
        plan=user.plan,
        company=user.company,
        created_at=user.created_at,
        stats=UserStats(**stats),
    )


@router.put("/profile", response_model=MessageResponse)
async def update_profile(
    body: ProfileUpdate,
    user_id: int = Depends(require_auth),
    repo: UserRepository = Depends(get_user_repo),
) -> MessageResponse:
    try:
        updated = await repo.update_profile(user_id, name=body.name, company=body.company)
    except SQLAlchemyError as exc:
        log.error("update_profile_error", user_id=user_id, error=str(exc))
        raise PersistenceError(MSG_PROFILE_UPDATE_FAILED) from exc

    if not updated:
        raise NotFoundError(MSG_USER_NOT_FOUND, context={"user_id": user_id})
    return MessageResponse(message=MSG_PROFILE_UPDATED)


@router.post("/api-keys", response_model=MessageResponse)
async def save_api_key(
    body: ApiKeySave,
    user_id: int = Depends(require_auth),
    repo: ApiKeyRepository = Depends(get_api_key_repo),
) -> MessageResponse:
    """Encrypt and store a credential; a second save for the same type replaces it."""
    try:
        await repo.save(user_id, body.key_type, body.key_value)
    except SQLAlchemyError as exc:
        log.error("save_api_key_error", user_id=user_id, error=str(exc))
        raise PersistenceError(MSG_API_KEY_SAVE_FAILED) from exc

    return MessageResponse(message=MSG_API_KEY_SAVED)


@router.get("/api-keys/status", response_model=ApiKeyStatus)
async def api_key_status(
    user_id: int = Depends(require_auth),
    repo: ApiKeyRepository = Depends(get_api_key_repo),
) -> ApiKeyStatus:
    """Report which credentials are stored, never their values."""
    try:
        statuses = await repo.status(user_id)
    except SQLAlchemyError as exc:
        log.error("api_key_status_error", user_id=user_id, error=str(exc))
        raise PersistenceError(MSG_API_KEY_STATUS_FAILED) from exc

    return ApiKeyStatus(**statuses)
