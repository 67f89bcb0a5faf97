"""Authentication routes — signup and login with email + password."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import SQLAlchemyError

from src.api.db.users import UserRepository
from src.api.deps import get_user_repo
from src.api.middleware import get_jwt_manager
from src.api.models.schemas import AuthResponse, LoginRequest, SignupRequest, UserOut
from src.core.constants import (
    MSG_LOGIN_FAILED,
    MSG_LOGIN_OK,
    MSG_SIGNUP_FAILED,
    MSG_SIGNUP_OK,
)
from src.core.exceptions import PersistenceError
from src.core.logging import get_logger
from src.saas.tokens import JWTManager

log = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    request: Request,
    repo: UserRepository = Depends(get_user_repo),
    jwt: JWTManager = Depends(get_jwt_manager),
) -> AuthResponse:
    """Create a free account and return a session token for it."""
    ip = request.client.host if request.client else None
    try:
        user = await repo.register(
            name=body.name,
            email=body.email,
            password=body.password,
            ip=ip,
        )
    except SQLAlchemyError as exc:
        log.error("signup_failed", error=str(exc))
        raise PersistenceError(MSG_SIGNUP_FAILED) from exc

    return AuthResponse(
        message=MSG_SIGNUP_OK,
        token=jwt.create_token(user.id, user.email),
        user=UserOut(**user.public_dict()),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    jwt: JWTManager = Depends(get_jwt_manager),
) -> AuthResponse:
    """Exchange email + password for a session token."""
    try:
        user = await repo.authenticate(body.email, body.password)
    except SQLAlchemyError as exc:
        log.error("login_error", error=str(exc))
        raise PersistenceError(MSG_LOGIN_FAILED) from exc

    return AuthResponse(
        message=MSG_LOGIN_OK,
        token=jwt.create_token(user.id, user.email),
        user=UserOut(**user.public_dict()),
    )
