"""LinkIQ FastAPI application — entry point for the API server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config.settings import Settings, get_settings
from src.core.constants import API_VERSION, MSG_INTERNAL_ERROR, MSG_INVALID_PAYLOAD, SERVICE_NAME
from src.core.exceptions import LinkIQBaseError
from src.core.logging import get_logger, setup_logging
from src.data.db import create_engine, init_schema
from src.saas.quota import QuotaPolicy
from src.saas.tokens import JWTManager
from src.saas.vault import SecretCipher

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup/shutdown lifecycle — own the DB engine, migrate, dispose on exit."""
    settings: Settings = app.state.settings
    log.info("api_starting", env=settings.linkiq_env)

    engine = create_engine(settings)
    app.state.engine = engine
    try:
        await init_schema(engine)
    except (SQLAlchemyError, OSError) as exc:
        # Tables may already exist or the DB may be briefly unreachable.
        log.warning("schema_migration_failed", error=str(exc))

    yield

    await engine.dispose()
    log.info("api_shutdown")


async def _linkiq_error_handler(request: Request, exc: LinkIQBaseError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def _validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.info("request_invalid", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": MSG_INVALID_PAYLOAD},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": MSG_INTERNAL_ERROR},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title=SERVICE_NAME,
        description="LinkIQ — backlink monitoring SaaS REST API",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.jwt = JWTManager(
        secret=settings.linkiq_jwt_secret.get_secret_value(),
        expiry_days=settings.linkiq_jwt_expiry_days,
    )
    app.state.quota = QuotaPolicy(free_accounts_per_ip=settings.free_accounts_per_ip)
    app.state.cipher = SecretCipher.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(LinkIQBaseError, _linkiq_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    # Register routers
    from src.api.routes.auth import router as auth_router
    from src.api.routes.health import router as health_router
    from src.api.routes.projects import router as projects_router
    from src.api.routes.users import router as users_router

    app.include_router(health_router)
    app.include_router(auth_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(projects_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
