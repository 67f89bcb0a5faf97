"""Project endpoints — plan-limited project creation."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError

from src.api.db.projects import ProjectRepository
from src.api.deps import get_project_repo, require_auth
from src.api.models.schemas import ProjectCreate, ProjectCreated, ProjectOut
from src.core.constants import MSG_PROJECT_CREATED, MSG_PROJECT_FAILED
from src.core.exceptions import PersistenceError
from src.core.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectCreated, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    user_id: int = Depends(require_auth),
    repo: ProjectRepository = Depends(get_project_repo),
) -> ProjectCreated:
    """Create a project and start monitoring the supplied URLs."""
    try:
        project = await repo.create_project(
            user_id,
            name=body.name,
            domain=body.domain,
            urls=body.urls,
        )
    except SQLAlchemyError as exc:
        log.error("create_project_error", user_id=user_id, error=str(exc))
        raise PersistenceError(MSG_PROJECT_FAILED) from exc

    return ProjectCreated(
        message=MSG_PROJECT_CREATED,
        project=ProjectOut(**asdict(project)),
    )
