"""DB-backed project repository — quota-checked project provisioning."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from src.core.constants import (
    MSG_PROJECT_MISSING_FIELDS,
    MSG_USER_NOT_FOUND,
    URL_STATUS_ACTIVE,
)
from src.core.exceptions import NotFoundError, ValidationError
from src.core.logging import get_logger
from src.data.db import monitored_urls, projects, users
from src.saas.quota import QuotaPolicy

log = get_logger(__name__)


@dataclass
class Project:
    """A persisted project and the URLs monitored under it."""

    id: int
    user_id: int
    name: str
    domain: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    urls: list[str] = field(default_factory=list)


class ProjectRepository:
    """Async PostgreSQL-backed project storage."""

    def __init__(self, engine: AsyncEngine, quota: QuotaPolicy | None = None) -> None:
        self._engine = engine
        self._quota = quota or QuotaPolicy()

    async def create_project(
        self,
        user_id: int,
        *,
        name: str | None,
        domain: str | None,
        urls: list[str] | None = None,
    ) -> Project:
        """Create a project and its monitored URLs in one transaction.

        The owner row is locked while counting so two concurrent requests
        cannot both take the last free slot of a plan.
        """
        name = (name or "").strip()
        domain = (domain or "").strip()
        if not name or not domain:
            raise ValidationError(MSG_PROJECT_MISSING_FIELDS)

        urls = list(urls or [])
        now = datetime.now(timezone.utc)

        async with self._engine.begin() as conn:
            result = await conn.execute(
                select(users.c.plan).where(users.c.id == user_id).with_for_update()
            )
            owner = result.first()
            if owner is None:
                raise NotFoundError(MSG_USER_NOT_FOUND, context={"user_id": user_id})

            result = await conn.execute(
                select(func.count()).select_from(projects).where(projects.c.user_id == user_id)
            )
            self._quota.check_project_limit(owner.plan, result.scalar_one())

            result = await conn.execute(
                insert(projects)
                .values(
                    user_id=user_id,
                    name=name,
                    domain=domain,
                    created_at=now,
                    updated_at=now,
                )
                .returning(*projects.c)
            )
            row = result.mappings().one()

            if urls:
                await conn.execute(
                    insert(monitored_urls),
                    [
                        {
                            "project_id": row["id"],
                            "url": url,
                            "status": URL_STATUS_ACTIVE,
                            "created_at": now,
                        }
                        for url in urls
                    ],
                )

        log.info(
            "project_created",
            project_id=row["id"],
            user_id=user_id,
            plan=owner.plan,
            urls=len(urls),
        )
        return Project(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            domain=row["domain"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            urls=urls,
        )
