"""DB-backed user repository — registration, login and profile storage."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from functools import lru_cache

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from src.core.constants import (
    MSG_EMAIL_TAKEN,
    MSG_INVALID_CREDENTIALS,
    MSG_LOGIN_MISSING_FIELDS,
    MSG_PROFILE_NAME_REQUIRED,
    MSG_SIGNUP_MISSING_FIELDS,
)
from src.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ValidationError,
)
from src.core.logging import get_logger
from src.data.db import backlinks, projects, users
from src.saas.account import (
    Plan,
    User,
    generate_password,
    hash_password,
    verify_password,
)
from src.saas.quota import QuotaPolicy

log = get_logger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Hash compared against when the email is unknown, so both paths cost the same."""
    return hash_password(generate_password())


class UserRepository:
    """Async store for user identity and password hashes."""

    def __init__(self, engine: AsyncEngine, quota: QuotaPolicy | None = None) -> None:
        self._engine = engine
        self._quota = quota or QuotaPolicy()

    async def find_by_id(self, user_id: int) -> User | None:
        """Look up a user by ID."""
        async with self._engine.begin() as conn:
            result = await conn.execute(select(users).where(users.c.id == user_id))
            r = result.mappings().first()
            if r is None:
                return None
            return self._row_to_user(r)

    async def find_by_email(self, email: str) -> User | None:
        """Look up a user by exact (case-sensitive) email."""
        async with self._engine.begin() as conn:
            result = await conn.execute(select(users).where(users.c.email == email))
            r = result.mappings().first()
            if r is None:
                return None
            return self._row_to_user(r)

    async def register(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None = None,
        ip: str | None = None,
    ) -> User:
        """Create a free-plan account.

        Without a password, a random one is hashed and discarded, so the
        account cannot log in with a password.
        """
        if not email or not name:
            raise ValidationError(MSG_SIGNUP_MISSING_FIELDS)

        hashed = await asyncio.to_thread(hash_password, password or generate_password())
        now = datetime.now(timezone.utc)

        try:
            async with self._engine.begin() as conn:
                existing = await conn.execute(select(users.c.id).where(users.c.email == email))
                if existing.first() is not None:
                    raise DuplicateEmailError(MSG_EMAIL_TAKEN, context={"email": email})

                result = await conn.execute(
                    select(func.count())
                    .select_from(users)
                    .where(users.c.created_ip == ip, users.c.plan == Plan.FREE.value)
                )
                self._quota.check_account_ip_limit(Plan.FREE, result.scalar_one())

                result = await conn.execute(
                    insert(users)
                    .values(
                        name=name,
                        email=email,
                        password=hashed,
                        plan=Plan.FREE.value,
                        created_ip=ip,
                        created_at=now,
                        updated_at=now,
                    )
                    .returning(users.c.id)
                )
                user_id = result.scalar_one()
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email.
            raise DuplicateEmailError(MSG_EMAIL_TAKEN, context={"email": email}) from exc

        log.info(
            "user_registered",
            user_id=user_id,
            generated_password=password is None or password == "",
        )
        return User(
            id=user_id,
            name=name,
            email=email,
            plan=Plan.FREE.value,
            created_ip=ip,
            created_at=now,
            updated_at=now,
            password_hash=hashed,
        )

    async def authenticate(self, email: str | None, password: str | None) -> User:
        """Return the user whose email and password match.

        Unknown email and wrong password fail with the same error.
        """
        if not email or not password:
            raise ValidationError(MSG_LOGIN_MISSING_FIELDS)

        user = await self.find_by_email(email)
        if user is None:
            await asyncio.to_thread(verify_password, password, _dummy_hash())
            log.info("login_failed")
            raise InvalidCredentialsError(MSG_INVALID_CREDENTIALS)

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            log.info("login_failed", user_id=user.id)
            raise InvalidCredentialsError(MSG_INVALID_CREDENTIALS)

        log.info("login_success", user_id=user.id)
        return user

    async def update_profile(
        self, user_id: int, *, name: str | None, company: str | None
    ) -> bool:
        """Update name and company. Returns False when no row matched."""
        if not name:
            raise ValidationError(MSG_PROFILE_NAME_REQUIRED)

        async with self._engine.begin() as conn:
            result = await conn.execute(
                update(users)
                .where(users.c.id == user_id)
                .values(name=name, company=company, updated_at=datetime.now(timezone.utc))
            )
        return result.rowcount > 0

    async def get_stats(self, user_id: int) -> dict[str, int]:
        """Project and backlink counts for the profile page."""
        async with self._engine.begin() as conn:
            result = await conn.execute(
                select(func.count()).select_from(projects).where(projects.c.user_id == user_id)
            )
            project_count = result.scalar_one()

            result = await conn.execute(
                select(func.count())
                .select_from(backlinks.join(projects, backlinks.c.project_id == projects.c.id))
                .where(projects.c.user_id == user_id)
            )
            backlink_count = result.scalar_one()

        return {
            "projects": project_count,
            "backlinks": backlink_count,
            "checks": 0,
            "alerts": 0,
        }

    @staticmethod
    def _row_to_user(r: object) -> User:
        """Convert a DB row mapping to a User dataclass."""
        return User(
            id=r["id"],  # type: ignore[index]
            name=r["name"],  # type: ignore[index]
            email=r["email"],  # type: ignore[index]
            plan=r["plan"],  # type: ignore[index]
            company=r["company"],  # type: ignore[index]
            created_ip=r["created_ip"],  # type: ignore[index]
            created_at=r["created_at"],  # type: ignore[index]
            updated_at=r["updated_at"],  # type: ignore[index]
            password_hash=r["password"],  # type: ignore[index]
        )
