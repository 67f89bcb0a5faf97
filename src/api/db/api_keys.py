"""DB-backed API key vault — encrypted per-user third-party credentials."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from src.core.constants import MSG_API_KEY_MISSING_FIELDS, MSG_API_KEY_UNKNOWN_TYPE
from src.core.exceptions import ValidationError
from src.core.logging import get_logger
from src.data.db import api_keys
from src.saas.vault import KNOWN_KEY_TYPES, SecretCipher

log = get_logger(__name__)


def _upsert_insert(conn: AsyncConnection):  # type: ignore[no-untyped-def]
    """Dialect-specific INSERT that supports ON CONFLICT."""
    if conn.dialect.name == "postgresql":
        return postgresql.insert(api_keys)
    return sqlite.insert(api_keys)


class ApiKeyRepository:
    """Stores one encrypted credential per (user, key_type)."""

    def __init__(self, engine: AsyncEngine, cipher: SecretCipher) -> None:
        self._engine = engine
        self._cipher = cipher

    async def save(self, user_id: int, key_type: str | None, key_value: str | None) -> None:
        """Encrypt and upsert a credential, replacing any previous value."""
        if not key_type or not key_value:
            raise ValidationError(MSG_API_KEY_MISSING_FIELDS)
        if key_type not in KNOWN_KEY_TYPES:
            raise ValidationError(
                MSG_API_KEY_UNKNOWN_TYPE.format(types=", ".join(KNOWN_KEY_TYPES)),
                context={"key_type": key_type},
            )

        sealed = self._cipher.encrypt(key_value)
        now = datetime.now(timezone.utc)

        async with self._engine.begin() as conn:
            stmt = _upsert_insert(conn).values(
                user_id=user_id,
                key_type=key_type,
                key_value=sealed,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[api_keys.c.user_id, api_keys.c.key_type],
                set_={"key_value": stmt.excluded.key_value, "updated_at": now},
            )
            await conn.execute(stmt)

        log.info("api_key_saved", user_id=user_id, key_type=key_type)

    async def status(self, user_id: int) -> dict[str, bool]:
        """Which known key types have a stored value. Values are never read."""
        async with self._engine.begin() as conn:
            result = await conn.execute(
                select(api_keys.c.key_type).where(api_keys.c.user_id == user_id)
            )
            stored = set(result.scalars().all())

        return {key_type: key_type in stored for key_type in KNOWN_KEY_TYPES}
