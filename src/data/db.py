"""Relational schema and async engine construction for LinkIQ."""

from __future__ import annotations

from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    event,
    func,
)
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from config.settings import Settings
from src.core.constants import (
    BACKLINK_STATUS_ACTIVE,
    CAMPAIGN_STATUS_DRAFT,
    URL_STATUS_ACTIVE,
)
from src.core.logging import get_logger

log = get_logger(__name__)

metadata = MetaData()

# ── Tables ───────────────────────────────────────────────────────

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("plan", String(50), nullable=False, server_default="free"),
    Column("company", String(255)),
    Column("created_ip", String(50)),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    Index("idx_users_email", "email"),
    Index("idx_users_created_ip_plan", "created_ip", "plan"),
)

projects = Table(
    "projects",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("name", String(255), nullable=False),
    Column("domain", String(255), nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    Index("idx_projects_user", "user_id"),
)

monitored_urls = Table(
    "monitored_urls",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
    Column("url", Text, nullable=False),
    Column("status", String(50), server_default=URL_STATUS_ACTIVE),
    Column("last_check", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)

backlinks = Table(
    "backlinks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
    Column("source_url", Text, nullable=False),
    Column("target_url", Text, nullable=False),
    Column("anchor_text", Text),
    Column("domain_authority", Integer),
    Column("page_authority", Integer),
    Column("status", String(50), server_default=BACKLINK_STATUS_ACTIVE),
    Column("first_seen", DateTime(timezone=True), server_default=func.now()),
    Column("last_seen", DateTime(timezone=True), server_default=func.now()),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Index("idx_backlinks_project", "project_id"),
)

api_keys = Table(
    "api_keys",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("key_type", String(50), nullable=False),
    Column("key_value", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    UniqueConstraint("user_id", "key_type", name="uq_api_keys_user_type"),
    Index("idx_api_keys_user", "user_id"),
)

campaigns = Table(
    "campaigns",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("name", String(255), nullable=False),
    Column("subject", String(255)),
    Column("template", Text),
    Column("status", String(50), server_default=CAMPAIGN_STATUS_DRAFT),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)


# ── Engine ───────────────────────────────────────────────────────


def _enable_sqlite_foreign_keys(dbapi_conn: Any, connection_record: Any) -> None:
    """SQLite ships with FK enforcement off; cascades need it on."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine (connection pool) described by ``settings``.

    The caller owns the engine and must dispose it.
    """
    db_url = settings.database_url.get_secret_value()
    url = make_url(db_url)

    kwargs: dict[str, Any] = {"echo": False}
    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(db_url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        kwargs["pool_size"] = settings.database_pool_size
        kwargs["max_overflow"] = settings.database_max_overflow
        kwargs["pool_pre_ping"] = True
        if settings.database_ssl:
            kwargs["connect_args"] = {"ssl": "require"}
        engine = create_async_engine(db_url, **kwargs)

    log.info("database_engine_created", backend=url.get_backend_name(), host=url.host or "")
    return engine


async def init_schema(engine: AsyncEngine) -> list[str]:
    """Create every table and index that does not exist yet.

    Returns the names of the tables known to the schema.
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    names = sorted(metadata.tables)
    log.info("schema_initialized", tables=names)
    return names
