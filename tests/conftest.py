"""Pytest configuration, compatibility helpers and shared fixtures.

This project includes async tests marked with ``@pytest.mark.asyncio``.
Some environments run unit tests without ``pytest-asyncio`` installed, which
would otherwise make those tests fail at collection/runtime.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from pathlib import Path
from typing import Any

import pytest
from cryptography.fernet import Fernet
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncEngine

from config.settings import Settings
from src.api.main import create_app
from src.data.db import create_engine, init_schema


def pytest_configure(config: pytest.Config) -> None:
    """Register local markers used in the suite."""
    config.addinivalue_line("markers", "asyncio: mark test as asyncio-compatible")


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run ``@pytest.mark.asyncio`` tests without external plugins.

    If pytest-asyncio (or another async plugin) is installed, this hook may be
    bypassed by that plugin depending on hook ordering. In plugin-less
    environments, this fallback executes coroutine tests via ``asyncio.run``.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    kwargs: dict[str, Any] = {
        arg: pyfuncitem.funcargs[arg]
        for arg in pyfuncitem._fixtureinfo.argnames
    }
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_func(**kwargs))
    finally:
        loop.close()
        # Keep a default loop available for sync tests that call
        # ``asyncio.get_event_loop()`` directly.
        asyncio.set_event_loop(asyncio.new_event_loop())
    return True


# ── Fixtures ──────────────────────────────────────────────────────


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        database_url=SecretStr(f"sqlite+aiosqlite:///{tmp_path / 'linkiq.db'}"),
        linkiq_jwt_secret=SecretStr("test-jwt-secret"),
        linkiq_encryption_keys=SecretStr(Fernet.generate_key().decode()),
    )


@pytest.fixture()
def db(settings: Settings) -> Callable[[], AbstractAsyncContextManager[AsyncEngine]]:
    """Factory for a migrated engine, opened inside the running test loop.

    Usage: ``async with db() as engine: ...``
    """

    @asynccontextmanager
    async def _open() -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        await init_schema(engine)
        try:
            yield engine
        finally:
            await engine.dispose()

    return _open


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    """HTTP client for an app whose lifespan migrates the SQLite database."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
