#!/usr/bin/env python3
"""Initialize the LinkIQ database schema and list the resulting tables."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from sqlalchemy import inspect

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import get_settings
from src.core.logging import get_logger, setup_logging
from src.data.db import create_engine, init_schema

log = get_logger(__name__)


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)
    log.info("starting_schema_initialization")

    engine = create_engine(settings)
    try:
        await init_schema(engine)
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda c: inspect(c).get_table_names())
        log.info("schema_initialization_complete", tables=sorted(tables))
    except Exception as exc:
        log.error("schema_initialization_failed", error=str(exc))
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception:
        sys.exit(1)
