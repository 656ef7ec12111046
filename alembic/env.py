"""Alembic environment — runs Exercise Tracker migrations on the app's async engine.

Design Decisions:
    - URL comes from Settings (DATABASE_URL / .env), so migrations and the app
      always target the same database with the same driver rewrite
    - SQLite runs in batch mode: ALTER TABLE there cannot change columns in place
    - compare_type on: autogenerate picks up column type changes (INTEGER -> BIGINT)
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from exercise_tracker.config import get_settings
from exercise_tracker.db.base import Base
import exercise_tracker.models  # noqa: F401  (registers tables on Base.metadata)

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

DATABASE_URL = get_settings().database_url


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=DATABASE_URL.startswith("sqlite"),
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(lambda conn: _configure(connection=conn))
    await engine.dispose()


if context.is_offline_mode():
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
else:
    asyncio.run(_migrate_online())
