"""Alembic migration environment.

The database URL comes from ``DatabaseSettings`` so migrations use the
same configuration as the application. Migrations run on the asyncpg
engine through ``run_sync``.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

# Import models so their tables register on Base.metadata
import dosing.infrastructure.models  # noqa: F401
import iam.infrastructure.models  # noqa: F401
from infrastructure.database.engines import build_async_url
from infrastructure.database.models import Base
from infrastructure.settings import get_database_settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=build_async_url(get_database_settings()),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Connect with the async engine and run migrations."""
    engine = create_async_engine(build_async_url(get_database_settings()))
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
