"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance.
Use docker-compose for testing.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import dosing.infrastructure.models  # noqa: F401
import iam.infrastructure.models  # noqa: F401
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        PEPPLANNER_DB_HOST, PEPPLANNER_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("PEPPLANNER_DB_HOST", "localhost"),
        port=int(os.getenv("PEPPLANNER_DB_PORT", "5432")),
        database=os.getenv("PEPPLANNER_DB_DATABASE", "pepplanner_test"),
        username=os.getenv("PEPPLANNER_DB_USERNAME", "pepplanner"),
        password=SecretStr(
            os.getenv("PEPPLANNER_DB_PASSWORD", "pepplanner_dev_password")
        ),
    )


@pytest_asyncio.fixture
async def async_session(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session against freshly emptied tables."""
    engine = create_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(
            text("TRUNCATE doses, calculator_settings, users RESTART IDENTITY CASCADE")
        )

    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
    async with sessionmaker() as session:
        yield session

    await engine.dispose()
