"""
Tests for settings parsing.
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from realty.config import Settings


class TestDatabaseUrl:

    @pytest.mark.parametrize("raw, expected", [
        ("postgres://u:p@db/realty", "postgresql+asyncpg://u:p@db/realty"),
        ("postgresql://u:p@db/realty", "postgresql+asyncpg://u:p@db/realty"),
        ("sqlite:///./realty.db", "sqlite+aiosqlite:///./realty.db"),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
    ])
    def test_async_driver_selected(self, raw, expected):
        assert Settings(database_url=raw).database_url == expected

    @pytest.mark.asyncio
    async def test_sqlite_url_gets_installed_driver(self):
        engine = create_async_engine(Settings(database_url="sqlite:///:memory:").database_url)
        try:
            assert engine.dialect.driver == "aiosqlite"
        finally:
            await engine.dispose()

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValueError):
            Settings(environment="moon")
