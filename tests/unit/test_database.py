import pytest
from sqlalchemy import text

from shopledger.db.database import Database, get_async_url
from shopledger.errors import ErrorType
from shopledger.exceptions import AppException
from shopledger.models import AppSettings
from shopledger.services.settings_service import SettingsService


class TestGetAsyncUrl:

    @pytest.mark.parametrize("url,expected", [
        ("postgresql://u:p@host:5432/shop", "postgresql+asyncpg://u:p@host:5432/shop"),
        ("postgres://u:p@host/shop", "postgresql+asyncpg://u:p@host/shop"),
        ("sqlite:///tmp/shop.db", "sqlite+aiosqlite:///tmp/shop.db"),
        ("mysql://u:p@host/shop", "mysql+aiomysql://u:p@host/shop"),
        ("postgresql+asyncpg://u:p@host/shop", "postgresql+asyncpg://u:p@host/shop"),
    ])
    def test_rewrites_to_async_driver(self, url, expected):
        assert get_async_url(url) == expected

    def test_dialect(self):
        assert Database(url="postgres://u:p@host/shop").dialect == "postgresql"
        assert Database(url="sqlite:///shop.db").dialect == "sqlite"


class TestDatabase:

    @pytest.mark.asyncio
    async def test_engine_is_created_lazily(self, tmp_path):
        database = Database(url=f"sqlite:///{tmp_path / 'lazy.db'}")
        assert database.engine is None

        async with database.session():
            pass

        assert database.engine is not None
        await database.disconnect()
        assert database.engine is None

    @pytest.mark.asyncio
    async def test_init_schema_is_idempotent(self, database):
        await database.init_schema()

        async with database.session() as session:
            settings = await session.get(AppSettings, 1)
            assert settings.app_name == "Shop Ledger"

    @pytest.mark.asyncio
    async def test_transaction_rolls_back_on_error(self, database):
        with pytest.raises(AppException):
            async with database.transaction() as session:
                settings = await session.get(AppSettings, 1)
                settings.app_name = "Renamed"
                await session.flush()
                raise AppException(ErrorType.INTERNAL_ERROR, "boom")

        settings = await SettingsService(database).get_settings()
        assert settings.app_name == "Shop Ledger"

    @pytest.mark.asyncio
    async def test_store_failures_become_store_errors(self, database):
        with pytest.raises(AppException) as exc_info:
            async with database.session() as session:
                await session.execute(text("SELECT * FROM no_such_table"))

        assert exc_info.value.error_type == ErrorType.STORE_ERROR
        assert "no_such_table" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_unreachable_server_is_a_store_error(self):
        database = Database(url="postgresql://u:p@127.0.0.1:1/shop")

        with pytest.raises(AppException) as exc_info:
            await database.now()

        assert exc_info.value.error_type == ErrorType.STORE_ERROR
        await database.disconnect()

    @pytest.mark.asyncio
    async def test_missing_settings_row(self, database):
        async with database.transaction() as session:
            await session.delete(await session.get(AppSettings, 1))

        with pytest.raises(AppException) as exc_info:
            await SettingsService(database).get_settings()
        assert exc_info.value.error_type == ErrorType.NOT_FOUND

        # Updating recreates the singleton
        settings = await SettingsService(database).update_settings("Kiosk", "EUR")
        assert settings.id == 1
        assert settings.currency == "EUR"
