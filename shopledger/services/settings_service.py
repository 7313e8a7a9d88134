from sqlalchemy import func

from shopledger.db.database import Database
from shopledger.errors import ErrorType
from shopledger.exceptions import AppException
from shopledger.models import AppSettings

SETTINGS_ID = 1


class SettingsService:
    """The app_settings table holds a single row with id 1."""

    def __init__(self, database: Database):
        self.database = database

    async def get_settings(self) -> AppSettings:
        async with self.database.session() as session:
            settings = await session.get(AppSettings, SETTINGS_ID)
            if settings is None:
                raise AppException(ErrorType.NOT_FOUND, "Settings not found")
            return settings

    async def update_settings(self, app_name: str, currency: str) -> AppSettings:
        async with self.database.transaction() as session:
            settings = await session.get(AppSettings, SETTINGS_ID)
            if settings is None:
                settings = AppSettings(id=SETTINGS_ID)
                session.add(settings)
            settings.app_name = app_name
            settings.currency = currency
            settings.updated_at = func.now()
            await session.flush()
            await session.refresh(settings)
        return settings
