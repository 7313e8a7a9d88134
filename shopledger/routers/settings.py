from fastapi import APIRouter, Depends

from shopledger.db.database import Database, get_db
from shopledger.schemas.settings import SettingsIn, SettingsOut
from shopledger.services.settings_service import SettingsService

router = APIRouter(prefix="/api/settings", tags=["settings"])


def get_settings_service(database: Database = Depends(get_db)) -> SettingsService:
    return SettingsService(database)


@router.get("", response_model=SettingsOut)
async def get_settings(service: SettingsService = Depends(get_settings_service)):
    return await service.get_settings()


@router.put("", response_model=SettingsOut)
async def update_settings(body: SettingsIn, service: SettingsService = Depends(get_settings_service)):
    return await service.update_settings(body.app_name, body.currency)
