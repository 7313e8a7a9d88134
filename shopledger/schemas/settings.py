from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SettingsIn(BaseModel):
    app_name: str = Field(min_length=1, max_length=255)
    currency: str = Field(min_length=1, max_length=10)


class SettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    app_name: str
    currency: str
    updated_at: datetime | None = None
