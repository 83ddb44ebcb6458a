from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SystemSettingUpsert(BaseModel):
    key: str = Field(..., min_length=1, max_length=255)
    value: str | None = None


class SystemSettingInDB(BaseModel):
    id: UUID
    key: str
    value: str | None = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
