from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.core.exceptions import BadRequestError, NotFoundError
from lineup.schemas.system_setting import SystemSettingInDB, SystemSettingUpsert
from lineup.services import settings_service

router = APIRouter(prefix="/system-settings", tags=["system-settings"])


@router.get("", response_model=SystemSettingInDB)
async def get_setting(key: str | None = None, db: AsyncSession = Depends(get_db)):
    if not key:
        raise BadRequestError("Key parameter is required")
    setting = await settings_service.get_setting(db, key)
    if setting is None:
        raise NotFoundError("Setting not found")
    return setting


@router.post("", response_model=SystemSettingInDB)
async def upsert_setting(
    data: SystemSettingUpsert,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await settings_service.upsert_setting(db, data.key, data.value)


@router.get("/{key}/ensure", response_model=SystemSettingInDB)
async def ensure_setting(key: str, default: str | None = None, db: AsyncSession = Depends(get_db)):
    return await settings_service.ensure_setting(db, key, default)
