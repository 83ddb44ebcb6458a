"""Key/value system settings stored in the database."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.models.system_setting import SystemSetting

logger = logging.getLogger(__name__)

# Well-known keys
SCHEDULE_DATA_OFFSET = "schedule_data_offset"
SCHEDULE_JSON = "schedule_json"
SCHEDULE_JSON_TEMPLATE = "schedule_json_template"
SCHEDULE_XML = "schedule_xml"
SCHEDULE_XML_REFRESH_INTERVAL = "schedule_xml_refresh_interval"


async def get_setting(db: AsyncSession, key: str) -> SystemSetting | None:
    result = await db.execute(select(SystemSetting).where(SystemSetting.key == key))
    return result.scalar_one_or_none()


async def get_value(db: AsyncSession, key: str, default: str | None = None) -> str | None:
    setting = await get_setting(db, key)
    if setting is None or setting.value is None:
        return default
    return setting.value


async def get_int(db: AsyncSession, key: str, default: int) -> int:
    raw = await get_value(db, key)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Setting %s is not an integer (%r), using %d", key, raw, default)
        return default


async def upsert_setting(db: AsyncSession, key: str, value: str | None, commit: bool = True) -> SystemSetting:
    setting = await get_setting(db, key)
    if setting is None:
        setting = SystemSetting(key=key, value=value)
        db.add(setting)
    else:
        setting.value = value
    if commit:
        await db.commit()
        await db.refresh(setting)
    return setting


async def ensure_setting(db: AsyncSession, key: str, default: str | None = None) -> SystemSetting:
    """Return the setting, creating it with `default` when missing."""
    setting = await get_setting(db, key)
    if setting is not None:
        return setting
    return await upsert_setting(db, key, default)
