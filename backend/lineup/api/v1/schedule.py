"""
Schedule grid endpoints: master templates, the resolved weekly grid,
slot commands and the exported schedule feeds.
"""
import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.core.exceptions import BadRequestError
from lineup.schemas.schedule import (
    AutocompleteResponse,
    ConflictCheckRequest,
    ConflictCheckResponse,
    DayScheduleOut,
    FeedGenerateRequest,
    FeedRefreshRequest,
    FeedRefreshResponse,
    HasLineupUpdate,
    SlotCreate,
    SlotInDB,
    SlotOccurrenceOut,
    SlotUpdate,
)
from lineup.services import settings_service
from lineup.services.feed_refresh import get_feed_refresher
from lineup.services.feed_service import FORMAT_JSON, FORMAT_XML, FeedService
from lineup.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/slots")
async def list_slots(
    selected_date: date | None = None,
    is_master_schedule: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """Master templates, or the resolved week (Sunday..Saturday) around selected_date."""
    service = ScheduleService(db)
    if is_master_schedule:
        return [SlotInDB.model_validate(s) for s in await service.list_masters()]
    if selected_date is None:
        raise BadRequestError("selected_date is required for the weekly schedule")
    return [SlotOccurrenceOut.model_validate(o) for o in await service.get_week(selected_date)]


@router.get("/day/{day}", response_model=DayScheduleOut)
async def day_schedule(day: date, db: AsyncSession = Depends(get_db)):
    occurrences = await ScheduleService(db).get_day(day)
    return DayScheduleOut(date=day, slots=[SlotOccurrenceOut.model_validate(o) for o in occurrences])


@router.post("/slots", response_model=SlotInDB, status_code=201)
async def create_slot(
    data: SlotCreate,
    is_master_schedule: bool = False,
    selected_date: date | None = None,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await ScheduleService(db).create_slot(data.model_dump(), is_master_schedule, selected_date)


@router.post("/slots/check-conflicts", response_model=ConflictCheckResponse)
async def check_conflicts(
    data: ConflictCheckRequest,
    db: AsyncSession = Depends(get_db),
):
    conflicts = await ScheduleService(db).find_conflicts(
        data.day_of_week,
        data.start_time,
        data.end_time,
        data.is_master_schedule,
        slot_date=data.slot_date,
        exclude_id=data.exclude_slot_id,
    )
    return ConflictCheckResponse(
        has_conflict=bool(conflicts),
        conflicting_slots=[SlotInDB.model_validate(s) for s in conflicts],
    )


@router.put("/slots/{slot_id}", response_model=SlotInDB)
async def update_slot(
    slot_id: UUID,
    data: SlotUpdate,
    is_master_schedule: bool = False,
    slot_date: date | None = None,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    changes = data.model_dump(exclude_unset=True)
    return await ScheduleService(db).update_slot(slot_id, changes, is_master_schedule, slot_date)


@router.put("/slots/{slot_id}/has-lineup", response_model=SlotInDB)
async def set_has_lineup(
    slot_id: UUID,
    data: HasLineupUpdate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await ScheduleService(db).set_has_lineup(slot_id, data.has_lineup)


@router.delete("/slots/{slot_id}", response_model=SlotInDB)
async def delete_slot(
    slot_id: UUID,
    is_master_schedule: bool = False,
    slot_date: date | None = None,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await ScheduleService(db).delete_slot(slot_id, is_master_schedule, slot_date)


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(db: AsyncSession = Depends(get_db)):
    return await ScheduleService(db).autocomplete()


# ==================== Feeds ====================

_MEDIA_TYPES = {FORMAT_JSON: "application/json", FORMAT_XML: "application/xml"}


async def _generate(fmt: str, data: FeedGenerateRequest | None, db: AsyncSession) -> Response:
    preview_offset = data.preview_offset if data else None
    content, count = await FeedService(db).generate(fmt, preview_offset)
    return Response(
        content=content,
        media_type=_MEDIA_TYPES[fmt],
        headers={"X-Feed-Entries": str(count), "X-Feed-Stored": "false" if preview_offset is not None else "true"},
    )


@router.post("/generate-json")
async def generate_json(
    data: FeedGenerateRequest | None = None,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await _generate(FORMAT_JSON, data, db)


@router.post("/generate-xml")
async def generate_xml(
    data: FeedGenerateRequest | None = None,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await _generate(FORMAT_XML, data, db)


@router.get("/json")
async def schedule_json(db: AsyncSession = Depends(get_db)):
    content = await FeedService(db).stored_or_generate(FORMAT_JSON)
    return Response(content=content, media_type=_MEDIA_TYPES[FORMAT_JSON])


@router.get("/xml")
async def schedule_xml(db: AsyncSession = Depends(get_db)):
    content = await FeedService(db).stored_or_generate(FORMAT_XML)
    return Response(content=content, media_type=_MEDIA_TYPES[FORMAT_XML])


@router.post("/xml-refresh", response_model=FeedRefreshResponse)
async def xml_refresh(
    data: FeedRefreshRequest | None = None,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    key = settings_service.SCHEDULE_XML_REFRESH_INTERVAL
    refresher = get_feed_refresher()
    if data and data.refresh_interval:
        await settings_service.upsert_setting(db, key, str(data.refresh_interval))
    interval = await settings_service.get_int(db, key, refresher.default_interval)
    if refresher.running:
        refresher.set_interval(interval)
    return FeedRefreshResponse(
        refresh_interval=interval,
        message=f"Schedule XML refresh set to {interval} minutes",
    )
