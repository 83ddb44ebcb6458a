from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.schemas.day_note import DayNoteCreate, DayNoteInDB, DayNoteUpdate
from lineup.services import day_note_service

router = APIRouter(prefix="/day-notes", tags=["day-notes"])


@router.get("", response_model=list[DayNoteInDB])
async def get_day_notes(
    start_date: date,
    end_date: date,
    is_bottom_note: bool = False,
    db: AsyncSession = Depends(get_db),
):
    return await day_note_service.get_day_notes(db, start_date, end_date, is_bottom_note)


@router.get("/{day}", response_model=DayNoteInDB | None)
async def get_note_for_date(day: date, is_bottom_note: bool = False, db: AsyncSession = Depends(get_db)):
    return await day_note_service.get_note_for_date(db, day, is_bottom_note)


@router.post("", response_model=DayNoteInDB, status_code=201)
async def create_day_note(
    data: DayNoteCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await day_note_service.create_day_note(db, data.date, data.note, data.is_bottom_note)


@router.put("/{note_id}", response_model=DayNoteInDB)
async def update_day_note(
    note_id: UUID,
    data: DayNoteUpdate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await day_note_service.update_day_note(db, note_id, data.note)


@router.delete("/{note_id}", status_code=204)
async def delete_day_note(
    note_id: UUID,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    await day_note_service.delete_day_note(db, note_id)
