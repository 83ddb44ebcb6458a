"""Day notes: free text pinned to the top or bottom of a day in the grid."""
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.exceptions import BadRequestError, NotFoundError
from lineup.models.day_note import DayNote


async def get_day_notes(db: AsyncSession, start: date, end: date, is_bottom: bool = False) -> list[DayNote]:
    stmt = (
        select(DayNote)
        .where(DayNote.date >= start, DayNote.date <= end, DayNote.is_bottom_note == is_bottom)
        .order_by(DayNote.date, DayNote.created_at)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_note_for_date(db: AsyncSession, on: date, is_bottom: bool = False) -> DayNote | None:
    """Most recent note for the date, if any."""
    stmt = (
        select(DayNote)
        .where(DayNote.date == on, DayNote.is_bottom_note == is_bottom)
        .order_by(DayNote.created_at.desc())
        .limit(1)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_day_note(db: AsyncSession, on: date | None, note: str, is_bottom: bool = False) -> DayNote:
    if on is None:
        raise BadRequestError("Date is required")
    record = DayNote(date=on, note=note, is_bottom_note=is_bottom)
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


async def _get(db: AsyncSession, note_id: UUID) -> DayNote:
    record = await db.get(DayNote, note_id)
    if not record:
        raise NotFoundError("Day note not found")
    return record


async def update_day_note(db: AsyncSession, note_id: UUID, note: str) -> DayNote:
    record = await _get(db, note_id)
    record.note = note
    await db.commit()
    await db.refresh(record)
    return record


async def delete_day_note(db: AsyncSession, note_id: UUID) -> None:
    record = await _get(db, note_id)
    await db.delete(record)
    await db.commit()
