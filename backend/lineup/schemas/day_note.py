"""Pydantic schemas for day notes."""
import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class DayNoteCreate(BaseModel):
    # Optional here so a missing date is reported as a 400, not a 422
    date: datetime.date | None = None
    note: str = ""
    is_bottom_note: bool = False


class DayNoteUpdate(BaseModel):
    note: str


class DayNoteInDB(BaseModel):
    id: UUID
    date: datetime.date
    note: str
    is_bottom_note: bool
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)
