"""
Pydantic schemas for schedule slots, resolved occurrences and schedule feeds.
"""
from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from lineup.services.slot_resolver import OccurrenceKind


# ==================== Slots ====================
class SlotBase(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6)  # 0 = Sunday
    start_time: time
    end_time: time
    show_name: str = Field("", max_length=255)
    host_name: str | None = Field(None, max_length=255)
    color: str | None = Field(None, max_length=50)
    has_lineup: bool = False
    is_prerecorded: bool = False
    is_collection: bool = False


class SlotCreate(SlotBase):
    slot_date: date | None = None
    is_recurring: bool | None = None
    is_deleted: bool = False
    parent_slot_id: UUID | None = None


class SlotUpdate(BaseModel):
    day_of_week: int | None = Field(None, ge=0, le=6)
    start_time: time | None = None
    end_time: time | None = None
    show_name: str | None = Field(None, max_length=255)
    host_name: str | None = Field(None, max_length=255)
    color: str | None = Field(None, max_length=50)
    has_lineup: bool | None = None
    is_prerecorded: bool | None = None
    is_collection: bool | None = None
    slot_date: date | None = None


class SlotInDB(SlotBase):
    id: UUID
    slot_date: date | None = None
    is_master: bool
    is_recurring: bool
    is_deleted: bool
    is_modified: bool
    parent_slot_id: UUID | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ==================== Occurrences ====================
class ShowSummary(BaseModel):
    id: UUID
    name: str
    time: str | None = None
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)


class SlotOccurrenceOut(BaseModel):
    """A slot as it airs on one date; `id` is the master's id for virtual occurrences."""
    id: UUID
    master_id: UUID | None = None
    date: date
    day_of_week: int
    start_time: time
    end_time: time
    show_name: str
    host_name: str | None = None
    color: str | None = None
    kind: OccurrenceKind
    is_virtual: bool
    is_modified: bool
    has_lineup: bool
    is_prerecorded: bool
    is_collection: bool
    show: ShowSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class DayScheduleOut(BaseModel):
    date: date
    slots: list[SlotOccurrenceOut]


# ==================== Commands ====================
class ConflictCheckRequest(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: time
    end_time: time
    slot_date: date | None = None
    exclude_slot_id: UUID | None = None
    is_master_schedule: bool = False


class ConflictCheckResponse(BaseModel):
    has_conflict: bool
    conflicting_slots: list[SlotInDB] = []


class HasLineupUpdate(BaseModel):
    has_lineup: StrictBool


class AutocompleteResponse(BaseModel):
    show_names: list[str]
    host_names: list[str]


# ==================== Feeds ====================
class FeedGenerateRequest(BaseModel):
    # Days to shift the feed window by; when given the result is not stored
    preview_offset: int | None = None


class FeedResponse(BaseModel):
    format: str
    content: str
    stored: bool
    entries: int


class FeedRefreshRequest(BaseModel):
    refresh_interval: int | None = Field(None, ge=1, le=1440)  # minutes


class FeedRefreshResponse(BaseModel):
    success: bool = True
    refresh_interval: int
    message: str
