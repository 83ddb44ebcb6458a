"""Pydantic schemas for shows, lineup items and interviewees."""
import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==================== Interviewee ====================
class IntervieweeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    title: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    duration: int | None = Field(None, ge=0)


class IntervieweeCreate(IntervieweeBase):
    item_id: UUID


class IntervieweeInDB(IntervieweeBase):
    id: UUID
    item_id: UUID
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


# ==================== ShowItem ====================
class ShowItemBase(BaseModel):
    position: int = Field(..., ge=0)
    name: str | None = Field(None, max_length=500)
    title: str | None = Field(None, max_length=255)
    details: str | None = None
    phone: str | None = Field(None, max_length=50)
    duration: int | None = Field(None, ge=0)
    is_break: bool = False
    is_note: bool = False
    is_divider: bool = False


class ShowItemWrite(ShowItemBase):
    interviewees: list[IntervieweeBase] = []


class ShowItemCreate(ShowItemWrite):
    show_id: UUID


class ShowItemInDB(ShowItemBase):
    id: UUID
    show_id: UUID
    interviewees: list[IntervieweeInDB] = []

    model_config = ConfigDict(from_attributes=True)


class ShowItemSearchResult(BaseModel):
    id: UUID
    show_id: UUID
    name: str | None = None
    title: str | None = None
    details: str | None = None
    phone: str | None = None
    show_name: str | None = None
    show_date: datetime.date | None = None


# ==================== Show ====================
class ShowBase(BaseModel):
    name: str = Field(..., max_length=255)
    time: str | None = Field(None, max_length=20)
    date: datetime.date | None = None
    notes: str | None = None
    slot_id: UUID | None = None


def _check_unique_positions(items: list[ShowItemWrite]) -> list[ShowItemWrite]:
    positions = [item.position for item in items]
    if len(positions) != len(set(positions)):
        raise ValueError("Item positions must be unique within a show")
    return items


class ShowCreate(ShowBase):
    items: list[ShowItemWrite] = []

    @field_validator("items")
    @classmethod
    def unique_positions(cls, v: list[ShowItemWrite]) -> list[ShowItemWrite]:
        return _check_unique_positions(v)


class ShowUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)
    time: str | None = Field(None, max_length=20)
    date: datetime.date | None = None
    notes: str | None = None
    slot_id: UUID | None = None


class ShowInDB(ShowBase):
    id: UUID
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


class ShowWithItems(ShowInDB):
    items: list[ShowItemInDB] = []


class ShowItemsReplace(BaseModel):
    items: list[ShowItemWrite]

    @field_validator("items")
    @classmethod
    def unique_positions(cls, v: list[ShowItemWrite]) -> list[ShowItemWrite]:
        return _check_unique_positions(v)
