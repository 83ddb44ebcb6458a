"""Pydantic schemas for workers, producer roles and producer assignments."""
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ==================== Worker ====================
class WorkerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    department: str | None = Field(None, max_length=100)
    position: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    is_active: bool = True


class WorkerCreate(WorkerBase):
    pass


class WorkerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    department: str | None = Field(None, max_length=100)
    position: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    is_active: bool | None = None


class WorkerInDB(WorkerBase):
    id: UUID
    # Stored values are not re-validated on the way out
    email: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WorkerAccountCreate(BaseModel):
    password: str = Field(..., min_length=8)
    role: str = "producer"


# ==================== ProducerRole ====================
class ProducerRoleBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    display_order: int = 0


class ProducerRoleUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    display_order: int | None = None


class ProducerRoleInDB(ProducerRoleBase):
    id: UUID

    model_config = ConfigDict(from_attributes=True)


class ProducerRolesEnsure(BaseModel):
    roles: list[ProducerRoleBase]


# ==================== ProducerAssignment ====================
class AssignmentCreate(BaseModel):
    worker_id: UUID
    slot_id: UUID
    week_start: date
    role: str | None = Field(None, max_length=100)
    is_recurring: bool = False


class AssignmentUpdate(BaseModel):
    worker_id: UUID | None = None
    role: str | None = Field(None, max_length=100)
    is_recurring: bool | None = None


class AssignmentInDB(BaseModel):
    id: UUID
    worker_id: UUID
    slot_id: UUID
    week_start: date
    role: str | None = None
    is_recurring: bool
    is_deleted: bool
    worker: WorkerInDB | None = None

    model_config = ConfigDict(from_attributes=True)


class AssignmentSkipCreate(BaseModel):
    week_start: date


class AssignmentSkipInDB(BaseModel):
    id: UUID
    assignment_id: UUID
    week_start: date

    model_config = ConfigDict(from_attributes=True)
