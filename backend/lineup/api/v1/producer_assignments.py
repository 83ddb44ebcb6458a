from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.schemas.staff import (
    AssignmentCreate,
    AssignmentInDB,
    AssignmentSkipCreate,
    AssignmentSkipInDB,
    AssignmentUpdate,
)
from lineup.services import assignment_service

router = APIRouter(prefix="/producer-assignments", tags=["producer-assignments"])


@router.get("", response_model=list[AssignmentInDB])
async def list_assignments(week_start: date, db: AsyncSession = Depends(get_db)):
    return await assignment_service.list_for_week(db, week_start)


@router.post("", response_model=AssignmentInDB, status_code=201)
async def create_assignment(
    data: AssignmentCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await assignment_service.create_assignment(db, data.model_dump())


@router.put("/{assignment_id}", response_model=AssignmentInDB)
async def update_assignment(
    assignment_id: UUID,
    data: AssignmentUpdate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await assignment_service.update_assignment(db, assignment_id, data.model_dump(exclude_unset=True))


@router.delete("/{assignment_id}", status_code=204)
async def delete_assignment(
    assignment_id: UUID,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    await assignment_service.delete_assignment(db, assignment_id)


@router.post("/{assignment_id}/skip", response_model=AssignmentSkipInDB, status_code=201)
async def skip_week(
    assignment_id: UUID,
    data: AssignmentSkipCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await assignment_service.skip_week(db, assignment_id, data.week_start)
