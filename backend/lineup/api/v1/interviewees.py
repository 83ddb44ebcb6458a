from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.core.exceptions import NotFoundError
from lineup.models.interviewee import Interviewee
from lineup.models.show_item import ShowItem
from lineup.schemas.show import IntervieweeCreate, IntervieweeInDB

router = APIRouter(prefix="/interviewees", tags=["interviewees"])


@router.get("", response_model=list[IntervieweeInDB])
async def list_interviewees(item_id: UUID, db: AsyncSession = Depends(get_db)):
    stmt = select(Interviewee).where(Interviewee.item_id == item_id).order_by(Interviewee.created_at)
    result = await db.execute(stmt)
    return result.scalars().all()


@router.post("", response_model=IntervieweeInDB, status_code=201)
async def create_interviewee(
    data: IntervieweeCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    if not await db.get(ShowItem, data.item_id):
        raise NotFoundError("Show item not found")
    record = Interviewee(**data.model_dump())
    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


@router.delete("/{interviewee_id}", status_code=204)
async def delete_interviewee(
    interviewee_id: UUID,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    record = await db.get(Interviewee, interviewee_id)
    if not record:
        raise NotFoundError("Interviewee not found")
    await db.delete(record)
    await db.commit()
