from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.core.exceptions import NotFoundError
from lineup.models.show import Show
from lineup.models.show_archive import ShowArchive
from lineup.schemas.show import (
    ShowCreate,
    ShowInDB,
    ShowItemsReplace,
    ShowUpdate,
    ShowWithItems,
)
from lineup.services import show_service

router = APIRouter(prefix="/shows", tags=["shows"])


@router.get("", response_model=list[ShowInDB])
async def list_shows(
    skip: int = 0,
    limit: int = Query(50, le=200),
    db: AsyncSession = Depends(get_db),
):
    stmt = select(Show).order_by(Show.date.desc(), Show.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return result.scalars().all()


@router.get("/latest", response_model=ShowWithItems | None)
async def latest_show(db: AsyncSession = Depends(get_db)):
    return await show_service.latest_show(db)


@router.get("/archive/search", response_model=list[ShowInDB])
async def search_archive(
    q: str = Query(..., min_length=1),
    limit: int = Query(50, le=200),
    db: AsyncSession = Depends(get_db),
):
    stmt = (
        select(ShowArchive)
        .where(ShowArchive.name.ilike(f"%{q.strip()}%"))
        .order_by(ShowArchive.date.desc())
        .limit(limit)
    )
    result = await db.execute(stmt)
    return result.scalars().all()


@router.get("/{show_id}", response_model=ShowWithItems)
async def get_show(show_id: UUID, db: AsyncSession = Depends(get_db)):
    return await show_service.get_show(db, show_id)


@router.post("", response_model=ShowWithItems, status_code=201)
async def create_show(
    data: ShowCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await show_service.create_show(db, data.model_dump())


@router.put("/{show_id}", response_model=ShowInDB)
async def update_show(
    show_id: UUID,
    data: ShowUpdate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    show = await db.get(Show, show_id)
    if not show:
        raise NotFoundError("Show not found")

    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(show, key, value)

    await db.commit()
    await db.refresh(show)
    return show


@router.delete("/{show_id}", status_code=204)
async def delete_show(
    show_id: UUID,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    show = await show_service.get_show(db, show_id)
    await db.delete(show)
    await db.commit()


@router.put("/{show_id}/items", response_model=ShowWithItems)
async def replace_items(
    show_id: UUID,
    data: ShowItemsReplace,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await show_service.replace_items(db, show_id, [item.model_dump() for item in data.items])


@router.delete("/{show_id}/items", status_code=204)
async def clear_items(
    show_id: UUID,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    await show_service.clear_items(db, show_id)
