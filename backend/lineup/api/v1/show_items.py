from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.core.exceptions import NotFoundError
from lineup.models.show_item import ShowItem
from lineup.schemas.show import ShowItemCreate, ShowItemInDB, ShowItemSearchResult
from lineup.services import show_service

router = APIRouter(prefix="/show-items", tags=["show-items"])


@router.get("/search", response_model=list[ShowItemSearchResult])
async def search_items(q: str = Query(..., min_length=2), db: AsyncSession = Depends(get_db)):
    return await show_service.search_items(db, q)


@router.post("", response_model=ShowItemInDB, status_code=201)
async def create_item(
    data: ShowItemCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await show_service.create_item(db, data.model_dump())


@router.delete("/{item_id}", status_code=204)
async def delete_item(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    item = await db.get(ShowItem, item_id)
    if not item:
        raise NotFoundError("Show item not found")
    await db.delete(item)
    await db.commit()
