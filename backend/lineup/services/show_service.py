"""Shows and their ordered lineup items."""
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lineup.core.exceptions import ConflictError, NotFoundError
from lineup.models.interviewee import Interviewee
from lineup.models.show import Show
from lineup.models.show_item import ShowItem

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50


def _with_items(stmt):
    return stmt.options(
        selectinload(Show.items).selectinload(ShowItem.interviewees)
    ).execution_options(populate_existing=True)


async def get_show(db: AsyncSession, show_id: UUID) -> Show:
    show = (await db.execute(_with_items(select(Show).where(Show.id == show_id)))).scalar_one_or_none()
    if not show:
        raise NotFoundError("Show not found")
    return show


async def latest_show(db: AsyncSession) -> Show | None:
    stmt = _with_items(select(Show).order_by(Show.created_at.desc()).limit(1))
    return (await db.execute(stmt)).scalar_one_or_none()


def _build_item(show_id: UUID, data: dict[str, Any]) -> ShowItem:
    interviewees = data.pop("interviewees", None) or []
    item = ShowItem(show_id=show_id, **data)
    item.interviewees = [Interviewee(**i) for i in interviewees]
    return item


async def create_show(db: AsyncSession, data: dict[str, Any]) -> Show:
    items = data.pop("items", None) or []
    show = Show(**data)
    db.add(show)
    await db.flush()
    for item in items:
        db.add(_build_item(show.id, item))
    await db.commit()
    return await get_show(db, show.id)


async def replace_items(db: AsyncSession, show_id: UUID, items: list[dict[str, Any]]) -> Show:
    """Swap the whole ordered item list of a show for `items`."""
    show = await get_show(db, show_id)
    await db.execute(delete(ShowItem).where(ShowItem.show_id == show.id))
    for item in items:
        db.add(_build_item(show.id, item))
    await db.commit()
    logger.info("Replaced items of show %s (%d items)", show_id, len(items))
    return await get_show(db, show_id)


async def clear_items(db: AsyncSession, show_id: UUID) -> None:
    show = await get_show(db, show_id)
    await db.execute(delete(ShowItem).where(ShowItem.show_id == show.id))
    await db.commit()


async def create_item(db: AsyncSession, data: dict[str, Any]) -> ShowItem:
    show_id = data.pop("show_id")
    if not await db.get(Show, show_id):
        raise NotFoundError("Show not found")
    taken = select(ShowItem.id).where(ShowItem.show_id == show_id, ShowItem.position == data["position"])
    if (await db.execute(taken)).first():
        raise ConflictError(f"Position {data['position']} is already used in this show")
    item = _build_item(show_id, data)
    db.add(item)
    await db.commit()
    stmt = (
        select(ShowItem)
        .where(ShowItem.id == item.id)
        .options(selectinload(ShowItem.interviewees))
        .execution_options(populate_existing=True)
    )
    return (await db.execute(stmt)).scalar_one()


async def search_items(db: AsyncSession, q: str) -> list[dict[str, Any]]:
    pattern = f"%{q.strip()}%"
    stmt = (
        select(ShowItem, Show.name, Show.date)
        .join(Show, Show.id == ShowItem.show_id)
        .where(or_(ShowItem.name.ilike(pattern), ShowItem.details.ilike(pattern), ShowItem.title.ilike(pattern)))
        .order_by(Show.date.desc(), ShowItem.position)
        .limit(SEARCH_LIMIT)
    )
    rows = (await db.execute(stmt)).all()
    return [
        {
            "id": item.id,
            "show_id": item.show_id,
            "name": item.name,
            "title": item.title,
            "details": item.details,
            "phone": item.phone,
            "show_name": show_name,
            "show_date": show_date,
        }
        for item, show_name, show_date in rows
    ]
