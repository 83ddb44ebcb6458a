"""
Workers: station staff (producers, digital, engineers) grouped by department.

Department listings are served through a TTL cache; every worker write
drops the whole cache.
"""
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.config import settings
from lineup.core.cache import TTLCache
from lineup.core.exceptions import NotFoundError
from lineup.models.worker import Worker

logger = logging.getLogger(__name__)

_ALL = "__all__"

worker_cache = TTLCache(ttl_seconds=settings.WORKER_CACHE_TTL_SECONDS)


async def list_workers(
    db: AsyncSession,
    department: str | None = None,
    cache: TTLCache = worker_cache,
) -> list[Worker]:
    async def load() -> list[Worker]:
        stmt = select(Worker).order_by(Worker.name)
        if department:
            stmt = stmt.where(Worker.department == department)
        result = await db.execute(stmt)
        workers = list(result.scalars().all())
        # Cached rows outlive this session
        for worker in workers:
            db.expunge(worker)
        logger.debug("Loaded %d workers for %s", len(workers), department or "all departments")
        return workers

    return await cache.get_or_load(department or _ALL, load)


async def get_worker(db: AsyncSession, worker_id: UUID) -> Worker:
    worker = await db.get(Worker, worker_id)
    if not worker:
        raise NotFoundError("Worker not found")
    return worker


async def create_worker(db: AsyncSession, data: dict[str, Any], cache: TTLCache = worker_cache) -> Worker:
    worker = Worker(**data)
    db.add(worker)
    await db.commit()
    await db.refresh(worker)
    cache.invalidate()
    return worker


async def update_worker(
    db: AsyncSession, worker_id: UUID, changes: dict[str, Any], cache: TTLCache = worker_cache
) -> Worker:
    worker = await get_worker(db, worker_id)
    for key, value in changes.items():
        setattr(worker, key, value)
    await db.commit()
    await db.refresh(worker)
    cache.invalidate()
    return worker


async def delete_worker(db: AsyncSession, worker_id: UUID, cache: TTLCache = worker_cache) -> None:
    worker = await get_worker(db, worker_id)
    await db.delete(worker)
    await db.commit()
    cache.invalidate()
