"""
Admin maintenance operations.

Only the named operations registered below can run; each validates its own
parameters with a pydantic model and works through the ORM. There is no
path for running caller-supplied SQL.
"""
import logging
from collections.abc import Awaitable, Callable
from datetime import date, timedelta
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.exceptions import BadRequestError
from lineup.db.base import Base
from lineup.models.producer_assignment import ProducerAssignment
from lineup.models.schedule_slot import ScheduleSlot
from lineup.models.show import Show
from lineup.services.slot_resolver import sunday_weekday

logger = logging.getLogger(__name__)


class PurgeDeletedOverridesParams(BaseModel):
    before: date


class ResetWeekParams(BaseModel):
    week_start: date


class NoParams(BaseModel):
    pass


async def _dependents(db: AsyncSession, slot_filter) -> dict[str, int]:
    """Rows the database changes alongside the slot rows matching `slot_filter`."""
    slot_ids = select(ScheduleSlot.id).where(*slot_filter)
    assignments = await db.execute(
        select(func.count()).select_from(ProducerAssignment).where(ProducerAssignment.slot_id.in_(slot_ids))
    )
    shows = await db.execute(select(func.count()).select_from(Show).where(Show.slot_id.in_(slot_ids)))
    return {"assignments_removed": assignments.scalar_one(), "shows_detached": shows.scalar_one()}


async def _delete_slots(db: AsyncSession, slot_filter) -> tuple[int, dict[str, int]]:
    dependents = await _dependents(db, slot_filter)
    result = await db.execute(delete(ScheduleSlot).where(*slot_filter))
    await db.commit()
    return result.rowcount or 0, dependents


async def purge_deleted_overrides(db: AsyncSession, params: PurgeDeletedOverridesParams) -> tuple[int, dict]:
    """
    Drop deletion overrides dated before `before`; they no longer affect anything shown.

    Producer assignments on the dropped rows go with them and shows written
    against them lose their slot link. Both counts are reported.
    """
    slot_filter = (
        ScheduleSlot.is_master == False,  # noqa: E712
        ScheduleSlot.is_deleted == True,  # noqa: E712
        ScheduleSlot.slot_date < params.before,
    )
    affected, dependents = await _delete_slots(db, slot_filter)
    return affected, {"before": params.before.isoformat(), **dependents}


async def reset_week(db: AsyncSession, params: ResetWeekParams) -> tuple[int, dict]:
    """
    Remove every date row of a Sunday-based week so it shows the master grid again.

    Deleting a date row cascades to the producer assignments made on it and
    sets `slot_id` to NULL on shows written against it; lineups written
    against the master stay bound. The details report how many of each.
    """
    if sunday_weekday(params.week_start) != 0:
        raise BadRequestError("week_start must be a Sunday")
    week_end = params.week_start + timedelta(days=6)
    slot_filter = (
        ScheduleSlot.is_master == False,  # noqa: E712
        ScheduleSlot.slot_date >= params.week_start,
        ScheduleSlot.slot_date <= week_end,
    )
    affected, dependents = await _delete_slots(db, slot_filter)
    if dependents["assignments_removed"] or dependents["shows_detached"]:
        logger.warning(
            "reset_week %s removed %d producer assignments and detached %d shows",
            params.week_start, dependents["assignments_removed"], dependents["shows_detached"],
        )
    return affected, {"week_start": params.week_start.isoformat(), "week_end": week_end.isoformat(), **dependents}


async def table_counts(db: AsyncSession, params: NoParams) -> tuple[int, dict]:
    counts = {}
    for table in Base.metadata.sorted_tables:
        counts[table.name] = (await db.execute(select(func.count()).select_from(table))).scalar_one()
    return 0, {"tables": counts}


Operation = Callable[[AsyncSession, Any], Awaitable[tuple[int, dict]]]

OPERATIONS: dict[str, tuple[type[BaseModel], Operation]] = {
    "purge_deleted_overrides": (PurgeDeletedOverridesParams, purge_deleted_overrides),
    "reset_week": (ResetWeekParams, reset_week),
    "table_counts": (NoParams, table_counts),
}


async def run_operation(db: AsyncSession, name: str, raw_params: dict[str, Any]) -> dict:
    if name not in OPERATIONS:
        raise BadRequestError(f"Unknown operation: {name}. Allowed: {', '.join(sorted(OPERATIONS))}")
    params_model, handler = OPERATIONS[name]
    try:
        params = params_model.model_validate(raw_params)
    except ValidationError as e:
        raise BadRequestError(f"Invalid parameters for {name}: {e.errors()[0]['msg']}")

    affected, details = await handler(db, params)
    logger.info("Maintenance operation %s affected %d rows", name, affected)
    return {"operation": name, "affected": affected, "details": details}
