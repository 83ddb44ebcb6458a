"""
Producer assignments for a week.

An assignment applies to its own week_start; a recurring one also applies
to every later week unless a skip row exists for that week.
"""
import logging
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lineup.core.exceptions import BadRequestError, ConflictError, NotFoundError
from lineup.models.producer_assignment import ProducerAssignment, ProducerAssignmentSkip
from lineup.models.producer_role import ProducerRole
from lineup.models.schedule_slot import ScheduleSlot
from lineup.models.worker import Worker
from lineup.services.slot_resolver import sunday_weekday

logger = logging.getLogger(__name__)


def _require_sunday(week_start: date) -> None:
    if sunday_weekday(week_start) != 0:
        raise BadRequestError("week_start must be a Sunday")


async def get_assignment(db: AsyncSession, assignment_id: UUID) -> ProducerAssignment:
    stmt = (
        select(ProducerAssignment)
        .where(ProducerAssignment.id == assignment_id)
        .options(selectinload(ProducerAssignment.worker))
        .execution_options(populate_existing=True)
    )
    assignment = (await db.execute(stmt)).scalar_one_or_none()
    if not assignment or assignment.is_deleted:
        raise NotFoundError("Assignment not found")
    return assignment


async def list_for_week(db: AsyncSession, week_start: date) -> list[ProducerAssignment]:
    _require_sunday(week_start)
    skipped = select(ProducerAssignmentSkip.assignment_id).where(ProducerAssignmentSkip.week_start == week_start)
    stmt = (
        select(ProducerAssignment)
        .where(
            ProducerAssignment.is_deleted == False,  # noqa: E712
            or_(
                ProducerAssignment.week_start == week_start,
                (ProducerAssignment.is_recurring == True) & (ProducerAssignment.week_start < week_start),  # noqa: E712
            ),
            ProducerAssignment.id.not_in(skipped),
        )
        .options(selectinload(ProducerAssignment.worker))
        .order_by(ProducerAssignment.created_at)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_assignment(db: AsyncSession, data: dict[str, Any]) -> ProducerAssignment:
    _require_sunday(data["week_start"])
    if not await db.get(Worker, data["worker_id"]):
        raise NotFoundError("Worker not found")
    if not await db.get(ScheduleSlot, data["slot_id"]):
        raise NotFoundError("Slot not found")

    stmt = select(ProducerAssignment.id).where(
        ProducerAssignment.is_deleted == False,  # noqa: E712
        ProducerAssignment.worker_id == data["worker_id"],
        ProducerAssignment.slot_id == data["slot_id"],
        ProducerAssignment.week_start == data["week_start"],
        ProducerAssignment.role == data.get("role"),
    )
    if (await db.execute(stmt)).first():
        raise ConflictError("Worker is already assigned to this slot for the week")

    assignment = ProducerAssignment(**data)
    db.add(assignment)
    await db.commit()
    return await get_assignment(db, assignment.id)


async def update_assignment(db: AsyncSession, assignment_id: UUID, changes: dict[str, Any]) -> ProducerAssignment:
    if not changes:
        raise BadRequestError("No valid fields to update")
    assignment = await get_assignment(db, assignment_id)
    if "worker_id" in changes and not await db.get(Worker, changes["worker_id"]):
        raise NotFoundError("Worker not found")
    for key, value in changes.items():
        setattr(assignment, key, value)
    await db.commit()
    return await get_assignment(db, assignment_id)


async def delete_assignment(db: AsyncSession, assignment_id: UUID) -> None:
    assignment = await get_assignment(db, assignment_id)
    assignment.is_deleted = True
    await db.commit()
    logger.info("Soft-deleted producer assignment %s", assignment_id)


async def skip_week(db: AsyncSession, assignment_id: UUID, week_start: date) -> ProducerAssignmentSkip:
    _require_sunday(week_start)
    assignment = await get_assignment(db, assignment_id)
    if not assignment.is_recurring:
        raise BadRequestError("Only recurring assignments can skip a week")
    if week_start < assignment.week_start:
        raise BadRequestError("Week is before the assignment starts")

    stmt = select(ProducerAssignmentSkip).where(
        ProducerAssignmentSkip.assignment_id == assignment_id,
        ProducerAssignmentSkip.week_start == week_start,
    )
    existing = (await db.execute(stmt)).scalar_one_or_none()
    if existing:
        return existing

    skip = ProducerAssignmentSkip(assignment_id=assignment_id, week_start=week_start)
    db.add(skip)
    await db.commit()
    await db.refresh(skip)
    return skip


# ==================== Roles ====================
async def list_roles(db: AsyncSession) -> list[ProducerRole]:
    result = await db.execute(select(ProducerRole).order_by(ProducerRole.display_order, ProducerRole.name))
    return list(result.scalars().all())


async def ensure_roles(db: AsyncSession, roles: list[dict[str, Any]]) -> list[ProducerRole]:
    """Create missing roles by name and update display order of existing ones."""
    result = await db.execute(select(ProducerRole))
    existing = {role.name: role for role in result.scalars().all()}
    for data in roles:
        role = existing.get(data["name"])
        if role is None:
            role = ProducerRole(**data)
            db.add(role)
            existing[role.name] = role
        else:
            role.display_order = data.get("display_order", role.display_order)
    await db.commit()
    return await list_roles(db)
