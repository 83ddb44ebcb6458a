"""
Schedule service: loads slot rows, resolves them and applies slot commands.

Masters are edited directly in master mode. In date mode, editing or
deleting a master's occurrence writes a date row (override) the first time
and edits it afterwards; masters themselves are never touched from the
weekly grid.
"""
import logging
from datetime import date, time, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.exceptions import BadRequestError, ConflictError, NotFoundError
from lineup.models.schedule_slot import DEFAULT_SLOT_COLOR, ScheduleSlot
from lineup.models.show import Show
from lineup.services.lineup_binder import bind_lineups
from lineup.services.slot_resolver import (
    SlotOccurrence,
    resolve_range,
    resolve_slots_for_date,
    sunday_weekday,
    week_start_for,
)

logger = logging.getLogger(__name__)

# Fields copied from a master into a new override
_SLOT_FIELDS = (
    "start_time",
    "end_time",
    "show_name",
    "host_name",
    "color",
    "has_lineup",
    "is_prerecorded",
    "is_collection",
)

MINUTES_PER_DAY = 24 * 60


def _span(start: time, end: time) -> tuple[int, int]:
    """Minutes since midnight; an end at or before the start runs to midnight."""
    s = start.hour * 60 + start.minute
    e = end.hour * 60 + end.minute
    if e <= s:
        e = MINUTES_PER_DAY
    return s, e


def times_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    a0, a1 = _span(a_start, a_end)
    b0, b1 = _span(b_start, b_end)
    return a0 < b1 and b0 < a1


class ScheduleService:
    """Slot reads (resolved) and slot commands."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------ loading

    async def get_slot(self, slot_id: UUID) -> ScheduleSlot:
        slot = await self.db.get(ScheduleSlot, slot_id)
        if not slot:
            raise NotFoundError("Slot not found")
        return slot

    async def list_masters(self) -> list[ScheduleSlot]:
        stmt = (
            select(ScheduleSlot)
            .where(ScheduleSlot.is_master == True, ScheduleSlot.is_deleted == False)  # noqa: E712
            .order_by(ScheduleSlot.day_of_week, ScheduleSlot.start_time, ScheduleSlot.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _load_masters_by_creation(self) -> list[ScheduleSlot]:
        stmt = (
            select(ScheduleSlot)
            .where(ScheduleSlot.is_master == True, ScheduleSlot.is_deleted == False)  # noqa: E712
            .order_by(ScheduleSlot.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _load_date_rows(self, start: date, end: date) -> list[ScheduleSlot]:
        """Date rows (including deletion overrides) in [start, end], creation order."""
        stmt = (
            select(ScheduleSlot)
            .where(
                ScheduleSlot.is_master == False,  # noqa: E712
                ScheduleSlot.slot_date >= start,
                ScheduleSlot.slot_date <= end,
            )
            .order_by(ScheduleSlot.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _load_shows(self, start: date, end: date) -> list[Show]:
        stmt = (
            select(Show)
            .where(Show.date >= start, Show.date <= end, Show.slot_id.is_not(None))
            .order_by(Show.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------ resolved reads

    async def resolve_range(self, start: date, days: int, bind: bool = True) -> dict[date, list[SlotOccurrence]]:
        end = start + timedelta(days=days - 1)
        masters = await self._load_masters_by_creation()
        date_rows = await self._load_date_rows(start, end)
        resolved = resolve_range(start, days, masters, date_rows)
        if not bind:
            return resolved
        shows = await self._load_shows(start, end)
        return {d: bind_lineups(occs, shows) for d, occs in resolved.items()}

    async def get_day(self, target: date) -> list[SlotOccurrence]:
        masters = await self._load_masters_by_creation()
        date_rows = await self._load_date_rows(target, target)
        shows = await self._load_shows(target, target)
        return bind_lineups(resolve_slots_for_date(target, masters, date_rows), shows)

    async def get_week(self, selected: date) -> list[SlotOccurrence]:
        resolved = await self.resolve_range(week_start_for(selected), 7)
        return [occ for occs in resolved.values() for occ in occs]

    # ------------------------------------------------------------------ create

    async def create_slot(
        self,
        data: dict[str, Any],
        is_master_schedule: bool,
        selected_date: date | None = None,
    ) -> ScheduleSlot:
        if data["end_time"] == data["start_time"]:
            raise BadRequestError("End time must differ from start time")

        if is_master_schedule:
            return await self._create_master(data)
        return await self._create_date_slot(data, selected_date)

    async def _create_master(self, data: dict[str, Any]) -> ScheduleSlot:
        stmt = select(ScheduleSlot.id).where(
            ScheduleSlot.is_master == True,  # noqa: E712
            ScheduleSlot.is_deleted == False,  # noqa: E712
            ScheduleSlot.day_of_week == data["day_of_week"],
            ScheduleSlot.start_time == data["start_time"],
        )
        if (await self.db.execute(stmt)).first():
            raise BadRequestError("A master slot already exists for this day and time")

        slot = ScheduleSlot(
            day_of_week=data["day_of_week"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            show_name=data.get("show_name") or "",
            host_name=data.get("host_name"),
            color=data.get("color") or DEFAULT_SLOT_COLOR,
            has_lineup=data.get("has_lineup", False),
            is_prerecorded=data.get("is_prerecorded", False),
            is_collection=data.get("is_collection", False),
            is_master=True,
            is_recurring=True,
        )
        self.db.add(slot)
        await self.db.commit()
        await self.db.refresh(slot)
        logger.info("Created master slot %s (day %d %s)", slot.id, slot.day_of_week, slot.start_time)
        return slot

    async def _create_date_slot(self, data: dict[str, Any], selected_date: date | None) -> ScheduleSlot:
        slot_date = data.get("slot_date")
        if slot_date is None:
            if selected_date is None:
                raise BadRequestError("slot_date or selected_date is required for the weekly schedule")
            slot_date = week_start_for(selected_date) + timedelta(days=data["day_of_week"])

        parent_id = data.get("parent_slot_id")
        if parent_id is not None:
            parent = await self.db.get(ScheduleSlot, parent_id)
            if not parent or not parent.is_master:
                raise BadRequestError("parent_slot_id must reference a master slot")

        is_deleted = bool(data.get("is_deleted"))
        if not is_deleted:
            await self._ensure_date_slot_free(slot_date, data["start_time"], data["end_time"])

        slot = ScheduleSlot(
            day_of_week=sunday_weekday(slot_date),
            slot_date=slot_date,
            start_time=data["start_time"],
            end_time=data["end_time"],
            show_name=data.get("show_name") or "",
            host_name=data.get("host_name"),
            color=data.get("color"),
            has_lineup=data.get("has_lineup", False),
            is_prerecorded=data.get("is_prerecorded", False),
            is_collection=data.get("is_collection", False),
            is_master=False,
            is_recurring=bool(data.get("is_recurring")),
            is_deleted=is_deleted,
            is_modified=parent_id is not None and not is_deleted,
            parent_slot_id=parent_id,
        )
        self.db.add(slot)
        await self.db.commit()
        await self.db.refresh(slot)
        logger.info("Created slot %s on %s at %s", slot.id, slot.slot_date, slot.start_time)
        return slot

    async def _ensure_date_slot_free(
        self, slot_date: date, start: time, end: time, exclude_ids: set[UUID] | None = None
    ) -> None:
        rows = await self._live_date_rows_on(slot_date)
        exclude_ids = exclude_ids or set()
        for row in rows:
            if row.id in exclude_ids:
                continue
            if row.start_time == start:
                raise ConflictError("A slot already exists at this date and time")
        for row in rows:
            if row.id in exclude_ids:
                continue
            if times_overlap(start, end, row.start_time, row.end_time):
                raise ConflictError("Time conflict: slot overlaps with an existing slot")

    async def _live_date_rows_on(self, slot_date: date) -> list[ScheduleSlot]:
        stmt = (
            select(ScheduleSlot)
            .where(
                ScheduleSlot.is_master == False,  # noqa: E712
                ScheduleSlot.is_deleted == False,  # noqa: E712
                ScheduleSlot.slot_date == slot_date,
            )
            .order_by(ScheduleSlot.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------ update

    async def _latest_override(self, master_id: UUID, slot_date: date) -> ScheduleSlot | None:
        stmt = (
            select(ScheduleSlot)
            .where(ScheduleSlot.parent_slot_id == master_id, ScheduleSlot.slot_date == slot_date)
            .order_by(ScheduleSlot.created_at.desc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    def _new_override(self, master: ScheduleSlot, slot_date: date) -> ScheduleSlot:
        override = ScheduleSlot(
            day_of_week=sunday_weekday(slot_date),
            slot_date=slot_date,
            parent_slot_id=master.id,
            is_master=False,
            is_recurring=False,
            **{name: getattr(master, name) for name in _SLOT_FIELDS},
        )
        self.db.add(override)
        return override

    async def update_slot(
        self,
        slot_id: UUID,
        changes: dict[str, Any],
        is_master_schedule: bool,
        slot_date: date | None = None,
    ) -> ScheduleSlot:
        if not changes:
            raise BadRequestError("No valid fields to update")

        slot = await self.get_slot(slot_id)

        if is_master_schedule:
            if not slot.is_master:
                raise BadRequestError("Slot is not a master slot")
            changes.pop("slot_date", None)
            if not changes:
                raise BadRequestError("No valid fields to update")
            for key, value in changes.items():
                setattr(slot, key, value)
            await self.db.commit()
            await self.db.refresh(slot)
            logger.info("Updated master slot %s", slot.id)
            return slot

        target_date = changes.pop("slot_date", None) or slot_date or slot.slot_date
        # Weekday follows the date in the weekly grid
        changes.pop("day_of_week", None)
        if not changes:
            raise BadRequestError("No valid fields to update")

        if slot.is_master:
            if target_date is None:
                raise BadRequestError("slot_date is required to edit a master occurrence")
            if sunday_weekday(target_date) != slot.day_of_week:
                raise BadRequestError("slot_date does not fall on this slot's day of week")
            override = await self._latest_override(slot.id, target_date)
            if override is None:
                override = self._new_override(slot, target_date)
                await self.db.flush()
                logger.info("Creating override of %s for %s", slot.id, target_date)
            target = override
        else:
            target = slot

        new_start = changes.get("start_time", target.start_time)
        new_end = changes.get("end_time", target.end_time)
        if new_start != target.start_time or new_end != target.end_time:
            await self._ensure_date_slot_free(target.slot_date, new_start, new_end, {target.id})

        for key, value in changes.items():
            setattr(target, key, value)
        if target.parent_slot_id is not None:
            target.is_modified = True
            target.is_deleted = False

        await self.db.commit()
        await self.db.refresh(target)
        return target

    async def set_has_lineup(self, slot_id: UUID, has_lineup: bool) -> ScheduleSlot:
        slot = await self.get_slot(slot_id)
        slot.has_lineup = has_lineup
        await self.db.commit()
        await self.db.refresh(slot)
        return slot

    # ------------------------------------------------------------------ delete

    async def delete_slot(
        self,
        slot_id: UUID,
        is_master_schedule: bool,
        slot_date: date | None = None,
    ) -> ScheduleSlot:
        slot = await self.get_slot(slot_id)

        if is_master_schedule:
            if not slot.is_master:
                raise BadRequestError("Slot is not a master slot")
            # Overrides keep their own rows; the resolver shows live ones standalone
            slot.is_deleted = True
            await self.db.commit()
            await self.db.refresh(slot)
            logger.info("Soft-deleted master slot %s", slot.id)
            return slot

        if slot.is_master:
            if slot_date is None:
                raise BadRequestError("slot_date is required to delete a master occurrence")
            if sunday_weekday(slot_date) != slot.day_of_week:
                raise BadRequestError("slot_date does not fall on this slot's day of week")
            target = await self._latest_override(slot.id, slot_date)
            if target is None:
                target = self._new_override(slot, slot_date)
            target.is_deleted = True
            target.is_modified = False
            logger.info("Suppressing master slot %s on %s", slot.id, slot_date)
        else:
            target = slot
            target.is_deleted = True

        await self.db.commit()
        await self.db.refresh(target)
        return target

    # ------------------------------------------------------------------ helpers

    async def find_conflicts(
        self,
        day_of_week: int,
        start: time,
        end: time,
        is_master_schedule: bool,
        slot_date: date | None = None,
        exclude_id: UUID | None = None,
    ) -> list[ScheduleSlot]:
        if is_master_schedule:
            stmt = select(ScheduleSlot).where(
                ScheduleSlot.is_master == True,  # noqa: E712
                ScheduleSlot.is_deleted == False,  # noqa: E712
                ScheduleSlot.day_of_week == day_of_week,
            ).order_by(ScheduleSlot.start_time)
            rows = list((await self.db.execute(stmt)).scalars().all())
        else:
            if slot_date is None:
                raise BadRequestError("slot_date is required for weekly schedule conflict checking")
            rows = await self._live_date_rows_on(slot_date)

        return [
            row for row in rows
            if row.id != exclude_id and times_overlap(start, end, row.start_time, row.end_time)
        ]

    async def autocomplete(self) -> dict[str, list[str]]:
        stmt = select(ScheduleSlot.show_name, ScheduleSlot.host_name).where(
            ScheduleSlot.is_deleted == False  # noqa: E712
        )
        result = await self.db.execute(stmt)
        show_names: set[str] = set()
        host_names: set[str] = set()
        for show_name, host_name in result.all():
            if show_name and show_name.strip():
                show_names.add(show_name.strip())
            if host_name and host_name.strip():
                host_names.add(host_name.strip())
        return {"show_names": sorted(show_names), "host_names": sorted(host_names)}
