"""
Slot resolver: turns stored slot rows into the effective line of shows for a date.

Pure functions only: callers load the rows, this module decides which ones
are on air. Rows are duck-typed (ORM ScheduleSlot instances or any object
with the same attributes) so the logic can be exercised without a database.

Resolution for a date D with Sunday-based weekday W:
  1. live masters with day_of_week == W
  2. per master: a deleted date row for (D, master) suppresses it, a live
     one replaces it, otherwise the master yields a virtual occurrence
  3. live date rows without a parent are one-off slots
  4. stable sort by start_time
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, time, timedelta
from enum import Enum
from typing import Any, Iterable, Protocol


class SlotRow(Protocol):
    id: uuid.UUID
    day_of_week: int
    slot_date: date | None
    start_time: time
    end_time: time
    show_name: str
    host_name: str | None
    color: str | None
    is_master: bool
    is_deleted: bool
    is_modified: bool
    parent_slot_id: uuid.UUID | None


class OccurrenceKind(str, Enum):
    DEFAULT = "default"      # master occurrence, no date row
    MODIFIED = "modified"    # date row replacing a master for one date
    ONE_OFF = "one_off"      # date row with no parent
    ORPHAN = "orphan"        # date row whose master is gone or moved


@dataclass(frozen=True)
class SlotOccurrence:
    """A slot as it airs on one concrete date."""

    id: uuid.UUID
    master_id: uuid.UUID | None
    date: date
    day_of_week: int
    start_time: time
    end_time: time
    show_name: str
    host_name: str | None
    color: str | None
    kind: OccurrenceKind
    has_lineup: bool = False
    is_prerecorded: bool = False
    is_collection: bool = False
    show: Any = field(default=None, compare=False)

    @property
    def is_virtual(self) -> bool:
        """True when no row exists for this date yet (editing creates one)."""
        return self.kind == OccurrenceKind.DEFAULT

    @property
    def is_modified(self) -> bool:
        return self.kind == OccurrenceKind.MODIFIED

    def with_show(self, show: Any) -> "SlotOccurrence":
        return replace(self, show=show, has_lineup=show is not None)


def sunday_weekday(d: date) -> int:
    """Weekday with Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def week_start_for(d: date) -> date:
    """The Sunday on or before d."""
    return d - timedelta(days=sunday_weekday(d))


def week_dates(d: date) -> list[date]:
    start = week_start_for(d)
    return [start + timedelta(days=i) for i in range(7)]


def _occurrence(row: SlotRow, on: date, kind: OccurrenceKind, master_id: uuid.UUID | None) -> SlotOccurrence:
    return SlotOccurrence(
        id=row.id,
        master_id=master_id,
        date=on,
        day_of_week=sunday_weekday(on),
        start_time=row.start_time,
        end_time=row.end_time,
        show_name=row.show_name or "",
        host_name=row.host_name,
        color=row.color,
        kind=kind,
        has_lineup=bool(getattr(row, "has_lineup", False)),
        is_prerecorded=bool(getattr(row, "is_prerecorded", False)),
        is_collection=bool(getattr(row, "is_collection", False)),
    )


def resolve_slots_for_date(
    target: date,
    masters: Iterable[SlotRow],
    date_rows: Iterable[SlotRow],
) -> list[SlotOccurrence]:
    """
    Effective slots airing on `target`, ordered by start time.

    `masters` and `date_rows` should be in creation order; it decides which
    date row wins when several point at the same master, and the order of
    slots that start at the same time. Date rows for other dates are ignored.
    """
    weekday = sunday_weekday(target)
    rows_today = [r for r in date_rows if r.slot_date == target]

    # Latest row per master wins
    override_for: dict[uuid.UUID, SlotRow] = {}
    for row in rows_today:
        if row.parent_slot_id is not None:
            override_for[row.parent_slot_id] = row

    occurrences: list[SlotOccurrence] = []
    live_master_ids: set[uuid.UUID] = set()
    for master in masters:
        if master.is_deleted or master.day_of_week != weekday or master.id in live_master_ids:
            continue
        live_master_ids.add(master.id)
        override = override_for.get(master.id)
        if override is None:
            occurrences.append(_occurrence(master, target, OccurrenceKind.DEFAULT, master.id))
        elif not override.is_deleted:
            occurrences.append(_occurrence(override, target, OccurrenceKind.MODIFIED, master.id))

    for row in rows_today:
        if row.is_deleted:
            continue
        if row.parent_slot_id is None:
            occurrences.append(_occurrence(row, target, OccurrenceKind.ONE_OFF, None))
        elif row.parent_slot_id not in live_master_ids and override_for.get(row.parent_slot_id) is row:
            occurrences.append(_occurrence(row, target, OccurrenceKind.ORPHAN, row.parent_slot_id))

    # sorted() is stable: equal start times keep insertion order
    return sorted(occurrences, key=lambda o: o.start_time)


def resolve_range(
    start: date,
    days: int,
    masters: Iterable[SlotRow],
    date_rows: Iterable[SlotRow],
) -> dict[date, list[SlotOccurrence]]:
    masters = list(masters)
    date_rows = list(date_rows)
    by_date: dict[date, list[SlotRow]] = {}
    for row in date_rows:
        if row.slot_date is not None:
            by_date.setdefault(row.slot_date, []).append(row)

    resolved: dict[date, list[SlotOccurrence]] = {}
    for offset in range(days):
        d = start + timedelta(days=offset)
        resolved[d] = resolve_slots_for_date(d, masters, by_date.get(d, []))
    return resolved


def resolve_week(
    selected: date,
    masters: Iterable[SlotRow],
    date_rows: Iterable[SlotRow],
) -> dict[date, list[SlotOccurrence]]:
    """Resolve Sunday..Saturday of the week containing `selected`."""
    return resolve_range(week_start_for(selected), 7, masters, date_rows)
