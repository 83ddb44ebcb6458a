"""Resolution of master slots, overrides and one-off slots for concrete dates."""
import uuid
from dataclasses import dataclass, field
from datetime import date, time

from lineup.services.slot_resolver import (
    OccurrenceKind,
    resolve_slots_for_date,
    resolve_week,
    sunday_weekday,
    week_dates,
    week_start_for,
)


@dataclass
class Row:
    day_of_week: int
    start_time: time
    end_time: time
    show_name: str
    host_name: str | None = None
    color: str | None = "green"
    slot_date: date | None = None
    is_master: bool = False
    is_deleted: bool = False
    is_modified: bool = False
    parent_slot_id: uuid.UUID | None = None
    has_lineup: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)


def master(day: int, start: time, end: time, name: str, **kw) -> Row:
    return Row(day_of_week=day, start_time=start, end_time=end, show_name=name, is_master=True, **kw)


def override(parent: Row, on: date, **kw) -> Row:
    fields = dict(start_time=parent.start_time, end_time=parent.end_time, show_name=parent.show_name)
    fields.update(kw)
    return Row(day_of_week=sunday_weekday(on), slot_date=on, parent_slot_id=parent.id, **fields)


MONDAY_1 = date(2024, 6, 3)
MONDAY_2 = date(2024, 6, 10)
MONDAY_3 = date(2024, 6, 17)
MORNING = master(1, time(8), time(9), "Morning")


def test_sunday_based_weekday():
    assert sunday_weekday(date(2024, 6, 2)) == 0  # Sunday
    assert sunday_weekday(MONDAY_1) == 1
    assert sunday_weekday(date(2024, 6, 8)) == 6  # Saturday


def test_week_starts_on_sunday():
    assert week_start_for(date(2024, 6, 5)) == date(2024, 6, 2)
    assert week_start_for(date(2024, 6, 2)) == date(2024, 6, 2)
    assert week_dates(date(2024, 6, 8)) == [date(2024, 6, d) for d in range(2, 9)]


def test_deletion_override_suppresses_master():
    deleted = override(MORNING, MONDAY_1, is_deleted=True)
    assert resolve_slots_for_date(MONDAY_1, [MORNING], [deleted]) == []


def test_modification_override_replaces_master():
    modified = override(MORNING, MONDAY_2, show_name="Special Morning", is_modified=True)
    result = resolve_slots_for_date(MONDAY_2, [MORNING], [modified])
    assert len(result) == 1
    assert result[0].show_name == "Special Morning"
    assert result[0].id == modified.id
    assert result[0].master_id == MORNING.id
    assert result[0].kind == OccurrenceKind.MODIFIED


def test_other_mondays_show_the_master():
    rows = [
        override(MORNING, MONDAY_1, is_deleted=True),
        override(MORNING, MONDAY_2, show_name="Special Morning", is_modified=True),
    ]
    result = resolve_slots_for_date(MONDAY_3, [MORNING], rows)
    assert [o.show_name for o in result] == ["Morning"]
    assert result[0].is_virtual
    assert result[0].id == MORNING.id
    assert result[0].date == MONDAY_3


def test_master_only_on_its_weekday():
    tuesday = date(2024, 6, 4)
    assert resolve_slots_for_date(tuesday, [MORNING], []) == []


def test_soft_deleted_master_is_ignored():
    gone = master(1, time(10), time(11), "Gone", is_deleted=True)
    assert resolve_slots_for_date(MONDAY_1, [gone], []) == []


def test_one_off_slots_are_included_and_deleted_ones_skipped():
    one_off = Row(day_of_week=1, slot_date=MONDAY_1, start_time=time(12), end_time=time(13), show_name="Special")
    removed = Row(
        day_of_week=1, slot_date=MONDAY_1, start_time=time(14), end_time=time(15), show_name="Removed", is_deleted=True
    )
    result = resolve_slots_for_date(MONDAY_1, [MORNING], [one_off, removed])
    assert [o.show_name for o in result] == ["Morning", "Special"]
    assert result[1].kind == OccurrenceKind.ONE_OFF
    assert result[1].master_id is None


def test_rows_for_other_dates_are_ignored():
    elsewhere = override(MORNING, MONDAY_2, is_deleted=True)
    result = resolve_slots_for_date(MONDAY_1, [MORNING], [elsewhere])
    assert [o.show_name for o in result] == ["Morning"]


def test_ordered_by_start_time():
    late = master(1, time(20), time(21), "Evening")
    early = master(1, time(6), time(7), "Dawn")
    result = resolve_slots_for_date(MONDAY_1, [late, MORNING, early], [])
    assert [o.show_name for o in result] == ["Dawn", "Morning", "Evening"]


def test_ties_keep_input_order():
    a = master(1, time(8), time(9), "A")
    b = master(1, time(8), time(9), "B")
    assert [o.show_name for o in resolve_slots_for_date(MONDAY_1, [a, b], [])] == ["A", "B"]
    assert [o.show_name for o in resolve_slots_for_date(MONDAY_1, [b, a], [])] == ["B", "A"]


def test_at_most_one_occurrence_per_master():
    first = override(MORNING, MONDAY_1, show_name="First edit", is_modified=True)
    second = override(MORNING, MONDAY_1, show_name="Second edit", is_modified=True)
    result = resolve_slots_for_date(MONDAY_1, [MORNING], [first, second])
    assert [o.show_name for o in result] == ["Second edit"]


def test_latest_row_wins_even_when_it_is_a_deletion():
    edited = override(MORNING, MONDAY_1, show_name="Edited", is_modified=True)
    deleted = override(MORNING, MONDAY_1, is_deleted=True)
    assert resolve_slots_for_date(MONDAY_1, [MORNING], [edited, deleted]) == []


def test_override_of_deleted_master_is_shown_standalone():
    gone = master(1, time(10), time(11), "Gone", is_deleted=True)
    kept = override(gone, MONDAY_1, show_name="Still on air", is_modified=True)
    result = resolve_slots_for_date(MONDAY_1, [gone], [kept])
    assert [o.show_name for o in result] == ["Still on air"]
    assert result[0].kind == OccurrenceKind.ORPHAN


def test_duplicate_master_rows_yield_one_occurrence():
    assert len(resolve_slots_for_date(MONDAY_1, [MORNING, MORNING], [])) == 1


def test_resolve_week_covers_sunday_to_saturday():
    sunday_show = master(0, time(9), time(10), "Sunday Show")
    resolved = resolve_week(date(2024, 6, 5), [MORNING, sunday_show], [override(MORNING, MONDAY_1, is_deleted=True)])
    assert list(resolved) == week_dates(date(2024, 6, 5))
    assert [o.show_name for o in resolved[date(2024, 6, 2)]] == ["Sunday Show"]
    assert resolved[MONDAY_1] == []
    assert all(not occs for d, occs in resolved.items() if sunday_weekday(d) not in (0, 1))
