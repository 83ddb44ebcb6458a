import uuid
from dataclasses import dataclass, field
from datetime import date, time

from lineup.services.lineup_binder import bind_lineups, find_show
from lineup.services.slot_resolver import OccurrenceKind, SlotOccurrence

ON = date(2024, 6, 3)
MASTER_ID = uuid.uuid4()
OVERRIDE_ID = uuid.uuid4()


@dataclass
class FakeShow:
    slot_id: uuid.UUID | None
    date: date | None
    name: str = "Lineup"
    id: uuid.UUID = field(default_factory=uuid.uuid4)


def occurrence(occ_id: uuid.UUID, master_id: uuid.UUID | None, kind: OccurrenceKind) -> SlotOccurrence:
    return SlotOccurrence(
        id=occ_id,
        master_id=master_id,
        date=ON,
        day_of_week=1,
        start_time=time(8),
        end_time=time(9),
        show_name="Morning",
        host_name=None,
        color="green",
        kind=kind,
    )


def test_show_bound_through_master_id():
    occ = occurrence(MASTER_ID, MASTER_ID, OccurrenceKind.DEFAULT)
    show = FakeShow(slot_id=MASTER_ID, date=ON)
    [bound] = bind_lineups([occ], [show])
    assert bound.has_lineup
    assert bound.show is show


def test_modified_occurrence_keeps_lineup_written_for_master():
    occ = occurrence(OVERRIDE_ID, MASTER_ID, OccurrenceKind.MODIFIED)
    show = FakeShow(slot_id=MASTER_ID, date=ON)
    assert find_show(occ, [show]) is show


def test_show_for_own_row_preferred_over_master():
    occ = occurrence(OVERRIDE_ID, MASTER_ID, OccurrenceKind.MODIFIED)
    via_master = FakeShow(slot_id=MASTER_ID, date=ON, name="old")
    exact = FakeShow(slot_id=OVERRIDE_ID, date=ON, name="new")
    assert find_show(occ, [exact, via_master]) is exact


def test_show_on_other_date_not_bound():
    occ = occurrence(MASTER_ID, MASTER_ID, OccurrenceKind.DEFAULT)
    [bound] = bind_lineups([occ], [FakeShow(slot_id=MASTER_ID, date=date(2024, 6, 10))])
    assert not bound.has_lineup
    assert bound.show is None


def test_unbound_occurrence_clears_stale_flag():
    occ = occurrence(MASTER_ID, MASTER_ID, OccurrenceKind.DEFAULT)
    occ = occ.with_show(object())
    [bound] = bind_lineups([occ], [])
    assert bound.has_lineup is False


def test_latest_matching_show_wins():
    occ = occurrence(MASTER_ID, MASTER_ID, OccurrenceKind.DEFAULT)
    older = FakeShow(slot_id=MASTER_ID, date=ON, name="older")
    newer = FakeShow(slot_id=MASTER_ID, date=ON, name="newer")
    assert find_show(occ, [older, newer]) is newer
