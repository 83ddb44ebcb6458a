"""
Attach written lineups (shows) to resolved slot occurrences.

A show belongs to an occurrence when it is dated the same day and its
slot_id is either the occurrence's own row or the master it came from.
Lineups written against the master before the date was edited therefore
stay attached to the edited occurrence.
"""
from collections.abc import Iterable, Sequence
from typing import Any

from lineup.services.slot_resolver import SlotOccurrence


def find_show(occurrence: SlotOccurrence, shows: Iterable[Any]) -> Any | None:
    """
    Latest matching show, preferring one written against the occurrence's own row.

    `shows` should be in creation order.
    """
    exact = None
    via_master = None
    for show in shows:
        if show.date != occurrence.date or show.slot_id is None:
            continue
        if show.slot_id == occurrence.id:
            exact = show
        elif occurrence.master_id is not None and show.slot_id == occurrence.master_id:
            via_master = show
    return exact if exact is not None else via_master


def bind_lineups(occurrences: Sequence[SlotOccurrence], shows: Iterable[Any]) -> list[SlotOccurrence]:
    shows = list(shows)
    return [occ.with_show(find_show(occ, shows)) for occ in occurrences]
