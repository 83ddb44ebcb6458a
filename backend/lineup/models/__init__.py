from lineup.models.user import User, UserRole
from lineup.models.worker import Worker
from lineup.models.schedule_slot import ScheduleSlot, DEFAULT_SLOT_COLOR
from lineup.models.show import Show
from lineup.models.show_item import ShowItem
from lineup.models.interviewee import Interviewee
from lineup.models.show_archive import ShowArchive
from lineup.models.day_note import DayNote
from lineup.models.producer_role import ProducerRole
from lineup.models.producer_assignment import ProducerAssignment, ProducerAssignmentSkip
from lineup.models.system_setting import SystemSetting

__all__ = [
    "User", "UserRole",
    "Worker",
    "ScheduleSlot", "DEFAULT_SLOT_COLOR",
    "Show",
    "ShowItem",
    "Interviewee",
    "ShowArchive",
    "DayNote",
    "ProducerRole",
    "ProducerAssignment", "ProducerAssignmentSkip",
    "SystemSetting",
]
