# Schemas package
from lineup.schemas.auth import LoginRequest, RefreshRequest, TokenResponse, UserResponse
from lineup.schemas.day_note import DayNoteCreate, DayNoteInDB, DayNoteUpdate
from lineup.schemas.schedule import SlotCreate, SlotInDB, SlotOccurrenceOut, SlotUpdate
from lineup.schemas.show import ShowCreate, ShowInDB, ShowItemInDB, ShowWithItems
from lineup.schemas.staff import AssignmentInDB, ProducerRoleInDB, WorkerInDB
from lineup.schemas.system_setting import SystemSettingInDB, SystemSettingUpsert

__all__ = [
    "LoginRequest", "RefreshRequest", "TokenResponse", "UserResponse",
    "DayNoteCreate", "DayNoteInDB", "DayNoteUpdate",
    "SlotCreate", "SlotInDB", "SlotOccurrenceOut", "SlotUpdate",
    "ShowCreate", "ShowInDB", "ShowItemInDB", "ShowWithItems",
    "AssignmentInDB", "ProducerRoleInDB", "WorkerInDB",
    "SystemSettingInDB", "SystemSettingUpsert",
]
