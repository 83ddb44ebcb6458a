"""
ScheduleSlot model: one broadcast time window in the weekly grid.

Three kinds of rows share the table:
  - master slots: recurring weekly templates keyed by day_of_week (slot_date is NULL)
  - date overrides: rows for one concrete slot_date pointing at a master via
    parent_slot_id; they either replace the master's fields (is_modified) or
    suppress it for that date (is_deleted)
  - one-off slots: date rows with no parent
"""
import uuid
from datetime import date, time

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, Time
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from lineup.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

DEFAULT_SLOT_COLOR = "green"


class ScheduleSlot(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "schedule_slots"
    __table_args__ = (
        Index("ix_schedule_slots_date_parent", "slot_date", "parent_slot_id"),
        Index("ix_schedule_slots_master_day", "is_master", "day_of_week"),
    )

    # 0 = Sunday ... 6 = Saturday
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    slot_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)

    show_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    host_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)

    has_lineup: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_prerecorded: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_collection: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    is_master: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_modified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Back-reference only: overrides outlive their master
    parent_slot_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("schedule_slots.id", ondelete="SET NULL"), nullable=True, index=True
    )
