"""
Producer assignments: a worker bound to a schedule slot for a week.

Recurring assignments repeat every week from week_start onwards; a
ProducerAssignmentSkip row suppresses a single week.
"""
import uuid
from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lineup.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ProducerAssignment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "producer_assignments"

    worker_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("workers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    slot_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("schedule_slots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Sunday of the first week the assignment applies to
    week_start: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    role: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    worker = relationship("Worker", lazy="noload")


class ProducerAssignmentSkip(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "producer_assignment_skips"
    __table_args__ = (UniqueConstraint("assignment_id", "week_start", name="uq_assignment_skip_week"),)

    assignment_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("producer_assignments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_start: Mapped[date] = mapped_column(Date, nullable=False)
