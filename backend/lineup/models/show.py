"""
Show model: the lineup written for one slot occurrence on a concrete date.
"""
import uuid
import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lineup.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from lineup.models.show_item import ShowItem


class Show(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "shows"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    time: Mapped[str | None] = mapped_column(String(20), nullable=True)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    slot_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("schedule_slots.id", ondelete="SET NULL"), nullable=True, index=True
    )

    items: Mapped[list["ShowItem"]] = relationship(
        "ShowItem",
        back_populates="show",
        cascade="all, delete-orphan",
        order_by="ShowItem.position",
        lazy="noload",
    )
