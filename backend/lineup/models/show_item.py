import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lineup.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from lineup.models.interviewee import Interviewee
    from lineup.models.show import Show


class ShowItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "show_items"
    __table_args__ = (UniqueConstraint("show_id", "position", name="uq_show_items_show_position"),)

    show_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Render/print order within the show
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes

    is_break: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_note: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_divider: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    show: Mapped["Show"] = relationship("Show", back_populates="items", lazy="noload")
    interviewees: Mapped[list["Interviewee"]] = relationship(
        "Interviewee", back_populates="item", cascade="all, delete-orphan", lazy="noload"
    )
