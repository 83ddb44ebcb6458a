"""Legacy copy of the shows table, kept read-only for lookups of old lineups."""
import uuid
import datetime

from sqlalchemy import Date, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from lineup.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ShowArchive(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "shows_backup"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    time: Mapped[str | None] = mapped_column(String(20), nullable=True)
    date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    slot_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True)
