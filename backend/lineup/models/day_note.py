import datetime

from sqlalchemy import Boolean, Date, Text
from sqlalchemy.orm import Mapped, mapped_column

from lineup.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class DayNote(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "day_notes"

    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Top-of-day vs bottom-of-day placement
    is_bottom_note: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
