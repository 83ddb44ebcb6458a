from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from lineup.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ProducerRole(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "producer_roles"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
