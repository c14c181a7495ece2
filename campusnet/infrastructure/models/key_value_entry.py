"""SQLAlchemy model backing the generic key-value store."""

from sqlalchemy import Column, DateTime, String, Text

from campusnet.infrastructure.database import Base
from campusnet.utils import now_in_app_timezone


class KeyValueEntryModel(Base):
    """A single serialized value addressed by its storage key."""

    __tablename__ = "kv_entry"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        onupdate=now_in_app_timezone,
    )


__all__ = ["KeyValueEntryModel"]
