from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String

from stockroom.database.base import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    # Autoincrement id doubles as insertion order for prefix scans.
    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(512), nullable=False, unique=True, index=True)
    value = Column(JSON, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


__all__ = ["KeyValueEntry"]
