from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.types import TypeDecorator
from shortlinks_app.database.connection import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetime.

    SQLite stores DateTime without an offset, so values are normalized to
    UTC on the way in and tagged as UTC on the way out.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Link(Base):
    """
    A short code pointing at an original URL.

    Rows are never deleted; after creation only ``clicks`` changes.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # unique=True creates the index enforcing one link per code
    short_code = Column(String(64), unique=True, nullable=False)
    original_url = Column(String, nullable=False)
    # Set in Python for microsecond resolution; SQLite's CURRENT_TIMESTAMP is per second
    created_at = Column(UTCDateTime, nullable=False, default=_utcnow)
    clicks = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Link {self.short_code} -> {self.original_url}>"
