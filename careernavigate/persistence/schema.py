"""Database schema definition and ORM models.

CareerNavigate stores everything as key-value entries, keyed by a namespaced
string such as ``resume:{id}``. Values are JSON documents held as text.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Index, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from careernavigate.logging import get_logger

logger = get_logger(__name__, component="database")

# Create base class for ORM models
Base = declarative_base()


class KeyValueModel(Base):
    """ORM model for kv_entries table."""

    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True, nullable=False)
    value = Column(Text, nullable=False)

    # Timestamps (stored as ISO 8601 strings)
    created_at = Column(String(50), nullable=False)
    updated_at = Column(String(50), nullable=False)

    __table_args__ = (Index("idx_kv_updated_at", "updated_at"),)

    @property
    def updated(self) -> Optional[datetime]:
        return _parse_datetime(self.updated_at)


def _format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime as ISO 8601 string for database storage.

    Args:
        dt: Datetime object (naive values are taken as UTC)

    Returns:
        ISO 8601 formatted string or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    # Format as ISO 8601 with explicit Z suffix
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 string written by _format_datetime.

    Returns:
        Timezone-aware datetime in UTC or None
    """
    if dt_str is None or dt_str == "":
        return None

    dt_str = dt_str.rstrip("Z")

    try:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S.%f")
    except ValueError:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S")

    return dt.replace(tzinfo=timezone.utc)


def create_schema(engine: Engine) -> None:
    """Create the kv_entries table and its index unless they already exist."""
    KeyValueModel.__table__.create(engine, checkfirst=True)
    logger.debug(
        "Key-value table ready",
        extra={"event": "database.schema.ready", "table": KeyValueModel.__tablename__},
    )
