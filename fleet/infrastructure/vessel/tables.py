"""
Relational schema for the vessel aggregate.

SQLAlchemy Core table definitions shared by the repository adapter
and schema creation at startup.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
)
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

metadata = MetaData()


def utcnow() -> datetime:
    """Timestamp used for the store-managed audit columns."""
    return datetime.now(timezone.utc)


vessel_table = Table(
    "vessel",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("version", Integer, nullable=False, default=0),
    Column("name", String(40), nullable=False),
    Column("length", Numeric(5, 2), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    ),
    # Identities are never reused after deletion.
    sqlite_autoincrement=True,
)

officer_table = Table(
    "officer",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(40), nullable=False),
    Column("age", Integer, nullable=True),
    Column(
        "vessel_id",
        Integer,
        ForeignKey("vessel.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
)

cargo_box_table = Table(
    "cargo_box",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("height", Numeric(4, 2), nullable=False),
    Column("length", Numeric(4, 2), nullable=False),
    Column("width", Numeric(4, 2), nullable=False),
    Column(
        "vessel_id",
        Integer,
        ForeignKey("vessel.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
)


def create_schema(engine: Engine) -> None:
    """Create the vessel tables if they do not exist yet."""
    metadata.create_all(engine)
    logger.info("Vessel schema is ready.")
