"""
SQLAlchemy engine construction.

pysqlite starts transactions lazily and never for a plain SELECT, so a
multi-statement read on SQLite would not see one snapshot. For SQLite the
engine therefore hands transaction control to SQLAlchemy and emits BEGIN
itself (the recipe from the SQLAlchemy SQLite dialect documentation).
"""

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

# Isolation level for reads that must see one snapshot, per dialect.
# SQLite transactions are serializable already.
SNAPSHOT_ISOLATION_LEVELS = {"postgresql": "REPEATABLE READ"}


def create_database_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine with pre-ping and real transactions on every backend.

    Args:
        url: SQLAlchemy database URL.
        **kwargs: Passed on to ``sqlalchemy.create_engine``.
    """
    engine = create_engine(url, pool_pre_ping=True, **kwargs)
    if engine.dialect.name == "sqlite":
        _emit_sqlite_begin(engine)
    return engine


def _emit_sqlite_begin(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, _connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")
