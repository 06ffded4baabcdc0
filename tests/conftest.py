"""
Shared fixtures for the vessel tests.

Repository and service tests run against an in-memory SQLite
database, concurrency tests against a file-backed one. No PostgreSQL
instance or network access is needed.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from fleet.application.vessel.read_service import VesselReadService
from fleet.application.vessel.write_service import VesselWriteService
from fleet.domain.vessel.entities import CargoBox, NewVessel, Officer
from fleet.domain.vessel.ports import NotificationPort
from fleet.domain.vessel.predicate_builder import VesselPredicateBuilder
from fleet.infrastructure.database import create_database_engine
from fleet.infrastructure.vessel.tables import create_schema
from fleet.infrastructure.vessel.vessel_repository import VesselRepositoryAdapter


def _make_vessel(
    name: str = "Festung",
    length: str = "200",
    officer_name: str = "Turm",
    officer_age: int | None = 45,
    boxes: tuple[tuple[str, str, str], ...] = (("2", "4", "2"),),
) -> NewVessel:
    """Build a NewVessel with sensible defaults."""
    return NewVessel(
        name=name,
        length=Decimal(length),
        officer=Officer(name=officer_name, age=officer_age),
        cargo_boxes=tuple(
            CargoBox(height=Decimal(h), length=Decimal(l), width=Decimal(w))
            for h, l, w in boxes
        ),
    )


@pytest.fixture
def make_vessel():
    """Factory for NewVessel inputs."""
    return _make_vessel


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by all connections of one test."""
    engine = create_database_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path):
    """File-backed SQLite engine in WAL mode.

    Every connection is a separate database connection, so concurrent
    readers and writers behave as they would against a server.
    """
    engine = create_database_engine(
        f"sqlite:///{tmp_path / 'fleet.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(engine, "connect")
    def _use_wal(dbapi_connection, _connection_record) -> None:
        dbapi_connection.execute("PRAGMA journal_mode=WAL")

    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine) -> VesselRepositoryAdapter:
    return VesselRepositoryAdapter(engine=engine)


@pytest.fixture
def read_service(repository) -> VesselReadService:
    return VesselReadService(
        repository=repository,
        predicate_builder=VesselPredicateBuilder(),
    )


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock(spec=NotificationPort)


@pytest.fixture
def write_service(repository, read_service, notifier) -> VesselWriteService:
    return VesselWriteService(
        repository=repository,
        read_service=read_service,
        notifier=notifier,
    )
