"""
Adapter: Vessel repository.

Implements VesselRepository port.
Persists vessel aggregates (vessel, officer, cargo boxes) in a
relational database through SQLAlchemy Core.
"""

import logging
from collections import defaultdict
from typing import Optional, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Connection, Engine, RowMapping
from sqlalchemy.sql.elements import ColumnElement

from fleet.domain.vessel.entities import (
    CargoBox,
    NewVessel,
    Officer,
    Vessel,
    VesselChanges,
)
from fleet.domain.vessel.ports import VesselRepository
from fleet.domain.vessel.predicate_builder import VesselFilter
from fleet.infrastructure.database import SNAPSHOT_ISOLATION_LEVELS
from fleet.infrastructure.vessel.tables import (
    cargo_box_table,
    officer_table,
    utcnow,
    vessel_table,
)

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def where_conditions(vessel_filter: Optional[VesselFilter]) -> list[ColumnElement]:
    """Render a VesselFilter as SQL conditions on the vessel table.

    Args:
        vessel_filter: The filter to render, or None for no conditions.

    Returns:
        Conditions to be combined with AND.
    """
    if vessel_filter is None or vessel_filter.is_empty:
        return []

    conditions: list[ColumnElement] = []
    if vessel_filter.name_contains is not None:
        pattern = f"%{_escape_like(vessel_filter.name_contains)}%"
        conditions.append(vessel_table.c.name.ilike(pattern, escape=LIKE_ESCAPE))
    if vessel_filter.min_length is not None:
        conditions.append(vessel_table.c.length >= vessel_filter.min_length)
    return conditions


class VesselRepositoryAdapter(VesselRepository):
    """SQLAlchemy implementation of the vessel repository.

    Works on any SQLAlchemy engine: PostgreSQL in production,
    SQLite for local runs and tests. Each write runs in its own
    transaction via ``Engine.begin``.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_by_id(self, vessel_id: int) -> Optional[Vessel]:
        """Return the vessel with its officer and cargo boxes, or None.

        Args:
            vessel_id: Identity of the vessel.
        """
        query = select(vessel_table).where(vessel_table.c.id == vessel_id)

        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()
            if row is None:
                return None
            return self._load_aggregates(conn, [row])[0]

    def find_page(
        self, vessel_filter: Optional[VesselFilter], skip: int, take: int
    ) -> tuple[list[Vessel], int]:
        """Return one window of matching vessels and the filtered total.

        Both queries and the aggregate loads run in one read transaction,
        on PostgreSQL at REPEATABLE READ, so they share a snapshot.

        Args:
            vessel_filter: Optional filter; None matches every vessel.
            skip: Number of matching rows to skip.
            take: Maximum number of vessels to return.
        """
        conditions = where_conditions(vessel_filter)
        query = (
            select(vessel_table)
            .where(*conditions)
            .order_by(vessel_table.c.id)
            .offset(skip)
            .limit(take)
        )

        with self._engine.connect() as conn:
            isolation_level = SNAPSHOT_ISOLATION_LEVELS.get(conn.dialect.name)
            if isolation_level is not None:
                conn.execution_options(isolation_level=isolation_level)

            with conn.begin():
                rows = conn.execute(query).mappings().all()
                total_elements = self._count(conn, conditions)
                vessels = self._load_aggregates(conn, rows)

        logger.debug(
            "Fetched %d of %d vessels (skip=%d, take=%d).",
            len(vessels),
            total_elements,
            skip,
            take,
        )
        return vessels, total_elements

    def count(self, vessel_filter: Optional[VesselFilter] = None) -> int:
        """Return the number of vessels matching the filter."""
        with self._engine.connect() as conn:
            return self._count(conn, where_conditions(vessel_filter))

    def create(self, new_vessel: NewVessel) -> Vessel:
        """Insert the vessel, its officer and cargo boxes in one transaction.

        Args:
            new_vessel: The vessel to persist.

        Returns:
            The persisted vessel with version 0.
        """
        now = utcnow()

        with self._engine.begin() as conn:
            result = conn.execute(
                insert(vessel_table).values(
                    version=0,
                    name=new_vessel.name,
                    length=new_vessel.length,
                    created_at=now,
                    updated_at=now,
                )
            )
            vessel_id = result.inserted_primary_key[0]

            conn.execute(
                insert(officer_table).values(
                    vessel_id=vessel_id,
                    name=new_vessel.officer.name,
                    age=new_vessel.officer.age,
                )
            )

            if new_vessel.cargo_boxes:
                conn.execute(
                    insert(cargo_box_table),
                    [
                        {
                            "vessel_id": vessel_id,
                            "height": box.height,
                            "length": box.length,
                            "width": box.width,
                        }
                        for box in new_vessel.cargo_boxes
                    ],
                )

        logger.debug(
            "Inserted vessel id=%d with %d cargo boxes.",
            vessel_id,
            len(new_vessel.cargo_boxes),
        )
        return Vessel(
            id=vessel_id,
            version=0,
            name=new_vessel.name,
            length=new_vessel.length,
            officer=new_vessel.officer,
            cargo_boxes=tuple(new_vessel.cargo_boxes),
            created_at=now,
            updated_at=now,
        )

    def update(
        self, vessel_id: int, changes: VesselChanges, expected_version: int
    ) -> Optional[int]:
        """Apply changes and increment the version in one conditional write.

        Args:
            vessel_id: Identity of the vessel.
            changes: Fields to write.
            expected_version: Version the stored row must still have.

        Returns:
            The new version, or None if no row has this identity and version.
        """
        statement = (
            update(vessel_table)
            .where(
                vessel_table.c.id == vessel_id,
                vessel_table.c.version == expected_version,
            )
            .values(
                **changes.as_values(),
                version=vessel_table.c.version + 1,
                updated_at=utcnow(),
            )
        )

        with self._engine.begin() as conn:
            updated_rows = conn.execute(statement).rowcount

        if updated_rows == 0:
            logger.debug(
                "No vessel with id=%d and version=%d.", vessel_id, expected_version
            )
            return None
        return expected_version + 1

    def delete(self, vessel_id: int) -> bool:
        """Delete the vessel, its officer and cargo boxes in one transaction.

        Returns:
            True if the vessel existed.
        """
        with self._engine.begin() as conn:
            conn.execute(
                delete(cargo_box_table).where(cargo_box_table.c.vessel_id == vessel_id)
            )
            conn.execute(
                delete(officer_table).where(officer_table.c.vessel_id == vessel_id)
            )
            deleted_rows = conn.execute(
                delete(vessel_table).where(vessel_table.c.id == vessel_id)
            ).rowcount

        return deleted_rows > 0

    @staticmethod
    def _count(conn: Connection, conditions: list[ColumnElement]) -> int:
        query = select(func.count()).select_from(vessel_table).where(*conditions)
        return conn.execute(query).scalar_one()

    def _load_aggregates(
        self, conn: Connection, rows: Sequence[RowMapping]
    ) -> list[Vessel]:
        """Attach officers and cargo boxes to vessel rows."""
        if not rows:
            return []

        vessel_ids = [row["id"] for row in rows]

        officers = {
            officer["vessel_id"]: Officer(name=officer["name"], age=officer["age"])
            for officer in conn.execute(
                select(officer_table).where(officer_table.c.vessel_id.in_(vessel_ids))
            ).mappings()
        }

        cargo_boxes: dict[int, list[CargoBox]] = defaultdict(list)
        for box in conn.execute(
            select(cargo_box_table)
            .where(cargo_box_table.c.vessel_id.in_(vessel_ids))
            .order_by(cargo_box_table.c.id)
        ).mappings():
            cargo_boxes[box["vessel_id"]].append(
                CargoBox(height=box["height"], length=box["length"], width=box["width"])
            )

        return [
            Vessel(
                id=row["id"],
                version=row["version"],
                name=row["name"],
                length=row["length"],
                officer=officers[row["id"]],
                cargo_boxes=tuple(cargo_boxes[row["id"]]),
                created_at=row["created_at"],
                updated_at=row["updated_at"],
            )
            for row in rows
        ]
