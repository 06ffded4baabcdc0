"""
Domain entities for the vessel bounded context.

The vessel is the aggregate root. It owns exactly one officer and
any number of cargo boxes; neither has a lifecycle of its own.
Entities contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Officer:
    """The officer embedded in a vessel."""

    name: str
    age: Optional[int] = None


@dataclass(frozen=True)
class CargoBox:
    """A cargo box carried by a vessel. Dimensions in metres."""

    height: Decimal
    length: Decimal
    width: Decimal


@dataclass(frozen=True)
class Vessel:
    """A persisted vessel aggregate.

    Attributes:
        id: Store-assigned identity, never reused after deletion.
        version: Optimistic concurrency counter, 0 on creation.
        name: Display name of the vessel.
        length: Length of the vessel in metres.
        officer: The officer owned by this vessel.
        cargo_boxes: Cargo boxes owned by this vessel, in insertion order.
        created_at: Store-managed creation timestamp.
        updated_at: Store-managed timestamp of the last update.
    """

    id: int
    version: int
    name: str
    length: Decimal
    officer: Officer
    cargo_boxes: tuple[CargoBox, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewVessel:
    """Input for creating a vessel together with its officer and cargo boxes."""

    name: str
    length: Decimal
    officer: Officer
    cargo_boxes: tuple[CargoBox, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class VesselChanges:
    """Field changes for an existing vessel.

    Fields left as None are not written.
    """

    name: Optional[str] = None
    length: Optional[Decimal] = None

    def as_values(self) -> dict[str, object]:
        """Return the supplied fields as a column/value mapping."""
        values: dict[str, object] = {}
        if self.name is not None:
            values["name"] = self.name
        if self.length is not None:
            values["length"] = self.length
        return values
