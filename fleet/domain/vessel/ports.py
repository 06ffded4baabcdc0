"""
Port interfaces (ABCs) for the vessel bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fleet.domain.vessel.entities import NewVessel, Vessel, VesselChanges
from fleet.domain.vessel.predicate_builder import VesselFilter


class VesselRepository(ABC):
    """Port for persisting and retrieving vessel aggregates.

    Every mutating method runs as one atomic unit of work covering the
    vessel, its officer and its cargo boxes.
    """

    @abstractmethod
    def find_by_id(self, vessel_id: int) -> Optional[Vessel]:
        """Return the vessel with its officer and cargo boxes, or None."""
        raise NotImplementedError

    @abstractmethod
    def find_page(
        self, vessel_filter: Optional[VesselFilter], skip: int, take: int
    ) -> tuple[list[Vessel], int]:
        """Return one window of matching vessels and the number of all matches.

        Window and total are read from the same snapshot of the store, so
        a concurrent write cannot make them disagree.

        Args:
            vessel_filter: Optional filter; None matches every vessel.
            skip: Number of matching rows to skip, in identity order.
            take: Maximum number of vessels to return.

        Returns:
            Vessels ordered by identity ascending, and the filtered total.
        """
        raise NotImplementedError

    @abstractmethod
    def count(self, vessel_filter: Optional[VesselFilter] = None) -> int:
        """Return the number of vessels matching the filter."""
        raise NotImplementedError

    @abstractmethod
    def create(self, new_vessel: NewVessel) -> Vessel:
        """Insert a vessel with version 0, its officer and cargo boxes."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, vessel_id: int, changes: VesselChanges, expected_version: int
    ) -> Optional[int]:
        """Apply changes if the stored version equals ``expected_version``.

        The comparison and the version increment happen in one
        conditional write.

        Returns:
            The new version, or None when no row matched the identity and
            the expected version.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, vessel_id: int) -> bool:
        """Delete a vessel and everything it owns.

        Returns:
            True if the vessel existed, False otherwise.
        """
        raise NotImplementedError


class NotificationPort(ABC):
    """Port for sending notifications about vessel lifecycle events."""

    @abstractmethod
    def notify(self, subject: str, body: str) -> None:
        """Send a notification.

        Args:
            subject: Short subject line.
            body: HTML body.
        """
        raise NotImplementedError
