"""
Service: Create, update and delete vessels.

Input: NewVessel; identity, VesselChanges and version token; identity
Output: new identity; new version; deleted flag
Side effects: Writes the vessel aggregate. Hands a notification to the
    notification port after a vessel is created.
Failure cases: VesselNotFoundError, VersionInvalidError, VersionOutdatedError.
"""

import html
import logging
from typing import Optional

from fleet.application.vessel.read_service import VesselReadService
from fleet.domain.vessel.entities import NewVessel, Vessel, VesselChanges
from fleet.domain.vessel.errors import VersionOutdatedError, VesselNotFoundError
from fleet.domain.vessel.ports import NotificationPort, VesselRepository
from fleet.domain.vessel.version_token import parse_version_token

logger = logging.getLogger(__name__)


class VesselWriteService:
    """Writes vessel aggregates with optimistic concurrency control.

    Updates carry the version the caller last saw. The repository
    compares it and increments the stored version in one conditional
    write, so two updates based on the same version cannot both succeed.
    """

    def __init__(
        self,
        repository: VesselRepository,
        read_service: VesselReadService,
        notifier: NotificationPort,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Store for vessel aggregates.
            read_service: Used to tell a missing vessel from a stale version.
            notifier: Receives a message for every created vessel. Expected
                to return without waiting for delivery.
        """
        self._repository = repository
        self._read_service = read_service
        self._notifier = notifier

    def create(self, new_vessel: NewVessel) -> int:
        """Persist a new vessel with its officer and cargo boxes.

        Args:
            new_vessel: The vessel to create.

        Returns:
            The identity assigned by the store.
        """
        vessel = self._repository.create(new_vessel)
        logger.info("Created vessel id=%d", vessel.id)
        self._send_notification(vessel)
        return vessel.id

    def update(
        self,
        vessel_id: Optional[int],
        changes: VesselChanges,
        version_token: str,
    ) -> int:
        """Update a vessel if the caller's version is current.

        Args:
            vessel_id: Identity of the vessel to update.
            changes: Fields to write.
            version_token: Last seen version as a token, e.g. ``"0"``.

        Returns:
            The new version.

        Raises:
            VesselNotFoundError: If the identity is missing or unknown.
            VersionInvalidError: If the token is malformed.
            VersionOutdatedError: If the stored version differs from the token.
        """
        logger.debug(
            "update: id=%s, changes=%s, version=%s", vessel_id, changes, version_token
        )
        if vessel_id is None:
            raise VesselNotFoundError(vessel_id)

        version = parse_version_token(version_token)

        new_version = self._repository.update(
            vessel_id, changes, expected_version=version
        )
        if new_version is None:
            current = self._read_service.find_by_id(vessel_id)
            logger.debug(
                "update: version %d is outdated, stored version is %d",
                version,
                current.version,
            )
            raise VersionOutdatedError(version, current.version)

        logger.info("Updated vessel id=%d to version %d", vessel_id, new_version)
        return new_version

    def delete(self, vessel_id: int) -> bool:
        """Delete a vessel with its officer and cargo boxes.

        Returns:
            True if the vessel existed and was deleted, False if it was absent.
        """
        deleted = self._repository.delete(vessel_id)
        if deleted:
            logger.info("Deleted vessel id=%d", vessel_id)
        else:
            logger.debug("delete: no vessel with id=%d", vessel_id)
        return deleted

    def _send_notification(self, vessel: Vessel) -> None:
        subject = f"New vessel {vessel.id}"
        body = (
            f"The vessel with officer <strong>{html.escape(vessel.officer.name)}"
            "</strong> has been created"
        )
        self._notifier.notify(subject, body)
