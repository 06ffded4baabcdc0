"""
Domain-specific errors for the vessel bounded context.

All errors raised from the domain and application layers are defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from typing import Iterable, Mapping, Optional


class VesselDomainError(Exception):
    """Base error for all vessel domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class NotFoundError(VesselDomainError):
    """Base error for every condition reported as "not found"."""


class VesselNotFoundError(NotFoundError):
    """Raised when no vessel exists for the given identity."""

    def __init__(self, vessel_id: Optional[int]) -> None:
        super().__init__(f"Vessel not found: {vessel_id}")
        self.vessel_id = vessel_id


class NoVesselsFoundError(NotFoundError):
    """Raised when a search or listing yields an empty page."""

    def __init__(
        self, search_params: Optional[Mapping[str, object]], page_number: int
    ) -> None:
        super().__init__(
            f"No vessels found: {dict(search_params or {})}, page {page_number}"
        )
        self.search_params = dict(search_params or {})
        self.page_number = page_number


class InvalidSearchParameterError(NotFoundError):
    """Raised when a search uses parameter names outside the whitelist."""

    def __init__(self, keys: Iterable[str]) -> None:
        self.keys = sorted(keys)
        super().__init__(f"Invalid search parameters: {', '.join(self.keys)}")


class VersionInvalidError(VesselDomainError):
    """Raised when a version token does not have the shape "<1-3 digits>"."""

    def __init__(self, token: Optional[str]) -> None:
        super().__init__(f"Invalid version token: {token!r}")
        self.token = token


class VersionOutdatedError(VesselDomainError):
    """Raised when an update is based on a stale version."""

    def __init__(self, version: int, current_version: Optional[int] = None) -> None:
        super().__init__(f"Version {version} is outdated")
        self.version = version
        self.current_version = current_version
