"""
Service: Read access to vessels.

Input: vessel identity, or search parameters plus a Pageable
Output: Vessel, Slice[Vessel], or a count
Side effects: None (read-only queries).
Failure cases: VesselNotFoundError, NoVesselsFoundError,
    InvalidSearchParameterError.
"""

import logging
from typing import Mapping, Optional

from fleet.domain.vessel.entities import Vessel
from fleet.domain.vessel.errors import (
    InvalidSearchParameterError,
    NoVesselsFoundError,
    VesselNotFoundError,
)
from fleet.domain.vessel.pagination import Pageable, Slice
from fleet.domain.vessel.ports import VesselRepository
from fleet.domain.vessel.predicate_builder import (
    SEARCH_PARAMETER_NAMES,
    VesselFilter,
    VesselPredicateBuilder,
)

logger = logging.getLogger(__name__)


class VesselReadService:
    """Looks up vessels by identity and searches them page by page."""

    def __init__(
        self,
        repository: VesselRepository,
        predicate_builder: VesselPredicateBuilder,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Store for vessel aggregates.
            predicate_builder: Translates search parameters into a filter.
        """
        self._repository = repository
        self._predicate_builder = predicate_builder

    def find_by_id(self, vessel_id: int) -> Vessel:
        """Return the vessel with the given identity.

        Raises:
            VesselNotFoundError: If no such vessel exists.
        """
        logger.debug("find_by_id: id=%s", vessel_id)
        vessel = self._repository.find_by_id(vessel_id)
        if vessel is None:
            logger.debug("find_by_id: no vessel with id=%s", vessel_id)
            raise VesselNotFoundError(vessel_id)
        return vessel

    def find(
        self,
        search_params: Optional[Mapping[str, object]],
        pageable: Pageable,
    ) -> Slice[Vessel]:
        """Search vessels and return one page of results.

        Without search parameters all vessels are listed page by page.

        Args:
            search_params: Search parameters; only ``name`` and ``length``
                are accepted.
            pageable: Requested page number and size.

        Returns:
            The matching vessels in the window plus the filtered total.

        Raises:
            InvalidSearchParameterError: If an unknown parameter name is used.
            NoVesselsFoundError: If the requested window is empty.
        """
        logger.debug("find: search_params=%s, pageable=%s", search_params, pageable)

        vessel_filter: Optional[VesselFilter] = None
        if search_params:
            invalid_keys = set(search_params) - SEARCH_PARAMETER_NAMES
            if invalid_keys:
                logger.debug("find: invalid search parameters %s", invalid_keys)
                raise InvalidSearchParameterError(invalid_keys)
            vessel_filter = self._predicate_builder.build(search_params)

        vessels, total_elements = self._repository.find_page(
            vessel_filter, skip=pageable.offset, take=pageable.size
        )
        if not vessels:
            logger.debug("find: no vessels found")
            raise NoVesselsFoundError(search_params, pageable.number)

        logger.debug(
            "find: %d vessels on page %d, %d in total",
            len(vessels),
            pageable.number,
            total_elements,
        )
        return Slice(content=tuple(vessels), total_elements=total_elements)

    def count(self) -> int:
        """Return the number of stored vessels, ignoring any filter."""
        count = self._repository.count()
        logger.debug("count: %d", count)
        return count
