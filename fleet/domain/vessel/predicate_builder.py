"""
Search predicate construction for vessels.

Translates a bag of whitelisted search parameters into a
store-neutral VesselFilter. The persistence adapter renders the
filter as a WHERE clause.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Valid names for search parameters.
SEARCH_PARAMETER_NAMES = frozenset({"name", "length"})

# Leading decimal integer; anything after it is ignored.
LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class VesselFilter:
    """Store-neutral filter for vessel searches.

    Attributes:
        name_contains: Case-insensitive substring the name must contain.
        min_length: Inclusive lower bound for the vessel length.
    """

    name_contains: Optional[str] = None
    min_length: Optional[Decimal] = None

    @property
    def is_empty(self) -> bool:
        return self.name_contains is None and self.min_length is None


def _parse_length(value: object) -> Optional[Decimal]:
    """Parse the leading integer of the value: "150.7" is 150, "12abc" is 12."""
    match = LEADING_INTEGER.match(str(value))
    if match is None:
        return None
    return Decimal(int(match.group(1)))


class VesselPredicateBuilder:
    """Builds a VesselFilter from search parameters.

    Stateless; one instance can be shared between concurrent callers.
    """

    def build(self, search_params: Mapping[str, object]) -> VesselFilter:
        """Build the filter for a vessel search.

        ``name`` becomes a case-insensitive substring match. ``length``
        becomes an inclusive lower bound on its leading integer; a value
        that does not start with an integer adds no condition. Other keys
        are ignored here and must be rejected by the caller.

        Args:
            search_params: Search parameters keyed by parameter name.

        Returns:
            The filter for the store query.
        """
        logger.debug("build: search_params=%s", dict(search_params))

        name_contains: Optional[str] = None
        min_length: Optional[Decimal] = None

        for key, value in search_params.items():
            if key == "name" and value is not None:
                name_contains = str(value)
            elif key == "length":
                min_length = _parse_length(value)
                if min_length is None:
                    logger.debug("build: ignoring unparsable length %r", value)

        vessel_filter = VesselFilter(name_contains=name_contains, min_length=min_length)
        logger.debug("build: filter=%s", vessel_filter)
        return vessel_filter
