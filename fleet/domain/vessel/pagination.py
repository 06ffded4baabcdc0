"""
Pagination model: a requested window (Pageable) and a returned page (Slice).
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")

DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pageable:
    """A requested window over an ordered result set.

    Attributes:
        number: Zero-based page index.
        size: Maximum number of elements per page.
    """

    number: int = DEFAULT_PAGE_NUMBER
    size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        """Number of rows to skip before the window starts."""
        return self.number * self.size


@dataclass(frozen=True)
class Slice(Generic[T]):
    """A page of results plus the total match count.

    ``total_elements`` is independent of the page window.
    """

    content: tuple[T, ...]
    total_elements: int


def _to_int(value: Union[str, int, None]) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def create_pageable(
    number: Union[str, int, None] = None,
    size: Union[str, int, None] = None,
    default_size: int = DEFAULT_PAGE_SIZE,
    max_size: int = MAX_PAGE_SIZE,
) -> Pageable:
    """Build a Pageable from raw, possibly missing or malformed values.

    Args:
        number: Requested zero-based page index.
        size: Requested page size.
        default_size: Size used when ``size`` is unusable.
        max_size: Upper bound for ``size``; larger values fall back to the default.

    Returns:
        A Pageable with a non-negative number and a size in 1..max_size.
    """
    page_number = _to_int(number)
    if page_number is None or page_number < 0:
        page_number = DEFAULT_PAGE_NUMBER

    page_size = _to_int(size)
    if page_size is None or page_size < 1 or page_size > max_size:
        page_size = default_size

    return Pageable(number=page_number, size=page_size)
