"""
Version tokens for optimistic concurrency.

A token is the version number wrapped in literal double quotes,
e.g. ``"3"``. It is the ETag of a vessel and the If-Match value
expected on update.
"""

import re

from fleet.domain.vessel.errors import VersionInvalidError

VERSION_PATTERN = re.compile(r'"([0-9]{1,3})"')


def parse_version_token(token: object) -> int:
    """Extract the version number from a token.

    Args:
        token: Caller-supplied token.

    Returns:
        The version number.

    Raises:
        VersionInvalidError: If the token is not a quoted 1-3 digit number.
    """
    if not isinstance(token, str):
        raise VersionInvalidError(None if token is None else str(token))
    match = VERSION_PATTERN.fullmatch(token)
    if match is None:
        raise VersionInvalidError(token)
    return int(match.group(1))


def format_version_token(version: int) -> str:
    """Render a version number as a token."""
    return f'"{version}"'
