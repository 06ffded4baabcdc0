"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fleet.domain.vessel.errors import (
    NotFoundError,
    VersionInvalidError,
    VersionOutdatedError,
    VesselDomainError,
)

logger = logging.getLogger(__name__)

HTTP_404 = 404
HTTP_412 = 412
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(
        _request: Request, exc: NotFoundError
    ) -> JSONResponse:
        """Handle unknown vessels, empty searches and invalid search keys."""
        logger.info("Not found: %s", exc.message)
        return _error_response(HTTP_404, "Not found", exc.message)

    @app.exception_handler(VersionInvalidError)
    async def handle_version_invalid(
        _request: Request, exc: VersionInvalidError
    ) -> JSONResponse:
        """Handle malformed version tokens."""
        logger.info("Invalid version token: %r", exc.token)
        return _error_response(HTTP_412, "Invalid version", exc.message)

    @app.exception_handler(VersionOutdatedError)
    async def handle_version_outdated(
        _request: Request, exc: VersionOutdatedError
    ) -> JSONResponse:
        """Handle updates based on a stale version."""
        logger.info(
            "Outdated version %d (current %s)", exc.version, exc.current_version
        )
        return _error_response(HTTP_412, "Version outdated", exc.message)

    @app.exception_handler(VesselDomainError)
    async def handle_vessel_domain(
        _request: Request, exc: VesselDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled vessel domain errors."""
        logger.error("Unhandled vessel domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
