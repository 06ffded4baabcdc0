"""
HTTP response headers middleware.

Every response gets restrictive security headers. Responses that carry
an ETag (single vessels, successful updates) are additionally marked for
revalidation, so clients ask again with If-None-Match instead of reusing
a possibly outdated version.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'",
}

VERSIONED_HEADERS = {
    "Cache-Control": "no-cache",
    "Access-Control-Expose-Headers": "ETag, Location",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds security headers, and revalidation hints to versioned responses.

    Headers already set by a route are left untouched.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        headers = dict(SECURE_HEADERS)
        if "etag" in response.headers or "location" in response.headers:
            headers.update(VERSIONED_HEADERS)

        for header_name, header_value in headers.items():
            response.headers.setdefault(header_name, header_value)
        return response
