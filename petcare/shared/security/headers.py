"""
Response hardening for the PetCare API.

Every response gets a fixed set of browser security headers. Responses
under ``/api`` also get ``Cache-Control: no-store``: owner payloads carry
contact details that shared caches must not keep.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}

API_PREFIX = "/api"
NO_STORE = "no-store"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds SECURE_HEADERS, and no-store caching on API routes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(SECURE_HEADERS)
        if request.url.path.startswith(API_PREFIX):
            response.headers["Cache-Control"] = NO_STORE
        return response
