from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette import status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class StrictTransportSecurityMiddleware(BaseHTTPMiddleware):
    """Adds ``Strict-Transport-Security`` to HTTPS responses.

    Loopback hosts are skipped so a browser never pins HSTS for local development.
    """

    EXCLUDED_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})

    def __init__(
        self,
        app: ASGIApp,
        *,
        max_age_seconds: int,
        include_subdomains: bool = False,
        preload: bool = False,
    ) -> None:
        super().__init__(app)
        directives = [f"max-age={max_age_seconds}"]
        if include_subdomains:
            directives.append("includeSubDomains")
        if preload:
            directives.append("preload")
        self.header_value = "; ".join(directives)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        host = (request.url.hostname or "").lower()
        if request.url.scheme == "https" and host not in self.EXCLUDED_HOSTS:
            response.headers["Strict-Transport-Security"] = self.header_value
        return response


def error_page_redirect_handler(error_path: str):
    """Build an exception handler that sends clients to the error page instead of a traceback."""

    async def redirect_to_error_page(request: Request, exc: Exception) -> RedirectResponse:
        # Starlette re-raises after this response, so the server logs the traceback once.
        logger.info("Redirecting %s %s to %s after %s", request.method, request.url.path, error_path, type(exc).__name__)
        return RedirectResponse(url=error_path, status_code=status.HTTP_302_FOUND)

    return redirect_to_error_page
