"""
CORS for the public API.

The admin API only answers the configured front end origins. Everything
under {API_PREFIX}/public is embedded by the sites themselves and answers
any origin in PUBLIC_CORS_ORIGINS, preflight requests included.
"""

import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from flexhub.config import settings

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization, X-Requested-With, Accept, Origin, Cache-Control, Pragma"
MAX_AGE = "86400"


class PublicCORSMiddleware(BaseHTTPMiddleware):
    """
    Path-scoped CORS middleware.

    Must wrap the global CORSMiddleware so public preflights are answered
    here before the admin origin list can reject them.
    """

    def __init__(self, app, prefix: str | None = None, origins: list[str] | None = None):
        super().__init__(app)
        self.prefix = prefix or f"{settings.API_PREFIX}/public"
        self.origins = origins if origins is not None else settings.public_cors_origins_list

    def _allowed_origin(self, origin: str | None) -> str | None:
        if "*" in self.origins:
            return "*"
        if origin and origin in self.origins:
            return origin
        return None

    def _apply_headers(self, response: Response, origin: str | None) -> None:
        allowed = self._allowed_origin(origin)
        if allowed is None:
            return
        response.headers["Access-Control-Allow-Origin"] = allowed
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        response.headers["Access-Control-Max-Age"] = MAX_AGE
        if allowed != "*":
            response.headers["Vary"] = "Origin"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(self.prefix):
            return await call_next(request)

        origin = request.headers.get("origin")

        if request.method == "OPTIONS":
            response = Response(status_code=200)
            self._apply_headers(response, origin)
            return response

        response = await call_next(request)
        # The admin CORS layer may have set its own headers on the way out
        for header in ("access-control-allow-origin", "access-control-allow-credentials"):
            if header in response.headers:
                del response.headers[header]
        self._apply_headers(response, origin)
        return response
