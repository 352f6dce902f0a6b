"""
CORS policy middleware
One allow-list check applied to every response
"""
from typing import Iterable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
import logging

logger = logging.getLogger(__name__)

ALLOWED_METHODS = "GET, POST, DELETE, PATCH"


class CORSPolicy:
    """Static origin allow-list"""

    def __init__(self, allowed_origins: Iterable[str], allowed_methods: str = ALLOWED_METHODS):
        self.allowed_origins = set(allowed_origins)
        self.allowed_methods = allowed_methods

    def is_allowed(self, origin: Optional[str]) -> bool:
        # No Origin header: same-origin or non-browser client
        return origin is None or origin in self.allowed_origins

    def apply(self, request: Request, response: Response) -> Response:
        """
        Attach CORS headers for an allowed origin.
        Disallowed origins get nothing; the browser enforces the block.
        """
        origin = request.headers.get("origin")
        if not self.is_allowed(origin):
            logger.debug(f"Origin {origin} not in allow-list, omitting CORS headers")
            return response

        if origin is not None:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        if request.method == "OPTIONS":
            response.headers["Access-Control-Allow-Methods"] = self.allowed_methods
        return response


class CORSPolicyMiddleware(BaseHTTPMiddleware):
    """Apply the CORS policy to every response"""

    def __init__(self, app, policy: CORSPolicy):
        super().__init__(app)
        self.policy = policy

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        return self.policy.apply(request, response)
