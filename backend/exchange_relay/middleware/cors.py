"""
CORS policy middleware.
Answers every preflight with 204 and stamps the same CORS headers on every
response, errors included, so browser clients can always read the body.
"""
from typing import Callable, Dict, Optional

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

ALLOWED_METHODS = "GET,POST,OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization, X-Relay-Signature, X-Client-Version"
MAX_AGE_SECONDS = "3600"


def cors_headers(origin: Optional[str] = None) -> Dict[str, str]:
    """CORS headers for a request origin; wildcard when there is none."""
    return {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Max-Age": MAX_AGE_SECONDS,
    }


class CorsPolicyMiddleware(BaseHTTPMiddleware):
    """Middleware applying the relay CORS policy to every route."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        headers = cors_headers(request.headers.get("origin"))

        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
