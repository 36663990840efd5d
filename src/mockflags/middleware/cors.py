"""
Permissive CORS middleware for the mock management API
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp CORS headers on every response and answer all preflights.

    Unlike Starlette's CORSMiddleware this does not depend on an ``Origin``
    request header: every ``OPTIONS`` request gets an empty 200 before any
    routing happens.
    """

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        response.headers.update(CORS_HEADERS)
        return response
