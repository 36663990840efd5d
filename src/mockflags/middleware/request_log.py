"""
Request logging middleware
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from mockflags.utils.logger import log_request

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log the method and path of each request before it is routed"""

    async def dispatch(self, request: Request, call_next):
        log_request(logger, request.method, request.url.path)
        return await call_next(request)
