"""
Mock LaunchDarkly Management API
Main application entry point
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mockflags import __version__
from mockflags.api.routes import flags as flags_router
from mockflags.api.routes import health as health_router
from mockflags.config import Settings
from mockflags.feature_flags.store import FlagNotFoundError, FlagStore
from mockflags.middleware.cors import CORS_HEADERS, CORSHeadersMiddleware
from mockflags.middleware.request_log import RequestLoggingMiddleware
from mockflags.utils.logger import log_error, setup_logging

logger = logging.getLogger(__name__)

SUPPORTED_ENDPOINTS = (
    "GET  /status",
    "POST /api/v2/flags/{projectKey}",
    "GET  /api/v2/flags/{projectKey}/{flagKey}",
    "DELETE /api/v2/flags/{projectKey}/{flagKey}",
    "POST /api/v2/flags/{projectKey}/{flagKey}/archive",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager"""
    settings: Settings = app.state.settings

    logger.info(f"Mock LaunchDarkly Management API server running on port {settings.server.port}")
    logger.info("Supported endpoints:")
    for endpoint in SUPPORTED_ENDPOINTS:
        logger.info(f"  {endpoint}")

    try:
        yield
    finally:
        store: FlagStore = app.state.flag_store
        logger.info(f"Shutting down, discarding {store.count()} flag(s)")
        store.clear()


def create_app(settings: Optional[Settings] = None, store: Optional[FlagStore] = None) -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Mock LaunchDarkly Management API",
        description="In-memory stand-in for the flag management API used in integration tests",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan
    )

    app.state.settings = settings or Settings()
    app.state.flag_store = store if store is not None else FlagStore()

    # Last added runs first: preflights are answered before they are logged
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(flags_router.router, tags=["flags"])

    @app.exception_handler(FlagNotFoundError)
    async def flag_not_found_handler(request: Request, exc: FlagNotFoundError):
        return JSONResponse(status_code=404, content={"error": "Flag not found"})

    @app.exception_handler(StarletteHTTPException)
    async def unrouted_handler(request: Request, exc: StarletteHTTPException):
        # A known path with the wrong method is reported as unrouted, not 405
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        log_error(logger, exc, {"method": request.method, "path": request.url.path})
        # Runs outside the middleware stack, so CORS headers are stamped here
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=CORS_HEADERS
        )

    return app


async def main():
    """Main application entry point"""
    settings = Settings()

    setup_logging(
        level=settings.logging.level,
        format_type=settings.logging.format,
        log_file=settings.logging.file
    )

    app = create_app(settings)

    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.logging.level.lower(),
        access_log=settings.logging.access_log,
        log_config=None,
    )

    server = uvicorn.Server(config)

    try:
        await server.serve()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        raise


def run():
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
