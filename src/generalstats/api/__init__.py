"""
GeneralStats Web API

FastAPI application serving match-history charts.

This package exposes:
- app: The FastAPI application (used by uvicorn and server.py)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response

from generalstats import __version__
from generalstats.core.config import configure_logging, get_config

configure_logging(get_config().logging)
logger = logging.getLogger(__name__)

# =============================================================================
# FastAPI App Creation
# =============================================================================

app = FastAPI(
    title="GeneralStats API",
    description="Charts one statistic of a player's match history against another",
    version=__version__,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# =============================================================================
# Security Middleware
# =============================================================================


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next) -> Response:
    """Add security headers to all responses."""
    response = await call_next(request)

    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if "/api/" in request.url.path:
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"

    return response


# =============================================================================
# Global Exception Handler
# =============================================================================


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler to prevent information disclosure."""
    logger.exception(f"Unhandled exception for {request.method} {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred. Please try again later.",
        },
    )


# =============================================================================
# Include Route Modules
# =============================================================================

from generalstats.api.routes_misc import router as misc_router  # noqa: E402
from generalstats.api.routes_stats import router as stats_router  # noqa: E402

app.include_router(misc_router)
app.include_router(stats_router)
