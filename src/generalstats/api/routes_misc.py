"""
Miscellaneous route handlers.

Endpoints:
- GET /: landing page with the chart form
- GET /health: health check
- GET /about: API documentation
"""

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from generalstats import __version__
from generalstats.analysis.statistics import STATISTICS
from generalstats.api.routes_stats import templates
from generalstats.api.shared import HealthResponse
from generalstats.core.constants import DEFAULT_X_STATISTIC, DEFAULT_Y_STATISTIC, GameMode

logger = logging.getLogger(__name__)

router = APIRouter(tags=["misc"])


@router.get("/", response_class=HTMLResponse)
def index(request: Request) -> HTMLResponse:
    """Landing page."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "default_x": DEFAULT_X_STATISTIC,
            "default_y": DEFAULT_Y_STATISTIC,
            "modes": [mode.value for mode in GameMode],
            "statistics": list(STATISTICS),
        },
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/about")
async def about() -> dict[str, Any]:
    """Information about the API and statistics."""
    return {
        "name": "GeneralStats",
        "version": __version__,
        "description": "Charts one match-history statistic against another",
        "statistics": {
            "Win": "1 for a won match, 0 otherwise",
            "Stars": "Star rating in the match (undefined if absent)",
            "Percentile": "Finishing position scaled to [0, 1], 1 = first",
            "Number": "Position in the history, 1 = oldest",
            "Date": "Match start timestamp",
            "Average[N,S]": "Parabolic moving average of S over N matches each side",
        },
        "game_modes": [mode.value for mode in GameMode],
        "endpoints": {
            "/stats": "HTML chart (username, x, y, type, against)",
            "/api/stats": "JSON series and chart geometry",
        },
    }
