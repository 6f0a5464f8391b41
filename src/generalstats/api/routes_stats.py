"""
Statistic chart route handlers.

Endpoints:
- GET /stats: HTML page with the chart for one user and two statistics
- GET /api/stats: the same analysis as JSON (series + chart geometry)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from generalstats.api.shared import (
    StatsResponse,
    get_chart_config,
    get_replay_client,
    nan_to_none,
    parse_filter_params,
    parse_statistic_param,
    validate_username,
)
from generalstats.core.config import ChartConfig
from generalstats.core.constants import DEFAULT_X_STATISTIC, DEFAULT_Y_STATISTIC
from generalstats.integrations.replays import ReplayClient, ReplayFetchError
from generalstats.pipeline import StatsResult, compute_series
from generalstats.visualization.chart import Chart, NoDataError
from generalstats.visualization.svg import render_svg

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stats"])

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def _run_analysis(
    client: ReplayClient,
    chart_config: ChartConfig,
    username: str,
    x: str,
    y: str,
    mode: str | None,
    against: list[str] | None,
) -> tuple[StatsResult, Chart]:
    """Validate inputs, fetch the history and build the chart.

    Inputs are validated before any network request is made.
    """
    username = validate_username(username)
    x_stat = parse_statistic_param("x", x)
    y_stat = parse_statistic_param("y", y)
    record_filter = parse_filter_params(mode, against)

    try:
        records = client.get_replays(username)
    except ReplayFetchError as e:
        logger.warning(f"Replay fetch failed for {username!r}: {e}")
        raise HTTPException(status_code=502, detail="Could not fetch match history") from e

    try:
        result = compute_series(records, x_stat, y_stat, username, record_filter)
        chart = result.chart(chart_config)
    except NoDataError as e:
        raise HTTPException(status_code=400, detail="no data") from e

    return result, chart


@router.get("/stats", response_class=HTMLResponse)
def stats_page(
    request: Request,
    client: Annotated[ReplayClient, Depends(get_replay_client)],
    chart_config: Annotated[ChartConfig, Depends(get_chart_config)],
    username: str = Query(..., description="Subject of both statistics"),
    x: str = Query(DEFAULT_X_STATISTIC, description="X statistic descriptor"),
    y: str = Query(DEFAULT_Y_STATISTIC, description="Y statistic descriptor"),
    type: str | None = Query(None, description="Game mode (classic, 1v1, 2v2, custom)"),
    against: list[str] | None = Query(None, description="Only matches with this opponent"),
) -> HTMLResponse:
    """Render the chart page."""
    result, chart = _run_analysis(client, chart_config, username, x, y, type, against)
    svg = render_svg(chart, margin=chart_config.margin, axis_color=chart_config.axis_color)

    return templates.TemplateResponse(
        request,
        "stats.html",
        {
            "username": result.username,
            "x_stat": result.x_label,
            "y_stat": result.y_label,
            "mode": type,
            "matches": len(result.records),
            "chart": svg,
        },
    )


@router.get("/api/stats", response_model=StatsResponse)
def stats_json(
    client: Annotated[ReplayClient, Depends(get_replay_client)],
    chart_config: Annotated[ChartConfig, Depends(get_chart_config)],
    username: str = Query(..., description="Subject of both statistics"),
    x: str = Query(DEFAULT_X_STATISTIC, description="X statistic descriptor"),
    y: str = Query(DEFAULT_Y_STATISTIC, description="Y statistic descriptor"),
    type: str | None = Query(None, description="Game mode (classic, 1v1, 2v2, custom)"),
    against: list[str] | None = Query(None, description="Only matches with this opponent"),
) -> StatsResponse:
    """Return both series and the chart geometry."""
    result, chart = _run_analysis(client, chart_config, username, x, y, type, against)

    return StatsResponse(
        username=result.username,
        x=result.x_label,
        y=result.y_label,
        mode=type,
        matches=len(result.records),
        points=chart.points,
        xs=nan_to_none(result.xs),
        ys=nan_to_none(result.ys),
        chart=chart.to_dict(),
    )
