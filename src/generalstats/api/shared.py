"""
Shared utilities for the GeneralStats API.

Contains input validation, response models and the dependencies route
modules use to reach the replay client and chart configuration.
"""

import logging
import math
from functools import lru_cache

from fastapi import HTTPException
from pydantic import BaseModel, Field

from generalstats.analysis.descriptor import DescriptorError, parse_statistic
from generalstats.analysis.filters import Filter, build_filter
from generalstats.analysis.statistics import Statistic
from generalstats.core.config import ChartConfig, get_config
from generalstats.integrations.replays import ReplayClient

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 64
MAX_DESCRIPTOR_LENGTH = 256


# =============================================================================
# Input Validation
# =============================================================================


def validate_username(username: str) -> str:
    """Validate a username. Raises HTTPException if invalid."""
    username = username.strip()
    if not username or len(username) > MAX_USERNAME_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid username: must be 1-{MAX_USERNAME_LENGTH} characters",
        )
    return username


def parse_statistic_param(name: str, text: str) -> Statistic:
    """Parse a statistic query parameter. Raises HTTPException if malformed."""
    if len(text) > MAX_DESCRIPTOR_LENGTH:
        raise HTTPException(status_code=400, detail=f"Statistic '{name}' is too long")
    try:
        return parse_statistic(text)
    except DescriptorError as e:
        raise HTTPException(status_code=400, detail=f"Invalid statistic '{name}': {e}") from e


def parse_filter_params(mode: str | None, against: list[str] | None) -> Filter:
    """Build a match filter from query parameters. Raises HTTPException if invalid."""
    try:
        return build_filter(mode, against or ())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid game type: {mode}") from e


# =============================================================================
# Dependencies
# =============================================================================


@lru_cache(maxsize=1)
def get_replay_client() -> ReplayClient:
    """Shared replay client built from the global configuration."""
    return ReplayClient.from_config(get_config().api)


def get_chart_config() -> ChartConfig:
    return get_config().chart


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    status: str
    version: str


class TickModel(BaseModel):
    value: float
    position: float
    label: str


class SegmentModel(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float


class ChartModel(BaseModel):
    segments: list[SegmentModel]
    axis_lines: list[SegmentModel]
    x_ticks: list[TickModel]
    y_ticks: list[TickModel]
    data_min: tuple[float, float]
    data_max: tuple[float, float]
    origin: tuple[int, int]
    size: tuple[int, int]
    color: str
    dropped: int


class StatsResponse(BaseModel):
    username: str
    x: str = Field(description="Descriptor of the x statistic")
    y: str = Field(description="Descriptor of the y statistic")
    mode: str | None = None
    matches: int = Field(description="Matches left after filtering")
    points: list[tuple[float, float]] = Field(description="Plotted data points, drawing order")
    xs: list[float | None] = Field(description="X series, null where undefined")
    ys: list[float | None] = Field(description="Y series, null where undefined")
    chart: ChartModel


def nan_to_none(values: list[float]) -> list[float | None]:
    return [None if math.isnan(v) else v for v in values]
