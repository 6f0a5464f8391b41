"""
Chart Geometry for Statistic-vs-Statistic Plots

Provides:
- Coordinate transformation from data space to chart pixels
- NaN-aware pairing of two evaluated series into an ordered polyline
- Automatic tick spacing for both axes

Coordinate systems:
- Data space: x grows right, y grows up
- Pixel space: origin is the top-left corner of the plot area, y grows down
- Transformation: px = (x - lo) / (hi - lo) * width + x0

The output is declarative geometry (segments, axis lines, labelled ticks);
``generalstats.visualization.svg`` turns it into markup.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass

import numpy as np

from generalstats.core.constants import (
    CHART_HEIGHT,
    CHART_MARGIN,
    CHART_WIDTH,
    LINE_COLOR,
    TICK_LABEL_DIGITS,
)

logger = logging.getLogger(__name__)


class NoDataError(ValueError):
    """Nothing is left to plot after filtering or dropping undefined values."""


@dataclass(frozen=True)
class Segment:
    """A straight line between two pixel positions."""

    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Tick:
    """A labelled gridline position on one axis."""

    value: float
    position: float  # Pixel coordinate along the axis
    label: str


@dataclass
class Chart:
    """Drawable geometry for one x/y statistic pair."""

    points: list[tuple[float, float]]  # Valid data points, in drawing order
    segments: list[Segment]
    axis_lines: list[Segment]
    x_ticks: list[Tick]
    y_ticks: list[Tick]
    data_min: tuple[float, float]
    data_max: tuple[float, float]
    origin: tuple[int, int]
    size: tuple[int, int]
    color: str = LINE_COLOR
    dropped: int = 0  # Pairs discarded for an undefined coordinate

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AxisScale:
    """Maps one data range onto one pixel span."""

    lo: float
    hi: float
    start: float
    length: float
    inverted: bool = False

    @property
    def is_flat(self) -> bool:
        return self.hi == self.lo

    def to_pixel(self, value: float) -> float:
        if self.is_flat:
            # Degenerate range: every value sits mid-axis
            return self.start + self.length / 2
        if self.inverted:
            return (self.hi - value) / (self.hi - self.lo) * self.length + self.start
        return (value - self.lo) / (self.hi - self.lo) * self.length + self.start


def transform(
    point: tuple[float, float],
    lo: tuple[float, float],
    hi: tuple[float, float],
    x: float,
    y: float,
    w: float,
    h: float,
) -> tuple[float, float]:
    """
    Transform a data point to pixel coordinates.

    Args:
        point: Data-space ``(x, y)``
        lo: Data minimum on each axis
        hi: Data maximum on each axis
        x: Left edge of the plot area
        y: Top edge of the plot area
        w: Plot width
        h: Plot height

    Returns:
        Pixel ``(px, py)``; the data maximum on y maps to the top edge. A
        flat axis (``lo == hi``) maps to the middle of its span.
    """
    x_scale = AxisScale(lo[0], hi[0], x, w)
    y_scale = AxisScale(lo[1], hi[1], y, h, inverted=True)
    return (x_scale.to_pixel(point[0]), y_scale.to_pixel(point[1]))


def tick_interval(lo: float, hi: float, extra_halving: bool = False) -> float:
    """
    Pick the spacing between ticks for a data range.

    Starts from the largest power of ten not above the span and halves it
    while the span holds too few intervals: once if six or fewer fit, and
    (for the y axis) once more if five or fewer still fit.

    Args:
        lo: Range minimum
        hi: Range maximum (must exceed *lo*)
        extra_halving: Apply the second halving step (y axis)

    Returns:
        Tick spacing in data units
    """
    span = hi - lo
    if not span > 0 or not math.isfinite(span):
        raise ValueError(f"tick range must be finite and non-empty, got [{lo}, {hi}]")

    interval = 10.0 ** math.floor(math.log10(span))
    if span / interval <= 6:
        interval /= 2
    if extra_halving and span / interval <= 5:
        interval /= 2
    return interval


def tick_values(lo: float, hi: float, extra_halving: bool = False) -> list[float]:
    """
    Tick values from the interval-aligned floor of *lo* up to (excluding) *hi*.

    A flat range yields a single tick at its value.
    """
    if hi == lo:
        return [lo]

    interval = tick_interval(lo, hi, extra_halving)
    start = math.floor(lo / interval) * interval

    values = []
    k = 0
    while (step := start + k * interval) < hi:
        values.append(step)
        k += 1

    logger.debug(f"Ticks for [{lo}, {hi}]: interval {interval}, {len(values)} ticks")
    return values


def format_tick(value: float) -> str:
    """Format a tick label to three significant digits."""
    return f"{value:.{TICK_LABEL_DIGITS}G}"


def _axis_ticks(scale: AxisScale, extra_halving: bool) -> list[Tick]:
    return [
        Tick(value=value, position=scale.to_pixel(value), label=format_tick(value))
        for value in tick_values(scale.lo, scale.hi, extra_halving)
    ]


def valid_pairs(xs: Sequence[float], ys: Sequence[float]) -> tuple[np.ndarray, np.ndarray]:
    """
    Pair two index-aligned series, drop undefined pairs and sort for drawing.

    Pairs are ordered by x, then y. This is a drawing order, not the match
    order: matches far apart in time with equal x values end up adjacent so
    the line reads left to right instead of doubling back.

    Returns:
        ``(x, y)`` arrays of the surviving pairs
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"series lengths differ: {x.size} x values, {y.size} y values")

    keep = ~(np.isnan(x) | np.isnan(y))
    x, y = x[keep], y[keep]

    # lexsort uses the last key as the primary one
    order = np.lexsort((y, x))
    return x[order], y[order]


def build_chart(
    xs: Sequence[float],
    ys: Sequence[float],
    origin: tuple[int, int] = (CHART_MARGIN, CHART_MARGIN),
    size: tuple[int, int] = (CHART_WIDTH, CHART_HEIGHT),
    color: str = LINE_COLOR,
) -> Chart:
    """
    Build chart geometry for two evaluated series.

    Args:
        xs: X statistic, one value per match (NaN = undefined)
        ys: Y statistic, index-aligned with *xs*
        origin: Pixel position of the plot area's top-left corner
        size: Pixel ``(width, height)`` of the plot area
        color: Stroke color for the data line

    Returns:
        Chart with N-1 segments for N valid points, both axis lines and ticks

    Raises:
        NoDataError: If no pair has both values defined
        ValueError: If the series lengths differ
    """
    x, y = valid_pairs(xs, ys)
    dropped = len(xs) - int(x.size)
    if x.size == 0:
        raise NoDataError("no data")

    data_min = (float(x.min()), float(y.min()))
    data_max = (float(x.max()), float(y.max()))
    x0, y0 = origin
    w, h = size

    x_scale = AxisScale(data_min[0], data_max[0], x0, w)
    y_scale = AxisScale(data_min[1], data_max[1], y0, h, inverted=True)

    points = [(float(px), float(py)) for px, py in zip(x, y)]
    pixels = [(x_scale.to_pixel(px), y_scale.to_pixel(py)) for px, py in points]
    segments = [
        Segment(x1=a[0], y1=a[1], x2=b[0], y2=b[1]) for a, b in zip(pixels, pixels[1:])
    ]

    axis_lines = [
        Segment(x1=x0, y1=y0 + h, x2=x0 + w, y2=y0 + h),  # x axis along the bottom
        Segment(x1=x0, y1=y0, x2=x0, y2=y0 + h),  # y axis along the left
    ]

    logger.debug(
        f"Chart: {x.size} points ({dropped} dropped), "
        f"x in [{data_min[0]}, {data_max[0]}], y in [{data_min[1]}, {data_max[1]}]"
    )

    return Chart(
        points=points,
        segments=segments,
        axis_lines=axis_lines,
        x_ticks=_axis_ticks(x_scale, extra_halving=False),
        y_ticks=_axis_ticks(y_scale, extra_halving=True),
        data_min=data_min,
        data_max=data_max,
        origin=origin,
        size=size,
        color=color,
        dropped=dropped,
    )
