"""
GeneralStats Visualization - chart geometry and rendering.

This package provides:
- chart: Data-to-pixel transforms, polylines and axis ticks
- svg: SVG markup for chart geometry
"""

from generalstats.visualization.chart import (
    AxisScale,
    Chart,
    NoDataError,
    Segment,
    Tick,
    build_chart,
    format_tick,
    tick_interval,
    tick_values,
    transform,
    valid_pairs,
)
from generalstats.visualization.svg import render_svg

__all__ = [
    "AxisScale",
    "Chart",
    "NoDataError",
    "Segment",
    "Tick",
    "build_chart",
    "format_tick",
    "render_svg",
    "tick_interval",
    "tick_values",
    "transform",
    "valid_pairs",
]
