"""
SVG rendering for chart geometry.

Produces a standalone ``<svg>`` element sized to the plot area plus a margin
on every side. Tick labels sit half a margin outside the plot area.
"""

from __future__ import annotations

import html

from generalstats.core.constants import (
    AXIS_COLOR,
    AXIS_STROKE_WIDTH,
    CHART_MARGIN,
    LINE_STROKE_WIDTH,
)
from generalstats.visualization.chart import Chart, Segment


def _line(segment: Segment, color: str, width: int) -> str:
    return (
        f'<line x1="{segment.x1:f}" y1="{segment.y1:f}" x2="{segment.x2:f}" y2="{segment.y2:f}" '
        f'stroke-width="{width}" stroke="{html.escape(color)}" />'
    )


def _text(x: float, y: float, label: str) -> str:
    return f'<text x="{x:f}" y="{y:f}" text-anchor="middle">{html.escape(label)}</text>'


def render_svg(chart: Chart, margin: int = CHART_MARGIN, axis_color: str = AXIS_COLOR) -> str:
    """
    Render *chart* as SVG markup.

    Args:
        chart: Geometry from ``build_chart``
        margin: Space around the plot area, in pixels
        axis_color: Stroke color for both axis lines

    Returns:
        SVG document fragment as a string
    """
    x0, y0 = chart.origin
    w, h = chart.size
    total_w = w + 2 * margin
    total_h = h + 2 * margin

    parts = [
        f'<svg viewBox="0 0 {total_w} {total_h}" width="{total_w}" height="{total_h}" '
        'xmlns="http://www.w3.org/2000/svg">'
    ]
    parts.extend(_line(s, chart.color, LINE_STROKE_WIDTH) for s in chart.segments)
    parts.extend(_line(s, axis_color, AXIS_STROKE_WIDTH) for s in chart.axis_lines)

    label_y = y0 + h + margin / 2
    parts.extend(_text(t.position, label_y, t.label) for t in chart.x_ticks)

    label_x = margin / 2
    parts.extend(_text(label_x, t.position, t.label) for t in chart.y_ticks)

    parts.append("</svg>")
    return "".join(parts)
