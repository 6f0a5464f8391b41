"""
Stats Pipeline - match history to plottable series.

Filters a match history, evaluates the x and y statistics over what is left
and builds chart geometry from the result. Fetching is delegated to the
replay client so the computation can run on any in-memory history.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from generalstats.analysis.filters import And, Filter, apply_filter
from generalstats.analysis.statistics import Statistic, evaluate_series
from generalstats.core.config import ChartConfig
from generalstats.core.models import MatchRecord
from generalstats.visualization.chart import Chart, NoDataError, build_chart

logger = logging.getLogger(__name__)


@dataclass
class StatsResult:
    """Two index-aligned series evaluated over one filtered history."""

    username: str
    x_stat: Statistic
    y_stat: Statistic
    records: list[MatchRecord]
    xs: list[float]
    ys: list[float]

    @property
    def x_label(self) -> str:
        return self.x_stat.describe()

    @property
    def y_label(self) -> str:
        return self.y_stat.describe()

    def chart(self, config: ChartConfig | None = None) -> Chart:
        """Build chart geometry; raises NoDataError when no pair is defined."""
        config = config or ChartConfig()
        return build_chart(
            self.xs, self.ys, origin=config.origin, size=config.size, color=config.line_color
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "x": self.x_label,
            "y": self.y_label,
            "matches": len(self.records),
            "xs": self.xs,
            "ys": self.ys,
        }


def compute_series(
    records: Sequence[MatchRecord],
    x_stat: Statistic,
    y_stat: Statistic,
    username: str,
    record_filter: Filter | None = None,
) -> StatsResult:
    """
    Filter *records* and evaluate both statistics over the survivors.

    Args:
        records: Match history in source order (newest first from the API)
        x_stat: Statistic for the x axis
        y_stat: Statistic for the y axis
        username: Subject of both statistics
        record_filter: Restriction applied first (None = keep everything)

    Returns:
        StatsResult with one x and one y value per surviving match

    Raises:
        NoDataError: If no match survives the filter
    """
    kept = apply_filter(record_filter or And(), records)
    if not kept:
        raise NoDataError("no data")

    xs = evaluate_series(x_stat, kept, username)
    ys = evaluate_series(y_stat, kept, username)
    logger.info(
        f"{username}: {x_stat.describe()} vs {y_stat.describe()} over {len(kept)} "
        f"of {len(records)} matches"
    )
    return StatsResult(
        username=username, x_stat=x_stat, y_stat=y_stat, records=kept, xs=xs, ys=ys
    )
