"""
GeneralStats - Match History Charts for generals.io

Evaluates per-match statistics over a player's match history and charts one
statistic against another, with windowed smoothing to turn noisy per-match
values into trend lines.

Usage:
    from generalstats import ReplayClient, compute_series, parse_statistic

    replays = ReplayClient().get_replays("person2597")
    result = compute_series(
        replays, parse_statistic("Number"), parse_statistic("Average[25,Percentile]"), "person2597"
    )
    chart = result.chart()
"""

__version__ = "0.1.0"
__author__ = "GeneralStats Contributors"


def __getattr__(name):
    """Lazy import so ``import generalstats`` stays cheap."""
    # Records
    if name in ("MatchRecord", "Placement"):
        from generalstats.core import models

        return getattr(models, name)
    elif name == "GameMode":
        from generalstats.core.constants import GameMode

        return GameMode
    # Analysis
    elif name in ("Filter", "ByGameMode", "AgainstOpponent", "And", "Or", "apply_filter"):
        from generalstats.analysis import filters

        return getattr(filters, name)
    elif name in (
        "Statistic",
        "Win",
        "Stars",
        "Percentile",
        "Number",
        "Date",
        "Average",
        "evaluate_series",
        "describe",
    ):
        from generalstats.analysis import statistics

        return getattr(statistics, name)
    elif name in ("parse_statistic", "DescriptorError"):
        from generalstats.analysis import descriptor

        return getattr(descriptor, name)
    # Charts
    elif name in ("build_chart", "Chart", "NoDataError"):
        from generalstats.visualization import chart

        return getattr(chart, name)
    elif name == "render_svg":
        from generalstats.visualization.svg import render_svg

        return render_svg
    # Pipeline & integrations
    elif name in ("compute_series", "StatsResult"):
        from generalstats import pipeline

        return getattr(pipeline, name)
    elif name in ("ReplayClient", "ReplayFetchError"):
        from generalstats.integrations import replays

        return getattr(replays, name)
    raise AttributeError(f"module 'generalstats' has no attribute '{name}'")


__all__ = [
    # Version
    "__version__",
    # Records
    "GameMode",
    "MatchRecord",
    "Placement",
    # Filters
    "AgainstOpponent",
    "And",
    "ByGameMode",
    "Filter",
    "Or",
    "apply_filter",
    # Statistics
    "Average",
    "Date",
    "Number",
    "Percentile",
    "Stars",
    "Statistic",
    "Win",
    "describe",
    "evaluate_series",
    "DescriptorError",
    "parse_statistic",
    # Charts
    "Chart",
    "NoDataError",
    "build_chart",
    "render_svg",
    # Pipeline
    "StatsResult",
    "compute_series",
    "ReplayClient",
    "ReplayFetchError",
]
