"""
GeneralStats Analysis - match filters and per-match statistics.

- filters: predicates that restrict a match history
- statistics: per-match metrics, windowed smoothing and series evaluation
- descriptor: parsing of statistic labels such as ``Average[25,Percentile]``
"""

from generalstats.analysis.descriptor import DescriptorError, parse_statistic
from generalstats.analysis.filters import (
    AgainstOpponent,
    And,
    ByGameMode,
    Filter,
    Or,
    apply_filter,
    build_filter,
)
from generalstats.analysis.statistics import (
    STATISTICS,
    Average,
    Date,
    Number,
    Percentile,
    Stars,
    Statistic,
    Win,
    describe,
    evaluate_series,
    won_team_game,
)

__all__ = [
    # Filters
    "AgainstOpponent",
    "And",
    "ByGameMode",
    "Filter",
    "Or",
    "apply_filter",
    "build_filter",
    # Statistics
    "STATISTICS",
    "Average",
    "Date",
    "Number",
    "Percentile",
    "Stars",
    "Statistic",
    "Win",
    "describe",
    "evaluate_series",
    "won_team_game",
    # Descriptors
    "DescriptorError",
    "parse_statistic",
]
