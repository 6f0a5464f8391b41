"""
GeneralStats Core - Foundation modules shared by analysis and integrations.

This module contains the fundamental components:
- constants: Game modes and layout/configuration defaults
- config: Application configuration management
- models: Match records and their wire format
"""

from generalstats.core.constants import (
    CHART_HEIGHT,
    CHART_MARGIN,
    CHART_WIDTH,
    LINE_COLOR,
    REPLAYS_API_BASE,
    REPLAYS_PAGE_SIZE,
    GameMode,
)
from generalstats.core.models import (
    MatchRecord,
    Placement,
    RankingPayload,
    ReplayPayload,
)

__all__ = [
    # Enums
    "GameMode",
    # Constants
    "CHART_HEIGHT",
    "CHART_MARGIN",
    "CHART_WIDTH",
    "LINE_COLOR",
    "REPLAYS_API_BASE",
    "REPLAYS_PAGE_SIZE",
    # Records
    "MatchRecord",
    "Placement",
    "RankingPayload",
    "ReplayPayload",
]
