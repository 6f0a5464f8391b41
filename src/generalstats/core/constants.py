"""
GeneralStats - Constants

Game modes reported by the replay history API, plus defaults for the replay
client and the chart layout.
"""

from enum import StrEnum


class GameMode(StrEnum):
    """
    Game modes as they appear in the ``type`` field of a replay entry.

    The set is closed: decoding rejects any other value, so every statistic
    only ever sees one of these four.
    """

    CLASSIC = "classic"  # Free-for-all, up to 8 players
    ONE_V_ONE = "1v1"
    TWO_V_TWO = "2v2"  # Two teams of two, four placements
    CUSTOM = "custom"  # Private lobbies, ranked like classic


# ============================================================================
# Replay history API
# ============================================================================

REPLAYS_API_BASE = "https://generals.io/api"
REPLAYS_ENDPOINT = "/replaysForUsername"

# The API serves at most this many replays per request
REPLAYS_PAGE_SIZE = 200
REPLAYS_TIMEOUT_SECONDS = 10.0

# ============================================================================
# Chart layout (pixels)
# ============================================================================

CHART_MARGIN = 64
CHART_WIDTH = 768
CHART_HEIGHT = 512

LINE_COLOR = "#1133ff"
LINE_STROKE_WIDTH = 2
AXIS_COLOR = "#111"
AXIS_STROKE_WIDTH = 4

# Significant digits used for tick labels
TICK_LABEL_DIGITS = 3

# ============================================================================
# Statistic defaults
# ============================================================================

# Window used by the CLI/web defaults: Average[25,Percentile]
DEFAULT_SMOOTHING_WINDOW = 25
DEFAULT_X_STATISTIC = "Number"
DEFAULT_Y_STATISTIC = f"Average[{DEFAULT_SMOOTHING_WINDOW},Percentile]"
