"""
GeneralStats Integrations - external data sources.

- replays: paginated replay history client
"""

from generalstats.integrations.replays import ReplayClient, ReplayFetchError

__all__ = ["ReplayClient", "ReplayFetchError"]
