"""Shared fixtures for GeneralStats tests."""

import pytest

from generalstats.core.constants import GameMode
from generalstats.core.models import MatchRecord, Placement


def build_match(
    mode: GameMode | str,
    names: list[str],
    stars: list[int] | None = None,
    match_id: str = "m",
    started_at: int = 0,
    turn_count: int = 100,
) -> MatchRecord:
    """Build a MatchRecord whose ranking follows *names* (best first)."""
    stars = stars if stars is not None else [50] * len(names)
    return MatchRecord(
        game_mode=GameMode(mode),
        id=match_id,
        started_at=started_at,
        turn_count=turn_count,
        ranking=tuple(
            Placement(player_name=f"acct_{name}", stars=s, display_name=name)
            for name, s in zip(names, stars)
        ),
    )


@pytest.fixture
def make_match():
    """Factory fixture for MatchRecords."""
    return build_match


@pytest.fixture
def history() -> list[MatchRecord]:
    """A mixed-mode history for 'me', newest first."""
    return [
        build_match("classic", ["me", "a", "b", "c"], match_id="r6", started_at=600),
        build_match("1v1", ["a", "me"], match_id="r5", started_at=500),
        build_match("classic", ["a", "b", "me"], match_id="r4", started_at=400),
        build_match("2v2", ["me", "x", "a", "b"], [60, 60, 40, 40], match_id="r3", started_at=300),
        build_match("custom", ["c", "me"], match_id="r2", started_at=200),
        build_match("classic", ["b", "me", "a"], match_id="r1", started_at=100),
    ]


@pytest.fixture
def replay_payloads() -> list[dict]:
    """Raw replay entries as served by the API."""
    return [
        {
            "type": "classic",
            "id": "HxYz",
            "started": 1600000000000,
            "turn": 250,
            "ranking": [
                {"name": "me", "stars": 55, "currentName": "me"},
                {"name": "rival", "stars": 60, "currentName": "rival"},
            ],
        },
        {
            "type": "1v1",
            "id": "AbCd",
            "started": 1599999999000,
            "turn": 180,
            "ranking": [
                {"name": "rival", "stars": 61, "currentName": "rival"},
                {"name": "me", "stars": 54, "currentName": "me"},
            ],
        },
    ]
