"""
GeneralStats Data Model

Match records as served by the replay history API, and their decoded,
immutable in-memory form. Every module downstream of the replay client
consumes ``MatchRecord``; nothing mutates one after decoding.

Wire shapes are declared as TypedDicts so producers (the HTTP client, test
fixtures) and the decoder agree on field names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict

from generalstats.core.constants import GameMode

# ============================================================
# WIRE FORMAT
# ============================================================


class RankingPayload(TypedDict):
    """One row of a replay's final standings."""

    name: str  # stable account name
    stars: int
    currentName: NotRequired[str]  # name shown during the match


class ReplayPayload(TypedDict):
    """One entry of ``/replaysForUsername``."""

    type: str  # "classic", "1v1", "2v2", "custom"
    id: str
    started: int  # epoch milliseconds
    turn: int
    ranking: list[RankingPayload]


# ============================================================
# DECODED RECORDS
# ============================================================


@dataclass(frozen=True)
class Placement:
    """A single player's row within a match's final standings."""

    player_name: str
    stars: int
    display_name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Placement:
        """Decode a ranking row. ``currentName`` falls back to ``name``."""
        try:
            name = str(data["name"])
        except KeyError as e:
            raise ValueError("ranking entry is missing 'name'") from e

        stars = int(data.get("stars", 0))
        if stars < 0:
            raise ValueError(f"ranking entry for {name!r} has negative stars: {stars}")

        return cls(
            player_name=name,
            stars=stars,
            display_name=str(data.get("currentName") or name),
        )

    def to_dict(self) -> RankingPayload:
        return {"name": self.player_name, "stars": self.stars, "currentName": self.display_name}


@dataclass(frozen=True)
class MatchRecord:
    """
    One completed game and its final standings.

    ``ranking`` is ordered by finishing rank, best first, and always holds at
    least one placement.
    """

    game_mode: GameMode
    id: str
    started_at: int
    turn_count: int
    ranking: tuple[Placement, ...]

    def __post_init__(self) -> None:
        if not self.ranking:
            raise ValueError(f"match {self.id!r} has an empty ranking")
        if self.turn_count < 0:
            raise ValueError(f"match {self.id!r} has a negative turn count")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchRecord:
        """
        Decode one replay history entry.

        Args:
            data: A ``ReplayPayload``-shaped dict

        Returns:
            The decoded MatchRecord

        Raises:
            ValueError: On an unknown game mode, missing fields or an empty ranking
        """
        try:
            raw_mode = data["type"]
            match_id = str(data["id"])
            ranking_data = data["ranking"]
        except KeyError as e:
            raise ValueError(f"replay entry is missing field {e.args[0]!r}") from e

        try:
            game_mode = GameMode(raw_mode)
        except ValueError as e:
            raise ValueError(f"replay {match_id!r} has unknown game mode {raw_mode!r}") from e

        return cls(
            game_mode=game_mode,
            id=match_id,
            started_at=int(data.get("started", 0)),
            turn_count=int(data.get("turn", 0)),
            ranking=tuple(Placement.from_dict(row) for row in ranking_data or []),
        )

    def to_dict(self) -> ReplayPayload:
        return {
            "type": self.game_mode.value,
            "id": self.id,
            "started": self.started_at,
            "turn": self.turn_count,
            "ranking": [p.to_dict() for p in self.ranking],
        }

    def find_placement(self, username: str) -> tuple[int, Placement] | None:
        """Return ``(rank_index, placement)`` for the first row displayed as *username*."""
        for i, placement in enumerate(self.ranking):
            if placement.display_name == username:
                return i, placement
        return None

    def has_player(self, username: str) -> bool:
        return self.find_placement(username) is not None
