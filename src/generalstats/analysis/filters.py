"""
Match filters.

A filter is an immutable predicate over a ``MatchRecord``. Filters compose
with ``And``/``Or`` (or the ``&``/``|`` operators) and are applied to a match
history before any statistic is evaluated, so the statistics only ever see
the matches a chart is about.

Usage:
    from generalstats.analysis.filters import AgainstOpponent, ByGameMode, apply_filter

    ffa_vs_rival = ByGameMode(GameMode.CLASSIC) & AgainstOpponent("rival")
    matches = apply_filter(ffa_vs_rival, matches)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from generalstats.core.constants import GameMode
from generalstats.core.models import MatchRecord

logger = logging.getLogger(__name__)


class Filter(ABC):
    """Predicate over a single match."""

    @abstractmethod
    def matches(self, record: MatchRecord) -> bool:
        """Return True if *record* should be kept."""

    def __and__(self, other: Filter) -> And:
        return And((self, other))

    def __or__(self, other: Filter) -> Or:
        return Or((self, other))


@dataclass(frozen=True)
class ByGameMode(Filter):
    """Keeps matches played in one game mode."""

    mode: GameMode

    def matches(self, record: MatchRecord) -> bool:
        return record.game_mode == self.mode


@dataclass(frozen=True)
class AgainstOpponent(Filter):
    """Keeps matches where *name* appears in the standings (by display name)."""

    name: str

    def matches(self, record: MatchRecord) -> bool:
        return record.has_player(self.name)


@dataclass(frozen=True)
class And(Filter):
    """All sub-filters must match. An empty ``And`` matches everything."""

    filters: tuple[Filter, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))

    def matches(self, record: MatchRecord) -> bool:
        return all(f.matches(record) for f in self.filters)


@dataclass(frozen=True)
class Or(Filter):
    """Any sub-filter must match. An empty ``Or`` matches nothing."""

    filters: tuple[Filter, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))

    def matches(self, record: MatchRecord) -> bool:
        return any(f.matches(record) for f in self.filters)


def apply_filter(record_filter: Filter, records: Iterable[MatchRecord]) -> list[MatchRecord]:
    """
    Keep the records *record_filter* matches, in their original order.

    Args:
        record_filter: Predicate to apply
        records: Match history (never modified)

    Returns:
        New list holding the surviving records
    """
    kept = [record for record in records if record_filter.matches(record)]
    logger.debug(f"Filter {record_filter!r} kept {len(kept)} matches")
    return kept


def build_filter(mode: GameMode | str | None = None, against: Sequence[str] = ()) -> Filter:
    """
    Build the filter used by the CLI and web endpoints.

    Args:
        mode: Restrict to one game mode (None = any mode)
        against: Restrict to matches containing any of these opponents

    Returns:
        An ``And`` over the requested restrictions (empty = keep everything)

    Raises:
        ValueError: If *mode* is not a known game mode
    """
    parts: list[Filter] = []
    if mode:
        parts.append(ByGameMode(GameMode(mode)))
    if against:
        parts.append(Or(tuple(AgainstOpponent(name) for name in against)))
    return And(tuple(parts))
