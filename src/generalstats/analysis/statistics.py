"""
Per-match statistics and series evaluation.

A statistic maps ``(records, index, username)`` to a float, where
``records[index]`` is the match being scored and the rest of ``records``
gives context to combinators such as ``Average``. When a statistic cannot be
computed for a match (the subject is not in it) it returns ``math.nan``;
NaN means "exclude from aggregation" everywhere downstream and is never read
as zero.

Statistics are immutable value objects, so one instance can be evaluated
against any number of histories concurrently.

Each variant describes itself as a bracketed label such as
``Average[25,Percentile]``; ``generalstats.analysis.descriptor`` parses those
labels back into statistics.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from generalstats.core.constants import GameMode
from generalstats.core.models import MatchRecord

logger = logging.getLogger(__name__)


class Statistic(ABC):
    """A pure function of a match history position."""

    # Label used in descriptors
    name: str = ""

    @abstractmethod
    def evaluate(self, records: Sequence[MatchRecord], index: int, username: str) -> float:
        """Score ``records[index]`` for *username*; NaN when undefined."""

    def args(self) -> tuple[int | float | Statistic, ...]:
        """Constructor arguments, in descriptor order."""
        return ()

    def describe(self) -> str:
        args = self.args()
        if not args:
            return self.name
        rendered = [a.describe() if isinstance(a, Statistic) else str(a) for a in args]
        return f"{self.name}[{','.join(rendered)}]"

    def __str__(self) -> str:
        return self.describe()


def won_team_game(record: MatchRecord, username: str) -> bool:
    """
    Decide whether *username*'s team won a 2v2 match.

    The standings do not say who was teamed with whom. When the two teams
    finished on different star counts, the winners are whoever holds the
    winner's stars. When the top three rows share the winner's stars, the
    teams cannot be told apart and the first two rows are taken as the
    winning team.
    """
    ranking = record.ranking
    winning_stars = ranking[0].stars

    # Degenerate standings (fewer than three rows) use the star rule
    tied = (
        len(ranking) >= 3
        and ranking[1].stars == winning_stars
        and ranking[2].stars == winning_stars
    )
    if tied:
        return username in (ranking[0].display_name, ranking[1].display_name)

    return any(p.display_name == username and p.stars == winning_stars for p in ranking)


def _unsupported(record: MatchRecord, statistic: Statistic) -> ValueError:
    return ValueError(f"{statistic.name} has no rule for game mode {record.game_mode!r}")


@dataclass(frozen=True)
class Win(Statistic):
    """1 for a won match, 0 otherwise."""

    name = "Win"

    def evaluate(self, records: Sequence[MatchRecord], index: int, username: str) -> float:
        record = records[index]
        mode = record.game_mode

        if mode in (GameMode.CLASSIC, GameMode.CUSTOM, GameMode.ONE_V_ONE):
            return 1.0 if record.ranking[0].display_name == username else 0.0
        elif mode == GameMode.TWO_V_TWO:
            return 1.0 if won_team_game(record, username) else 0.0

        raise _unsupported(record, self)


@dataclass(frozen=True)
class Stars(Statistic):
    """The subject's star rating in that match; NaN if they are not in it."""

    name = "Stars"

    def evaluate(self, records: Sequence[MatchRecord], index: int, username: str) -> float:
        found = records[index].find_placement(username)
        if found is None:
            return math.nan
        return float(found[1].stars)


@dataclass(frozen=True)
class Percentile(Statistic):
    """
    Normalized finishing position in [0, 1], 1 being first place.

    Team modes only distinguish winners (1) from losers (0). A subject
    missing from a free-for-all ranking scores 0, unlike ``Stars`` which
    reports NaN.
    """

    name = "Percentile"

    def evaluate(self, records: Sequence[MatchRecord], index: int, username: str) -> float:
        record = records[index]
        mode = record.game_mode

        if mode in (GameMode.CLASSIC, GameMode.CUSTOM):
            found = record.find_placement(username)
            if found is None:
                return 0.0
            players = len(record.ranking)
            if players == 1:
                # A lone finisher is the best finisher
                return 1.0
            return (players - found[0] - 1) / (players - 1)
        elif mode == GameMode.ONE_V_ONE:
            return 1.0 if record.ranking[0].display_name == username else 0.0
        elif mode == GameMode.TWO_V_TWO:
            return 1.0 if won_team_game(record, username) else 0.0

        raise _unsupported(record, self)


@dataclass(frozen=True)
class Number(Statistic):
    """Countdown position in the history: the last record is 1."""

    name = "Number"

    def evaluate(self, records: Sequence[MatchRecord], index: int, username: str) -> float:
        return float(len(records) - index)


@dataclass(frozen=True)
class Date(Statistic):
    """Raw start timestamp of the match."""

    name = "Date"

    def evaluate(self, records: Sequence[MatchRecord], index: int, username: str) -> float:
        return float(records[index].started_at)


@dataclass(frozen=True)
class Average(Statistic):
    """
    Parabolic-kernel moving average of another statistic.

    Looks at offsets ``-n`` to ``n - 1`` around the scored match and weights
    each defined neighbour by ``1 - (offset / n) ** 2``: 1 at the centre,
    falling to 0 at ``-n``. Neighbours outside the history or undefined for
    the subject contribute no weight. With no weight at all (``n == 0``, or
    nothing defined in the window) the result is NaN.
    """

    n: int
    of: Statistic

    name = "Average"

    def __post_init__(self) -> None:
        if self.n < 0:
            raise ValueError(f"Average window must be non-negative, got {self.n}")

    def args(self) -> tuple[int | float | Statistic, ...]:
        return (self.n, self.of)

    def evaluate(self, records: Sequence[MatchRecord], index: int, username: str) -> float:
        total_value = 0.0
        total_weight = 0.0

        # Offsets outside the history carry no weight, so clip the window to it
        first = max(-self.n, -index)
        last = min(self.n, len(records) - index)

        for offset in range(first, last):
            idx = index + offset
            value = self.of.evaluate(records, idx, username)
            if math.isnan(value):
                continue

            weight = 1.0 - (offset / self.n) ** 2
            total_value += value * weight
            total_weight += weight

        if total_weight == 0:
            return math.nan
        return total_value / total_weight


# Closed set of variants, keyed by descriptor name
STATISTICS: dict[str, type[Statistic]] = {
    cls.name: cls for cls in (Win, Stars, Percentile, Number, Date, Average)
}


def evaluate_series(
    statistic: Statistic, records: Sequence[MatchRecord], username: str
) -> list[float]:
    """
    Evaluate *statistic* at every position of *records*.

    Args:
        statistic: Statistic to evaluate
        records: Filtered match history, in source order
        username: Subject (matched against each placement's display name)

    Returns:
        One value per record, index-aligned with *records*; NaN where undefined
    """
    values = [statistic.evaluate(records, i, username) for i in range(len(records))]
    undefined = sum(1 for v in values if math.isnan(v))
    logger.debug(
        f"Evaluated {statistic.describe()} over {len(values)} matches ({undefined} undefined)"
    )
    return values


def describe(statistic: Statistic) -> str:
    """Render *statistic* as a descriptor label, e.g. ``Average[25,Percentile]``."""
    return statistic.describe()
