"""Tests for per-match statistics."""

import math
import time
from unittest.mock import MagicMock

import pytest

from generalstats.analysis.statistics import (
    STATISTICS,
    Average,
    Date,
    Number,
    Percentile,
    Stars,
    Win,
    describe,
    evaluate_series,
    won_team_game,
)


class TestWin:
    """Tests for the Win statistic."""

    def test_first_place_wins(self, history):
        """Win follows first place in free-for-all, 1v1 and custom."""
        assert evaluate_series(Win(), history, "me") == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]

    def test_absent_subject_loses(self, make_match):
        """A subject missing from the match did not win it."""
        records = [make_match("classic", ["a", "b"])]
        assert Win().evaluate(records, 0, "me") == 0.0

    def test_unsupported_mode_raises(self):
        """A mode without a rule is an error, not a silent zero."""
        record = MagicMock()
        record.game_mode = "3v3"
        with pytest.raises(ValueError, match="no rule"):
            Win().evaluate([record], 0, "me")


class TestTeamGames:
    """Tests for the 2v2 winner heuristic."""

    def test_star_rule(self, make_match):
        """Holding the winner's stars means winning."""
        record = make_match("2v2", ["a", "me", "b", "c"], [70, 70, 30, 30])
        assert won_team_game(record, "me")
        assert not won_team_game(record, "b")

    def test_tied_top_three_uses_first_two_seats(self, make_match):
        """When three rows share the top stars, seats 0 and 1 win."""
        record = make_match("2v2", ["a", "b", "me", "c"], [50, 50, 50, 50])
        assert won_team_game(record, "a")
        assert won_team_game(record, "b")
        assert not won_team_game(record, "me")

    def test_short_ranking_uses_star_rule(self, make_match):
        """Fewer than three rows never counts as tied."""
        record = make_match("2v2", ["a", "me"], [50, 50])
        assert won_team_game(record, "me")

    def test_win_and_percentile_agree(self, make_match):
        """Team modes score Win and Percentile the same way."""
        records = [make_match("2v2", ["a", "me", "b", "c"], [70, 70, 30, 30])]
        assert Win().evaluate(records, 0, "me") == 1.0
        assert Percentile().evaluate(records, 0, "me") == 1.0


class TestStars:
    """Tests for the Stars statistic."""

    def test_reports_subject_stars(self, make_match):
        """Stars returns the subject's own rating."""
        records = [make_match("1v1", ["a", "me"], [61, 54])]
        assert Stars().evaluate(records, 0, "me") == 54.0

    def test_absent_is_nan(self, make_match):
        """Stars is undefined for matches without the subject."""
        records = [make_match("1v1", ["a", "b"])]
        assert math.isnan(Stars().evaluate(records, 0, "me"))


class TestPercentile:
    """Tests for the Percentile statistic."""

    def test_history(self, history):
        """Percentile scales finishing rank to [0, 1]."""
        assert evaluate_series(Percentile(), history, "me") == [1.0, 0.0, 0.0, 1.0, 0.0, 0.5]

    def test_middle_of_four(self, make_match):
        """Second of four scores two thirds."""
        records = [make_match("classic", ["a", "me", "b", "c"])]
        assert Percentile().evaluate(records, 0, "me") == pytest.approx(2 / 3)

    def test_single_player(self, make_match):
        """A lone finisher scores 1."""
        records = [make_match("custom", ["me"])]
        assert Percentile().evaluate(records, 0, "me") == 1.0

    def test_absent_is_zero(self, make_match):
        """A missing subject scores 0 in free-for-all."""
        records = [make_match("classic", ["a", "b", "c"])]
        assert Percentile().evaluate(records, 0, "me") == 0.0


class TestNumberAndDate:
    """Tests for positional statistics."""

    def test_number_counts_down(self, history):
        """The last record is number 1."""
        assert evaluate_series(Number(), history, "me") == [6.0, 5.0, 4.0, 3.0, 2.0, 1.0]

    def test_number_ignores_subject(self, history):
        """Number is defined even for unknown subjects."""
        assert Number().evaluate(history, 0, "nobody") == 6.0

    def test_date(self, history):
        """Date is the start timestamp."""
        assert Date().evaluate(history, 2, "me") == 400.0


class TestAverage:
    """Tests for the parabolic moving average."""

    def test_centre_of_window(self, history):
        """Weights 0, 0.75, 1, 0.75 around index 2."""
        records = history[:5]
        assert Average(2, Number()).evaluate(records, 2, "me") == pytest.approx(3.0)

    def test_window_clipped_at_start(self, history):
        """Offsets outside the history contribute nothing."""
        records = history[:5]
        assert Average(2, Number()).evaluate(records, 0, "me") == pytest.approx(32 / 7)

    def test_window_of_one_is_identity(self, history):
        """With n=1 only the centre has weight."""
        smoothed = evaluate_series(Average(1, Percentile()), history, "me")
        assert smoothed == evaluate_series(Percentile(), history, "me")

    def test_zero_window_is_nan(self, history):
        """n=0 has no weight at all."""
        assert math.isnan(Average(0, Win()).evaluate(history, 0, "me"))

    def test_skips_undefined_neighbours(self, make_match):
        """NaN neighbours carry no weight."""
        records = [
            make_match("1v1", ["me", "a"], [40, 10]),
            make_match("1v1", ["a", "b"]),
            make_match("1v1", ["me", "a"], [20, 10]),
        ]
        # index 1 is undefined; offsets -1 and +1 both weigh 0.75
        assert Average(2, Stars()).evaluate(records, 1, "me") == pytest.approx(30.0)
        assert Average(2, Stars()).evaluate(records, 2, "me") == pytest.approx(20.0)

    def test_all_undefined_is_nan(self, make_match):
        """A window with no defined values is NaN."""
        records = [make_match("1v1", ["a", "b"]) for _ in range(3)]
        assert math.isnan(Average(3, Stars()).evaluate(records, 1, "me"))

    def test_negative_window_raises(self):
        """The window must be non-negative."""
        with pytest.raises(ValueError):
            Average(-1, Win())

    def test_nested(self, history):
        """Averages of averages evaluate."""
        value = Average(2, Average(2, Win())).evaluate(history, 3, "me")
        assert 0.0 <= value <= 1.0

    def test_huge_window_over_short_history(self, history):
        """Window cost is bounded by the history, not by n."""
        start = time.perf_counter()
        smoothed = evaluate_series(Average(10**30, Number()), history, "me")
        nested = evaluate_series(Average(10**30, Average(10**30, Win())), history, "me")
        assert time.perf_counter() - start < 1.0

        # Weights are all but 1, so every position sees the plain mean
        assert smoothed == pytest.approx([3.5] * len(history))
        assert nested == pytest.approx([2 / 6] * len(history))

    def test_clipped_window_matches_full_scan(self, history):
        """Clipping to the history keeps the weights of the asymmetric window."""
        n = 4
        for index in range(len(history)):
            total_value = total_weight = 0.0
            for offset in range(-n, n):
                if 0 <= index + offset < len(history):
                    weight = 1 - (offset / n) ** 2
                    total_value += Number().evaluate(history, index + offset, "me") * weight
                    total_weight += weight
            expected = total_value / total_weight
            assert Average(n, Number()).evaluate(history, index, "me") == pytest.approx(expected)


class TestDescribe:
    """Tests for descriptor labels."""

    def test_simple(self):
        """Simple statistics describe as their name."""
        assert describe(Win()) == "Win"
        assert str(Percentile()) == "Percentile"

    def test_average(self):
        """Average lists its window and inner statistic."""
        assert describe(Average(25, Percentile())) == "Average[25,Percentile]"

    def test_nested(self):
        """Nested averages describe recursively."""
        assert Average(3, Average(2, Stars())).describe() == "Average[3,Average[2,Stars]]"

    def test_registry(self):
        """Every variant is registered under its name."""
        assert set(STATISTICS) == {"Win", "Stars", "Percentile", "Number", "Date", "Average"}


class TestEvaluateSeries:
    """Tests for series evaluation."""

    def test_index_aligned(self, history):
        """One value per record."""
        assert len(evaluate_series(Stars(), history, "me")) == len(history)

    def test_empty_history(self):
        """An empty history gives an empty series."""
        assert evaluate_series(Win(), [], "me") == []
