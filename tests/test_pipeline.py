"""Tests for the stats pipeline."""

import math

import pytest

from generalstats.analysis.filters import build_filter
from generalstats.analysis.statistics import Average, Number, Percentile, Stars, Win
from generalstats.core.config import ChartConfig
from generalstats.pipeline import compute_series
from generalstats.visualization.chart import NoDataError


class TestComputeSeries:
    """Tests for compute_series."""

    def test_unfiltered(self, history):
        """Both series are evaluated over the whole history."""
        result = compute_series(history, Number(), Win(), "me")
        assert result.xs == [6.0, 5.0, 4.0, 3.0, 2.0, 1.0]
        assert result.ys == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]
        assert result.records == history

    def test_filter_applies_before_evaluation(self, history):
        """Positional statistics see only the filtered history."""
        result = compute_series(history, Number(), Percentile(), "me", build_filter("classic"))
        assert [r.id for r in result.records] == ["r6", "r4", "r1"]
        assert result.xs == [3.0, 2.0, 1.0]
        assert result.ys == [1.0, 0.0, 0.5]

    def test_nothing_left_raises(self, history):
        """A filter that removes everything means no data."""
        with pytest.raises(NoDataError, match="no data"):
            compute_series(history, Number(), Win(), "me", build_filter("2v2", ["nobody"]))

    def test_empty_history_raises(self):
        """An empty history means no data."""
        with pytest.raises(NoDataError):
            compute_series([], Number(), Win(), "me")

    def test_labels(self, history):
        """Labels are descriptor strings."""
        result = compute_series(history, Number(), Average(25, Percentile()), "me")
        assert result.x_label == "Number"
        assert result.y_label == "Average[25,Percentile]"

    def test_to_dict(self, history):
        """to_dict carries labels, counts and series."""
        data = compute_series(history, Number(), Win(), "me").to_dict()
        assert data["username"] == "me"
        assert data["x"] == "Number"
        assert data["y"] == "Win"
        assert data["matches"] == 6


class TestStatsResultChart:
    """Tests for chart construction from a result."""

    def test_chart_uses_config(self, history):
        """The chart follows the configured area and color."""
        result = compute_series(history, Number(), Percentile(), "me")
        chart = result.chart(ChartConfig(margin=10, width=200, height=100, line_color="green"))
        assert chart.origin == (10, 10)
        assert chart.size == (200, 100)
        assert chart.color == "green"
        assert len(chart.segments) == len(history) - 1

    def test_undefined_series_raises(self, make_match):
        """A history where the subject never appears has nothing to plot for Stars."""
        records = [make_match("1v1", ["a", "b"]), make_match("1v1", ["b", "a"])]
        result = compute_series(records, Number(), Stars(), "me")
        assert all(math.isnan(v) for v in result.ys)
        with pytest.raises(NoDataError):
            result.chart()
