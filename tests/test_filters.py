"""Tests for match filters."""

import pytest

from generalstats.analysis.filters import (
    AgainstOpponent,
    And,
    ByGameMode,
    Or,
    apply_filter,
    build_filter,
)
from generalstats.core.constants import GameMode


class TestByGameMode:
    """Tests for the game mode filter."""

    def test_keeps_only_mode(self, history):
        """Only matches of the requested mode survive."""
        kept = apply_filter(ByGameMode(GameMode.CLASSIC), history)
        assert [r.id for r in kept] == ["r6", "r4", "r1"]

    def test_no_match(self, make_match):
        """A mode nobody played yields an empty list."""
        records = [make_match("classic", ["me"])]
        assert apply_filter(ByGameMode(GameMode.TWO_V_TWO), records) == []


class TestAgainstOpponent:
    """Tests for the opponent filter."""

    def test_keeps_matches_with_opponent(self, history):
        """Matches containing the opponent survive, in original order."""
        kept = apply_filter(AgainstOpponent("c"), history)
        assert [r.id for r in kept] == ["r6", "r2"]

    def test_matches_display_name(self, make_match):
        """The opponent is looked up by display name."""
        record = make_match("1v1", ["me", "rival"])
        assert AgainstOpponent("rival").matches(record)
        assert not AgainstOpponent("acct_rival").matches(record)


class TestCombinators:
    """Tests for And/Or composition."""

    def test_empty_and_keeps_everything(self, history):
        """An empty And is the identity filter."""
        assert apply_filter(And(), history) == history

    def test_empty_or_keeps_nothing(self, history):
        """An empty Or matches nothing."""
        assert apply_filter(Or(), history) == []

    def test_and_requires_all(self, history):
        """And keeps matches satisfying every sub-filter."""
        f = And((ByGameMode(GameMode.CLASSIC), AgainstOpponent("c")))
        assert [r.id for r in apply_filter(f, history)] == ["r6"]

    def test_or_requires_any(self, history):
        """Or keeps matches satisfying at least one sub-filter."""
        f = Or((AgainstOpponent("c"), AgainstOpponent("x")))
        assert [r.id for r in apply_filter(f, history)] == ["r6", "r3", "r2"]

    def test_operators(self, history):
        """& and | build And and Or."""
        f = ByGameMode(GameMode.CLASSIC) & (AgainstOpponent("c") | AgainstOpponent("b"))
        assert isinstance(f, And)
        assert [r.id for r in apply_filter(f, history)] == ["r6", "r4", "r1"]

    def test_list_arguments_become_tuples(self):
        """Combinators accept lists and stay hashable."""
        f = And([ByGameMode(GameMode.CLASSIC)])
        assert isinstance(f.filters, tuple)
        assert hash(f) == hash(And((ByGameMode(GameMode.CLASSIC),)))

    def test_input_is_not_modified(self, history):
        """Filtering returns a new list and leaves the input alone."""
        before = list(history)
        apply_filter(ByGameMode(GameMode.ONE_V_ONE), history)
        assert history == before


class TestBuildFilter:
    """Tests for request filter construction."""

    def test_no_restrictions(self, history):
        """No mode and no opponents keeps everything."""
        assert apply_filter(build_filter(), history) == history

    def test_mode_string(self, history):
        """A mode value string is accepted."""
        kept = apply_filter(build_filter("1v1"), history)
        assert [r.id for r in kept] == ["r5"]

    def test_mode_and_opponents(self, history):
        """Mode and opponents combine with AND; opponents with OR."""
        kept = apply_filter(build_filter("classic", ["c", "nobody"]), history)
        assert [r.id for r in kept] == ["r6"]

    def test_unknown_mode_raises(self):
        """An unknown mode is rejected."""
        with pytest.raises(ValueError):
            build_filter("3v3")
