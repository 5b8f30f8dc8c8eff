"""Tests for SortSession."""

import random

import pytest

from cardasort import (
    Config,
    InvalidStateTransitionError,
    Item,
    Judgment,
    RankingStrategy,
    SortSession,
    StateItemMismatchError,
)


@pytest.fixture
def items() -> list[Item]:
    return [Item(id=i, name=f"item-{i}") for i in (1, 2, 3)]


CHAIN_ORDER = [(1, 2), (2, 3), (1, 3)]


class TestSortSession:
    """Tests for driving a sort through a session."""

    def test_chain_finishes(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        session.left()
        session.left()
        assert session.is_finished
        assert [g.ids for g in session.ranking] == [[1], [2], [3]]
        assert session.history == [Judgment.LEFT, Judgment.LEFT]

    def test_ranking_empty_until_finished(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        assert session.ranking == []

    def test_progress(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        session.left()
        assert session.progress.remaining == 2
        assert session.progress.comparisons == 2

    def test_undo_restores_previous_state(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        first = session.state
        session.right()
        assert session.undo() is True
        assert session.state == first
        assert session.history == []

    def test_undo_replays_history(self, items: list[Item]) -> None:
        session = SortSession(items, order=[(1, 2), (1, 3), (2, 3)])
        session.tie()
        after_tie = session.state
        session.left()
        session.undo()
        assert session.state == after_tie
        assert session.history == [Judgment.TIE]

    def test_undo_out_of_finished(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        session.left()
        session.left()
        session.undo()
        assert not session.is_finished
        assert (session.state.left_id, session.state.right_id) == (2, 3)

    def test_undo_empty(self, items: list[Item]) -> None:
        assert SortSession(items, order=CHAIN_ORDER).undo() is False

    def test_ignored_judgment_not_recorded(self) -> None:
        session = SortSession([Item(id=1, name="only")])
        session.left()
        assert session.history == []

    def test_strict_config(self) -> None:
        session = SortSession([Item(id=1, name="only")], Config(strict=True))
        with pytest.raises(InvalidStateTransitionError):
            session.tie()

    def test_submit_by_name(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        session.submit("right")
        assert session.state.beats(2, 1)

    def test_seeded_sessions_match(self, items: list[Item]) -> None:
        a = SortSession(items, Config(seed=8))
        b = SortSession(items, rng=random.Random(8))
        assert a.state.remaining_pairs == b.state.remaining_pairs

    def test_layered_strategy(self) -> None:
        items = [Item(id=i, name=str(i)) for i in (1, 2, 3, 4)]
        order = [(1, 2), (3, 4), (1, 4), (1, 3), (2, 3), (2, 4)]
        session = SortSession(items, Config(ranking_strategy=RankingStrategy.LAYERS), order=order)
        session.left()  # 1 > 2
        session.left()  # 3 > 4
        session.left()  # 1 > 4
        session.tie()  # 1 ~ 3
        session.tie()  # 2 ~ 3
        session.tie()  # 2 ~ 4
        assert session.is_finished
        assert [g.ids for g in session.ranking] == [[1, 3], [2, 4]]
        assert [g.ids for g in session.state.ranking] == [[1], [3], [2, 4]]


class TestResume:
    """Tests for SortSession.resume() and token()."""

    def test_resume_round_trip(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        session.left()
        resumed = SortSession.resume(session.token(), items)
        assert resumed.state.graph == session.state.graph
        assert resumed.state.remaining_pairs == session.state.remaining_pairs
        assert resumed.history == []
        resumed.left()
        assert resumed.is_finished

    def test_resume_undo_stops_at_resume_point(self, items: list[Item]) -> None:
        session = SortSession(items, order=CHAIN_ORDER)
        session.left()
        resumed = SortSession.resume(session.token(), items)
        assert resumed.undo() is False

    def test_resume_stale_token(self, items: list[Item]) -> None:
        token = SortSession(items, order=CHAIN_ORDER).token()
        with pytest.raises(StateItemMismatchError):
            SortSession.resume(token, items[:2])
