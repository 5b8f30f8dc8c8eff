"""Tests for the reporter module."""

import pytest

from cardasort import (
    Item,
    RankGroup,
    SortProgress,
    Tag,
    TextReporter,
    initialize,
    print_results,
    submit_left_wins,
)


@pytest.fixture
def items() -> list[Item]:
    return [
        Item(
            id=1,
            name="Kind of Blue",
            image_url="https://img.example/kob.png",
            tags=[Tag(id=1, name="jazz"), Tag(id=2, name="modal"), Tag(id=3, name="1959")],
        ),
        Item(id=2, name="Blue Train"),
        Item(id=3, name="Giant Steps"),
    ]


class TestTextReporterProgress:
    """Tests for TextReporter.format_progress()."""

    def test_counters(self) -> None:
        output = TextReporter().format_progress(
            SortProgress(comparisons=4, remaining=3, total_pairs=10, percent=70)
        )
        assert "Comparisons: 4" in output
        assert "Remaining: 3" in output
        assert "Total Pairs: 10" in output
        assert "70%" in output


class TestTextReporterComparison:
    """Tests for TextReporter.format_comparison()."""

    def test_current_pair(self, items: list[Item]) -> None:
        state = initialize(items, order=[(1, 2), (2, 3), (1, 3)])
        output = TextReporter().format_comparison(state)
        assert "A: Kind of Blue" in output
        assert "B: Blue Train" in output
        assert "jazz, modal, +1" in output
        assert "https://img.example/kob.png" in output
        assert "No Image" in output

    def test_finished_state(self, items: list[Item]) -> None:
        state = initialize(items[:1])
        assert TextReporter().format_comparison(state) == "Nothing left to compare."


class TestTextReporterRanking:
    """Tests for TextReporter.format_ranking()."""

    def test_ranking(self, items: list[Item]) -> None:
        ranking = [
            RankGroup(members=[items[0]], wins=2),
            RankGroup(members=[items[1], items[2]], wins=0),
        ]
        output = TextReporter().format_ranking(ranking)
        assert "3 item(s) sorted into 2 rank(s)." in output
        assert "Rank 1  (1 item, 2 wins)" in output
        assert "Rank 2  (2 items, 0 wins)" in output
        assert "- Giant Steps" in output

    def test_layered_group_has_no_wins(self, items: list[Item]) -> None:
        output = TextReporter().format_ranking([RankGroup(members=items)])
        assert "Rank 1  (3 items)" in output

    def test_empty_ranking(self) -> None:
        assert "0 item(s) sorted into 0 rank(s)." in TextReporter().format_ranking([])


class TestPrintResults:
    """Tests for print_results()."""

    def test_prints_finished_state(self, items: list[Item], capsys) -> None:
        state = initialize(items, order=[(1, 2), (2, 3), (1, 3)])
        state = submit_left_wins(submit_left_wins(state))
        print_results(state)
        assert "Rank 3" in capsys.readouterr().out

    def test_unfinished_state(self, items: list[Item]) -> None:
        with pytest.raises(ValueError, match="not finished"):
            print_results(initialize(items, order=[(1, 2), (2, 3), (1, 3)]))

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            print_results("ranking")
