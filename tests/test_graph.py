"""Tests for the preference graph."""

from cardasort import PreferenceGraph


class TestPreferenceGraph:
    """Tests for PreferenceGraph."""

    def test_empty_nodes(self) -> None:
        graph = PreferenceGraph([1, 2, 3])
        assert graph.nodes == [1, 2, 3]
        assert graph.edge_count() == 0
        assert not graph.can_infer(1, 2)

    def test_direct_win(self) -> None:
        graph = PreferenceGraph([1, 2])
        graph.add_win(1, 2)
        assert graph.beats(1, 2)
        assert not graph.beats(2, 1)
        assert graph.can_infer(1, 2)
        assert graph.can_infer(2, 1)

    def test_chain_infers_transitive(self) -> None:
        """A>B and B>C implies A>C."""
        graph = PreferenceGraph([1, 2, 3])
        graph.add_win(1, 2)
        graph.add_win(2, 3)
        assert graph.beats(1, 3)
        assert graph.win_count(1) == 2

    def test_chain_added_backwards(self) -> None:
        """Closure holds regardless of the order edges arrive in."""
        graph = PreferenceGraph([1, 2, 3, 4])
        graph.add_win(3, 4)
        graph.add_win(2, 3)
        graph.add_win(1, 2)
        assert graph.beaten_by(1) == {2, 3, 4}
        assert graph.beaten_by(2) == {3, 4}

    def test_joining_two_chains(self) -> None:
        """One edge between chains links every upstream to every downstream."""
        graph = PreferenceGraph([1, 2, 3, 4])
        graph.add_win(1, 2)
        graph.add_win(3, 4)
        graph.add_win(2, 3)
        assert graph.beaten_by(1) == {2, 3, 4}
        assert graph.beaten_by(2) == {3, 4}
        assert graph.beaten_by(3) == {4}
        assert graph.beaten_by(4) == set()

    def test_close_nonclosed_mapping(self) -> None:
        """close() completes a relation built from raw edges."""
        graph = PreferenceGraph.from_mapping({1: [2], 2: [3], 3: [4], 4: []})
        graph.close()
        assert graph.beaten_by(1) == {2, 3, 4}

    def test_beaten_by_is_copy(self) -> None:
        graph = PreferenceGraph([1, 2])
        graph.add_win(1, 2)
        graph.beaten_by(1).add(99)
        assert graph.beaten_by(1) == {2}

    def test_unknown_node(self) -> None:
        graph = PreferenceGraph([1])
        assert not graph.beats(5, 1)
        assert graph.win_count(5) == 0

    def test_contradiction_detected(self) -> None:
        graph = PreferenceGraph.from_mapping({1: [2], 2: [1]})
        assert graph.has_contradiction()
        assert not PreferenceGraph.from_mapping({1: [2], 2: []}).has_contradiction()

    def test_freeze_and_wire(self) -> None:
        graph = PreferenceGraph([2, 1])
        graph.add_win(2, 1)
        assert graph.freeze() == {2: frozenset({1}), 1: frozenset()}
        assert graph.to_wire() == [(2, [1]), (1, [])]

    def test_equality(self) -> None:
        a = PreferenceGraph.from_mapping({1: [2], 2: []})
        b = PreferenceGraph([1, 2])
        b.add_win(1, 2)
        assert a == b
