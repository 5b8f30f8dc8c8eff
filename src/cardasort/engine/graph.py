"""Preference graph with transitive closure.

The graph maps each item id to the set of ids it beats. After every update the
relation is transitively closed, so "a beats c" is recorded whenever
"a beats b" and "b beats c" are.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class PreferenceGraph:
    """Mutable working copy of a beats-relation.

    SorterState stores the relation as frozensets. The engine copies it into a
    PreferenceGraph, applies a judgment, and freezes the result again.

    Example:
        ```python
        graph = PreferenceGraph([1, 2, 3])
        graph.add_win(1, 2)
        graph.add_win(2, 3)
        graph.beats(1, 3)  # True
        ```
    """

    def __init__(self, nodes: Iterable[int] = ()):
        self._beats: dict[int, set[int]] = {node: set() for node in nodes}

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, Iterable[int]]) -> PreferenceGraph:
        graph = cls()
        for node, beaten in mapping.items():
            graph._beats[node] = set(beaten)
        return graph

    @property
    def nodes(self) -> list[int]:
        return list(self._beats)

    def beaten_by(self, node: int) -> set[int]:
        """Ids that ``node`` beats (a copy)."""
        return set(self._beats.get(node, ()))

    def beats(self, winner: int, loser: int) -> bool:
        return loser in self._beats.get(winner, ())

    def can_infer(self, a: int, b: int) -> bool:
        """Whether the order of a and b is already known."""
        return self.beats(a, b) or self.beats(b, a)

    def add_win(self, winner: int, loser: int) -> None:
        """Record ``winner`` beating ``loser`` and restore closure."""
        self._beats.setdefault(winner, set()).add(loser)
        self._beats.setdefault(loser, set())
        self.close()

    def close(self) -> None:
        """Run one Warshall pass over the relation.

        Iterates the intermediate node k, then every i that beats k, and adds
        k's beaten set to i's. One pass reaches the fixed point.
        """
        for k in list(self._beats):
            via = self._beats[k]
            if not via:
                continue
            for i, beaten in self._beats.items():
                if i != k and k in beaten:
                    beaten |= via

    def win_count(self, node: int) -> int:
        return len(self._beats.get(node, ()))

    def edge_count(self) -> int:
        return sum(len(beaten) for beaten in self._beats.values())

    def has_contradiction(self) -> bool:
        """Whether any pair beats each other (or a node beats itself)."""
        for node, beaten in self._beats.items():
            if node in beaten:
                return True
            for other in beaten:
                if node in self._beats.get(other, ()):
                    return True
        return False

    def freeze(self) -> dict[int, frozenset[int]]:
        return {node: frozenset(beaten) for node, beaten in self._beats.items()}

    def to_wire(self) -> list[tuple[int, list[int]]]:
        """Serialize as ``(id, sorted beaten ids)`` entries in node order."""
        return [(node, sorted(beaten)) for node, beaten in self._beats.items()]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreferenceGraph):
            return NotImplemented
        return self._beats == other._beats

    def __repr__(self) -> str:
        return f"PreferenceGraph({self._beats!r})"
