"""Core data models for CardaSort.

This module defines the data structures shared by the engine, codec and session:
- Item / Tag: The things being ranked and their display metadata
- Pair: A pending comparison between two item ids
- SorterState: An immutable snapshot of a sorting run
- RankGroup / SortProgress: Result and progress types
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


class Judgment(str, Enum):
    """A user's verdict on the current pair."""

    LEFT = "left"
    RIGHT = "right"
    TIE = "tie"


class RankingStrategy(str, Enum):
    """How the final graph is partitioned into rank groups."""

    WINS = "wins"
    LAYERS = "layers"


class Tag(BaseModel):
    """A tag attached to an item."""

    id: int
    name: str


class Item(BaseModel):
    """An item to rank.

    The engine identifies items by ``id`` only. Everything else is carried
    through for display and filtering.

    Attributes:
        id: Stable unique identifier supplied by the item source.
        name: Display name.
        image_url: Optional image reference.
        tags: Associated tags.
        category_id: Optional category, used by ItemFilter.
    """

    id: int
    name: str
    image_url: str | None = None
    tags: list[Tag] = Field(default_factory=list)
    category_id: int | None = None

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]


class Pair(BaseModel):
    """A comparison awaiting judgment, in display orientation."""

    model_config = ConfigDict(frozen=True)

    left: int
    right: int

    def key(self) -> frozenset[int]:
        """Orientation-free identity of the pair."""
        return frozenset((self.left, self.right))


class RankGroup(BaseModel):
    """Items sharing one rank.

    Attributes:
        members: Items in this group, in input order.
        wins: Shared win count for win-based groups, None for layered groups.
    """

    members: list[Item]
    wins: int | None = None

    @property
    def ids(self) -> list[int]:
        return [item.id for item in self.members]


class SorterState(BaseModel):
    """Snapshot of a sorting run.

    States are never mutated. Each judgment produces a new state, so a caller
    may keep older states around for back navigation.

    Attributes:
        items: Every item being ranked, in input order.
        graph: Item id -> ids it is known to beat (directly or transitively).
        remaining_pairs: Unresolved comparisons; the head is the current pair.
        left_id: Left side of the current pair, None when finished.
        right_id: Right side of the current pair, None when finished.
        round: Comparison counter shown to the user, starts at 1.
        ranking: Final rank groups, empty until finished.
        started: Whether the run has been initialized.
        is_finished: Whether every pair has been judged or inferred.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[Item, ...] = ()
    graph: dict[int, frozenset[int]] = Field(default_factory=dict)
    remaining_pairs: tuple[Pair, ...] = ()
    left_id: int | None = None
    right_id: int | None = None
    round: int = 1
    ranking: tuple[RankGroup, ...] = ()
    started: bool = False
    is_finished: bool = False

    def item_map(self) -> Mapping[int, Item]:
        return {item.id: item for item in self.items}

    @property
    def current_pair(self) -> Pair | None:
        if self.left_id is None or self.right_id is None:
            return None
        return Pair(left=self.left_id, right=self.right_id)

    @property
    def left_item(self) -> Item | None:
        if self.left_id is None:
            return None
        return self.item_map().get(self.left_id)

    @property
    def right_item(self) -> Item | None:
        if self.right_id is None:
            return None
        return self.item_map().get(self.right_id)

    @property
    def total_pairs(self) -> int:
        n = len(self.items)
        return n * (n - 1) // 2

    def beats(self, winner: int, loser: int) -> bool:
        """Whether ``winner`` is known to beat ``loser``."""
        return loser in self.graph.get(winner, frozenset())


class SortProgress(BaseModel):
    """Progress counters for a sorting run.

    Attributes:
        comparisons: Current round number.
        remaining: Pairs still pending.
        total_pairs: C(n, 2) for the item set.
        percent: Share of pairs resolved, 0-100.
    """

    comparisons: int
    remaining: int
    total_pairs: int
    percent: int = 0
