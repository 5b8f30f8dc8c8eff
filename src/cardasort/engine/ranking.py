"""Rank-group construction from a finished preference graph.

Two strategies are provided:
- build_ranking: group by win count (out-degree), most wins first
- build_layered_ranking: peel off unbeaten items layer by layer

Ties carry no preference edge, so two items separated only by a tie can still
land in different groups when their win counts differ.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import AbstractSet

from ..models import Item, RankGroup, RankingStrategy

logger = logging.getLogger(__name__)


def build_ranking(
    items: Sequence[Item],
    graph: Mapping[int, AbstractSet[int]],
) -> list[RankGroup]:
    """Group items by the number of items they beat.

    Args:
        items: Items in input order.
        graph: Closed beats-relation.

    Returns:
        Rank groups ordered from most wins to fewest. Items with equal wins
        keep their input order within a group.
    """
    wins = {item.id: len(graph.get(item.id, ())) for item in items}
    ordered = sorted(items, key=lambda item: wins[item.id], reverse=True)

    groups: list[RankGroup] = []
    for item in ordered:
        count = wins[item.id]
        if groups and groups[-1].wins == count:
            groups[-1].members.append(item)
        else:
            groups.append(RankGroup(members=[item], wins=count))
    return groups


def build_layered_ranking(
    items: Sequence[Item],
    graph: Mapping[int, AbstractSet[int]],
) -> list[RankGroup]:
    """Group items into layers of mutually unbeaten items.

    Each layer holds every remaining item that no other remaining item beats.
    If a cycle leaves no such item, the leftovers form one final group.
    """
    placed: set[int] = set()
    groups: list[RankGroup] = []

    while len(placed) < len(items):
        pending = [item for item in items if item.id not in placed]
        layer = [
            item
            for item in pending
            if not any(
                other.id != item.id and item.id in graph.get(other.id, ())
                for other in pending
            )
        ]
        if not layer:
            logger.warning(
                f"Preference graph has a cycle; placing {len(pending)} items in one group"
            )
            layer = pending
        groups.append(RankGroup(members=layer))
        placed.update(item.id for item in layer)

    return groups


def rank(
    items: Sequence[Item],
    graph: Mapping[int, AbstractSet[int]],
    strategy: RankingStrategy | str = RankingStrategy.WINS,
) -> list[RankGroup]:
    """Build a ranking with the given strategy."""
    strategy = RankingStrategy(strategy)
    if strategy is RankingStrategy.LAYERS:
        return build_layered_ranking(items, graph)
    return build_ranking(items, graph)
