"""Pairwise tournament sorter.

Ranks a fixed item set from user judgments on pairs. Every winning judgment is
folded into a transitively closed preference graph, and any pending pair whose
order the graph already implies is dropped, so a full ranking usually needs far
fewer than C(n, 2) comparisons.

All functions are pure: they take a SorterState and return a new one.

Example:
    ```python
    from cardasort.engine import initialize, submit_left_wins, submit_tie

    state = initialize(items)
    while not state.is_finished:
        state = submit_left_wins(state)
    for group in state.ranking:
        print([item.name for item in group.members])
    ```
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from ..config import Config
from ..exceptions import InvalidPairOrderError, InvalidStateTransitionError
from ..items import ensure_unique_ids
from ..models import Item, Judgment, Pair, SorterState, SortProgress
from .graph import PreferenceGraph
from .ranking import build_ranking

logger = logging.getLogger(__name__)


def shuffle_pairs(pairs: Sequence[Pair], rng: random.Random) -> list[Pair]:
    """Fisher-Yates shuffle into a new list."""
    shuffled = list(pairs)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def generate_pairs(items: Sequence[Item]) -> list[Pair]:
    """All unordered pairs, left side earlier in input order."""
    return [
        Pair(left=items[i].id, right=items[j].id)
        for i in range(len(items))
        for j in range(i + 1, len(items))
    ]


def _ordered_pairs(items: Sequence[Item], order: Sequence[tuple[int, int]]) -> list[Pair]:
    expected = {pair.key() for pair in generate_pairs(items)}
    pairs = [Pair(left=left, right=right) for left, right in order]
    keys = [pair.key() for pair in pairs]

    if any(len(key) != 2 for key in keys):
        raise InvalidPairOrderError("a pair compares an item with itself")
    if len(set(keys)) != len(keys):
        raise InvalidPairOrderError("a pair appears more than once")
    if set(keys) != expected:
        raise InvalidPairOrderError(
            f"expected {len(expected)} pairs over the item ids, got {len(keys)}"
        )
    return pairs


def initialize(
    items: Sequence[Item],
    *,
    rng: random.Random | None = None,
    order: Sequence[tuple[int, int]] | None = None,
    config: Config | None = None,
) -> SorterState:
    """Start a sort over ``items``.

    Args:
        items: Items to rank. Ids must be unique.
        rng: Random source for the pair shuffle. Defaults to one seeded
            from ``config.seed``.
        order: Explicit pair ordering as ``(left_id, right_id)`` tuples. Skips
            the shuffle; must cover every unordered pair exactly once.
        config: Engine configuration.

    Returns:
        A started state. Fewer than two items yields a finished state.

    Raises:
        DuplicateItemIdentifierError: If two items share an id.
        InvalidPairOrderError: If ``order`` is not a permutation of all pairs.
    """
    config = config or Config()
    items = tuple(items)
    ensure_unique_ids(items)

    if len(items) < 2:
        ranking = build_ranking(items, {})
        return SorterState(
            items=items,
            graph={item.id: frozenset() for item in items},
            ranking=tuple(ranking),
            started=True,
            is_finished=True,
        )

    if len(items) > config.large_set_warning:
        logger.warning(
            f"Sorting {len(items)} items: graph and pair queue grow with the "
            f"square of the item count ({len(items) * (len(items) - 1) // 2} pairs)"
        )

    if order is not None:
        pairs = _ordered_pairs(items, order)
    else:
        if rng is None:
            rng = random.Random(config.seed)
        pairs = shuffle_pairs(generate_pairs(items), rng)

    logger.debug(f"Initialized sort: {len(items)} items, {len(pairs)} pairs")
    head = pairs[0]
    return SorterState(
        items=items,
        graph={item.id: frozenset() for item in items},
        remaining_pairs=tuple(pairs),
        left_id=head.left,
        right_id=head.right,
        round=1,
        started=True,
        is_finished=False,
    )


def _rejected(state: SorterState, operation: str, strict: bool) -> SorterState:
    if strict:
        reason = "sort is finished" if state.is_finished else "no current pair"
        raise InvalidStateTransitionError(operation, reason)
    logger.debug(f"Ignoring '{operation}': no current pair")
    return state


def _finish(state: SorterState, graph: dict) -> SorterState:
    ranking = build_ranking(state.items, graph)
    logger.info(f"Sort finished after {state.round} rounds: {len(ranking)} rank groups")
    return state.model_copy(
        update={
            "graph": graph,
            "remaining_pairs": (),
            "left_id": None,
            "right_id": None,
            "ranking": tuple(ranking),
            "is_finished": True,
        }
    )


def _apply_win(
    state: SorterState,
    winner: int,
    loser: int,
    operation: str,
) -> SorterState:
    if state.beats(loser, winner):
        raise InvalidStateTransitionError(
            operation,
            f"item {loser} is already known to beat item {winner}",
        )

    graph = PreferenceGraph.from_mapping(state.graph)
    graph.add_win(winner, loser)

    remaining = [
        pair
        for pair in state.remaining_pairs[1:]
        if not graph.can_infer(pair.left, pair.right)
    ]
    inferred = len(state.remaining_pairs) - 1 - len(remaining)
    logger.debug(
        f"Round {state.round}: {winner} beats {loser}, "
        f"{inferred} pairs inferred, {len(remaining)} remaining"
    )

    if not remaining:
        return _finish(state, graph.freeze())

    head = remaining[0]
    return state.model_copy(
        update={
            "graph": graph.freeze(),
            "remaining_pairs": tuple(remaining),
            "left_id": head.left,
            "right_id": head.right,
            "round": state.round + 1,
        }
    )


def submit_left_wins(state: SorterState, *, strict: bool = False) -> SorterState:
    """The left item of the current pair wins.

    Raises:
        InvalidStateTransitionError: If the right item is already known to win,
            or in strict mode when there is no current pair.
    """
    if state.is_finished or state.current_pair is None:
        return _rejected(state, "left", strict)
    return _apply_win(state, state.left_id, state.right_id, "left")


def submit_right_wins(state: SorterState, *, strict: bool = False) -> SorterState:
    """The right item of the current pair wins."""
    if state.is_finished or state.current_pair is None:
        return _rejected(state, "right", strict)
    return _apply_win(state, state.right_id, state.left_id, "right")


def submit_tie(state: SorterState, *, strict: bool = False) -> SorterState:
    """No preference between the current pair.

    The graph is left untouched and the pair is simply dropped from the queue.
    The round counter does not advance on ties.
    """
    if state.is_finished or state.current_pair is None:
        return _rejected(state, "tie", strict)

    remaining = state.remaining_pairs[1:]
    logger.debug(f"Round {state.round}: tie between {state.left_id} and {state.right_id}")

    if not remaining:
        return _finish(state, dict(state.graph))

    head = remaining[0]
    return state.model_copy(
        update={
            "remaining_pairs": remaining,
            "left_id": head.left,
            "right_id": head.right,
        }
    )


def submit(state: SorterState, judgment: Judgment | str, *, strict: bool = False) -> SorterState:
    """Apply a judgment by name."""
    judgment = Judgment(judgment)
    if judgment is Judgment.LEFT:
        return submit_left_wins(state, strict=strict)
    if judgment is Judgment.RIGHT:
        return submit_right_wins(state, strict=strict)
    return submit_tie(state, strict=strict)


def progress(state: SorterState) -> SortProgress:
    """Progress counters for display."""
    total = state.total_pairs
    remaining = len(state.remaining_pairs)
    percent = round((1 - remaining / total) * 100) if total else 100
    return SortProgress(
        comparisons=state.round,
        remaining=remaining,
        total_pairs=total,
        percent=percent,
    )
