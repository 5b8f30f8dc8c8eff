"""Continuation tokens for sorting state.

A token is compact JSON, base64 encoded so it can travel in a URL. It holds ids
only. Item metadata is looked up again from the item source on resume.

Wire schema (keys kept short to fit in URLs):
    g   graph as [[id, [beaten ids]], ...]
    r   round counter
    rp  remaining pairs as [[left, right], ...]
    l   left id of the current pair, or null
    ri  right id of the current pair, or null
    f   finished flag
    e   every item id, in input order
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .engine.graph import PreferenceGraph
from .engine.ranking import rank
from .exceptions import StateItemMismatchError, StateTokenError
from .models import Item, Pair, RankingStrategy, SorterState

logger = logging.getLogger(__name__)


class StateToken(BaseModel):
    """Typed wire form of a SorterState."""

    model_config = ConfigDict(populate_by_name=True)

    graph: list[tuple[int, list[int]]] = Field(default_factory=list, alias="g")
    round: int = Field(default=1, alias="r", ge=1)
    remaining_pairs: list[tuple[int, int]] = Field(default_factory=list, alias="rp")
    left: int | None = Field(default=None, alias="l")
    right: int | None = Field(default=None, alias="ri")
    finished: bool = Field(default=False, alias="f")
    item_ids: list[int] = Field(default_factory=list, alias="e")

    @classmethod
    def from_state(cls, state: SorterState) -> StateToken:
        return cls(
            graph=PreferenceGraph.from_mapping(state.graph).to_wire(),
            round=state.round,
            remaining_pairs=[(pair.left, pair.right) for pair in state.remaining_pairs],
            left=state.left_id,
            right=state.right_id,
            finished=state.is_finished,
            item_ids=[item.id for item in state.items],
        )

    def referenced_ids(self) -> set[int]:
        ids = set(self.item_ids)
        for node, beaten in self.graph:
            ids.add(node)
            ids.update(beaten)
        for left, right in self.remaining_pairs:
            ids.update((left, right))
        ids.update(i for i in (self.left, self.right) if i is not None)
        return ids


def encode_state(state: SorterState) -> str:
    """Encode a state as a URL-safe token."""
    payload = StateToken.from_state(state).model_dump(by_alias=True)
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_token(token: str) -> StateToken:
    """Decode a token into its wire schema.

    Accepts URL-safe or standard base64, with or without padding.

    Raises:
        StateTokenError: If the token is not valid base64 JSON of the schema.
    """
    text = token.strip().replace("+", "-").replace("/", "_")
    text += "=" * (-len(text) % 4)
    try:
        raw = base64.urlsafe_b64decode(text.encode("ascii"))
        payload = json.loads(raw)
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise StateTokenError(f"not base64-encoded JSON ({e})") from e

    if not isinstance(payload, dict):
        raise StateTokenError(f"expected an object, got {type(payload).__name__}")

    try:
        return StateToken.model_validate(payload)
    except ValidationError as e:
        raise StateTokenError(str(e)) from e


def token_item_ids(token: str) -> list[int]:
    """Item ids a token needs, so the caller can fetch them before resuming."""
    return decode_token(token).item_ids


def decode_state(
    token: str,
    items: Sequence[Item],
    *,
    strategy: RankingStrategy | str = RankingStrategy.WINS,
) -> SorterState:
    """Rebuild a SorterState from a token and the current items.

    Args:
        token: Token produced by encode_state.
        items: Items from the item source. Extra items are ignored.
        strategy: Ranking strategy used when the token is finished.

    Raises:
        StateTokenError: If the token is malformed or inconsistent (a cycle in
            the graph, or a queued pair that is invalid or already decided).
        StateItemMismatchError: If the token references ids missing from the
            supplied items or from its own item list.
    """
    wire = decode_token(token)
    by_id = {item.id: item for item in items}

    referenced = wire.referenced_ids()
    missing = referenced - (set(by_id) & set(wire.item_ids))
    if missing:
        raise StateItemMismatchError(missing)
    if len(set(wire.item_ids)) != len(wire.item_ids):
        raise StateTokenError("item list contains duplicate ids")

    ordered = tuple(by_id[item_id] for item_id in wire.item_ids)
    mapping: dict[int, list[int]] = {item.id: [] for item in ordered}
    for node, beaten in wire.graph:
        mapping[node] = beaten
    relation = PreferenceGraph.from_mapping(mapping)
    relation.close()
    if relation.has_contradiction():
        raise StateTokenError("graph contains a cycle")
    graph = relation.freeze()

    pairs = tuple(Pair(left=left, right=right) for left, right in wire.remaining_pairs)
    seen: set[frozenset[int]] = set()
    for pair in pairs:
        if pair.left == pair.right:
            raise StateTokenError(f"pair ({pair.left}, {pair.right}) compares an item with itself")
        if pair.key() in seen:
            raise StateTokenError(f"pair ({pair.left}, {pair.right}) is queued twice")
        if relation.can_infer(pair.left, pair.right):
            raise StateTokenError(f"pair ({pair.left}, {pair.right}) is already decided by the graph")
        seen.add(pair.key())

    if wire.finished:
        if pairs:
            raise StateTokenError("finished state still has pending pairs")
        ranking = rank(ordered, graph, strategy)
        return SorterState(
            items=ordered,
            graph=graph,
            round=wire.round,
            ranking=tuple(ranking),
            started=True,
            is_finished=True,
        )

    if not pairs:
        raise StateTokenError("unfinished state has no pending pairs")
    head = pairs[0]
    if (wire.left, wire.right) != (head.left, head.right):
        raise StateTokenError("current pair does not match the head of the queue")

    logger.debug(f"Resumed sort at round {wire.round} with {len(pairs)} pairs pending")
    return SorterState(
        items=ordered,
        graph=graph,
        remaining_pairs=pairs,
        left_id=head.left,
        right_id=head.right,
        round=wire.round,
        started=True,
        is_finished=False,
    )
