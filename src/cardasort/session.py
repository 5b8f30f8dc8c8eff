"""Sorting sessions with undo.

A SortSession drives one sort for one caller. It keeps the initial state and an
append-only list of judgments; the current state is the result of replaying
that list, which makes undo a matter of dropping the last entry.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from .codec import decode_state, encode_state
from .config import Config
from .engine import rank
from .engine.sorter import initialize, progress, submit
from .models import Item, Judgment, RankGroup, SorterState, SortProgress

logger = logging.getLogger(__name__)


class SortSession:
    """Single-writer sorting session.

    Example:
        ```python
        session = SortSession(items, Config(seed=3))
        while not session.is_finished:
            print(session.state.left_item.name, "vs", session.state.right_item.name)
            session.left()
        print(session.ranking)

        # Save and continue later
        token = session.token()
        session = SortSession.resume(token, items)
        ```
    """

    def __init__(
        self,
        items: Sequence[Item],
        config: Config | None = None,
        *,
        rng: random.Random | None = None,
        order: Sequence[tuple[int, int]] | None = None,
    ):
        """Start a new session.

        Args:
            items: Items to rank.
            config: Session configuration.
            rng: Random source for the pair shuffle.
            order: Explicit pair ordering (skips the shuffle).
        """
        self.config = config or Config()
        base = initialize(items, rng=rng, order=order, config=self.config)
        self._reset(base)
        logger.info(f"Started sort of {len(base.items)} items ({base.total_pairs} pairs)")

    def _reset(self, base: SorterState) -> None:
        self._base = base
        self._state = base
        self.history: list[Judgment] = []

    @classmethod
    def resume(
        cls,
        token: str,
        items: Sequence[Item],
        config: Config | None = None,
    ) -> SortSession:
        """Continue a session from a continuation token.

        Undo history starts at the resumed state.

        Raises:
            StateTokenError: If the token is malformed.
            StateItemMismatchError: If the token references unknown items.
        """
        config = config or Config()
        state = decode_state(token, items, strategy=config.ranking_strategy)
        session = cls.__new__(cls)
        session.config = config
        session._reset(state)
        logger.info(f"Resumed sort at round {state.round}")
        return session

    @property
    def state(self) -> SorterState:
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    @property
    def progress(self) -> SortProgress:
        return progress(self._state)

    @property
    def ranking(self) -> list[RankGroup]:
        """Final ranking in the configured strategy, empty until finished."""
        if not self._state.is_finished:
            return []
        return rank(self._state.items, self._state.graph, self.config.ranking_strategy)

    def submit(self, judgment: Judgment | str) -> SorterState:
        """Apply a judgment to the current pair.

        A judgment the state ignores (nothing to compare) is not recorded.
        """
        judgment = Judgment(judgment)
        new_state = submit(self._state, judgment, strict=self.config.strict)
        if new_state is not self._state:
            self.history.append(judgment)
            self._state = new_state
        return self._state

    def left(self) -> SorterState:
        return self.submit(Judgment.LEFT)

    def right(self) -> SorterState:
        return self.submit(Judgment.RIGHT)

    def tie(self) -> SorterState:
        return self.submit(Judgment.TIE)

    def undo(self) -> bool:
        """Revert the last judgment.

        Returns:
            False if there was nothing to undo.
        """
        if not self.history:
            return False
        self.history.pop()
        state = self._base
        for judgment in self.history:
            state = submit(state, judgment)
        self._state = state
        logger.debug(f"Undo: back to round {state.round}")
        return True

    def token(self) -> str:
        """Continuation token for the current state."""
        return encode_state(self._state)
