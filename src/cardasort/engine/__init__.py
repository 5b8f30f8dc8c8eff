"""Ranking engine for CardaSort.

This module holds the pairwise tournament algorithm and its building blocks.

Components:
    - PreferenceGraph: Transitively closed beats-relation
    - initialize / submit_*: Pure state transitions for a sorting run
    - build_ranking / build_layered_ranking: Final rank-group construction

Example:
    ```python
    from cardasort.engine import initialize, submit_left_wins

    state = initialize(items)
    state = submit_left_wins(state)
    ```
"""

from .graph import PreferenceGraph
from .ranking import build_layered_ranking, build_ranking, rank
from .sorter import (
    generate_pairs,
    initialize,
    progress,
    shuffle_pairs,
    submit,
    submit_left_wins,
    submit_right_wins,
    submit_tie,
)

__all__ = [
    "PreferenceGraph",
    "build_ranking",
    "build_layered_ranking",
    "rank",
    "generate_pairs",
    "shuffle_pairs",
    "initialize",
    "submit",
    "submit_left_wins",
    "submit_right_wins",
    "submit_tie",
    "progress",
]
