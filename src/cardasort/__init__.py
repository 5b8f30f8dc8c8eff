"""CardaSort - Rank anything through pairwise comparisons.

Pick the better of two items until the order is known. Every answer is folded
into a transitively closed preference graph, so most pairs never need to be
asked about.

Example:
    ```python
    from cardasort import Item, SortSession

    items = [Item(id=1, name="Tea"), Item(id=2, name="Coffee"), Item(id=3, name="Cocoa")]
    session = SortSession(items)
    while not session.is_finished:
        session.left()
    for group in session.ranking:
        print([item.name for item in group.members])
    ```
"""

from .codec import StateToken, decode_state, decode_token, encode_state, token_item_ids
from .config import Config, SortConfig
from .engine import (
    PreferenceGraph,
    build_layered_ranking,
    build_ranking,
    initialize,
    progress,
    rank,
    submit,
    submit_left_wins,
    submit_right_wins,
    submit_tie,
)
from .exceptions import (
    CardaSortError,
    ConfigError,
    DuplicateItemIdentifierError,
    InvalidPairOrderError,
    InvalidStateTransitionError,
    ItemSourceError,
    StateItemMismatchError,
    StateTokenError,
)
from .items import ItemFilter, ensure_unique_ids, load_items, parse_items
from .models import (
    Item,
    Judgment,
    Pair,
    RankGroup,
    RankingStrategy,
    SorterState,
    SortProgress,
    Tag,
)
from .reporter import TextReporter, print_results
from .session import SortSession

__version__ = "0.1.0"

__all__ = [
    # Session entry point
    "SortSession",
    # Configuration
    "Config",
    "SortConfig",
    # Core models
    "Item",
    "Tag",
    "Pair",
    "Judgment",
    "RankGroup",
    "RankingStrategy",
    "SorterState",
    "SortProgress",
    # Engine
    "PreferenceGraph",
    "initialize",
    "submit",
    "submit_left_wins",
    "submit_right_wins",
    "submit_tie",
    "progress",
    "build_ranking",
    "build_layered_ranking",
    "rank",
    # State transport
    "StateToken",
    "encode_state",
    "decode_state",
    "decode_token",
    "token_item_ids",
    # Item source
    "ItemFilter",
    "load_items",
    "parse_items",
    "ensure_unique_ids",
    # Reporter
    "TextReporter",
    "print_results",
    # Exceptions
    "CardaSortError",
    "ConfigError",
    "DuplicateItemIdentifierError",
    "InvalidPairOrderError",
    "InvalidStateTransitionError",
    "ItemSourceError",
    "StateItemMismatchError",
    "StateTokenError",
]
