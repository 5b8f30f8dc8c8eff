"""Custom exceptions for CardaSort.

Every error carries an actionable message plus the structured fields a caller
needs to recover (for example, the ids that did not match).
"""

from __future__ import annotations

from collections.abc import Iterable


class CardaSortError(Exception):
    """Base exception for all CardaSort errors."""

    pass


class DuplicateItemIdentifierError(CardaSortError):
    """The item list contains the same id more than once.

    Raised by initialization, since aliased ids would corrupt the graph.
    """

    def __init__(self, ids: Iterable[int]):
        self.ids = sorted(set(ids))
        message = (
            f"Duplicate item identifiers: {', '.join(str(i) for i in self.ids)}.\n"
            "Every item passed to a sort must have a unique id."
        )
        super().__init__(message)


class StateItemMismatchError(CardaSortError):
    """A saved state references items that are not in the supplied list.

    Usually means the continuation token is stale (items were deleted or the
    filter changed). Start a fresh sort instead of resuming.
    """

    def __init__(self, missing_ids: Iterable[int]):
        self.missing_ids = sorted(set(missing_ids))
        message = (
            "Saved sorting state references unknown items: "
            f"{', '.join(str(i) for i in self.missing_ids)}.\n"
            "The state is stale. Start a new sort with the current items."
        )
        super().__init__(message)


class StateTokenError(CardaSortError):
    """A continuation token could not be decoded or is internally inconsistent."""

    def __init__(self, message: str):
        super().__init__(f"Invalid sorting state token: {message}")


class InvalidStateTransitionError(CardaSortError):
    """A judgment was submitted that the state cannot accept.

    Raised in strict mode for judgments without a current pair, and always
    for judgments that would contradict an already known order.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cannot apply '{operation}': {reason}")


class InvalidPairOrderError(CardaSortError):
    """An explicit pair ordering is not a permutation of all item pairs."""

    def __init__(self, message: str):
        super().__init__(
            f"Invalid pair order: {message}\n"
            "Provide every unordered pair of item ids exactly once."
        )


class ItemSourceError(CardaSortError):
    """Items could not be loaded from a file."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        full_message = message
        if path:
            full_message = f"Could not load items from '{path}'.\n{message}"
        super().__init__(full_message)


class ConfigError(CardaSortError):
    """Error in configuration."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Configuration error in '{field}': {message}"
        super().__init__(full_message)
