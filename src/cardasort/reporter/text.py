"""Text reporter for CardaSort.

Provides human-readable formatting for the current comparison, progress
counters and final rankings.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..engine.sorter import progress as state_progress
from ..models import Item, RankGroup, SorterState, SortProgress


class TextReporter:
    """Formats sorting state as human-readable text.

    Example:
        ```python
        reporter = TextReporter()
        print(reporter.format_comparison(state))
        ```
    """

    BAR_WIDTH = 30
    MAX_TAGS = 2

    @staticmethod
    def _bar(fraction: float, width: int = 30) -> str:
        """Render a simple bar chart segment."""
        filled = round(fraction * width)
        return "█" * filled + "░" * (width - filled)

    def _item_line(self, item: Item) -> str:
        line = item.name
        if item.tags:
            shown = [tag.name for tag in item.tags[: self.MAX_TAGS]]
            if len(item.tags) > self.MAX_TAGS:
                shown.append(f"+{len(item.tags) - self.MAX_TAGS}")
            line += f"  [{', '.join(shown)}]"
        return line

    def format_progress(self, progress: SortProgress) -> str:
        """Format progress counters on one line."""
        return (
            f"Comparisons: {progress.comparisons}  "
            f"Remaining: {progress.remaining}  "
            f"Total Pairs: {progress.total_pairs}  "
            f"{self._bar(progress.percent / 100, 20)} {progress.percent}%"
        )

    def format_comparison(self, state: SorterState) -> str:
        """Format the current pair for a judgment prompt.

        Args:
            state: An unfinished state.

        Returns:
            Formatted string, or a short notice if there is nothing to compare.
        """
        left, right = state.left_item, state.right_item
        if left is None or right is None:
            return "Nothing left to compare."

        lines = [
            self.format_progress(state_progress(state)),
            "",
            f"  A: {self._item_line(left)}",
            f"  B: {self._item_line(right)}",
        ]
        if left.image_url or right.image_url:
            lines.append("")
            lines.append(f"  A image: {left.image_url or 'No Image'}")
            lines.append(f"  B image: {right.image_url or 'No Image'}")
        return "\n".join(lines)

    def format_ranking(self, ranking: Sequence[RankGroup]) -> str:
        """Format rank groups, best first.

        Args:
            ranking: Rank groups from a finished sort.

        Returns:
            Formatted string.
        """
        count = sum(len(group.members) for group in ranking)
        lines = [
            "Sorting Results",
            f"{'=' * 50}",
            f"{count} item(s) sorted into {len(ranking)} rank(s).",
        ]

        for index, group in enumerate(ranking, start=1):
            noun = "item" if len(group.members) == 1 else "items"
            header = f"Rank {index}  ({len(group.members)} {noun}"
            if group.wins is not None:
                header += f", {group.wins} wins"
            header += ")"
            lines.append("")
            lines.append(header)
            for item in group.members:
                lines.append(f"  - {self._item_line(item)}")

        return "\n".join(lines)


def print_results(result: SorterState | Sequence[RankGroup]) -> None:
    """Print a finished state's ranking, or a ranking directly.

    Example:
        ```python
        from cardasort import SortSession, print_results

        print_results(session.ranking)
        ```
    """
    reporter = TextReporter()

    if isinstance(result, SorterState):
        if not result.is_finished:
            raise ValueError("Sort is not finished yet")
        print(reporter.format_ranking(result.ranking))
    elif isinstance(result, (list, tuple)):
        print(reporter.format_ranking(result))
    else:
        raise TypeError(f"Unsupported result type: {type(result).__name__}")
