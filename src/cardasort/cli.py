"""Command line interface for CardaSort.

Commands:
    cardasort sort ITEMS       Rank items interactively
    cardasort resume TOKEN ITEMS
    cardasort results TOKEN ITEMS
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .codec import decode_state
from .config import Config, SortConfig
from .exceptions import CardaSortError
from .items import ItemFilter, load_items
from .models import RankGroup, RankingStrategy
from .reporter import TextReporter
from .session import SortSession

app = typer.Typer(name="cardasort", help="Rank items through pairwise comparisons.")
console = Console()

KEYS = {
    "l": "left",
    "a": "left",
    "r": "right",
    "b": "right",
    "t": "tie",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(error: CardaSortError | FileNotFoundError | ValueError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", soft_wrap=True)
    raise typer.Exit(code=1)


def _ranking_table(ranking: list[RankGroup]) -> Table:
    table = Table(title="Sorting Results")
    table.add_column("Rank", justify="right")
    table.add_column("Items")
    table.add_column("Wins", justify="right")
    for index, group in enumerate(ranking, start=1):
        names = ", ".join(escape(item.name) for item in group.members)
        wins = "" if group.wins is None else str(group.wins)
        table.add_row(str(index), names, wins)
    return table


def _run(session: SortSession) -> None:
    reporter = TextReporter()

    while not session.is_finished:
        console.print()
        console.print(reporter.format_comparison(session.state), markup=False)
        choice = typer.prompt("[l]eft / [r]ight / [t]ie / [u]ndo / [q]uit").strip().lower()

        if choice == "q":
            console.print("Sort paused. Resume with:")
            console.print(session.token(), soft_wrap=True)
            return
        if choice == "u":
            if not session.undo():
                console.print("[yellow]Nothing to undo.[/yellow]")
            continue
        if choice not in KEYS:
            console.print(f"[yellow]Unknown choice '{escape(choice)}'.[/yellow]")
            continue

        try:
            session.submit(KEYS[choice])
        except CardaSortError as e:
            _fail(e)

    console.print()
    console.print(_ranking_table(session.ranking))
    console.print("Results token:")
    console.print(session.token(), soft_wrap=True)


@app.command()
def sort(
    items_path: Optional[Path] = typer.Argument(None, help="JSON or YAML file with items."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML sort description."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the comparison order."),
    category: Optional[int] = typer.Option(None, "--category", help="Only items in this category."),
    tags: list[str] = typer.Option([], "--tag", help="Only items with one of these tags."),
    strategy: Optional[RankingStrategy] = typer.Option(None, "--strategy", help="Ranking strategy."),
    strict: bool = typer.Option(False, "--strict", help="Fail on invalid judgments."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """
    Rank items interactively, one pair at a time.
    """
    try:
        if config_path is not None:
            sort_config = SortConfig.from_yaml(config_path)
        elif items_path is not None:
            sort_config = SortConfig(items=load_items(items_path))
        else:
            console.print("[bold red]Error:[/bold red] Provide an items file or --config.")
            raise typer.Exit(code=1)

        if items_path is not None and config_path is not None:
            sort_config.items = load_items(items_path)
        if category is not None or tags:
            sort_config.filter = ItemFilter(category_id=category, tag_names=tags)

        settings = sort_config.sorting.model_dump()
        if seed is not None:
            settings["seed"] = seed
        if strategy is not None:
            settings["ranking_strategy"] = strategy
        settings["strict"] = strict or settings["strict"]
        settings["verbose"] = verbose or settings["verbose"]
        config = Config(**settings)
        _setup_logging(config.verbose)

        items = sort_config.selected_items()
        if not items:
            console.print("[yellow]No items match the selection.[/yellow]")
            raise typer.Exit(code=1)

        session = SortSession(items, config)
    except (CardaSortError, FileNotFoundError, ValueError) as e:
        _fail(e)

    console.print(f"Sorting {len(items)} items.")
    _run(session)


@app.command()
def resume(
    token: str = typer.Argument(..., help="Token printed by a paused sort."),
    items_path: Path = typer.Argument(..., help="JSON or YAML file with items."),
    strategy: RankingStrategy = typer.Option(RankingStrategy.WINS, "--strategy", help="Ranking strategy."),
    strict: bool = typer.Option(False, "--strict", help="Fail on invalid judgments."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """
    Continue a paused sort.
    """
    try:
        config = Config(ranking_strategy=strategy, strict=strict, verbose=verbose)
        _setup_logging(config.verbose)
        items = load_items(items_path)
        session = SortSession.resume(token, items, config)
    except CardaSortError as e:
        _fail(e)

    _run(session)


@app.command()
def results(
    token: str = typer.Argument(..., help="Token printed by a finished sort."),
    items_path: Path = typer.Argument(..., help="JSON or YAML file with items."),
    strategy: RankingStrategy = typer.Option(RankingStrategy.WINS, "--strategy", help="Ranking strategy."),
):
    """
    Show the ranking stored in a finished sort's token.
    """
    try:
        state = decode_state(token, load_items(items_path), strategy=strategy)
    except CardaSortError as e:
        _fail(e)

    if not state.is_finished:
        console.print("[yellow]This sort is not finished yet. Use 'resume' to continue.[/yellow]")
        raise typer.Exit(code=1)

    console.print(_ranking_table(list(state.ranking)))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
