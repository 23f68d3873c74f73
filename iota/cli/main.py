"""Typer entry-point wiring for the Iota CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import actions
from ..cards import Card
from ..position import Position
from ..rules import GridConfig, InvalidPlacement, score
from .render import format_card, render_grid, render_turn_scores
from .replay import ReplayFormatError, ReplayResult, load_replay, run_replay

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")


def _grid_config(max_line_length: int, allow_duplicates: bool) -> GridConfig:
    try:
        return GridConfig(max_line_length=max_line_length, exclude_present_candidates=not allow_duplicates)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_card(code: str) -> Card:
    try:
        return Card.from_code(code)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _replay(path: Path, config: GridConfig) -> ReplayResult:
    """Replay ``path`` or exit with a readable error."""

    try:
        turns = load_replay(path)
    except (OSError, ReplayFormatError) as exc:
        raise typer.BadParameter(str(exc), param_hint="FILE") from exc
    logger.debug("loaded %d turn(s) from %s", len(turns), path)
    try:
        return run_replay(turns, config)
    except InvalidPlacement as exc:
        console.print(f"[red]Rejected:[/red] {exc}")
        raise typer.Exit(code=1) from exc


MAX_LINE_LENGTH_OPTION = typer.Option(4, min=2, max=4, help="Longest line a placement may form.")
ALLOW_DUPLICATES_OPTION = typer.Option(
    False,
    "--allow-duplicates/--no-allow-duplicates",
    help="Let a wildcard stand for a card already present in its line.",
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log every placement decision.")


@app.command()
def replay(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON replay file."),
    max_line_length: int = MAX_LINE_LENGTH_OPTION,
    allow_duplicates: bool = ALLOW_DUPLICATES_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Apply every turn of a replay file and print the scores."""

    _configure_logging(verbose)
    result = _replay(path, _grid_config(max_line_length, allow_duplicates))
    console.print(render_grid(result.grid))
    console.print(render_turn_scores(result.scores))


@app.command()
def check(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON replay file."),
    card_code: str = typer.Argument(..., metavar="CARD", help="Card code such as RC1 or **."),
    row: int = typer.Argument(...),
    col: int = typer.Argument(...),
    max_line_length: int = MAX_LINE_LENGTH_OPTION,
    allow_duplicates: bool = ALLOW_DUPLICATES_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Report whether CARD may be placed at (ROW, COL) after the replay."""

    _configure_logging(verbose)
    card = _parse_card(card_code)
    grid = _replay(path, _grid_config(max_line_length, allow_duplicates)).grid
    position = Position(row, col)
    rejection = grid.check(card, position)
    if rejection is not None:
        console.print(f"[red]{card.label()} cannot go to {position}: {rejection.describe()}[/red]")
        raise typer.Exit(code=1)

    points = score(grid.preview(card, position))
    lookahead = grid.copy()
    lookahead.place(card, position)
    console.print(render_grid(lookahead, highlight=position))
    console.print(f"[green]{format_card(card)} fits at {position} for {points} point(s).[/green]")


@app.command()
def hints(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON replay file."),
    card_codes: list[str] = typer.Argument(..., metavar="CARDS...", help="Cards in hand."),
    max_line_length: int = MAX_LINE_LENGTH_OPTION,
    allow_duplicates: bool = ALLOW_DUPLICATES_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List the legal single placements for the given cards."""

    _configure_logging(verbose)
    hand = [_parse_card(code) for code in card_codes]
    grid = _replay(path, _grid_config(max_line_length, allow_duplicates)).grid

    legal = actions.legal_actions(grid, hand)
    if not legal:
        console.print("[yellow]No legal placement for this hand.[/yellow]")
        return

    table = Table(title="Legal Placements", box=box.SIMPLE_HEAVY)
    table.add_column("Card", justify="center")
    table.add_column("Position", justify="center")
    table.add_column("Points", justify="right")
    for action in legal:
        points = score(grid.preview(action.card, action.position))
        table.add_row(format_card(action.card), str(action.position), str(points))
    console.print(table)

    best = actions.best_single_placement(grid, hand)
    if best is not None:
        action, points = best
        console.print(f"[cyan]Best: {format_card(action.card)} at {action.position} for {points} point(s).[/cyan]")


def main() -> None:
    """Entry-point for ``python -m iota.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
