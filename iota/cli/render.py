"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..cards import Card, Color, Shape
from ..grid import Grid
from ..position import Position

_COLOR_STYLES = {
    Color.RED: "red",
    Color.GREEN: "green",
    Color.BLUE: "blue",
    Color.YELLOW: "yellow",
}

_SHAPE_SYMBOLS = {
    Shape.CIRCLE: "●",
    Shape.SQUARE: "■",
    Shape.TRIANGLE: "▲",
    Shape.CROSS: "✚",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card.is_wildcard:
        return "[magenta]★★[/magenta]"
    style = _COLOR_STYLES[card.color]
    return f"[{style}]{_SHAPE_SYMBOLS[card.shape]}{card.face_value}[/{style}]"


def render_grid(grid: Grid, *, title: str = "Iota", highlight: Position | None = None) -> RenderableType:
    """Return a Rich panel laying out the occupied area of ``grid``."""

    bounds = grid.bounds()
    if bounds is None:
        return Panel(Text("Empty grid", style="dim"), title=title, border_style="cyan")

    top_left, bottom_right = bounds
    table = Table(box=box.SIMPLE, show_header=True, padding=(0, 1))
    table.add_column("", justify="right", style="dim")
    for col in range(top_left.col, bottom_right.col + 1):
        table.add_column(str(col), justify="center")

    for row in range(top_left.row, bottom_right.row + 1):
        cells: list[str] = [str(row)]
        for col in range(top_left.col, bottom_right.col + 1):
            position = Position(row, col)
            card = grid.card_at(position)
            if card is None:
                cells.append("[dim]·[/dim]")
            elif position == highlight:
                cells.append(f"[reverse]{format_card(card)}[/reverse]")
            else:
                cells.append(format_card(card))
        table.add_row(*cells)
    return Panel(table, title=title, padding=(0, 1), border_style="cyan")


def render_turn_scores(scores: Sequence[int]) -> RenderableType:
    """Return a table listing the points earned on each turn."""

    table = Table(title="Turn Scores", box=box.SIMPLE_HEAVY)
    table.add_column("Turn", justify="right")
    table.add_column("Points", justify="right")
    for idx, points in enumerate(scores, start=1):
        table.add_row(str(idx), str(points))
    table.add_row("[bold]Total[/bold]", f"[bold]{sum(scores)}[/bold]")
    return table
