"""Top-level package for the Iota grid engine."""

from . import actions, cards, encoding, grid, line, matching, position, rules

__all__ = [
    "actions",
    "cards",
    "encoding",
    "grid",
    "line",
    "matching",
    "position",
    "rules",
]
