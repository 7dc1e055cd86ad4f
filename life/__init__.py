from life.cells import Cell
from life.rules import next_state
from life.universe import Universe

__all__ = [
    "Cell",
    "next_state",
    "Universe",
]
