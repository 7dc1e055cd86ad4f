"""Conway's transition rule.

1. A live cell with fewer than two live neighbours dies (underpopulation).
2. A live cell with two or three live neighbours lives on.
3. A live cell with more than three live neighbours dies (overpopulation).
4. A dead cell with exactly three live neighbours becomes alive (reproduction).
"""

from life.cells import Cell


def next_state(cell, living_neighbours):
    """Return the state of `cell` in the next generation."""
    if cell is Cell.ALIVE:
        return Cell.ALIVE if living_neighbours in (2, 3) else Cell.DEAD
    return Cell.ALIVE if living_neighbours == 3 else Cell.DEAD
