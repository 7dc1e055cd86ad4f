"""Cell states and their encodings."""

from enum import Enum

ALIVE_GLYPH = "◼"  # ◼
DEAD_GLYPH = "◻"  # ◻


class Cell(Enum):
    DEAD = 0
    ALIVE = 1

    def encode(self):
        """Numeric form used for buffers and exports."""
        return self.value

    def display_glyph(self):
        return ALIVE_GLYPH if self is Cell.ALIVE else DEAD_GLYPH

    def __str__(self):
        return self.display_glyph()
