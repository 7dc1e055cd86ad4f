"""Toroidal Game of Life grid.

Cells live in one flat, row-major ``bytearray`` holding the numeric cell
codes (index = row * width + col). The buffer is allocated once and never
resized, so views handed out by ``raw_cell_view`` stay valid across
generations.
"""

from core.errors import CoordinateError, DimensionError, GridInvariantError
from internal.logging import get_logger
from life.cells import Cell
from life.rules import next_state

# 256 x 256; one pure-Python generation at this size takes a fraction of a second
MAX_CELLS = 1 << 16

NEIGHBOUR_OFFSETS = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


def _is_count(value):
    return isinstance(value, int) and not isinstance(value, bool)


class Universe:
    """Fixed-size grid whose edges wrap around in both directions."""

    __slots__ = ("_width", "_height", "_cells", "_log")

    def __init__(self, width, height):
        if not (_is_count(width) and _is_count(height)) or width < 1 or height < 1:
            raise DimensionError(
                f"universe dimensions must be positive integers, got {width!r}x{height!r}",
                width=width, height=height,
            )
        if width * height > MAX_CELLS:
            raise DimensionError(
                f"universe of {width}x{height} exceeds {MAX_CELLS} cells",
                width=width, height=height,
            )
        self._width = width
        self._height = height
        self._cells = bytearray(width * height)
        self._log = get_logger()

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def population(self):
        """Number of live cells."""
        return sum(self._cells)

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def to_index(self, row, col):
        """Map (row, col) to a flat buffer index. No wrapping."""
        if not (_is_count(row) and _is_count(col)):
            raise CoordinateError(f"coordinates must be integers, got ({row!r}, {col!r})", row=row, col=col)
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise CoordinateError(
                f"({row}, {col}) outside {self._height} rows x {self._width} cols",
                row=row, col=col,
            )
        return row * self._width + col

    def from_index(self, index):
        """Map a flat buffer index back to (row, col)."""
        if not _is_count(index) or not 0 <= index < len(self._cells):
            raise CoordinateError(f"index {index!r} outside [0, {len(self._cells)})", index=index)
        return divmod(index, self._width)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def seed(self, coordinates):
        """Mark each (row, col) pair alive.

        Malformed or out-of-range pairs are skipped (and logged); the rest of
        the batch is still applied. Returns the number of accepted pairs.
        """
        accepted = 0
        for pair in coordinates:
            try:
                row, col = pair
                index = self.to_index(row, col)
            except (TypeError, ValueError, CoordinateError) as exc:
                self._log.warn("seed coordinate rejected", error=exc, coordinate=repr(pair))
                continue
            self._cells[index] = Cell.ALIVE.encode()
            accepted += 1
        return accepted

    def seed_one(self, row, col):
        return self.seed([(row, col)])

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def cell(self, row, col):
        return Cell(self._cells[self.to_index(row, col)])

    def cells(self):
        return [Cell(code) for code in self._cells]

    def live_cells(self):
        """Live coordinates in row-major order."""
        return [divmod(index, self._width) for index, code in enumerate(self._cells) if code]

    def export_cells(self):
        """Row-major copy of the grid as 0/1 bytes."""
        return bytes(self._cells)

    def raw_cell_view(self):
        """Read-only, zero-copy view of the live buffer."""
        return memoryview(self._cells).toreadonly()

    def render(self):
        rows = []
        for start in range(0, len(self._cells), self._width):
            rows.append("".join(Cell(code).display_glyph() for code in self._cells[start:start + self._width]))
        return "\n".join(rows)

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"Universe(width={self._width}, height={self._height}, population={self.population})"

    # ------------------------------------------------------------------
    # Evolution
    # ------------------------------------------------------------------

    def neighbor_count(self, row, col):
        """Live cells among the 8 neighbours of (row, col), wrapping at the edges."""
        width, height, cells = self._width, self._height, self._cells
        count = 0
        for dr, dc in NEIGHBOUR_OFFSETS:
            # Python's % is floored, so (0 - 1) % height == height - 1
            count += cells[((row + dr) % height) * width + (col + dc) % width]
        return count

    def advance_generation(self):
        """Advance one generation.

        The next grid is computed entirely from the current one, then copied
        over the live buffer in a single slice assignment.
        """
        width = self._width
        next_cells = bytearray(len(self._cells))
        for index, code in enumerate(self._cells):
            row, col = divmod(index, width)
            next_cells[index] = next_state(Cell(code), self.neighbor_count(row, col)).encode()
        self.check_invariant(next_cells)
        self._cells[:] = next_cells

    tick = advance_generation

    def check_invariant(self, cells=None):
        """Raise GridInvariantError if a buffer does not hold width * height cells."""
        cells = self._cells if cells is None else cells
        expected = self._width * self._height
        if len(cells) != expected:
            raise GridInvariantError(
                f"cell buffer holds {len(cells)} cells, expected {expected}",
                expected=expected, actual=len(cells),
            )
