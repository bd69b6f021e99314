"""
Grid model: a width x height field of typed cells.

Cells are addressed by (x, y) with x the column and y the row. Besides its
type every cell carries two search flags, ``visited`` and ``on_path``, which
belong to the last search run and are cleared by ``reset_search_state``.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional


class CellType(str, Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    EXIT = "exit"
    KEY = "key"
    DOOR = "door"


# Integer cell codes used by the matrix form of the HTTP API
CODES = {
    0: CellType.EMPTY,
    1: CellType.WALL,
    2: CellType.START,
    3: CellType.EXIT,
    4: CellType.KEY,
    5: CellType.DOOR,
}
CODE_OF = {t: code for code, t in CODES.items()}

# Only one cell of each of these types may exist at a time
UNIQUE_TYPES = (CellType.START, CellType.EXIT)

# Neighbor expansion order: +x, +y, -x, -y
DIRECTIONS = ((1, 0), (0, 1), (-1, 0), (0, -1))


class Point(NamedTuple):
    x: int
    y: int


@dataclass
class Cell:
    x: int
    y: int
    type: CellType = CellType.EMPTY
    visited: bool = False
    on_path: bool = False

    @property
    def point(self):
        return Point(self.x, self.y)


def coerce_type(value):
    """Accept a CellType, its record spelling or its integer code."""
    if isinstance(value, CellType):
        return value
    if isinstance(value, bool):
        raise ValueError(f"not a cell type: {value!r}")
    if isinstance(value, int):
        try:
            return CODES[value]
        except KeyError:
            raise ValueError(f"unknown cell code: {value}") from None
    return CellType(str(value).lower())


class Grid:
    def __init__(self, width, height, fill=CellType.EMPTY):
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        self.width = width
        self.height = height
        self._rows: List[List[Cell]] = [
            [Cell(x, y, fill) for x in range(width)] for y in range(height)
        ]

    @classmethod
    def create_empty(cls, width, height):
        return cls(width, height)

    @classmethod
    def from_rows(cls, rows):
        """Build a grid from a row-major matrix of types, names or codes.

        Start/Exit uniqueness is enforced: a later Start or Exit replaces an
        earlier one, exactly as repeated ``set_type`` calls would.
        """
        if not rows or not rows[0]:
            raise ValueError("grid rows must not be empty")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("grid rows must all have the same length")
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            for x, value in enumerate(row):
                t = coerce_type(value)
                if t is not CellType.EMPTY:
                    grid.set_type(x, y, t)
        return grid

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.to_codes() == other.to_codes()

    # --- queries --- #
    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x, y) -> Optional[Cell]:
        """Return the cell at (x, y), or None when the point is off the grid."""
        if not self.in_bounds(x, y):
            return None
        return self._rows[y][x]

    def type_at(self, x, y):
        cell = self.cell_at(x, y)
        return None if cell is None else cell.type

    def passable(self, point):
        # Doors are open terrain; keys are collectibles lying on the floor
        cell = self.cell_at(point[0], point[1])
        return cell is not None and cell.type is not CellType.WALL

    def neighbors(self, point):
        """Passable 4-directional neighbors of ``point`` in +x, +y, -x, -y order."""
        x, y = point
        out = []
        for dx, dy in DIRECTIONS:
            n = Point(x + dx, y + dy)
            if self.passable(n):
                out.append(n)
        return out

    def rows(self) -> Iterator[List[Cell]]:
        for row in self._rows:
            yield list(row)

    def cells(self) -> Iterator[Cell]:
        for row in self._rows:
            yield from row

    def find_by_type(self, cell_type):
        cell_type = coerce_type(cell_type)
        return [c.point for c in self.cells() if c.type is cell_type]

    def find_start_and_exit(self):
        starts = self.find_by_type(CellType.START)
        exits = self.find_by_type(CellType.EXIT)
        return (starts[0] if starts else None, exits[0] if exits else None)

    # --- editing --- #
    def set_type(self, x, y, cell_type):
        cell_type = coerce_type(cell_type)
        cell = self.cell_at(x, y)
        if cell is None:
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} grid")
        if cell_type in UNIQUE_TYPES:
            for p in self.find_by_type(cell_type):
                self._rows[p.y][p.x].type = CellType.EMPTY
        cell.type = cell_type

    def fill(self, cell_type):
        cell_type = coerce_type(cell_type)
        if cell_type in UNIQUE_TYPES:
            raise ValueError(f"cannot fill a grid with {cell_type.value} cells")
        for cell in self.cells():
            cell.type = cell_type

    def clear(self):
        self.fill(CellType.EMPTY)
        self.reset_search_state()

    def reset_search_state(self):
        for cell in self.cells():
            cell.visited = False
            cell.on_path = False

    def mark_visited(self, point):
        cell = self.cell_at(point[0], point[1])
        if cell is not None:
            cell.visited = True

    def mark_path(self, path):
        for point in path:
            cell = self.cell_at(point[0], point[1])
            if cell is not None:
                cell.on_path = True

    def copy(self):
        other = Grid(self.width, self.height)
        for cell in self.cells():
            twin = other._rows[cell.y][cell.x]
            twin.type = cell.type
            twin.visited = cell.visited
            twin.on_path = cell.on_path
        return other

    def to_codes(self):
        """Row-major matrix of integer cell codes."""
        return [[CODE_OF[c.type] for c in row] for row in self._rows]
