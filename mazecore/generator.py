"""
Randomized maze generator.

  1. fill the grid with walls
  2. carve a spanning tree on the odd lattice (depth-first, explicit stack)
  3. style variation: open space, loops, or key/door pairs
  4. place start and exit, corners first
  5. difficulty: add walls that keep the maze solvable, or knock some out
  6. final check, repairing the maze if the exit became unreachable

Every maze returned by ``generate`` has a path from Start to Exit.
"""
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .connectivity import is_reachable, shortest_path
from .errors import InvalidOptionsError
from .grid import CellType, Grid, Point, DIRECTIONS

logger = logging.getLogger(__name__)

MIN_SIDE = 5
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5

OPEN_SPACE_RATIO = 0.1
LOOP_RATIO = 0.05
KEYS_PER_LEVEL = 0.7
ADJUST_RATIO = 0.1

# Carving steps two cells at a time so corridors keep a wall between them
CARVE_STEPS = tuple((dx * 2, dy * 2) for dx, dy in DIRECTIONS)


class MazeStyle(str, Enum):
    LABYRINTH = "Labyrinth"
    PUZZLE = "Puzzle Challenge"
    OPEN_SPACE = "Open Space"
    LOOPS = "Maze with Loops"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("_", " ").replace("-", " ")
        for style in cls:
            if text in (style.value.lower(), style.name.lower().replace("_", " ")):
                return style
        raise InvalidOptionsError(f"unknown maze style: {value!r}")


@dataclass(frozen=True)
class MazeGenerationOptions:
    style: MazeStyle = MazeStyle.LABYRINTH
    difficulty: int = 3
    width: int = 21
    height: int = 21
    seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "style", MazeStyle.parse(self.style))
        for name in ("difficulty", "width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidOptionsError(f"{name} must be an integer, got {value!r}")
        if not MIN_DIFFICULTY <= self.difficulty <= MAX_DIFFICULTY:
            raise InvalidOptionsError(
                f"difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got {self.difficulty}"
            )
        if self.width < MIN_SIDE or self.height < MIN_SIDE:
            raise InvalidOptionsError(
                f"maze must be at least {MIN_SIDE}x{MIN_SIDE}, got {self.width}x{self.height}"
            )


def generate(options=None, rng=None, **kwargs):
    """Generate a solvable maze.

    Accepts a MazeGenerationOptions or its fields as keyword arguments:

        generate(style="Maze with Loops", difficulty=4, width=25, height=25, seed=7)

    ``rng`` overrides the generator seeded from ``options.seed``.
    """
    if options is None:
        options = MazeGenerationOptions(**kwargs)
    elif kwargs:
        raise TypeError("pass either options or keyword fields, not both")
    if rng is None:
        rng = random.Random(options.seed)

    width, height = options.width, options.height
    logger.debug("generating %s maze %dx%d, difficulty %d",
                 options.style.value, width, height, options.difficulty)

    grid = Grid(width, height, fill=CellType.WALL)
    carve(grid, rng)
    _vary(grid, options, rng)
    start, exit_ = place_endpoints(grid, rng)
    adjust_difficulty(grid, options.difficulty, start, exit_, rng)
    ensure_solvable(grid, start, exit_)
    return grid


# --- carving --- #
def carve(grid, rng, origin=None):
    """Depth-first carve from ``origin`` (a random odd cell by default).

    Each cell shuffles its four directions once, on arrival, and tries them in
    that order; a direction is taken when the cell two steps away is still a
    wall, clearing both it and the cell in between.
    """
    if origin is None:
        origin = Point(rng.randrange(grid.width // 2) * 2 + 1,
                       rng.randrange(grid.height // 2) * 2 + 1)
    grid.set_type(origin[0], origin[1], CellType.EMPTY)
    stack = [(Point(*origin), _shuffled(rng))]
    while stack:
        (x, y), pending = stack[-1]
        if not pending:
            stack.pop()
            continue
        dx, dy = pending.pop(0)
        nx, ny = x + dx, y + dy
        if grid.type_at(nx, ny) is CellType.WALL:
            grid.set_type(x + dx // 2, y + dy // 2, CellType.EMPTY)
            grid.set_type(nx, ny, CellType.EMPTY)
            stack.append((Point(nx, ny), _shuffled(rng)))


def _shuffled(rng):
    dirs = list(CARVE_STEPS)
    rng.shuffle(dirs)
    return dirs


def _random_cell(grid, rng, x_range=None, y_range=None):
    lo_x, hi_x = x_range or (0, grid.width)
    lo_y, hi_y = y_range or (0, grid.height)
    return grid.cell_at(rng.randrange(lo_x, hi_x), rng.randrange(lo_y, hi_y))


# --- style variation --- #
def _vary(grid, options, rng):
    width, height = grid.width, grid.height
    if options.style is MazeStyle.OPEN_SPACE:
        for _ in range(math.ceil(width * height * OPEN_SPACE_RATIO)):
            cell = _random_cell(grid, rng)
            if cell.type is CellType.WALL:
                cell.type = CellType.EMPTY
    elif options.style is MazeStyle.LOOPS:
        # interior only, so the outer wall stays closed
        for _ in range(math.ceil(width * height * LOOP_RATIO)):
            cell = _random_cell(grid, rng, (1, width - 1), (1, height - 1))
            if cell.type is CellType.WALL:
                cell.type = CellType.EMPTY
    elif options.style is MazeStyle.PUZZLE:
        place_keys_and_doors(grid, int(options.difficulty * KEYS_PER_LEVEL), rng)


def place_keys_and_doors(grid, pairs, rng):
    """Drop ``pairs`` key/door pairs on empty cells.

    Pairs are placed whole or not at all, and two empty cells are always
    left over for the start and exit. Returns the number of pairs placed.
    """
    placed = 0
    for _ in range(pairs):
        if len(grid.find_by_type(CellType.EMPTY)) < 4:
            break
        for cell_type in (CellType.KEY, CellType.DOOR):
            p = rng.choice(grid.find_by_type(CellType.EMPTY))
            grid.set_type(p.x, p.y, cell_type)
        placed += 1
    return placed


# --- start / exit --- #
def corners(grid):
    w, h = grid.width, grid.height
    return [Point(1, 1), Point(w - 2, 1), Point(1, h - 2), Point(w - 2, h - 2)]


def place_endpoints(grid, rng):
    """Put Start and Exit on the first two open inner corners.

    Whatever the corners could not host is placed on a random empty cell; a
    random exit must lie farther than half the shorter side from the start.
    """
    start = exit_ = None
    for p in corners(grid):
        if grid.type_at(p.x, p.y) is not CellType.EMPTY:
            continue
        if start is None:
            start = p
            grid.set_type(p.x, p.y, CellType.START)
        elif exit_ is None:
            exit_ = p
            grid.set_type(p.x, p.y, CellType.EXIT)
            break

    if start is None:
        start = rng.choice(grid.find_by_type(CellType.EMPTY))
        grid.set_type(start.x, start.y, CellType.START)
    if exit_ is None:
        empties = grid.find_by_type(CellType.EMPTY)
        min_distance = min(grid.width, grid.height) / 2
        far = [p for p in empties if abs(p.x - start.x) + abs(p.y - start.y) > min_distance]
        if far:
            exit_ = rng.choice(far)
        else:
            exit_ = max(empties, key=lambda p: abs(p.x - start.x) + abs(p.y - start.y))
        grid.set_type(exit_.x, exit_.y, CellType.EXIT)
    return start, exit_


# --- difficulty --- #
def adjust_difficulty(grid, difficulty, start, exit_, rng):
    """Thicken (difficulty 3-5) or thin out (1-2) the walls.

    A new wall is kept only while Start still reaches Exit. The search is
    re-run only when the wall lands on the current known route; a wall
    anywhere else leaves that route intact.

    Returns the number of cells that changed type.
    """
    scale = difficulty / MAX_DIFFICULTY
    budget = int(grid.width * grid.height * ADJUST_RATIO * scale)
    changed = 0
    if scale > 0.5:
        route = set(shortest_path(grid, start, exit_))
        for _ in range(budget):
            cell = _random_cell(grid, rng)
            if cell.type is not CellType.EMPTY:
                continue
            cell.type = CellType.WALL
            if route and cell.point not in route:
                changed += 1
                continue
            detour = shortest_path(grid, start, exit_)
            if detour:
                route = set(detour)
                changed += 1
            else:
                cell.type = CellType.EMPTY
    else:
        for _ in range(budget):
            cell = _random_cell(grid, rng)
            if cell.type is CellType.WALL:
                cell.type = CellType.EMPTY
                changed += 1
    return changed


# --- solvability --- #
def carve_corridor(grid, start, exit_):
    """Clear walls along start's row to exit's column, then down that column to exit."""
    dx = 1 if exit_.x > start.x else -1
    dy = 1 if exit_.y > start.y else -1
    for x in range(start.x, exit_.x, dx):
        if grid.type_at(x, start.y) is CellType.WALL:
            grid.set_type(x, start.y, CellType.EMPTY)
    for y in range(start.y, exit_.y, dy):
        if grid.type_at(exit_.x, y) is CellType.WALL:
            grid.set_type(exit_.x, y, CellType.EMPTY)


def ensure_solvable(grid, start, exit_):
    """Make sure Exit is reachable from Start; returns False when a repair was needed."""
    if is_reachable(grid, start, exit_):
        return True
    logger.warning("maze %r unsolvable after generation, repairing", grid)
    if not shortest_path(grid, start, exit_):
        carve_corridor(grid, start, exit_)
    if not is_reachable(grid, start, exit_):
        raise RuntimeError("maze repair left the exit unreachable")
    return False
