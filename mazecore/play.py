"""
Play mode: a player walks the maze one cell at a time.

  - moves go to a 4-adjacent cell and never into a wall
  - stepping on a key adds it to the player's keys (each key counts once)
  - a door stops the player until at least one key is held; keys are not
    used up by doors
  - reaching the exit wins and ends the session

With a visibility radius set (fog-of-war), only cells within that Euclidean
distance of the player are visible, and every cell seen so far stays
discovered.
"""
import logging
from enum import Enum

from .errors import MissingEndpointError
from .grid import CellType, Point

logger = logging.getLogger(__name__)

DEFAULT_VISIBILITY_RADIUS = 4

# (dx, dy) per direction name, keyboard keys included
MOVES = {
    "up": (0, -1), "w": (0, -1), "arrowup": (0, -1),
    "down": (0, 1), "s": (0, 1), "arrowdown": (0, 1),
    "left": (-1, 0), "a": (-1, 0), "arrowleft": (-1, 0),
    "right": (1, 0), "d": (1, 0), "arrowright": (1, 0),
}


class MoveStatus(str, Enum):
    MOVED = "moved"
    BLOCKED = "blocked"
    LOCKED = "locked"
    WON = "won"
    FINISHED = "finished"


def visible_cells(grid, center, radius):
    """Points of ``grid`` within Euclidean ``radius`` of ``center``."""
    cx, cy = center
    r = int(radius)
    out = set()
    for y in range(max(0, cy - r), min(grid.height, cy + r + 1)):
        for x in range(max(0, cx - r), min(grid.width, cx + r + 1)):
            if (x - cx) ** 2 + (y - cy) ** 2 <= radius * radius:
                out.add(Point(x, y))
    return out


class PlaySession:
    def __init__(self, grid, visibility_radius=None):
        start, _ = grid.find_start_and_exit()
        if start is None:
            raise MissingEndpointError("the grid needs a start cell to play")
        self.grid = grid
        self.visibility_radius = visibility_radius
        self.position = start
        self.collected = set()
        self.moves = 0
        self.won = False
        self.discovered = {start}

    @property
    def keys(self):
        return len(self.collected)

    @property
    def fog(self):
        return self.visibility_radius is not None

    def visible(self):
        if not self.fog:
            return {c.point for c in self.grid.cells()}
        return visible_cells(self.grid, self.position, self.visibility_radius)

    def is_visible(self, point):
        return not self.fog or Point(*point) in self.visible()

    def move_to(self, x, y):
        if self.won:
            return MoveStatus.FINISHED
        if abs(x - self.position.x) + abs(y - self.position.y) != 1:
            return MoveStatus.BLOCKED
        cell = self.grid.cell_at(x, y)
        if cell is None or cell.type is CellType.WALL:
            return MoveStatus.BLOCKED
        if cell.type is CellType.DOOR and not self.collected:
            return MoveStatus.LOCKED
        if cell.type is CellType.KEY:
            self.collected.add(cell.point)

        self.position = cell.point
        self.moves += 1
        if self.fog:
            self.discovered |= self.visible()
        if cell.type is CellType.EXIT:
            self.won = True
            logger.debug("exit reached after %d moves with %d keys", self.moves, self.keys)
            return MoveStatus.WON
        return MoveStatus.MOVED

    def move(self, direction):
        """Move by direction name: up/down/left/right, w/a/s/d or arrow key names."""
        try:
            dx, dy = MOVES[direction.strip().lower()]
        except KeyError:
            raise ValueError(f"unknown direction: {direction!r}") from None
        return self.move_to(self.position.x + dx, self.position.y + dy)
