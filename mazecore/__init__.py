"""
Maze design and pathfinding engine: grids, reachability, search strategies
and a generator that always hands back a solvable maze.
"""
from .connectivity import is_reachable, reachable_count, shortest_path
from .errors import (
    ConfigError,
    InvalidOptionsError,
    MazeError,
    MissingEndpointError,
    RecordError,
)
from .generator import MazeGenerationOptions, MazeStyle, generate
from .grid import Cell, CellType, Grid, Point
from .play import MoveStatus, PlaySession, visible_cells
from .search import (
    SearchResult,
    apply_result,
    astar,
    get_strategy,
    neural,
    random_walk,
    run,
)

__version__ = "0.2.0"
