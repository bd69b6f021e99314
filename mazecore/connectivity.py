"""
Breadth-first reachability over a Grid.

Walls block movement, every other cell type (doors included) is open.
Neighbors are expanded in the fixed +x, +y, -x, -y order, so among paths of
equal length ``shortest_path`` always returns the same one for a given grid.
"""
from collections import deque

from .grid import Point


def _bfs(grid, source, target, came_from):
    source, target = Point(*source), Point(*target)
    came_from[source] = None
    q = deque([source])
    while q:
        cur = q.popleft()
        if cur == target:
            return True
        for nxt in grid.neighbors(cur):
            if nxt not in came_from:
                came_from[nxt] = cur
                q.append(nxt)
    return False


def is_reachable(grid, source, target):
    return _bfs(grid, source, target, {})


def shortest_path(grid, source, target):
    """Return the BFS path from ``source`` to ``target`` inclusive, or []."""
    came_from = {}
    if not _bfs(grid, source, target, came_from):
        return []
    path = []
    cur = Point(*target)
    while cur is not None:
        path.append(cur)
        cur = came_from[cur]
    path.reverse()
    return path


def reachable_count(grid, source):
    """Number of cells in the open component containing ``source``."""
    seen = {}
    # a target that is never dequeued makes the BFS exhaust the component
    _bfs(grid, source, Point(-1, -1), seen)
    return len(seen)
