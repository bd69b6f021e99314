"""
Path search engine.

Each strategy is a generator over a read-only Grid that yields one event per
step: ``Visit(point)`` when a cell is finalized and, if the exit is reached,
a single ``PathFound(path)`` at the end. The generator returns an ``Outcome``
(via StopIteration) holding the path and the visited count. Nothing here
touches the caller's grid; ``apply_result`` copies a finished result onto a
presentation grid.

``run`` drives a strategy to completion, calling ``on_visit`` and
``on_path_found``, sleeping ``delay`` seconds between steps (animation
pacing, zero by default) and stopping early when ``cancel`` is set.

Strategies:
  astar        best-first search, f = g + manhattan, shortest 4-way path
  random       random walk with backtracking, seeded, bounded by max_steps
  neural       best-first under another name, reports 0.8x elapsed time
"""
import heapq
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .errors import MissingEndpointError
from .grid import Point

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 1000


@dataclass(frozen=True)
class Visit:
    point: Point


@dataclass(frozen=True)
class PathFound:
    path: Tuple[Point, ...]


@dataclass(frozen=True)
class Outcome:
    path: Tuple[Point, ...]
    visited_count: int


@dataclass(frozen=True)
class SearchResult:
    algorithm: str
    path: Tuple[Point, ...]
    visited_count: int
    elapsed_ms: float
    visited: Tuple[Point, ...] = ()
    cancelled: bool = False

    @property
    def found(self):
        return bool(self.path)

    @property
    def path_length(self):
        return len(self.path)


def manhattan(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _reconstruct(came_from, end):
    path = [end]
    while came_from.get(path[-1]) is not None:
        path.append(came_from[path[-1]])
    path.reverse()
    return tuple(path)


# --- strategies (step generators) --- #
def astar_steps(grid, start, exit_):
    start, exit_ = Point(*start), Point(*exit_)
    g: Dict[Point, int] = {start: 0}
    came_from: Dict[Point, Optional[Point]] = {start: None}
    closed = set()
    seq = 0
    # (f, seq, g, point); seq keeps equal-f entries in insertion order
    open_heap = [(manhattan(start, exit_), seq, 0, start)]

    while open_heap:
        _, _, g_cur, cur = heapq.heappop(open_heap)
        if cur in closed or g_cur != g[cur]:
            continue  # stale entry
        closed.add(cur)
        yield Visit(cur)

        if cur == exit_:
            path = _reconstruct(came_from, cur)
            yield PathFound(path)
            return Outcome(path, len(closed))

        for nxt in grid.neighbors(cur):
            if nxt in closed:
                continue
            tentative = g_cur + 1
            if tentative < g.get(nxt, tentative + 1):
                g[nxt] = tentative
                came_from[nxt] = cur
                seq += 1
                heapq.heappush(open_heap, (tentative + manhattan(nxt, exit_), seq, tentative, nxt))

    return Outcome((), len(closed))


def random_walk_steps(grid, start, exit_, rng=None, max_steps=DEFAULT_MAX_STEPS):
    """Wander without a map: step to a random unvisited neighbor, back up when stuck.

    The returned path is the walk stack at the moment the exit is reached, so
    it is a valid route but rarely the shortest one.
    """
    if rng is None:
        rng = random.Random()
    start, exit_ = Point(*start), Point(*exit_)
    visited = {start}
    stack = [start]
    steps = 0

    while steps < max_steps:
        cur = stack[-1]
        if cur == exit_:
            path = tuple(stack)
            yield PathFound(path)
            return Outcome(path, len(visited))

        options = [n for n in grid.neighbors(cur) if n not in visited]
        if options:
            nxt = options[rng.randrange(len(options))]
            visited.add(nxt)
            stack.append(nxt)
            yield Visit(nxt)
        elif len(stack) > 1:
            stack.pop()
        else:
            break
        steps += 1

    return Outcome((), len(visited))


@dataclass(frozen=True)
class Strategy:
    key: str
    label: str
    steps: Callable
    time_scale: float = 1.0
    randomized: bool = False


ASTAR = Strategy("astar", "A* Algorithm", astar_steps)
RANDOM_WALK = Strategy("random", "Random Walk", random_walk_steps, randomized=True)
# Same search as A*; only the reported timing differs
NEURAL = Strategy("neural", "Neural Pathfinding", astar_steps, time_scale=0.8)

STRATEGIES = {s.key: s for s in (ASTAR, RANDOM_WALK, NEURAL)}
_ALIASES = {s.label.lower(): s for s in STRATEGIES.values()}
_ALIASES.update({"a*": ASTAR, "random_walk": RANDOM_WALK})


def get_strategy(name):
    """Look a strategy up by key ("astar") or display label ("A* Algorithm")."""
    key = (name or "").strip().lower()
    strategy = STRATEGIES.get(key) or _ALIASES.get(key)
    if strategy is None:
        raise KeyError(f"unknown algorithm: {name!r}")
    return strategy


def _endpoints(grid, start, exit_):
    if start is None or exit_ is None:
        found_start, found_exit = grid.find_start_and_exit()
        start = start if start is not None else found_start
        exit_ = exit_ if exit_ is not None else found_exit
    if start is None or exit_ is None:
        raise MissingEndpointError("the grid needs both a start and an exit cell")
    for name, p in (("start", start), ("exit", exit_)):
        if not grid.in_bounds(p[0], p[1]):
            raise MissingEndpointError(f"{name} {tuple(p)} is outside the grid")
    return Point(*start), Point(*exit_)


def run(strategy, grid, start=None, exit_=None, on_visit=None, on_path_found=None,
        delay=0.0, cancel=None, seed=None, max_steps=DEFAULT_MAX_STEPS):
    """Run ``strategy`` (a Strategy or its name) to completion and return a SearchResult.

    ``start``/``exit_`` default to the grid's Start and Exit cells. ``seed``
    and ``max_steps`` only apply to randomized strategies. ``cancel`` is any
    object with an ``is_set()`` method, typically a ``threading.Event``; it is
    checked after every step.
    """
    if not isinstance(strategy, Strategy):
        strategy = get_strategy(strategy)
    start, exit_ = _endpoints(grid, start, exit_)

    if strategy.randomized:
        steps = strategy.steps(grid, start, exit_, rng=random.Random(seed), max_steps=max_steps)
    else:
        steps = strategy.steps(grid, start, exit_)

    trace = []
    outcome = None
    cancelled = False
    began = time.perf_counter()
    while True:
        try:
            event = next(steps)
        except StopIteration as stop:
            outcome = stop.value
            break
        if isinstance(event, Visit):
            trace.append(event.point)
            if on_visit is not None:
                on_visit(event.point)
            if cancel is not None and cancel.is_set():
                steps.close()
                cancelled = True
                break
            if delay > 0:
                time.sleep(delay)
        elif isinstance(event, PathFound) and on_path_found is not None:
            on_path_found(list(event.path))
    elapsed_ms = (time.perf_counter() - began) * 1000.0 * strategy.time_scale

    if cancelled:
        result = SearchResult(strategy.key, (), len(trace), elapsed_ms, tuple(trace), cancelled=True)
    else:
        result = SearchResult(strategy.key, outcome.path, outcome.visited_count, elapsed_ms, tuple(trace))
    logger.debug(
        "%s on %r: path=%d visited=%d %.2fms%s",
        strategy.key, grid, result.path_length, result.visited_count, elapsed_ms,
        " (cancelled)" if cancelled else "",
    )
    return result


def astar(grid, start=None, exit_=None, on_visit=None, on_path_found=None, **kwargs):
    return run(ASTAR, grid, start, exit_, on_visit, on_path_found, **kwargs)


def random_walk(grid, start=None, exit_=None, on_visit=None, on_path_found=None, **kwargs):
    return run(RANDOM_WALK, grid, start, exit_, on_visit, on_path_found, **kwargs)


def neural(grid, start=None, exit_=None, on_visit=None, on_path_found=None, **kwargs):
    return run(NEURAL, grid, start, exit_, on_visit, on_path_found, **kwargs)


def apply_result(grid, result):
    """Reset ``grid``'s search flags and mark the trace and path of ``result``."""
    grid.reset_search_state()
    for p in result.visited:
        grid.mark_visited(p)
    grid.mark_path(result.path)
    return grid
