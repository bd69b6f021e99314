"""
Maze records, the dict form a maze is stored and exchanged in:

    {id, name, description, isPublic, gridSize,
     cells: [{x, y, type, visited?, path?}, ...], userId, createdAt}

``cells`` lists every coordinate of the gridSize x gridSize square exactly once.
"""
from datetime import datetime, timezone

from .errors import RecordError
from .grid import CellType, Grid, UNIQUE_TYPES

REQUIRED_KEYS = ("name", "isPublic", "gridSize", "cells")


def cell_record(cell, with_flags=True):
    out = {"x": cell.x, "y": cell.y, "type": cell.type.value}
    if with_flags:
        out["visited"] = cell.visited
        out["path"] = cell.on_path
    return out


def to_record(grid, name, description=None, is_public=False, maze_id=None,
              user_id=None, created_at=None, with_flags=False):
    if grid.width != grid.height:
        raise RecordError(f"records hold square grids, got {grid.width}x{grid.height}")
    if created_at is None:
        created_at = datetime.now(timezone.utc).isoformat()
    record = {
        "name": name,
        "isPublic": bool(is_public),
        "gridSize": grid.width,
        "cells": [cell_record(c, with_flags) for c in grid.cells()],
        "createdAt": created_at,
    }
    if maze_id is not None:
        record["id"] = maze_id
    if description is not None:
        record["description"] = description
    if user_id is not None:
        record["userId"] = user_id
    return record


def _int_field(data, key):
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordError(f"{key} must be an integer, got {value!r}")
    return value


def from_record(data):
    """Rebuild a Grid from a record; returns (grid, meta) where meta is the record minus cells."""
    if not isinstance(data, dict):
        raise RecordError("a maze record must be an object")
    missing = [k for k in REQUIRED_KEYS if k not in data]
    if missing:
        raise RecordError(f"maze record is missing: {', '.join(missing)}")
    if not isinstance(data["isPublic"], bool):
        raise RecordError("isPublic must be a boolean")
    size = _int_field(data, "gridSize")
    if size <= 0:
        raise RecordError(f"gridSize must be positive, got {size}")

    cells = data["cells"]
    if not isinstance(cells, list) or len(cells) != size * size:
        got = len(cells) if isinstance(cells, list) else type(cells).__name__
        raise RecordError(f"expected {size * size} cells for gridSize {size}, got {got}")

    grid = Grid(size, size)
    seen = set()
    uniques = {t: 0 for t in UNIQUE_TYPES}
    for raw in cells:
        if not isinstance(raw, dict):
            raise RecordError(f"cell must be an object, got {raw!r}")
        x, y = _int_field(raw, "x"), _int_field(raw, "y")
        if not grid.in_bounds(x, y):
            raise RecordError(f"cell ({x}, {y}) is outside a {size}x{size} grid")
        if (x, y) in seen:
            raise RecordError(f"cell ({x}, {y}) appears more than once")
        seen.add((x, y))
        try:
            cell_type = CellType(raw.get("type"))
        except (TypeError, ValueError):
            raise RecordError(f"cell ({x}, {y}) has unknown type {raw.get('type')!r}") from None
        if cell_type in uniques:
            uniques[cell_type] += 1
            if uniques[cell_type] > 1:
                raise RecordError(f"maze record has more than one {cell_type.value} cell")
        cell = grid.cell_at(x, y)
        cell.type = cell_type
        cell.visited = bool(raw.get("visited", False))
        cell.on_path = bool(raw.get("path", False))

    meta = {k: v for k, v in data.items() if k != "cells"}
    return grid, meta


def metrics(result):
    """The numbers the editor shows after a run."""
    return {
        "computationTime": round(result.elapsed_ms, 3),
        "cellsEvaluated": result.visited_count,
        "pathLength": result.path_length,
        "status": "Solution Found" if result.found else "No Solution",
    }


def difficulty_label(grid_size):
    """Level-list difficulty of a saved maze, judged by its side length."""
    if grid_size <= 10:
        return "Easy"
    if grid_size <= 15:
        return "Medium"
    if grid_size <= 20:
        return "Hard"
    return "Expert"
