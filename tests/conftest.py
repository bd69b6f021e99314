import pytest

from mazecore.grid import CellType, Grid

CHARS = {
    ".": CellType.EMPTY,
    "#": CellType.WALL,
    "S": CellType.START,
    "E": CellType.EXIT,
    "k": CellType.KEY,
    "d": CellType.DOOR,
}


def parse(text):
    """Grid from an ascii picture, one row per line."""
    lines = [line.strip() for line in text.strip().splitlines()]
    return Grid.from_rows([[CHARS[ch] for ch in line] for line in lines])


def assert_valid_path(grid, path, start, exit_):
    assert path[0] == start
    assert path[-1] == exit_
    for a, b in zip(path, path[1:]):
        assert abs(a.x - b.x) + abs(a.y - b.y) == 1
    for p in path:
        assert grid.type_at(p.x, p.y) is not CellType.WALL


@pytest.fixture
def gap_wall_grid():
    """10x10, start (1,1), exit (8,8), wall at x=5 with a gap at y=5."""
    grid = Grid.create_empty(10, 10)
    for y in range(10):
        if y != 5:
            grid.set_type(5, y, CellType.WALL)
    grid.set_type(1, 1, CellType.START)
    grid.set_type(8, 8, CellType.EXIT)
    return grid


@pytest.fixture
def boxed_start_grid():
    return parse("""
        ..........
        .#####....
        .#...#....
        .#.S.#....
        .#...#....
        .#####....
        ........E.
    """)
