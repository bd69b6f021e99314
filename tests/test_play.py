import pytest

from mazecore.errors import MissingEndpointError
from mazecore.grid import Grid, Point
from mazecore.play import MoveStatus, PlaySession, visible_cells

from conftest import parse


@pytest.fixture
def door_maze():
    return parse("""
        S.d.E
        #k###
    """)


def test_player_starts_on_start(door_maze):
    session = PlaySession(door_maze)
    assert session.position == Point(0, 0)
    assert session.keys == 0
    assert not session.won


def test_no_start_no_session():
    with pytest.raises(MissingEndpointError):
        PlaySession(Grid.create_empty(3, 3))


def test_moves_must_be_adjacent_and_open(door_maze):
    session = PlaySession(door_maze)
    assert session.move_to(2, 0) is MoveStatus.BLOCKED
    assert session.move_to(1, 1) is MoveStatus.BLOCKED
    assert session.move("down") is MoveStatus.BLOCKED
    assert session.move("left") is MoveStatus.BLOCKED
    assert session.position == Point(0, 0)
    assert session.moves == 0


def test_door_needs_a_key(door_maze):
    session = PlaySession(door_maze)
    assert session.move("right") is MoveStatus.MOVED
    assert session.move("right") is MoveStatus.LOCKED
    assert session.position == Point(1, 0)

    assert session.move("s") is MoveStatus.MOVED
    assert session.keys == 1
    session.move("w")
    assert session.move("d") is MoveStatus.MOVED
    assert session.position == Point(2, 0)


def test_key_counts_once(door_maze):
    session = PlaySession(door_maze)
    for key in ("ArrowRight", "ArrowDown", "ArrowUp", "ArrowDown"):
        session.move(key)
    assert session.keys == 1


def test_doors_do_not_use_up_keys():
    session = PlaySession(parse("""
        Skdd.E
    """))
    for _ in range(5):
        session.move("right")
    assert session.won
    assert session.keys == 1


def test_reaching_exit_wins_and_ends_session(door_maze):
    session = PlaySession(door_maze)
    for d in ("right", "down", "up", "right", "right"):
        session.move(d)
    assert session.move("right") is MoveStatus.WON
    assert session.won
    assert session.moves == 6
    assert session.move("left") is MoveStatus.FINISHED
    assert session.position == Point(4, 0)


def test_unknown_direction(door_maze):
    with pytest.raises(ValueError):
        PlaySession(door_maze).move("north-east")


def test_visible_cells_use_euclidean_radius():
    grid = Grid.create_empty(9, 9)
    seen = visible_cells(grid, Point(4, 4), 2)
    assert Point(4, 2) in seen
    assert Point(5, 5) in seen
    assert Point(6, 6) not in seen
    assert len(seen) == 13


def test_visible_cells_are_clipped_to_grid():
    grid = Grid.create_empty(5, 5)
    assert visible_cells(grid, Point(0, 0), 1) == {Point(0, 0), Point(1, 0), Point(0, 1)}


def test_fog_tracks_discovered_cells():
    grid = Grid.create_empty(12, 3)
    grid.set_type(0, 1, "start")
    grid.set_type(11, 1, "exit")
    session = PlaySession(grid, visibility_radius=2)
    assert session.discovered == {Point(0, 1)}
    assert not session.is_visible((5, 1))

    for _ in range(3):
        session.move("right")
    assert session.is_visible((5, 1))
    assert not session.is_visible((0, 1))
    # cells seen earlier stay discovered
    assert Point(0, 1) in session.discovered
    assert Point(5, 1) in session.discovered
    assert Point(6, 1) not in session.discovered


def test_without_fog_everything_is_visible(door_maze):
    session = PlaySession(door_maze)
    assert session.is_visible((4, 1))
    assert len(session.visible()) == 10
