import pytest

from app import app as flask_app
from mazecore.connectivity import is_reachable
from mazecore.grid import Grid
from mazecore.records import to_record


@pytest.fixture
def client():
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as client:
        yield client


def test_generate_maze_returns_solvable_grid(client):
    resp = client.post("/api/generate_maze", json={"size": 15, "style": "Maze with Loops", "seed": 4})
    assert resp.status_code == 200
    data = resp.get_json()
    grid = Grid.from_rows(data["maze"])
    assert (grid.width, grid.height) == (15, 15)
    assert is_reachable(grid, tuple(data["start"]), tuple(data["exit"]))
    assert data["style"] == "Maze with Loops"


def test_generate_maze_clamps_size(client):
    data = client.post("/api/generate_maze", json={"size": 3}).get_json()
    assert data["width"] == 10 and data["height"] == 10


def test_generate_maze_rejects_bad_style(client):
    resp = client.post("/api/generate_maze", json={"style": "Swamp"})
    assert resp.status_code == 400
    assert "style" in resp.get_json()["error"]


def test_generate_maze_rejects_non_numeric_size(client):
    resp = client.post("/api/generate_maze", json={"size": "big"})
    assert resp.status_code == 400


def test_solve_maze_with_matrix(client, gap_wall_grid):
    resp = client.post("/api/solve_maze", json={"maze": gap_wall_grid.to_codes(), "algorithm": "astar"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert len(data["path"]) == 15
    assert data["path"][0] == [1, 1] and data["path"][-1] == [8, 8]
    assert data["explored"] == len(data["visited_steps"])
    assert data["metrics"]["status"] == "Solution Found"


def test_solve_maze_with_record(client, boxed_start_grid):
    grid = Grid(10, 10)
    for cell in boxed_start_grid.cells():
        grid.set_type(cell.x, cell.y, cell.type)
    resp = client.post("/api/solve_maze", json={"record": to_record(grid, "boxed"), "algorithm": "A* Algorithm"})
    data = resp.get_json()
    assert data["path"] == []
    assert data["explored"] == 9
    assert data["metrics"]["status"] == "No Solution"


def test_solve_maze_random_walk_is_seeded(client, gap_wall_grid):
    payload = {"maze": gap_wall_grid.to_codes(), "algorithm": "random", "seed": 11}
    first = client.post("/api/solve_maze", json=payload).get_json()
    second = client.post("/api/solve_maze", json=payload).get_json()
    assert first["path"] == second["path"]
    assert first["visited_steps"] == second["visited_steps"]


def test_solve_maze_requires_maze(client):
    resp = client.post("/api/solve_maze", json={})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "maze data required"


def test_solve_maze_requires_endpoints(client):
    resp = client.post("/api/solve_maze", json={"maze": [[0, 0], [0, 3]]})
    assert resp.status_code == 400


def test_solve_maze_rejects_unknown_algorithm(client, gap_wall_grid):
    resp = client.post("/api/solve_maze", json={"maze": gap_wall_grid.to_codes(), "algorithm": "bogo"})
    assert resp.status_code == 400


def test_solve_maze_rejects_bad_cells(client):
    resp = client.post("/api/solve_maze", json={"maze": [[0, 9]]})
    assert resp.status_code == 400


@pytest.mark.parametrize("payload", [
    {"maze": {"a": 1}},
    {"maze": [1, 2, 3]},
    {"maze": "0,1"},
])
def test_solve_maze_rejects_non_matrix_maze(client, payload):
    resp = client.post("/api/solve_maze", json=payload)
    assert resp.status_code == 400
    assert "maze" in resp.get_json()["error"]


@pytest.mark.parametrize("seed", [[1, 2], {"x": 1}, True, 1.5])
def test_generate_maze_rejects_unusable_seed(client, seed):
    resp = client.post("/api/generate_maze", json={"seed": seed})
    assert resp.status_code == 400
    assert "seed" in resp.get_json()["error"]


def test_solve_maze_rejects_unusable_seed(client, gap_wall_grid):
    payload = {"maze": gap_wall_grid.to_codes(), "algorithm": "random", "seed": {"x": 1}}
    resp = client.post("/api/solve_maze", json=payload)
    assert resp.status_code == 400
    assert "seed" in resp.get_json()["error"]


def test_string_seed_is_accepted(client):
    first = client.post("/api/generate_maze", json={"size": 11, "seed": "abc"}).get_json()
    second = client.post("/api/generate_maze", json={"size": 11, "seed": "abc"}).get_json()
    assert first["maze"] == second["maze"]


def test_non_object_body_is_rejected(client):
    resp = client.post("/api/solve_maze", json=[[0, 2], [3, 0]])
    assert resp.status_code == 400


def test_non_string_algorithm_is_rejected(client, gap_wall_grid):
    resp = client.post("/api/solve_maze", json={"maze": gap_wall_grid.to_codes(), "algorithm": 7})
    assert resp.status_code == 400
