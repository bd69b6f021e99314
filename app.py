"""
Maze designer backend (Flask).
Endpoints:
  POST /api/generate_maze  -> { size | width+height, style, difficulty, seed }
                              returns { maze: [[0..5]], width, height, start, exit, style, difficulty }
  POST /api/solve_maze     -> { maze: [[0..5]] | record: {...}, algorithm: 'astar'|'random'|'neural', seed }
                              returns { explored, path: [[x,y]..], time: ms, visited_steps: [[x,y]..], metrics }
Cell codes: 0 empty, 1 wall, 2 start, 3 exit, 4 key, 5 door.
Run locally:
  python3 -m venv venv
  source venv/bin/activate
  pip install -r requirements.txt
  python app.py
"""
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from mazecore import generate, records, search
from mazecore.errors import MazeError
from mazecore.generator import MazeGenerationOptions
from mazecore.grid import Grid
from mazecore.settings import load_settings

settings = load_settings()
logging.basicConfig(level=settings.log_level)

app = Flask(__name__)
app.config["MAZE_SETTINGS"] = settings
CORS(app)


def _point(p):
    return None if p is None else [p.x, p.y]


def _payload():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise MazeError("request body must be a JSON object")
    return payload


def _seed(payload):
    seed = payload.get("seed")
    if seed is None or isinstance(seed, str):
        return seed
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise MazeError(f"seed must be an integer or a string, got {seed!r}")
    return seed


def _grid_from_payload(payload):
    if payload.get("record") is not None:
        grid, _ = records.from_record(payload["record"])
        return grid
    maze = payload.get("maze")
    if not maze:
        return None
    if not isinstance(maze, list) or not all(isinstance(row, list) for row in maze):
        raise MazeError("maze must be a list of rows")
    try:
        return Grid.from_rows(maze)
    except (TypeError, ValueError) as exc:
        raise MazeError(f"invalid maze data: {exc}") from exc


@app.errorhandler(MazeError)
def handle_maze_error(exc):
    app.logger.info("rejected request to %s: %s", request.path, exc)
    return jsonify({'error': str(exc)}), 400


# --- Flask API routes --- #
@app.route('/api/generate_maze', methods=['POST'])
def api_generate_maze():
    cfg = app.config["MAZE_SETTINGS"]
    payload = _payload()
    size = payload.get('size', 21)
    try:
        width = cfg.clamp_size(payload.get('width', size))
        height = cfg.clamp_size(payload.get('height', size))
        difficulty = int(payload.get('difficulty', 3))
    except (TypeError, ValueError):
        return jsonify({'error': 'size, width, height and difficulty must be integers'}), 400

    options = MazeGenerationOptions(
        style=payload.get('style', 'Labyrinth'),
        difficulty=difficulty,
        width=width,
        height=height,
        seed=_seed(payload),
    )
    grid = generate(options)
    start, exit_ = grid.find_start_and_exit()
    return jsonify({
        'maze': grid.to_codes(),
        'width': width,
        'height': height,
        'start': _point(start),
        'exit': _point(exit_),
        'style': options.style.value,
        'difficulty': difficulty,
    })


@app.route('/api/solve_maze', methods=['POST'])
def api_solve_maze():
    cfg = app.config["MAZE_SETTINGS"]
    payload = _payload()
    grid = _grid_from_payload(payload)
    if grid is None:
        return jsonify({'error': 'maze data required'}), 400
    algorithm = payload.get('algorithm') or 'astar'
    try:
        strategy = search.get_strategy(str(algorithm))
    except KeyError:
        return jsonify({'error': f'unknown algorithm: {algorithm}'}), 400

    result = search.run(
        strategy,
        grid,
        delay=cfg.step_delay,
        seed=_seed(payload),
        max_steps=cfg.max_walk_steps,
    )
    return jsonify({
        'algorithm': result.algorithm,
        'explored': result.visited_count,
        'path': [[p.x, p.y] for p in result.path],
        'time': int(result.elapsed_ms),
        'visited_steps': [[p.x, p.y] for p in result.visited],
        'metrics': records.metrics(result),
    })


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=settings.port, debug=settings.debug)
