import pytest

from mazecore.errors import ConfigError
from mazecore.generator import generate
from mazecore.settings import Settings, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings == Settings()
    assert settings.step_delay == 0


def test_environment_overrides():
    settings = load_settings({
        "PORT": "8080",
        "MAZE_DEBUG": "yes",
        "MAZE_STEP_DELAY_MS": "25",
        "MAZE_MAX_WALK_STEPS": "50",
        "MAZE_LOG_LEVEL": "debug",
    })
    assert settings.port == 8080
    assert settings.debug is True
    assert settings.step_delay == pytest.approx(0.025)
    assert settings.max_walk_steps == 50
    assert settings.log_level == "DEBUG"


def test_clamp_size():
    settings = load_settings({"MAZE_MIN_SIZE": "9", "MAZE_MAX_SIZE": "31"})
    assert settings.clamp_size(3) == 9
    assert settings.clamp_size(50) == 31
    assert settings.clamp_size("15") == 15


@pytest.mark.parametrize("env", [
    {"PORT": "eighty"},
    {"PORT": "0"},
    {"MAZE_DEBUG": "maybe"},
    {"MAZE_STEP_DELAY_MS": "-1"},
    {"MAZE_LOG_LEVEL": "LOUD"},
    {"MAZE_MIN_SIZE": "40", "MAZE_MAX_SIZE": "20"},
])
def test_invalid_values(env):
    with pytest.raises(ConfigError):
        load_settings(env)


@pytest.mark.parametrize("key", ["MAZE_MIN_SIZE", "MAZE_MAX_SIZE"])
def test_sizes_below_generator_minimum_are_rejected(key):
    with pytest.raises(ConfigError):
        load_settings({key: "4"})


def test_smallest_accepted_size_can_be_generated():
    settings = load_settings({"MAZE_MIN_SIZE": "5"})
    size = settings.clamp_size(1)
    grid = generate(width=size, height=size, seed=1)
    assert (grid.width, grid.height) == (5, 5)
