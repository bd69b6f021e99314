"""
Runtime settings, read from environment variables.

  PORT                 port the Flask host binds to (5000)
  MAZE_DEBUG           run the host in debug mode (false)
  MAZE_STEP_DELAY_MS   pause between search steps, in ms (0)
  MAZE_MAX_WALK_STEPS  step bound of the random walk (1000)
  MAZE_MIN_SIZE        smallest side the host will generate (10, at least 5)
  MAZE_MAX_SIZE        largest side the host will generate (101)
  MAZE_LOG_LEVEL       logging level name (INFO)
"""
import logging
import os
from dataclasses import dataclass

from .errors import ConfigError
from .generator import MIN_SIDE

TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off", ""}


def _int(env, key, default, minimum=0):
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigError(f"{key} must be >= {minimum}, got {value}")
    return value


def _bool(env, key, default):
    raw = env.get(key)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    port: int = 5000
    debug: bool = False
    step_delay_ms: int = 0
    max_walk_steps: int = 1000
    min_size: int = 10
    max_size: int = 101
    log_level: str = "INFO"

    @property
    def step_delay(self):
        """Step delay in seconds, as the search engine expects it."""
        return self.step_delay_ms / 1000.0

    def clamp_size(self, size):
        return max(self.min_size, min(int(size), self.max_size))


def load_settings(env=None):
    """Build a Settings object from ``env`` (defaults to ``os.environ``)."""
    if env is None:
        env = os.environ

    level = env.get("MAZE_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"MAZE_LOG_LEVEL is not a logging level: {level!r}")

    settings = Settings(
        port=_int(env, "PORT", 5000, minimum=1),
        debug=_bool(env, "MAZE_DEBUG", False),
        step_delay_ms=_int(env, "MAZE_STEP_DELAY_MS", 0),
        max_walk_steps=_int(env, "MAZE_MAX_WALK_STEPS", 1000, minimum=1),
        min_size=_int(env, "MAZE_MIN_SIZE", 10, minimum=MIN_SIDE),
        max_size=_int(env, "MAZE_MAX_SIZE", 101, minimum=MIN_SIDE),
        log_level=level,
    )
    if settings.min_size > settings.max_size:
        raise ConfigError("MAZE_MIN_SIZE must not exceed MAZE_MAX_SIZE")
    return settings
