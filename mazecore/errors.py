"""
Exceptions raised by the maze engine.
"""


class MazeError(Exception):
    """Base class for every error the engine raises on purpose."""


class ConfigError(MazeError):
    pass


class InvalidOptionsError(MazeError):
    """Generation options out of range (style, difficulty or size)."""


class RecordError(MazeError):
    """A maze record that does not describe a complete grid."""


class MissingEndpointError(MazeError):
    """A search was started on a grid without a Start or an Exit."""
