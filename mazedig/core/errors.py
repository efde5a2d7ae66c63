"""Exceptions raised by the maze core."""


class MazeError(Exception):
    """Base exception for maze core failures."""

    pass


class DiggingInProgressError(MazeError):
    """Exception raised when a runner is started before digging has finished."""

    pass


class MazeTextError(MazeError):
    """Exception raised when maze text cannot be parsed."""

    pass
