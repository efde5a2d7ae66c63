# Core module
from .errors import DiggingInProgressError, MazeError, MazeTextError
from .geometry import DIG_DIRECTIONS, RUN_DIRECTIONS, Bounds, Position, Vector
from .maze import Maze
from .digger import MazeDigger
from .runner import MazeRunner, RightHandRunner, RunResult
from .scheduler import AsyncioScheduler, ManualScheduler
from .surface import NullSurface, RecordingSurface
from .maze_text import parse_maze_text, render_maze_rows, render_maze_text

__all__ = [
    "DiggingInProgressError",
    "MazeError",
    "MazeTextError",
    "DIG_DIRECTIONS",
    "RUN_DIRECTIONS",
    "Bounds",
    "Position",
    "Vector",
    "Maze",
    "MazeDigger",
    "MazeRunner",
    "RightHandRunner",
    "RunResult",
    "AsyncioScheduler",
    "ManualScheduler",
    "NullSurface",
    "RecordingSurface",
    "parse_maze_text",
    "render_maze_rows",
    "render_maze_text",
]
