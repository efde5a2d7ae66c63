"""
Maze occupancy grid.

The grid is a ``width x height`` table of booleans indexed ``grid[x][y]``.
A True cell is a corridor cell. Cells only ever go from False to True.

Corridors are dug on the even sublattice: every even-aligned cell is a
potential corridor cell and the odd cell between two of them is the wall
that gets knocked through when they are joined.
"""

import logging
import random
from typing import TYPE_CHECKING, Callable, Iterator, Optional

from mazedig.core.geometry import DIG_DIRECTIONS, Position, Vector
from mazedig.core.surface import BACKGROUND_COLOR, CORRIDOR_COLOR, DrawingSurface, NullSurface

if TYPE_CHECKING:
    from mazedig.core.digger import MazeDigger
    from mazedig.core.scheduler import Scheduler

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 6
DEFAULT_DIG_INTERVAL_MS = 200
DIG_START_VECTOR = Vector(-2, 0)

# Scan vectors for find_open_location: north or east.
_SCAN_VECTORS = DIG_DIRECTIONS[:2]


class Maze:
    """
    A maze grid with a fixed exit cell.

    Example usage:
        maze = Maze(40, 40)
        maze.dig()
        runner = RightHandRunner(maze)
        runner.solve()
    """

    def __init__(
        self,
        width: int = 100,
        height: int = 100,
        exit: Optional[Position] = None,
        surface: Optional[DrawingSurface] = None,
        scale: int = DEFAULT_SCALE,
    ):
        """
        Initialize maze and dig its exit cell.

        Args:
            width: Grid width, a positive even integer.
            height: Grid height, a positive even integer.
            exit: Exit cell. Defaults to near the right edge on an even row.
            surface: Drawing surface to paint onto.
            scale: Pixels per grid cell on the surface.

        Raises:
            ValueError: If the dimensions are not positive and even, or the
                exit lies outside the grid.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")
        if width % 2 or height % 2:
            raise ValueError(f"Maze dimensions must be even, got {width}x{height}")

        self.width = width
        self.height = height
        self.exit = exit or Position(width - 2, (height // 4) * 2)
        if not self.is_inside(self.exit):
            raise ValueError(
                f"Exit ({self.exit.x}, {self.exit.y}) lies outside the {width}x{height} grid"
            )
        if self.exit.x % 2 or self.exit.y % 2:
            raise ValueError(f"Exit ({self.exit.x}, {self.exit.y}) must be on even coordinates")
        self.surface: DrawingSurface = surface or NullSurface()
        self.scale = scale
        self.is_dug = False
        self.grid: list[list[bool]] = []
        self.erase()

    def erase(self) -> None:
        """Allocate a fresh grid (discarding any previous one) and dig the exit."""
        self.grid = [[False] * self.height for _ in range(self.width)]
        self.grid[self.exit.x][self.exit.y] = True
        self.is_dug = False

        self.surface.fill_rect(0, 0, self.width * self.scale, self.height * self.scale, BACKGROUND_COLOR)
        self.surface.fill_rect(
            self.exit.x * self.scale - 5, self.exit.y * self.scale - 5, 20, 10, CORRIDOR_COLOR
        )

    def is_inside(self, position: Position) -> bool:
        """Check whether position lies within the grid."""
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def is_passable(self, position: Position) -> bool:
        """Check whether position is a corridor cell. Outside the grid is never passable."""
        if not self.is_inside(position):
            return False
        return self.grid[position.x][position.y]

    def mark_passable(self, position: Position) -> None:
        """
        Dig a cell.

        Raises:
            IndexError: If position lies outside the grid.
        """
        if not self.is_inside(position):
            raise IndexError(f"Cannot dig ({position.x}, {position.y}) outside the grid")
        self.grid[position.x][position.y] = True

    def paint(self, position: Position, color: str, size: int) -> None:
        """Fill a size x size square centred on the cell."""
        half = size / 2
        self.surface.fill_rect(
            position.x * self.scale - half, position.y * self.scale - half, size, size, color
        )

    def passable_cells(self) -> Iterator[Position]:
        """Yield every corridor cell, column by column."""
        for x, column in enumerate(self.grid):
            for y, cell in enumerate(column):
                if cell:
                    yield Position(x, y)

    @property
    def corridor_count(self) -> int:
        """Number of corridor cells."""
        return sum(sum(column) for column in self.grid)

    def find_open_location(
        self,
        is_valid: Callable[[Position], bool],
        rng: Optional[random.Random] = None,
    ) -> Optional[Position]:
        """
        Find a corridor cell accepted by is_valid.

        Starts at a random even cell and scans north or east (picked at
        random). Scanning north past the top wraps to the bottom of the next
        column to the right; scanning east past the right edge wraps to the
        left of the next row up. Each even cell is visited at most once; if
        the scan comes back to its start cell, nothing qualifies.

        Args:
            is_valid: Called with each corridor cell in scan order until it
                returns True.
            rng: Random source. Defaults to the ``random`` module.

        Returns:
            The first qualifying cell, or None if none exists.
        """
        rng = rng or random
        x = rng.randrange(self.width // 2) * 2
        y = rng.randrange(self.height // 2) * 2
        origin = (x, y)
        vector = rng.choice(_SCAN_VECTORS)

        while not self.grid[x][y] or not is_valid(Position(x, y)):
            x += vector.x
            y += vector.y
            if x >= self.width:
                x -= self.width
                y -= 2
                if y < 0:
                    y += self.height
            elif y < 0:
                y += self.height
                x += 2
                if x >= self.width:
                    x -= self.width
            if (x, y) == origin:
                return None
        return Position(x, y)

    def dig(
        self,
        scheduler: Optional["Scheduler"] = None,
        interval_ms: int = DEFAULT_DIG_INTERVAL_MS,
        rng: Optional[random.Random] = None,
        **digger_options,
    ) -> "MazeDigger":
        """
        Dig the maze starting from the exit cell.

        Without a scheduler digging runs to completion before returning.
        With one, the digger is registered on it and this returns at once;
        ``is_dug`` turns True when the digger finishes.

        Args:
            scheduler: Optional tick source to dig on.
            interval_ms: Interval between dig steps when scheduled.
            rng: Random source shared with the digger.
            **digger_options: Passed to MazeDigger (probabilities, bounds).

        Returns:
            The digger doing the work.
        """
        from mazedig.core.digger import MazeDigger

        digger = MazeDigger(self, self.exit, DIG_START_VECTOR, rng=rng, **digger_options)
        if scheduler is None:
            digger.dig_all()
        else:
            digger.run(scheduler, interval_ms)
        return digger

    def mark_dug(self) -> None:
        """Record that digging has finished."""
        self.is_dug = True
        logger.debug(f"Maze {self.width}x{self.height} completely dug ({self.corridor_count} cells)")
