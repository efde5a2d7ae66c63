"""
Maze runners.

Runners walk existing corridors one cell at a time until they reach the
maze exit. They never dig.

- MazeRunner: keeps going straight along a corridor and picks a random
  non-reversing direction at corners and intersections. Reverses only at
  dead ends.
- RightHandRunner: follows the wall on its right: right turn first, then
  straight, then left, then back. Deterministic, and always finds the exit
  of a maze without loops.
"""

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Optional

from mazedig.core.errors import DiggingInProgressError, MazeError
from mazedig.core.geometry import RUN_DIRECTIONS, Position, Vector
from mazedig.core.movement import DugRule, MovingPoint
from mazedig.core.scheduler import ScheduledTask, Scheduler
from mazedig.core.surface import CORRIDOR_COLOR, RIGHT_HAND_RUNNER_COLOR, RUNNER_COLOR

if TYPE_CHECKING:
    from mazedig.core.maze import Maze

logger = logging.getLogger(__name__)

RUNNER_MARK_SIZE = 6
DEFAULT_RUN_INTERVAL_MS = 100


@dataclass
class RunResult:
    """Outcome of driving a runner to completion."""
    status: Literal["exited", "enclosed", "exhausted"]
    position: Position
    steps: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status,
            "position": self.position.to_dict(),
            "steps": self.steps,
        }


class MazeRunner(MovingPoint):
    """Runner picking random turns at corners and intersections."""

    directions = RUN_DIRECTIONS
    color = RUNNER_COLOR
    kind = "random"

    def __init__(
        self,
        maze: "Maze",
        position: Optional[Position] = None,
        vector: Optional[Vector] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize runner.

        Args:
            maze: Maze to run in.
            position: Starting cell. Defaults to a random corridor cell.
            vector: Starting direction. Defaults to a random unit direction.
            rng: Random source. Defaults to a fresh random.Random().

        Raises:
            MazeError: If no position is given and the maze has no
                corridor cell on the even sublattice.
        """
        self.maze = maze
        self.rng = rng or random.Random()
        super().__init__(position, vector or self.rng.choice(self.directions), rules=(DugRule(maze),))
        self.steps = 0
        self.enclosed = False
        self._task: Optional[ScheduledTask] = None
        if position is None and not self.pick_new_location():
            raise MazeError("Maze has no corridor to start a runner on")

    @property
    def at_exit(self) -> bool:
        return self.position == self.maze.exit

    def pick_new_location(self) -> bool:
        """
        Jump to a random corridor cell.

        Returns:
            True if a cell was found, False if the maze has no corridors.
        """
        location = self.maze.find_open_location(lambda position: True, rng=self.rng)
        if location is None:
            return False
        self.position = location
        return True

    def pick_direction(self) -> bool:
        """
        Point at a random legal direction other than back the way we came.

        Reversing is only chosen when nothing else is legal.

        Returns:
            True if a direction was found, False if walled in on all sides.
        """
        reverse = self.vector.reversed()
        available = [d for d in self.legal_directions(self.directions) if d != reverse]
        if available:
            self.vector = self.rng.choice(available)
            return True
        with self.probe(reverse):
            if not self.can_move():
                return False
        self.vector = reverse
        return True

    def is_at_intersection(self) -> bool:
        """An intersection has more than two directions of travel."""
        return len(self.legal_directions(self.directions)) > 2

    def move(self) -> bool:
        """
        Take one step, re-picking direction when blocked or at an intersection.

        Returns:
            True if the runner moved, False if it is walled in.
        """
        if not self.can_move() or self.is_at_intersection():
            if not self.pick_direction():
                self.enclosed = True
                logger.warning(
                    f"{type(self).__name__} enclosed at ({self.position.x}, {self.position.y})"
                )
                return False
        self.maze.paint(self.position, CORRIDOR_COLOR, RUNNER_MARK_SIZE)
        self.advance()
        self.maze.paint(self.position, self.color, RUNNER_MARK_SIZE)
        self.steps += 1
        return True

    def step(self) -> bool:
        """
        Scheduler callback.

        Returns:
            True while the runner should keep being driven.
        """
        if self.at_exit:
            self.stop()
            return False
        if not self.move():
            self.stop()
            return False
        if self.at_exit:
            logger.debug(f"{type(self).__name__} stopped at exit after {self.steps} steps")
            self.stop()
            return False
        return True

    def run(self, scheduler: Scheduler, interval_ms: int = DEFAULT_RUN_INTERVAL_MS) -> ScheduledTask:
        """
        Run on a scheduler until the exit is reached. Returns immediately.

        Raises:
            DiggingInProgressError: If the maze is still being dug.
        """
        if not self.maze.is_dug:
            raise DiggingInProgressError("Cannot start a runner before the maze is dug")
        self._task = scheduler.schedule(self.step, interval_ms)
        return self._task

    def stop(self) -> None:
        """Stop being driven by the scheduler."""
        if self._task is not None:
            self._task.cancel()

    def solve(self, max_steps: int) -> RunResult:
        """
        Step synchronously until the exit, a dead stop, or max_steps moves.

        Returns:
            RunResult describing how the run ended.
        """
        taken = 0
        while taken < max_steps and self.step():
            taken += 1
        if self.at_exit:
            status = "exited"
        elif self.enclosed:
            status = "enclosed"
        else:
            status = "exhausted"
        return RunResult(status=status, position=self.position, steps=self.steps)


class RightHandRunner(MazeRunner):
    """Runner keeping its right hand on the wall."""

    color = RIGHT_HAND_RUNNER_COLOR
    kind = "right_hand"

    def pick_direction(self) -> bool:
        """
        Try right, straight, left, then back, relative to the entry vector.

        Returns:
            True if a direction was found, False if walled in on all sides.
        """
        count = len(self.directions)
        entry = self.directions.index(self.vector) if self.vector in self.directions else 0
        for turn in range(1, 1 - count, -1):
            candidate = self.directions[(entry + turn) % count]
            with self.probe(candidate):
                legal = self.can_move()
            if legal:
                self.vector = candidate
                return True
        return False
