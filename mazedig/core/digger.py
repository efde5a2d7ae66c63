"""
Maze digger.

Carves corridors by random walk on the even sublattice. Each step knocks
through the wall cell between the current cell and an undug neighbour two
cells away, so corridors never merge and the dug maze is a spanning tree
rooted at the starting cell.

When the digger is boxed in it relocates to a random corridor cell that
still has an undug neighbour. When no such cell remains the maze is done.
"""

import logging
import random
from typing import TYPE_CHECKING, Optional

from mazedig.core.geometry import DIG_DIRECTIONS, Bounds, Position, Vector
from mazedig.core.movement import BoundsRule, MovingPoint, UndugRule
from mazedig.core.scheduler import ScheduledTask, Scheduler
from mazedig.core.surface import CORRIDOR_COLOR

if TYPE_CHECKING:
    from mazedig.core.maze import Maze

logger = logging.getLogger(__name__)

TURN_PROBABILITY = 0.2
RELOCATE_PROBABILITY = 0.05
DIG_MARK_SIZE = 10


class MazeDigger(MovingPoint):
    """
    Digs corridors into a maze.

    Legality of a dig step is checked in this order: the destination must
    be inside the grid and still undug, then inside the digger's bounds.
    """

    directions = DIG_DIRECTIONS

    def __init__(
        self,
        maze: "Maze",
        position: Position,
        vector: Vector = DIG_DIRECTIONS[3],
        rng: Optional[random.Random] = None,
        bounds: Optional[Bounds] = None,
        turn_probability: float = TURN_PROBABILITY,
        relocate_probability: float = RELOCATE_PROBABILITY,
    ):
        """
        Initialize digger.

        Args:
            maze: Maze to dig in.
            position: Starting cell, normally an already dug cell.
            vector: Starting dig direction.
            rng: Random source. Defaults to a fresh random.Random().
            bounds: Rectangle to stay within. Defaults to the grid minus a
                two-cell margin on the top and left.
            turn_probability: Chance of changing direction on any step.
            relocate_probability: Chance of jumping to a new dig site on any step.
        """
        self.maze = maze
        self.bounds = bounds or Bounds(top=2, right=maze.width, bottom=maze.height, left=2)
        super().__init__(position, vector, rules=(UndugRule(maze), BoundsRule(self.bounds)))
        self.rng = rng or random.Random()
        self.turn_probability = turn_probability
        self.relocate_probability = relocate_probability
        self.steps = 0
        self.done = False
        self._task: Optional[ScheduledTask] = None

    def pick_direction(self) -> bool:
        """
        Point at a random legal dig direction.

        Returns:
            True if a direction was found, False if boxed in. On False the
            vector is left unchanged.
        """
        available = self.legal_directions(self.directions)
        if not available:
            return False
        self.vector = self.rng.choice(available)
        return True

    def pick_new_location(self) -> bool:
        """
        Relocate to a corridor cell that has at least one legal dig direction.

        Returns:
            True if relocated, False if no such cell exists. On False the
            digger's position and vector are left unchanged.
        """
        previous_position, previous_vector = self.position, self.vector

        def can_dig_from(position: Position) -> bool:
            self.position = position
            return self.pick_direction()

        location = self.maze.find_open_location(can_dig_from, rng=self.rng)
        if location is None:
            self.position, self.vector = previous_position, previous_vector
            return False
        return True

    def move(self) -> bool:
        """
        Dig one step, turning and relocating at random.

        Returns:
            True if a step was dug, False if the maze is completely dug.
        """
        if self.done:
            return False

        if self.rng.random() < self.turn_probability or not self.can_move():
            if not self.pick_direction() and not self.pick_new_location():
                self._finish()
                return False

        if self.rng.random() < self.relocate_probability:
            self.pick_new_location()

        halfway = self.position.moved(self.vector.halved())
        self.maze.mark_passable(halfway)
        self.maze.paint(halfway, CORRIDOR_COLOR, DIG_MARK_SIZE)
        self.advance()
        self.maze.mark_passable(self.position)
        self.maze.paint(self.position, CORRIDOR_COLOR, DIG_MARK_SIZE)
        self.steps += 1
        return True

    def step(self) -> bool:
        """Scheduler callback: dig once, cancelling the schedule when finished."""
        moved = self.move()
        if not moved:
            self.stop()
        return moved

    def run(self, scheduler: Scheduler, interval_ms: int) -> ScheduledTask:
        """
        Dig on a scheduler until the maze is complete. Returns immediately.

        Args:
            scheduler: Tick source.
            interval_ms: Milliseconds between dig steps.

        Returns:
            The scheduled task.
        """
        self._task = scheduler.schedule(self.step, interval_ms)
        return self._task

    def stop(self) -> None:
        """Stop being driven by the scheduler."""
        if self._task is not None:
            self._task.cancel()

    def dig_all(self, max_steps: Optional[int] = None) -> int:
        """
        Dig synchronously until done.

        Args:
            max_steps: Optional cap on dig steps.

        Returns:
            Number of dig steps taken by this call.
        """
        taken = 0
        while (max_steps is None or taken < max_steps) and self.move():
            taken += 1
        return taken

    def _finish(self) -> None:
        self.done = True
        self.maze.mark_dug()
        logger.debug(f"Maze completely dug after {self.steps} steps")
