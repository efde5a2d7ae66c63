"""In-memory registry of dug mazes and the runners walking them."""

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from mazedig.config import get_settings
from mazedig.core import (
    AsyncioScheduler,
    Maze,
    MazeDigger,
    MazeError,
    MazeRunner,
    Position,
    RightHandRunner,
    RunResult,
)
from mazedig.core.errors import DiggingInProgressError

logger = logging.getLogger(__name__)


class NotFoundError(MazeError):
    """Exception raised when a maze or runner id is unknown."""

    pass


@dataclass
class RunnerRecord:
    """A runner and its bookkeeping."""

    id: uuid.UUID
    runner: MazeRunner
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status(self) -> str:
        if self.runner.at_exit:
            return "exited"
        if self.runner.enclosed:
            return "enclosed"
        return "running"


@dataclass
class MazeRecord:
    """A maze, the digger that carved it, and its runners."""

    id: uuid.UUID
    maze: Maze
    digger: MazeDigger
    seed: Optional[int] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    runners: dict[uuid.UUID, RunnerRecord] = field(default_factory=dict)


class SimulationService:
    """Creates mazes, digs them, and drives runners through them."""

    def __init__(self):
        self.settings = get_settings()
        self._mazes: dict[uuid.UUID, MazeRecord] = {}
        self._scheduler: Optional[AsyncioScheduler] = None

    def create_maze(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        exit: Optional[Position] = None,
        seed: Optional[int] = None,
        animate: bool = False,
    ) -> MazeRecord:
        """
        Create and dig a new maze.

        Args:
            width: Grid width (default from settings).
            height: Grid height (default from settings).
            exit: Optional exit cell override.
            seed: Optional seed for reproducible digging.
            animate: Dig on the asyncio scheduler at the configured interval
                instead of to completion. Requires a running event loop.

        Returns:
            MazeRecord for the new maze.

        Raises:
            ValueError: If the dimensions or exit are invalid.
        """
        width = width or self.settings.default_width
        height = height or self.settings.default_height
        if max(width, height) > self.settings.max_dimension:
            raise ValueError(
                f"Maze dimensions may not exceed {self.settings.max_dimension}"
            )

        maze = Maze(width, height, exit=exit, scale=self.settings.scale)
        rng = random.Random(seed)
        digger = maze.dig(
            scheduler=self._get_scheduler() if animate else None,
            interval_ms=self.settings.dig_interval_ms,
            rng=rng,
            turn_probability=self.settings.turn_probability,
            relocate_probability=self.settings.relocate_probability,
        )

        record = MazeRecord(id=uuid.uuid4(), maze=maze, digger=digger, seed=seed)
        self._mazes[record.id] = record
        logger.info(
            f"Created maze {record.id} ({width}x{height}, "
            f"{'digging' if animate else f'{maze.corridor_count} corridor cells'})"
        )
        return record

    def list_mazes(self) -> list[MazeRecord]:
        return sorted(self._mazes.values(), key=lambda record: record.created_at)

    def get_maze(self, maze_id: uuid.UUID) -> MazeRecord:
        """
        Raises:
            NotFoundError: If the maze id is unknown.
        """
        record = self._mazes.get(maze_id)
        if record is None:
            raise NotFoundError(f"Maze not found: {maze_id}")
        return record

    def delete_maze(self, maze_id: uuid.UUID) -> None:
        record = self.get_maze(maze_id)
        record.digger.stop()
        for runner_record in record.runners.values():
            runner_record.runner.stop()
        del self._mazes[maze_id]
        logger.info(f"Deleted maze {maze_id}")

    def create_runner(
        self,
        maze_id: uuid.UUID,
        right_hand: bool = False,
        position: Optional[Position] = None,
        seed: Optional[int] = None,
        animate: bool = False,
    ) -> RunnerRecord:
        """
        Place a new runner in a dug maze.

        Args:
            maze_id: Maze to run in.
            right_hand: Use the wall-following runner instead of the random one.
            position: Starting cell. Defaults to a random corridor cell.
            seed: Optional seed for the runner's random choices.
            animate: Drive the runner on the asyncio scheduler at the
                configured interval until it reaches the exit. Requires a
                running event loop.

        Raises:
            NotFoundError: If the maze id is unknown.
            DiggingInProgressError: If the maze is still being dug.
            ValueError: If the starting cell is not a corridor cell.
        """
        record = self.get_maze(maze_id)
        maze = record.maze
        if not maze.is_dug:
            raise DiggingInProgressError(f"Maze {maze_id} is still being dug")
        if position is not None and not maze.is_passable(position):
            raise ValueError(f"Start ({position.x}, {position.y}) is not a corridor cell")

        runner_class = RightHandRunner if right_hand else MazeRunner
        runner = runner_class(maze, position=position, rng=random.Random(seed))
        runner_record = RunnerRecord(id=uuid.uuid4(), runner=runner)
        record.runners[runner_record.id] = runner_record
        if animate:
            runner.run(self._get_scheduler(), self.settings.run_interval_ms)
        logger.info(
            f"Added {runner.kind} runner {runner_record.id} to maze {maze_id} "
            f"at ({runner.position.x}, {runner.position.y})"
        )
        return runner_record

    def get_runner(self, maze_id: uuid.UUID, runner_id: uuid.UUID) -> RunnerRecord:
        """
        Raises:
            NotFoundError: If the maze or runner id is unknown.
        """
        record = self.get_maze(maze_id)
        runner_record = record.runners.get(runner_id)
        if runner_record is None:
            raise NotFoundError(f"Runner not found: {runner_id}")
        return runner_record

    def step_runner(self, maze_id: uuid.UUID, runner_id: uuid.UUID, count: int = 1) -> RunnerRecord:
        """Advance a runner by up to count steps, stopping early at the exit."""
        runner_record = self.get_runner(maze_id, runner_id)
        count = min(count, self.settings.max_step_batch)
        for _ in range(count):
            if not runner_record.runner.step():
                break
        return runner_record

    def solve_runner(self, maze_id: uuid.UUID, runner_id: uuid.UUID) -> RunResult:
        """Drive a runner until it exits, is enclosed, or hits the step cap."""
        runner_record = self.get_runner(maze_id, runner_id)
        result = runner_record.runner.solve(self.settings.max_runner_steps)
        logger.info(f"Runner {runner_id} finished: {result.status} after {result.steps} steps")
        return result

    def reset(self) -> None:
        """Stop all scheduled work and forget every maze."""
        if self._scheduler is not None:
            self._scheduler.cancel_all()
            self._scheduler = None
        self._mazes.clear()

    def _get_scheduler(self) -> AsyncioScheduler:
        if self._scheduler is None:
            self._scheduler = AsyncioScheduler()
        return self._scheduler


_simulation_service: Optional[SimulationService] = None


def get_simulation_service() -> SimulationService:
    """Get the process-wide simulation service."""
    global _simulation_service
    if _simulation_service is None:
        _simulation_service = SimulationService()
    return _simulation_service
