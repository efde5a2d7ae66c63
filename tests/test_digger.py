"""Tests for the maze digger."""

import random

from mazedig.core import (
    DIG_DIRECTIONS,
    Bounds,
    ManualScheduler,
    Maze,
    MazeDigger,
    Position,
    RecordingSurface,
    Vector,
)
from mazedig.core.surface import CORRIDOR_COLOR


class TestCanMove:
    """Tests for dig-step legality."""

    def test_rejects_dug_destination(self):
        """Test that the digger never digs into an existing corridor."""
        maze = Maze(10, 10, exit=Position(4, 4))
        digger = MazeDigger(maze, Position(4, 6), Vector(0, -2))
        assert digger.can_move() is False

        digger.vector = Vector(0, 2)
        assert digger.can_move() is True

    def test_rejects_dug_destination_for_any_grid_state(self):
        """Test the no-merge rule over many random grids."""
        rng = random.Random(7)
        for _ in range(50):
            maze = Maze(12, 12, exit=Position(10, 6))
            for _ in range(rng.randrange(30)):
                maze.mark_passable(Position(rng.randrange(12), rng.randrange(12)))
            for x in range(0, 12, 2):
                for y in range(0, 12, 2):
                    digger = MazeDigger(maze, Position(x, y))
                    for direction in DIG_DIRECTIONS:
                        digger.vector = direction
                        if maze.is_passable(digger.next_position()):
                            assert digger.can_move() is False

    def test_default_bounds_leave_top_left_margin(self):
        """Test that row 0 and column 0 are never dug into."""
        maze = Maze(10, 10, exit=Position(4, 2))
        digger = MazeDigger(maze, Position(4, 2), Vector(0, -2))
        assert digger.bounds == Bounds(top=2, right=10, bottom=10, left=2)
        assert digger.can_move() is False

        digger.position = Position(2, 4)
        digger.vector = Vector(-2, 0)
        assert digger.can_move() is False

    def test_rejects_outside_grid(self):
        """Test that stepping off the grid is illegal rather than an error."""
        maze = Maze(10, 10, exit=Position(8, 4))
        wide = Bounds(top=0, right=20, bottom=20, left=0)
        digger = MazeDigger(maze, Position(8, 4), Vector(2, 0), bounds=wide)
        assert digger.can_move() is False


class TestPickDirection:
    """Tests for random direction selection."""

    def test_picks_only_legal_directions(self):
        """Test that the chosen direction is always legal."""
        maze = Maze(10, 10, exit=Position(4, 4))
        maze.mark_passable(Position(6, 4))
        for seed in range(20):
            digger = MazeDigger(maze, Position(4, 4), rng=random.Random(seed))
            assert digger.pick_direction() is True
            assert digger.vector in {Vector(0, -2), Vector(0, 2), Vector(-2, 0)}

    def test_boxed_in_keeps_vector(self):
        """Test that failure leaves the vector alone."""
        maze = Maze(4, 4, exit=Position(2, 2))
        maze.mark_passable(Position(2, 0))
        digger = MazeDigger(maze, Position(2, 2), Vector(0, -2))
        assert digger.pick_direction() is False
        assert digger.vector == Vector(0, -2)


class TestPickNewLocation:
    """Tests for relocation."""

    def test_relocates_to_diggable_corridor(self):
        """Test relocation onto a corridor cell with an undug neighbour."""
        maze = Maze(8, 8, exit=Position(6, 2))
        digger = MazeDigger(maze, Position(0, 0), rng=random.Random(3))
        assert digger.pick_new_location() is True
        assert digger.position == Position(6, 2)
        assert digger.can_move() is True

    def test_failure_restores_state(self):
        """Test that a failed search leaves position and vector unchanged."""
        maze = Maze(4, 4, exit=Position(2, 0))
        maze.mark_passable(Position(2, 2))
        digger = MazeDigger(maze, Position(2, 2), Vector(2, 0), rng=random.Random(0))
        assert digger.pick_new_location() is False
        assert digger.position == Position(2, 2)
        assert digger.vector == Vector(2, 0)


class TestMove:
    """Tests for single dig steps."""

    def test_digs_halfway_and_destination(self):
        """Test that one step digs two cells and advances two cells."""
        maze = Maze(10, 10, exit=Position(8, 4))
        digger = MazeDigger(
            maze, Position(8, 4), Vector(-2, 0),
            rng=random.Random(0), turn_probability=0.0, relocate_probability=0.0,
        )
        assert digger.move() is True
        assert digger.position == Position(6, 4)
        assert maze.is_passable(Position(7, 4))
        assert maze.is_passable(Position(6, 4))
        assert digger.steps == 1

    def test_move_paints_both_cells(self):
        """Test that each dig step paints the half-step and destination."""
        surface = RecordingSurface()
        maze = Maze(10, 10, exit=Position(8, 4), surface=surface)
        surface.clear()
        digger = MazeDigger(
            maze, Position(8, 4), Vector(-2, 0),
            turn_probability=0.0, relocate_probability=0.0,
        )
        digger.move()

        assert surface.colors() == [CORRIDOR_COLOR, CORRIDOR_COLOR]
        halfway, destination = surface.calls
        assert (halfway.x, halfway.y) == (7 * 6 - 5, 4 * 6 - 5)
        assert (destination.x, destination.y) == (6 * 6 - 5, 4 * 6 - 5)
        assert (destination.width, destination.height) == (10, 10)

    def test_finished_digger_stays_finished(self):
        """Test that move() keeps returning False once the maze is dug."""
        maze = Maze(4, 4, exit=Position(2, 0))
        digger = MazeDigger(maze, Position(2, 0), rng=random.Random(0))
        assert digger.dig_all() == 1
        assert digger.move() is False
        assert digger.done is True
        assert maze.is_dug is True

    def test_dig_all_respects_max_steps(self):
        """Test that dig_all can be capped."""
        maze = Maze(20, 20)
        digger = MazeDigger(maze, maze.exit, rng=random.Random(0))
        assert digger.dig_all(max_steps=5) == 5
        assert maze.is_dug is False
        assert maze.corridor_count == 11


class TestRun:
    """Tests for scheduler-driven digging."""

    def test_run_until_complete(self):
        """Test that the digger cancels its own task once done."""
        scheduler = ManualScheduler()
        maze = Maze(12, 12)
        digger = maze.dig(scheduler=scheduler, interval_ms=200, rng=random.Random(5))

        assert maze.is_dug is False
        assert scheduler.active == 1

        scheduler.tick()
        assert digger.steps == 1

        scheduler.run_until_idle()
        assert maze.is_dug is True
        assert scheduler.active == 0
        # 5 x 5 in-bounds lattice cells, one tunnel per cell but the first
        assert digger.steps == 24

    def test_scheduled_and_synchronous_dig_match(self):
        """Test that a scheduled dig with the same seed digs the same maze."""
        scheduled = Maze(16, 16)
        scheduler = ManualScheduler()
        scheduled.dig(scheduler=scheduler, rng=random.Random(9))
        scheduler.run_until_idle()

        direct = Maze(16, 16)
        direct.dig(rng=random.Random(9))

        assert scheduled.grid == direct.grid
