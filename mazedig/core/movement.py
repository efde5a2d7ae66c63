"""
Moving entities built from composable move rules.

A MovingPoint holds a position and a direction vector. Whether it may take
its next step is decided by an ordered tuple of rules: every rule must
accept the next position, and they are checked in the order given. Concrete
entities pick the rules they need:

- BoundsRule: next position must lie inside a rectangle.
- UndugRule: next position must be inside the grid and not yet dug.
- DugRule: next position must be an existing corridor cell.
"""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional, Protocol, Sequence

from mazedig.core.geometry import Bounds, Position, Vector

if TYPE_CHECKING:
    from mazedig.core.maze import Maze


class MoveRule(Protocol):
    """Predicate deciding whether a move to next_position is legal."""

    def __call__(self, current: Position, next_position: Position) -> bool:
        ...


class Movable(Protocol):
    """Capability shared by everything that walks the grid."""

    position: Position
    vector: Vector

    def can_move(self) -> bool:
        ...

    def next_position(self) -> Position:
        ...

    def advance(self, vector: Optional[Vector] = None) -> Position:
        ...


class BoundsRule:
    """Rejects moves leaving the bounds rectangle."""

    def __init__(self, bounds: Bounds):
        self.bounds = bounds

    def __call__(self, current: Position, next_position: Position) -> bool:
        return self.bounds.contains(next_position)


class UndugRule:
    """Rejects moves onto cells that are already dug or outside the grid."""

    def __init__(self, maze: "Maze"):
        self.maze = maze

    def __call__(self, current: Position, next_position: Position) -> bool:
        return self.maze.is_inside(next_position) and not self.maze.is_passable(next_position)


class DugRule:
    """Accepts only moves onto existing corridor cells."""

    def __init__(self, maze: "Maze"):
        self.maze = maze

    def __call__(self, current: Position, next_position: Position) -> bool:
        return self.maze.is_passable(next_position)


class MovingPoint:
    """
    A position plus a direction vector, moved under a set of rules.

    Args:
        position: Starting position.
        vector: Starting direction vector.
        rules: Move rules, checked in order. With no rules every move is legal.
    """

    def __init__(
        self,
        position: Optional[Position] = None,
        vector: Optional[Vector] = None,
        rules: Sequence[MoveRule] = (),
    ):
        self.position = position or Position(0, 0)
        self.vector = vector or Vector(0, 0)
        self.rules = tuple(rules)

    def can_move(self) -> bool:
        """Check whether moving by the current vector is legal."""
        next_position = self.next_position()
        return all(rule(self.position, next_position) for rule in self.rules)

    def next_position(self) -> Position:
        """Position after the next move. Has no side effects."""
        return self.position.moved(self.vector)

    def advance(self, vector: Optional[Vector] = None) -> Position:
        """Move by vector (default: current vector) without checking rules."""
        self.position = self.position.moved(vector or self.vector)
        return self.position

    @contextmanager
    def probe(self, vector: Vector) -> Iterator[None]:
        """Temporarily point in another direction; the vector is restored on exit."""
        previous = self.vector
        self.vector = vector
        try:
            yield
        finally:
            self.vector = previous

    def legal_directions(self, directions: Sequence[Vector]) -> list[Vector]:
        """Directions from the given set that can be moved in right now."""
        legal = []
        for direction in directions:
            with self.probe(direction):
                if self.can_move():
                    legal.append(direction)
        return legal

    def move(self) -> bool:
        """Advance if the current vector is legal."""
        if not self.can_move():
            return False
        self.advance()
        return True
