"""Grid geometry: positions, direction vectors and bounding rectangles."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    """Direction of travel on the grid."""
    x: int
    y: int

    def reversed(self) -> "Vector":
        """Return the vector pointing the opposite way."""
        return Vector(-self.x, -self.y)

    def halved(self) -> "Vector":
        """Return the half-step vector (the wall cell between two dig cells)."""
        return Vector(self.x // 2, self.y // 2)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Position:
    """2D position in the maze grid."""
    x: int
    y: int

    def moved(self, vector: Vector) -> "Position":
        """Return new position after moving by vector."""
        return Position(self.x + vector.x, self.y + vector.y)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Bounds:
    """
    Rectangle constraining where a bounded entity may go.

    ``top`` and ``left`` are inclusive, ``right`` and ``bottom`` exclusive.
    """
    top: int = 0
    right: int = 100
    bottom: int = 100
    left: int = 0

    def contains(self, position: Position) -> bool:
        """Check whether position lies inside the rectangle."""
        return (
            self.left <= position.x < self.right
            and self.top <= position.y < self.bottom
        )


# Canonical clockwise order (screen coordinates, y grows downward):
# north, east, south, west.
DIG_DIRECTIONS: tuple[Vector, ...] = (
    Vector(0, -2),
    Vector(2, 0),
    Vector(0, 2),
    Vector(-2, 0),
)

RUN_DIRECTIONS: tuple[Vector, ...] = (
    Vector(0, -1),
    Vector(1, 0),
    Vector(0, 1),
    Vector(-1, 0),
)
