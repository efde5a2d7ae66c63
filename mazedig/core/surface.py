"""
Drawing surfaces the maze core paints onto.

The core only ever fires ``fill_rect`` calls at a surface and never reads
anything back, so any canvas-like object with that method can be injected.
"""

from dataclasses import dataclass
from typing import Protocol


BACKGROUND_COLOR = "#000"
CORRIDOR_COLOR = "#aaf"
RUNNER_COLOR = "#f00"
RIGHT_HAND_RUNNER_COLOR = "#ff0"


class DrawingSurface(Protocol):
    """Anything that can fill a rectangle in a given colour."""

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        ...


class NullSurface:
    """Surface that discards every draw call."""

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        return None


@dataclass(frozen=True)
class FillRect:
    """A single recorded fill_rect call."""
    x: float
    y: float
    width: float
    height: float
    color: str


class RecordingSurface:
    """Surface that keeps every draw call, in order."""

    def __init__(self):
        self.calls: list[FillRect] = []

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.calls.append(FillRect(x, y, width, height, color))

    def colors(self) -> list[str]:
        """Colours used, in call order."""
        return [call.color for call in self.calls]

    def clear(self) -> None:
        self.calls.clear()
