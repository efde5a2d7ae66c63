"""
Text format for dug mazes.

Maze Format:
    X = Wall (undug cell)
    . = Corridor (dug cell)
    E = Exit (dug)
    @ = Runner marker (dug, read back as a corridor)

One line per row, top row first. Rendering a maze and parsing the text back
gives the same grid. Parsed mazes are treated as completely dug, which makes
hand-written mazes usable for runners.
"""

from typing import Optional

from mazedig.core.errors import MazeTextError
from mazedig.core.geometry import Position
from mazedig.core.maze import Maze
from mazedig.core.surface import DrawingSurface

WALL = "X"
CORRIDOR = "."
EXIT = "E"
RUNNER = "@"

VALID_CHARS = {WALL, CORRIDOR, EXIT, RUNNER}


def render_maze_rows(maze: Maze, marker: Optional[Position] = None) -> list[str]:
    """
    Render a maze as text rows.

    Args:
        maze: Maze to render.
        marker: If provided, drawn as '@' (e.g. a runner position). The exit
            cell always renders as 'E'.

    Returns:
        One string per grid row.
    """
    rows = []
    for y in range(maze.height):
        row = []
        for x in range(maze.width):
            position = Position(x, y)
            if position == maze.exit:
                row.append(EXIT)
            elif marker is not None and position == marker:
                row.append(RUNNER)
            elif maze.grid[x][y]:
                row.append(CORRIDOR)
            else:
                row.append(WALL)
        rows.append("".join(row))
    return rows


def render_maze_text(maze: Maze, marker: Optional[Position] = None) -> str:
    """Render a maze as a single multi-line string."""
    return "\n".join(render_maze_rows(maze, marker))


def parse_maze_text(maze_text: str, surface: Optional[DrawingSurface] = None) -> Maze:
    """
    Build a dug maze from text.

    Args:
        maze_text: Multi-line string in the maze text format.
        surface: Optional drawing surface for the new maze.

    Returns:
        Maze with the corridors marked and ``is_dug`` set.

    Raises:
        MazeTextError: If the text is empty, ragged, has an invalid
            character, or does not have exactly one exit.
    """
    if not maze_text or not maze_text.strip():
        raise MazeTextError("Maze text is empty")

    lines = maze_text.strip().split("\n")
    width = len(lines[0])
    exit_pos: Optional[Position] = None
    corridors: list[Position] = []

    for y, line in enumerate(lines):
        if len(line) != width:
            raise MazeTextError(
                f"Row {y} has {len(line)} cells, expected {width}"
            )
        for x, char in enumerate(line):
            if char not in VALID_CHARS:
                raise MazeTextError(
                    f"Invalid character '{char}' at position ({x}, {y}). "
                    f"Valid characters: {', '.join(sorted(VALID_CHARS))}"
                )
            if char == EXIT:
                if exit_pos is not None:
                    raise MazeTextError(
                        f"Multiple exit positions found: "
                        f"first at ({exit_pos.x}, {exit_pos.y}), second at ({x}, {y})"
                    )
                exit_pos = Position(x, y)
            elif char in (CORRIDOR, RUNNER):
                corridors.append(Position(x, y))

    if exit_pos is None:
        raise MazeTextError("Maze must have an exit position (E)")

    try:
        maze = Maze(width, len(lines), exit=exit_pos, surface=surface)
    except ValueError as e:
        raise MazeTextError(str(e)) from e

    for position in corridors:
        maze.mark_passable(position)
    maze.mark_dug()
    return maze


if __name__ == "__main__":
    # Quick demo: dig a small maze and walk it with the wall follower
    from mazedig.core.runner import RightHandRunner

    maze = Maze(24, 12)
    maze.dig()
    print(render_maze_text(maze))

    runner = RightHandRunner(maze)
    start = runner.position
    result = runner.solve(max_steps=2 * maze.corridor_count)
    print(f"\nRight-hand runner from ({start.x}, {start.y}): {result.to_dict()}")
