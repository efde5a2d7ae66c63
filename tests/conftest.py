"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from mazedig.api.routes.maze import limiter
from mazedig.core import Maze, parse_maze_text
from mazedig.main import app
from mazedig.services.simulation_service import SimulationService, get_simulation_service


# 8x8 tree maze, exit at (6, 0). (4, 2) is the only intersection;
# (4, 6) and (6, 6) are dead ends.
BRANCHING_MAZE = """XXXXXXEX
XXXXXX.X
XX.....X
XX.X.XXX
XX.X...X
XX.XXX.X
XX...X.X
XXXXXXXX"""

# Corridor cell (2, 2) has no corridor neighbours.
WALLED_IN_MAZE = """XXEX
XXXX
XX.X
XXXX"""


@pytest.fixture
def branching_maze() -> Maze:
    """Hand-written dug maze with one intersection and two dead ends."""
    return parse_maze_text(BRANCHING_MAZE)


@pytest.fixture
def walled_in_maze() -> Maze:
    """Dug maze with an isolated corridor cell."""
    return parse_maze_text(WALLED_IN_MAZE)


@pytest.fixture
def simulation() -> SimulationService:
    """Fresh simulation service state for each test."""
    service = get_simulation_service()
    service.reset()
    yield service
    service.reset()


@pytest_asyncio.fixture(scope="function")
async def client(simulation) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    limiter.enabled = False

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    limiter.enabled = True
