"""Maze routes for digging, listing and retrieving mazes."""

import asyncio
import logging
import uuid

from fastapi import APIRouter, HTTPException, Request, Response, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from mazedig.api.deps import Simulation
from mazedig.config import get_settings
from mazedig.core import Position, render_maze_rows
from mazedig.schemas.maze import (
    MazeCreateRequest,
    MazeDetail,
    MazeListItem,
    MazeListResponse,
    MazePosition,
)
from mazedig.services.simulation_service import MazeRecord, NotFoundError

logger = logging.getLogger(__name__)

settings = get_settings()
limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/maze", tags=["Mazes"])


def _list_item(record: MazeRecord) -> MazeListItem:
    maze = record.maze
    return MazeListItem(
        id=record.id,
        width=maze.width,
        height=maze.height,
        exit=MazePosition(**maze.exit.to_dict()),
        is_dug=maze.is_dug,
        corridor_count=maze.corridor_count,
        runner_count=len(record.runners),
        created_at=record.created_at,
    )


def _detail(record: MazeRecord) -> MazeDetail:
    return MazeDetail(
        **_list_item(record).model_dump(),
        seed=record.seed,
        dig_steps=record.digger.steps,
        rows=render_maze_rows(record.maze),
    )


@router.post(
    "",
    response_model=MazeDetail,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(f"{settings.rate_limit_mazes}/minute")
async def create_maze(
    request: Request,
    maze_data: MazeCreateRequest,
    simulation: Simulation,
) -> MazeDetail:
    """Dig a new maze.

    The maze is dug to completion in a worker thread before the response is
    returned, unless ``animate`` is set, in which case digging continues in
    the background and ``is_dug`` stays false until it finishes.
    """
    exit_pos = Position(maze_data.exit.x, maze_data.exit.y) if maze_data.exit else None
    options = dict(
        width=maze_data.width,
        height=maze_data.height,
        exit=exit_pos,
        seed=maze_data.seed,
        animate=maze_data.animate,
    )
    try:
        if maze_data.animate:
            # Animated digging is scheduled on the running loop
            record = simulation.create_maze(**options)
        else:
            record = await asyncio.to_thread(simulation.create_maze, **options)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return _detail(record)


@router.get(
    "",
    response_model=MazeListResponse,
)
async def list_mazes(simulation: Simulation) -> MazeListResponse:
    """List all mazes, oldest first. Grid rows are not included."""
    maze_items = [_list_item(record) for record in simulation.list_mazes()]
    return MazeListResponse(
        mazes=maze_items,
        total=len(maze_items),
    )


@router.get(
    "/{maze_id}",
    response_model=MazeDetail,
)
async def get_maze(
    maze_id: uuid.UUID,
    simulation: Simulation,
) -> MazeDetail:
    """Get a maze including its grid rows ('X' wall, '.' corridor, 'E' exit)."""
    try:
        record = simulation.get_maze(maze_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return _detail(record)


@router.delete(
    "/{maze_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_maze(
    maze_id: uuid.UUID,
    simulation: Simulation,
) -> Response:
    """Delete a maze, stopping its digger and runners."""
    try:
        simulation.delete_maze(maze_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
