"""Runner routes for placing and stepping runners through a maze."""

import logging
import uuid

from fastapi import APIRouter, HTTPException, Query, status

from mazedig.api.deps import Simulation
from mazedig.core import DiggingInProgressError, Position
from mazedig.schemas.maze import MazePosition
from mazedig.schemas.runner import (
    RunResultResponse,
    RunnerCreateRequest,
    RunnerState,
    RunnerVector,
)
from mazedig.services.simulation_service import NotFoundError, RunnerRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/maze/{maze_id}/runners", tags=["Runners"])


def _state(maze_id: uuid.UUID, record: RunnerRecord) -> RunnerState:
    runner = record.runner
    return RunnerState(
        id=record.id,
        maze_id=maze_id,
        kind=runner.kind,
        position=MazePosition(**runner.position.to_dict()),
        vector=RunnerVector(**runner.vector.to_dict()),
        steps=runner.steps,
        status=record.status,
        created_at=record.created_at,
    )


@router.post(
    "",
    response_model=RunnerState,
    status_code=status.HTTP_201_CREATED,
)
async def create_runner(
    maze_id: uuid.UUID,
    runner_data: RunnerCreateRequest,
    simulation: Simulation,
) -> RunnerState:
    """Place a runner in a dug maze.

    ``right_hand`` selects the wall-following runner; otherwise the runner
    picks random turns. Without ``start`` the runner begins on a random
    corridor cell. With ``animate`` the runner keeps stepping in the
    background until it reaches the exit; poll it with GET to follow it.
    """
    start = Position(runner_data.start.x, runner_data.start.y) if runner_data.start else None
    try:
        record = simulation.create_runner(
            maze_id,
            right_hand=runner_data.right_hand,
            position=start,
            seed=runner_data.seed,
            animate=runner_data.animate,
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except DiggingInProgressError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return _state(maze_id, record)


@router.get(
    "/{runner_id}",
    response_model=RunnerState,
)
async def get_runner(
    maze_id: uuid.UUID,
    runner_id: uuid.UUID,
    simulation: Simulation,
) -> RunnerState:
    """Get a runner's position, direction and status."""
    try:
        record = simulation.get_runner(maze_id, runner_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return _state(maze_id, record)


@router.post(
    "/{runner_id}/step",
    response_model=RunnerState,
)
async def step_runner(
    maze_id: uuid.UUID,
    runner_id: uuid.UUID,
    simulation: Simulation,
    count: int = Query(1, ge=1, description="Number of steps to take"),
) -> RunnerState:
    """Advance a runner. Stops early once the exit is reached."""
    try:
        record = simulation.step_runner(maze_id, runner_id, count)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return _state(maze_id, record)


@router.post(
    "/{runner_id}/solve",
    response_model=RunResultResponse,
)
async def solve_runner(
    maze_id: uuid.UUID,
    runner_id: uuid.UUID,
    simulation: Simulation,
) -> RunResultResponse:
    """Run a runner until it exits, gets walled in, or hits the step cap."""
    try:
        result = simulation.solve_runner(maze_id, runner_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return RunResultResponse(
        runner_id=runner_id,
        status=result.status,
        position=MazePosition(**result.position.to_dict()),
        steps=result.steps,
    )
