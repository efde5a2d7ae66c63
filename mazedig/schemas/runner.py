"""Runner schemas for request/response validation."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from mazedig.schemas.maze import MazePosition


class RunnerCreateRequest(BaseModel):
    """Schema for placing a runner in a maze."""

    right_hand: bool = False
    start: Optional[MazePosition] = None
    seed: Optional[int] = None
    animate: bool = False


class RunnerVector(BaseModel):
    """Schema for a runner's direction of travel."""

    x: int
    y: int


class RunnerState(BaseModel):
    """Schema for runner state."""

    id: uuid.UUID
    maze_id: uuid.UUID
    kind: str = Field(..., pattern="^(random|right_hand)$")
    position: MazePosition
    vector: RunnerVector
    steps: int
    status: str  # running, exited, enclosed
    created_at: datetime


class RunResultResponse(BaseModel):
    """Schema for a completed run."""

    runner_id: uuid.UUID
    status: str  # exited, enclosed, exhausted
    position: MazePosition
    steps: int
