"""Maze schemas for request/response validation."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MazePosition(BaseModel):
    """Schema for a position in the maze."""

    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)


class MazeCreateRequest(BaseModel):
    """Schema for creating (digging) a new maze."""

    width: Optional[int] = Field(None, gt=0, multiple_of=2)
    height: Optional[int] = Field(None, gt=0, multiple_of=2)
    exit: Optional[MazePosition] = None
    seed: Optional[int] = None
    animate: bool = False


class MazeListItem(BaseModel):
    """Schema for maze list item (without grid data)."""

    id: uuid.UUID
    width: int
    height: int
    exit: MazePosition
    is_dug: bool
    corridor_count: int
    runner_count: int
    created_at: datetime


class MazeDetail(MazeListItem):
    """Schema for detailed maze response with grid rows."""

    seed: Optional[int] = None
    dig_steps: int
    rows: list[str]


class MazeListResponse(BaseModel):
    """Schema for maze list response."""

    mazes: list[MazeListItem]
    total: int
