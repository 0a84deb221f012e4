from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Task(BaseModel):
    id: int | None = Field(
        default=None, description="Unique task identifier, assigned on first save."
    )
    title: str = Field(description="Short human-readable label.")
    description: str | None = Field(default=None, description="Optional task details.")
    status: str = Field(description="Application-defined status, e.g. 'open' or 'done'.")
    created_at: datetime | None = Field(
        default=None, description="When the task was first persisted."
    )
    updated_at: datetime | None = Field(
        default=None, description="When the task was last persisted."
    )
