from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class JobState(str, Enum):
    """Lifecycle state of a job opening."""

    HIRING = "Hiring"
    PAUSED = "Paused"
    CLOSED = "Closed"
    DRAFT = "Draft"


class Job(BaseModel):
    """A job opening. Created from fixture or admin data."""

    id: str
    title: str
    department: str = ""
    location: str = ""
    type: str = "Full-time"
    status: JobState = JobState.HIRING
    recruiter: str = ""
    hiring_manager: str = ""
    target_count: int = Field(default=1, ge=0)
    hired_count: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)
