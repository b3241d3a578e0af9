from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .application import Application
from .candidate import Candidate
from .job import Job


class StoreSnapshot(BaseModel):
    """Serialisable dump of the entity store collections."""

    candidates: list[Candidate] = Field(default_factory=list)
    jobs: list[Job] = Field(default_factory=list)
    applications: list[Application] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
