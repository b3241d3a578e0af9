from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .application import ApplicationStatus
from .candidate import WorkExperience


class JobScoped(BaseModel):
    """Row backed by a real application inside a job's pipeline."""

    kind: Literal["job"] = "job"
    application_id: str
    job_id: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class PoolScoped(BaseModel):
    """Row shown in the talent pool; no application behind it."""

    kind: Literal["pool"] = "pool"

    model_config = ConfigDict(extra="forbid", frozen=True)


PipelineScope = Annotated[Union[JobScoped, PoolScoped], Field(discriminator="kind")]


class ApplicationCandidate(BaseModel):
    """Candidate merged with the pipeline fields of one application."""

    id: str
    name: str
    email: str
    phone: str = ""
    role: str = ""
    experience: float = 0
    education: str = ""
    tags: list[str] = Field(default_factory=list)
    avatar_url: str = ""
    resume_url: str | None = None
    work_experience: list[WorkExperience] | None = None
    scope: PipelineScope
    status: ApplicationStatus
    interview_round: int = 0
    interview_score: float | None = None
    reject_reason: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def application_id(self) -> str:
        """Application id, or ``""`` for pool rows (board wire format)."""
        if isinstance(self.scope, JobScoped):
            return self.scope.application_id
        return ""

    @property
    def job_id(self) -> str | None:
        if isinstance(self.scope, JobScoped):
            return self.scope.job_id
        return None

    @property
    def card_id(self) -> str:
        """Identifier used for drag and per-card actions on the board."""
        return self.application_id or self.id

    def to_board_dict(self) -> dict:
        payload = self.model_dump(mode="json", exclude={"scope"})
        payload["application_id"] = self.application_id
        payload["job_id"] = self.job_id
        return payload
