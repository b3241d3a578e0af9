from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WorkExperience(BaseModel):
    """Employment history entry."""

    company: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Candidate(BaseModel):
    """A person tracked by the system, independent of any job."""

    id: str
    name: str
    email: str
    phone: str = ""
    role: str = "Applicant"
    experience: float = Field(default=0, ge=0)
    education: str = ""
    tags: list[str] = Field(default_factory=list)
    avatar_url: str = ""
    resume_url: str | None = None
    resume_text: str | None = None
    work_experience: list[WorkExperience] | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class CandidateDraft(BaseModel):
    """Intake form contents, possibly pre-filled by resume extraction.

    Every field may be empty so that a failed extraction still yields a
    draft the operator can complete by hand.
    """

    name: str = ""
    email: str = ""
    phone: str | None = None
    role: str | None = None
    experience: float | None = None
    education: str | None = None
    tags: list[str] | None = None
    resume_ref: str | None = None
    resume_text: str | None = None
    work_experience: list[WorkExperience] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def missing_required(self) -> list[str]:
        return [
            field_name
            for field_name in ("name", "email")
            if not getattr(self, field_name).strip()
        ]
