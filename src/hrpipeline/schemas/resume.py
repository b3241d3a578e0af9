from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ParsedWorkExperience(BaseModel):
    """Work history entry as returned by the extraction service."""

    company: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""

    model_config = ConfigDict(extra="ignore")


class ParsedResume(BaseModel):
    """Best-effort structured record extracted from a resume file."""

    name: str = ""
    email: str = ""
    phone: str = ""
    education: str = ""
    experience_years: float = 0
    skills: list[str] = Field(default_factory=list)
    summary: str = ""
    work_experience: list[ParsedWorkExperience] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")
