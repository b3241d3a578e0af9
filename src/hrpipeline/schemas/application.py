from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Rating = Literal["S", "A", "B", "C", "D"]

MIN_SCORE = 1.0
MAX_SCORE = 5.0


class ApplicationStatus(str, Enum):
    """Pipeline column an application currently sits in."""

    NEW = "New"
    SCREENED = "Screened"
    INTERVIEWING = "Interviewing"
    OFFER = "Offer"
    HIRED = "Hired"
    REJECTED = "Rejected"
    TALENT_POOL = "Talent Pool"


TERMINAL_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {ApplicationStatus.HIRED, ApplicationStatus.REJECTED}
)


def is_active(status: ApplicationStatus) -> bool:
    """Return True for statuses that still count as in-flight for a candidate."""
    return status not in TERMINAL_STATUSES


class Decision(str, Enum):
    """Scorecard outcome submitted at the end of an interview."""

    PASS = "Pass"
    REJECT = "Reject"
    HOLD = "Hold"


class InterviewReview(BaseModel):
    """One interviewer's scorecard."""

    id: str
    interviewer_name: str = ""
    score: float = Field(ge=MIN_SCORE, le=MAX_SCORE)
    decision: Decision
    comment: str = ""
    ratings: dict[str, Rating] = Field(default_factory=dict)
    reviewed_on: date

    model_config = ConfigDict(extra="forbid", frozen=True)


class Application(BaseModel):
    """One candidate's pipeline instance for one job."""

    id: str
    job_id: str
    candidate_id: str
    status: ApplicationStatus = ApplicationStatus.NEW
    interview_round: int = Field(default=0, ge=0)
    score: float | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    reject_reason: str | None = None
    applied_at: date
    updated_at: date
    reviews: list[InterviewReview] | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_active(self) -> bool:
        return is_active(self.status)
