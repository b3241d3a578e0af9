"""Pydantic schema definitions for pipeline entities and projections."""

from __future__ import annotations

from .application import (
    TERMINAL_STATUSES,
    Application,
    ApplicationStatus,
    Decision,
    InterviewReview,
    is_active,
)
from .candidate import Candidate, CandidateDraft, WorkExperience
from .job import Job, JobState
from .projection import ApplicationCandidate, JobScoped, PipelineScope, PoolScoped
from .resume import ParsedResume, ParsedWorkExperience
from .snapshot import StoreSnapshot

__all__ = [
    "Application",
    "ApplicationCandidate",
    "ApplicationStatus",
    "Candidate",
    "CandidateDraft",
    "Decision",
    "InterviewReview",
    "Job",
    "JobScoped",
    "JobState",
    "ParsedResume",
    "ParsedWorkExperience",
    "PipelineScope",
    "PoolScoped",
    "StoreSnapshot",
    "TERMINAL_STATUSES",
    "WorkExperience",
    "is_active",
]
