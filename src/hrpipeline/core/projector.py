"""Projection of the entity store into board rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..schemas import (
    Application,
    ApplicationCandidate,
    ApplicationStatus,
    Candidate,
    Job,
    JobScoped,
    PoolScoped,
    is_active,
)

POOL_PAGE = "candidates"

BOARD_COLUMNS: tuple[ApplicationStatus, ...] = (
    ApplicationStatus.NEW,
    ApplicationStatus.SCREENED,
    ApplicationStatus.INTERVIEWING,
    ApplicationStatus.OFFER,
    ApplicationStatus.HIRED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.TALENT_POOL,
)


@dataclass(frozen=True, slots=True)
class ViewContext:
    """Which board is on screen."""

    active_job_id: str | None = None
    page: str = POOL_PAGE

    @property
    def is_job_scoped(self) -> bool:
        return self.active_job_id is not None


@dataclass(frozen=True, slots=True)
class JobSummary:
    job_id: str
    title: str
    total: int
    active: int
    in_pipeline: int
    hired_count: int
    target_count: int


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    application: Application
    job_title: str


def matches_query(name: str, role: str, query: str) -> bool:
    needle = query.lower()
    return needle in name.lower() or needle in role.lower()


def project(
    candidates: Sequence[Candidate],
    applications: Iterable[Application],
    context: ViewContext,
    search_query: str = "",
) -> list[ApplicationCandidate]:
    """Return the rows visible for ``context``, filtered by ``search_query``."""

    if context.active_job_id is not None:
        return _project_job(candidates, applications, context.active_job_id, search_query)
    if context.page == POOL_PAGE:
        return _project_pool(candidates, search_query)
    return []


def _project_job(
    candidates: Sequence[Candidate],
    applications: Iterable[Application],
    job_id: str,
    search_query: str,
) -> list[ApplicationCandidate]:
    by_id = {candidate.id: candidate for candidate in candidates}
    rows: list[ApplicationCandidate] = []
    for application in applications:
        if application.job_id != job_id:
            continue
        candidate = by_id.get(application.candidate_id)
        if candidate is None:
            # dangling reference
            continue
        if not matches_query(candidate.name, candidate.role, search_query):
            continue
        rows.append(
            _merge(
                candidate,
                scope=JobScoped(application_id=application.id, job_id=application.job_id),
                status=application.status,
                interview_round=application.interview_round,
                interview_score=application.score,
                reject_reason=application.reject_reason,
            )
        )
    return rows


def _project_pool(candidates: Sequence[Candidate], search_query: str) -> list[ApplicationCandidate]:
    return [
        _merge(
            candidate,
            scope=PoolScoped(),
            status=ApplicationStatus.TALENT_POOL,
            interview_round=0,
        )
        for candidate in candidates
        if matches_query(candidate.name, candidate.role, search_query)
    ]


def _merge(candidate: Candidate, **pipeline_fields) -> ApplicationCandidate:
    data = candidate.model_dump(exclude={"resume_text"})
    data.update(pipeline_fields)
    return ApplicationCandidate.model_validate(data)


def group_by_column(
    rows: Iterable[ApplicationCandidate],
) -> dict[ApplicationStatus, list[ApplicationCandidate]]:
    columns: dict[ApplicationStatus, list[ApplicationCandidate]] = {
        status: [] for status in BOARD_COLUMNS
    }
    for row in rows:
        columns[row.status].append(row)
    return columns


def job_summary(job: Job, applications: Iterable[Application]) -> JobSummary:
    statuses = [a.status for a in applications if a.job_id == job.id]
    return JobSummary(
        job_id=job.id,
        title=job.title,
        total=len(statuses),
        active=sum(1 for status in statuses if is_active(status)),
        in_pipeline=sum(1 for status in statuses if status != ApplicationStatus.REJECTED),
        hired_count=job.hired_count,
        target_count=job.target_count,
    )


def candidate_history(
    candidate_id: str,
    applications: Iterable[Application],
    jobs: Iterable[Job],
) -> list[HistoryEntry]:
    titles = {job.id: job.title for job in jobs}
    return [
        HistoryEntry(application=a, job_title=titles.get(a.job_id, "Unknown Job"))
        for a in applications
        if a.candidate_id == candidate_id
    ]


__all__ = [
    "BOARD_COLUMNS",
    "HistoryEntry",
    "JobSummary",
    "POOL_PAGE",
    "ViewContext",
    "candidate_history",
    "group_by_column",
    "job_summary",
    "matches_query",
    "project",
]
