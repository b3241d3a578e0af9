"""In-memory entity store holding candidates, jobs and applications."""

from __future__ import annotations

from typing import Iterable

from ..errors import EntityNotFoundError
from ..schemas import Application, Candidate, Job, StoreSnapshot


class EntityStore:
    """Canonical collections behind every view.

    Collections are tuples and every command swaps in a new tuple, so a
    reader holding a reference never observes a half-applied change. The
    store performs no validation of pipeline rules; those live in the
    intake resolver and the transition functions.
    """

    def __init__(
        self,
        *,
        candidates: Iterable[Candidate] = (),
        jobs: Iterable[Job] = (),
        applications: Iterable[Application] = (),
    ) -> None:
        self._candidates: tuple[Candidate, ...] = tuple(candidates)
        self._jobs: tuple[Job, ...] = tuple(jobs)
        self._applications: tuple[Application, ...] = tuple(applications)

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return self._candidates

    @property
    def jobs(self) -> tuple[Job, ...]:
        return self._jobs

    @property
    def applications(self) -> tuple[Application, ...]:
        return self._applications

    # lookups

    def get_candidate(self, candidate_id: str) -> Candidate:
        for candidate in self._candidates:
            if candidate.id == candidate_id:
                return candidate
        raise EntityNotFoundError("candidate", candidate_id)

    def get_job(self, job_id: str) -> Job:
        for job in self._jobs:
            if job.id == job_id:
                return job
        raise EntityNotFoundError("job", job_id)

    def get_application(self, application_id: str) -> Application:
        for application in self._applications:
            if application.id == application_id:
                return application
        raise EntityNotFoundError("application", application_id)

    def applications_for_candidate(self, candidate_id: str) -> list[Application]:
        return [a for a in self._applications if a.candidate_id == candidate_id]

    def applications_for_job(self, job_id: str) -> list[Application]:
        return [a for a in self._applications if a.job_id == job_id]

    # commands

    def add_candidate(self, candidate: Candidate) -> None:
        # Newest first, matching the talent pool ordering.
        self._candidates = (candidate, *self._candidates)

    def attach_application(self, application: Application) -> None:
        self._applications = (*self._applications, application)

    def replace_application(self, application: Application) -> None:
        self.get_application(application.id)
        self._applications = tuple(
            application if existing.id == application.id else existing
            for existing in self._applications
        )

    def withdraw_application(self, application_id: str) -> Application:
        removed = self.get_application(application_id)
        self._applications = tuple(
            a for a in self._applications if a.id != application_id
        )
        return removed

    def remove_candidate(self, candidate_id: str) -> list[Application]:
        """Delete a candidate and cascade to every application referencing it."""
        self.get_candidate(candidate_id)
        cascaded = self.applications_for_candidate(candidate_id)
        self._candidates = tuple(c for c in self._candidates if c.id != candidate_id)
        self._applications = tuple(
            a for a in self._applications if a.candidate_id != candidate_id
        )
        return cascaded

    def replace_job(self, job: Job) -> None:
        self.get_job(job.id)
        self._jobs = tuple(job if existing.id == job.id else existing for existing in self._jobs)

    # serialisation

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            candidates=list(self._candidates),
            jobs=list(self._jobs),
            applications=list(self._applications),
        )

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> "EntityStore":
        return cls(
            candidates=snapshot.candidates,
            jobs=snapshot.jobs,
            applications=snapshot.applications,
        )


__all__ = ["EntityStore"]
