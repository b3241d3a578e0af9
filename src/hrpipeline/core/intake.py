"""Candidate intake: deduplication and application creation rules."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Union
from urllib.parse import quote

import pendulum

from ..errors import IntakeValidationError
from ..schemas import Application, ApplicationStatus, Candidate, CandidateDraft


@dataclass
class IntakeSettings:
    """Defaults applied when minting a new candidate."""

    default_role: str = "Applicant"
    avatar_url_template: str = "https://ui-avatars.com/api/?name={name}&background=random"
    # Emails are matched verbatim unless this is switched off.
    email_case_sensitive: bool = True


@dataclass(frozen=True, slots=True)
class IntakePlan:
    """Entities the caller has to commit for an accepted intake."""

    candidate: Candidate
    application: Application | None
    is_new_candidate: bool


@dataclass(frozen=True, slots=True)
class Accepted:
    plan: IntakePlan


@dataclass(frozen=True, slots=True)
class DuplicateInPipeline:
    """Hard block: the candidate already has an application for the job."""

    candidate_id: str
    application_id: str


@dataclass(frozen=True, slots=True)
class CrossJobConflict:
    """Soft block: the candidate is still active in another pipeline.

    ``plan`` is what would be committed once the operator confirms.
    """

    candidate_id: str
    conflicting_application_id: str
    plan: IntakePlan


IntakeOutcome = Union[Accepted, DuplicateInPipeline, CrossJobConflict]


def default_id_factory(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex[:12]}"


def resolve_intake(
    candidates: Iterable[Candidate],
    applications: Iterable[Application],
    draft: CandidateDraft,
    target_job_id: str | None,
    *,
    settings: IntakeSettings | None = None,
    today: date | None = None,
    id_factory: Callable[[str], str] | None = None,
) -> IntakeOutcome:
    """Decide which entities an intake creates, or why it cannot proceed.

    Nothing is mutated; the caller commits the returned plan.
    """

    settings = settings or IntakeSettings()
    id_factory = id_factory or default_id_factory
    missing = draft.missing_required()
    if missing:
        raise IntakeValidationError(missing)

    applications = list(applications)
    existing = find_by_email(candidates, draft.email, case_sensitive=settings.email_case_sensitive)

    if existing is None:
        candidate = build_candidate(draft, id_factory("c"), settings)
        is_new = True
    else:
        candidate = existing
        is_new = False

    application: Application | None = None
    if target_job_id is not None:
        stamp = today or pendulum.today().date()
        application = Application(
            id=id_factory("a"),
            job_id=target_job_id,
            candidate_id=candidate.id,
            status=ApplicationStatus.NEW,
            interview_round=0,
            applied_at=stamp,
            updated_at=stamp,
        )

    plan = IntakePlan(candidate=candidate, application=application, is_new_candidate=is_new)

    if is_new or target_job_id is None:
        return Accepted(plan)

    for existing_app in applications:
        if existing_app.candidate_id == candidate.id and existing_app.job_id == target_job_id:
            return DuplicateInPipeline(candidate_id=candidate.id, application_id=existing_app.id)

    for other in applications:
        if other.candidate_id == candidate.id and other.is_active:
            return CrossJobConflict(
                candidate_id=candidate.id,
                conflicting_application_id=other.id,
                plan=plan,
            )

    return Accepted(plan)


def confirm_conflict(conflict: CrossJobConflict) -> Accepted:
    """Proceed with an intake after the operator acknowledged the warning."""
    return Accepted(conflict.plan)


def find_by_email(
    candidates: Iterable[Candidate],
    email: str,
    *,
    case_sensitive: bool = True,
) -> Candidate | None:
    needle = email if case_sensitive else email.casefold()
    for candidate in candidates:
        key = candidate.email if case_sensitive else candidate.email.casefold()
        if key == needle:
            return candidate
    return None


def build_candidate(draft: CandidateDraft, candidate_id: str, settings: IntakeSettings) -> Candidate:
    return Candidate(
        id=candidate_id,
        name=draft.name,
        email=draft.email,
        role=draft.role or settings.default_role,
        phone=draft.phone or "",
        experience=draft.experience or 0,
        education=draft.education or "",
        tags=list(draft.tags or []),
        avatar_url=settings.avatar_url_template.format(name=quote(draft.name, safe="")),
        resume_url=draft.resume_ref,
        resume_text=draft.resume_text,
        work_experience=list(draft.work_experience) or None,
    )


__all__ = [
    "Accepted",
    "CrossJobConflict",
    "DuplicateInPipeline",
    "IntakeOutcome",
    "IntakePlan",
    "IntakeSettings",
    "build_candidate",
    "confirm_conflict",
    "find_by_email",
    "resolve_intake",
]
