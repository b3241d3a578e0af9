"""Pipeline service assembly and execution."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Callable

import pendulum
import structlog

from . import __version__
from .config import ConfigManager, bundled_config_dir
from .core import (
    CrossJobConflict,
    DuplicateInPipeline,
    EntityStore,
    EvaluationSettings,
    IntakePlan,
    IntakeSettings,
    JobSummary,
    TransitionPolicy,
    ViewContext,
    apply_evaluation,
    apply_hire_bookkeeping,
    candidate_history,
    confirm_conflict,
    group_by_column,
    job_summary,
    move_application,
    project,
    resolve_intake,
)
from .core.evaluation import validate_scorecard
from .core.intake import default_id_factory
from .core.projector import HistoryEntry
from .errors import DuplicateInPipelineError, IllegalTransitionError
from .schemas import (
    Application,
    ApplicationCandidate,
    ApplicationStatus,
    CandidateDraft,
    Decision,
    InterviewReview,
    Job,
    StoreSnapshot,
)

ConfirmCallback = Callable[[CrossJobConflict], bool]


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        entry = {"timestamp": pendulum.now().to_iso8601_string(), "app_version": __version__}
        entry.update(record)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry, ensure_ascii=False, default=_json_default))
            handle.write("\n")


class PipelineService:
    """Single writer over the entity store.

    Every UI-level action goes through one method here; each method either
    commits all of its changes or raises before touching the store.
    """

    def __init__(
        self,
        *,
        store: EntityStore,
        policy: TransitionPolicy | None = None,
        intake_settings: IntakeSettings | None = None,
        evaluation_settings: EvaluationSettings | None = None,
        track_hired_count: bool = True,
        audit_logger: AuditLogger | None = None,
        id_factory: Callable[[str], str] | None = None,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._store = store
        self._policy = policy or TransitionPolicy.permissive()
        self._intake_settings = intake_settings or IntakeSettings()
        self._evaluation_settings = evaluation_settings or EvaluationSettings()
        self._track_hired_count = track_hired_count
        self._audit = audit_logger
        self._id_factory = id_factory or default_id_factory
        self._today = today_provider or (lambda: pendulum.today().date())
        self._logger = structlog.get_logger(__name__)

    @property
    def store(self) -> EntityStore:
        return self._store

    def attach_audit_logger(self, audit_logger: AuditLogger | None) -> None:
        self._audit = audit_logger

    # intake

    def add_candidate(
        self,
        draft: CandidateDraft,
        job_id: str | None = None,
        *,
        confirm: ConfirmCallback | None = None,
    ) -> IntakePlan | None:
        """Add a new or existing candidate, optionally into ``job_id``'s pipeline.

        Returns the committed plan, or ``None`` when the operator declined a
        cross-job conflict warning.
        """

        if job_id is not None:
            self._store.get_job(job_id)

        outcome = resolve_intake(
            self._store.candidates,
            self._store.applications,
            draft,
            job_id,
            settings=self._intake_settings,
            today=self._today(),
            id_factory=self._id_factory,
        )

        if isinstance(outcome, DuplicateInPipeline):
            self._logger.info(
                "intake.duplicate_in_pipeline",
                candidate_id=outcome.candidate_id,
                application_id=outcome.application_id,
                job_id=job_id,
            )
            raise DuplicateInPipelineError(outcome.candidate_id, outcome.application_id)

        if isinstance(outcome, CrossJobConflict):
            self._logger.warning(
                "intake.cross_job_conflict",
                candidate_id=outcome.candidate_id,
                conflicting_application_id=outcome.conflicting_application_id,
                job_id=job_id,
            )
            if confirm is None or not confirm(outcome):
                self._logger.info("intake.cancelled", candidate_id=outcome.candidate_id, job_id=job_id)
                return None
            outcome = confirm_conflict(outcome)

        plan = outcome.plan
        if plan.is_new_candidate:
            self._store.add_candidate(plan.candidate)
        if plan.application is not None:
            self._store.attach_application(plan.application)

        application_id = plan.application.id if plan.application else None
        self._logger.info(
            "intake.accepted",
            candidate_id=plan.candidate.id,
            application_id=application_id,
            job_id=job_id,
            is_new_candidate=plan.is_new_candidate,
        )
        self._record(
            "intake",
            candidate_id=plan.candidate.id,
            application_id=application_id,
            job_id=job_id,
            is_new_candidate=plan.is_new_candidate,
        )
        return plan

    # transitions

    def change_status(
        self,
        item_id: str,
        new_status: ApplicationStatus | str,
        context: ViewContext,
    ) -> Application | None:
        """Move a board card to ``new_status``; a no-op outside a job context."""

        try:
            new_status = ApplicationStatus(new_status)
        except ValueError as exc:
            raise IllegalTransitionError(f"Unknown status: {new_status!r}") from exc
        if not context.is_job_scoped:
            self._logger.info("pipeline.pool_status_ignored", item_id=item_id, status=new_status.value)
            return None

        before = self._store.get_application(item_id)
        after = move_application(before, new_status, policy=self._policy, today=self._today())
        self._commit_application(before, after)
        self._logger.info(
            "pipeline.status_changed",
            application_id=after.id,
            job_id=after.job_id,
            source=before.status.value,
            destination=after.status.value,
        )
        self._record(
            "status_change",
            application_id=after.id,
            job_id=after.job_id,
            source=before.status,
            destination=after.status,
        )
        return after

    def submit_evaluation(
        self,
        application_id: str,
        score: float,
        decision: Decision | str,
        *,
        interviewer: str = "",
        comment: str = "",
        ratings: dict[str, str] | None = None,
    ) -> Application:
        before = self._store.get_application(application_id)
        decision = validate_scorecard(score, decision)
        today = self._today()
        review = None
        if interviewer or comment or ratings:
            review = InterviewReview(
                id=self._id_factory("r"),
                interviewer_name=interviewer,
                score=score,
                decision=decision,
                comment=comment,
                ratings=ratings or {},
                reviewed_on=today,
            )
        after = apply_evaluation(
            before,
            score,
            decision,
            settings=self._evaluation_settings,
            review=review,
            today=today,
        )
        self._commit_application(before, after)
        self._logger.info(
            "pipeline.evaluation_applied",
            application_id=after.id,
            decision=decision.value,
            score=after.score,
            status=after.status.value,
            interview_round=after.interview_round,
        )
        self._record(
            "evaluation",
            application_id=after.id,
            job_id=after.job_id,
            decision=decision,
            score=after.score,
            status=after.status,
            interview_round=after.interview_round,
        )
        return after

    def delete(self, item_id: str, context: ViewContext) -> list[Application]:
        """Withdraw an application (job context) or remove a candidate (pool).

        Returns the applications that were removed.
        """

        if context.is_job_scoped:
            removed = [self._store.withdraw_application(item_id)]
            self._logger.info("pipeline.application_withdrawn", application_id=item_id)
            self._record("withdraw", application_id=item_id)
        else:
            removed = self._store.remove_candidate(item_id)
            self._logger.info(
                "pipeline.candidate_removed",
                candidate_id=item_id,
                cascaded=[a.id for a in removed],
            )
            self._record("remove_candidate", candidate_id=item_id, cascaded=[a.id for a in removed])
        return removed

    # views

    def board(self, context: ViewContext, search_query: str = "") -> list[ApplicationCandidate]:
        return project(self._store.candidates, self._store.applications, context, search_query)

    def columns(
        self,
        context: ViewContext,
        search_query: str = "",
    ) -> dict[ApplicationStatus, list[ApplicationCandidate]]:
        return group_by_column(self.board(context, search_query))

    def job_summary(self, job_id: str) -> JobSummary:
        return job_summary(self._store.get_job(job_id), self._store.applications)

    def job_summaries(self) -> list[JobSummary]:
        return [job_summary(job, self._store.applications) for job in self._store.jobs]

    def candidate_history(self, candidate_id: str) -> list[HistoryEntry]:
        self._store.get_candidate(candidate_id)
        return candidate_history(candidate_id, self._store.applications, self._store.jobs)

    # internals

    def _commit_application(self, before: Application, after: Application) -> None:
        job = self._find_job(after.job_id)
        updated_job: Job | None = None
        if self._track_hired_count and job is not None:
            updated_job = apply_hire_bookkeeping(job, before.status, after.status)

        self._store.replace_application(after)
        if updated_job is not None and updated_job is not job:
            self._store.replace_job(updated_job)
            self._logger.info(
                "pipeline.hired_count_updated",
                job_id=updated_job.id,
                hired_count=updated_job.hired_count,
            )

    def _find_job(self, job_id: str) -> Job | None:
        for job in self._store.jobs:
            if job.id == job_id:
                return job
        return None

    def _record(self, action: str, **fields: Any) -> None:
        if self._audit:
            self._audit.append({"action": action, **fields})


class StoreLoader:
    """Load an entity store from a JSON state file or the bundled seed data."""

    def __init__(self, config_manager: ConfigManager | None = None) -> None:
        self._configs = config_manager or ConfigManager(bundled_config_dir())

    def load(self, path: Path | None) -> EntityStore:
        if path is None or not path.exists():
            return self.load_seed()
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid state JSON: {exc}") from exc
        return EntityStore.from_snapshot(StoreSnapshot.model_validate(data))

    def load_seed(self) -> EntityStore:
        raw = self._configs.load("seed") or {}
        return EntityStore.from_snapshot(StoreSnapshot.model_validate(raw))


class StoreWriter:
    """Persist entity store snapshots."""

    def write(self, path: Path, store: EntityStore) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(store.snapshot().model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def _json_default(value):  # type: ignore[override]
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
