"""Core pipeline engine: store, intake, transitions, evaluation and projection."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .evaluation import EvaluationSettings, apply_evaluation
from .intake import (
    Accepted,
    CrossJobConflict,
    DuplicateInPipeline,
    IntakeOutcome,
    IntakePlan,
    IntakeSettings,
    confirm_conflict,
    resolve_intake,
)
from .projector import (
    BOARD_COLUMNS,
    JobSummary,
    ViewContext,
    candidate_history,
    group_by_column,
    job_summary,
    project,
)
from .store import EntityStore
from .transitions import TransitionPolicy, apply_hire_bookkeeping, move_application

__all__ = [
    "Accepted",
    "BOARD_COLUMNS",
    "CrossJobConflict",
    "DuplicateInPipeline",
    "EntityStore",
    "EvaluationSettings",
    "IntakeOutcome",
    "IntakePlan",
    "IntakeSettings",
    "JobSummary",
    "TransitionPolicy",
    "ViewContext",
    "apply_evaluation",
    "apply_hire_bookkeeping",
    "candidate_history",
    "confirm_conflict",
    "group_by_column",
    "job_summary",
    "move_application",
    "project",
    "resolve_intake",
]
