"""Interview scorecard reducer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pendulum

from ..errors import EvaluationValidationError, IllegalTransitionError
from ..schemas import Application, ApplicationStatus, Decision, InterviewReview
from ..schemas.application import MAX_SCORE, MIN_SCORE


@dataclass
class EvaluationSettings:
    """Constants of the interview loop."""

    max_rounds: int = 2
    reject_reason: str = "Technical fit issue"
    hold_reason: str = "Good candidate, wrong timing"


def apply_evaluation(
    application: Application,
    submitted_score: float,
    decision: Decision | str,
    *,
    settings: EvaluationSettings | None = None,
    review: InterviewReview | None = None,
    today: date | None = None,
) -> Application:
    """Fold a submitted scorecard into the next application state.

    The score always replaces the previous one; rounds are not averaged.
    Only applications in the Interviewing column take scorecards.
    """

    settings = settings or EvaluationSettings()
    decision = validate_scorecard(submitted_score, decision)
    if application.status != ApplicationStatus.INTERVIEWING:
        raise IllegalTransitionError(
            f"Application {application.id} is {application.status.value}; "
            "only Interviewing applications can be evaluated"
        )

    status = application.status
    interview_round = application.interview_round or 1
    reject_reason: str | None = None

    if decision is Decision.PASS:
        if interview_round < settings.max_rounds:
            interview_round += 1
        else:
            status = ApplicationStatus.OFFER
    elif decision is Decision.REJECT:
        status = ApplicationStatus.REJECTED
        reject_reason = settings.reject_reason
    else:
        status = ApplicationStatus.TALENT_POOL
        reject_reason = settings.hold_reason

    update: dict = {
        "status": status,
        "interview_round": interview_round,
        "score": float(submitted_score),
        "reject_reason": reject_reason,
        "updated_at": today or pendulum.today().date(),
    }
    if review is not None:
        update["reviews"] = [*(application.reviews or []), review]
    return application.model_copy(update=update)


def validate_scorecard(score: float, decision: Decision | str) -> Decision:
    """Check the score scale and normalise the decision."""
    try:
        normalized = Decision(decision)
    except ValueError as exc:
        raise EvaluationValidationError(f"Unknown decision: {decision!r}") from exc
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise EvaluationValidationError(
            f"Score must be between {MIN_SCORE} and {MAX_SCORE}, got {score}"
        )
    return normalized


__all__ = ["EvaluationSettings", "apply_evaluation", "validate_scorecard"]
