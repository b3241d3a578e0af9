from __future__ import annotations

from datetime import date

import pytest

from hrpipeline.core import TransitionPolicy, apply_hire_bookkeeping, move_application
from hrpipeline.errors import IllegalTransitionError
from hrpipeline.schemas import Application, ApplicationStatus, Job

S = ApplicationStatus


def build_application(status: ApplicationStatus = S.NEW, **kwargs) -> Application:
    return Application(
        id="a1",
        job_id="j1",
        candidate_id="c1",
        status=status,
        applied_at=date(2024, 1, 1),
        updated_at=date(2024, 1, 1),
        **kwargs,
    )


@pytest.mark.parametrize("source", list(S))
@pytest.mark.parametrize("destination", list(S))
def test_permissive_policy_allows_any_move(source: ApplicationStatus, destination: ApplicationStatus):
    moved = move_application(
        build_application(source),
        destination,
        policy=TransitionPolicy.permissive(),
        today=date(2024, 2, 1),
    )
    assert moved.status == destination


def test_move_refreshes_updated_at_and_keeps_everything_else():
    original = build_application(S.INTERVIEWING, interview_round=2, score=4.0)

    moved = move_application(original, S.OFFER, today=date(2024, 3, 3))

    assert moved.updated_at == date(2024, 3, 3)
    assert moved.interview_round == 2
    assert moved.score == 4.0
    assert moved.applied_at == original.applied_at
    assert original.status == S.INTERVIEWING


def test_board_move_never_synthesizes_or_clears_reject_reason():
    dragged = move_application(build_application(S.SCREENED), S.REJECTED, today=date(2024, 2, 1))
    assert dragged.reject_reason is None

    with_reason = build_application(S.REJECTED, reject_reason="Technical fit issue")
    revived = move_application(with_reason, S.NEW, today=date(2024, 2, 1))
    assert revived.reject_reason == "Technical fit issue"


def test_strict_policy_refuses_skipping_and_leaving_terminal_states():
    policy = TransitionPolicy.strict()

    assert policy.allows(S.NEW, S.SCREENED)
    assert policy.allows(S.OFFER, S.REJECTED)
    assert policy.allows(S.INTERVIEWING, S.TALENT_POOL)
    assert not policy.allows(S.NEW, S.HIRED)
    assert not policy.allows(S.HIRED, S.NEW)
    assert not policy.allows(S.REJECTED, S.SCREENED)

    with pytest.raises(IllegalTransitionError):
        move_application(build_application(S.NEW), S.OFFER, policy=policy)


def test_policy_from_flag():
    assert TransitionPolicy.from_flag(False).is_permissive
    assert not TransitionPolicy.from_flag(True).is_permissive


def build_job(hired_count: int = 0) -> Job:
    return Job(id="j1", title="Engineer", target_count=2, hired_count=hired_count)


def test_hire_bookkeeping_counts_entering_hired_once():
    job = build_job()

    hired = apply_hire_bookkeeping(job, S.OFFER, S.HIRED)
    again = apply_hire_bookkeeping(hired, S.HIRED, S.HIRED)

    assert hired.hired_count == 1
    assert again.hired_count == 1


def test_hire_bookkeeping_decrements_when_leaving_hired():
    job = build_job(hired_count=1)

    assert apply_hire_bookkeeping(job, S.HIRED, S.OFFER).hired_count == 0
    assert apply_hire_bookkeeping(build_job(0), S.HIRED, S.OFFER).hired_count == 0
    assert apply_hire_bookkeeping(job, S.NEW, S.SCREENED) is job
