from __future__ import annotations

from datetime import date

import pytest

from hrpipeline.core import BOARD_COLUMNS, ViewContext, group_by_column, job_summary, project
from hrpipeline.core.projector import candidate_history
from hrpipeline.schemas import (
    Application,
    ApplicationStatus,
    Candidate,
    Job,
    JobScoped,
    PoolScoped,
)

ALICE = Candidate(id="c1", name="Alice Johnson", email="alice@x.com", role="Senior Frontend Engineer")
BOB = Candidate(id="c2", name="Bob Smith", email="bob@x.com", role="Product Manager")


def app(app_id: str, candidate_id: str, job_id: str, status=ApplicationStatus.NEW, **kwargs) -> Application:
    return Application(
        id=app_id,
        job_id=job_id,
        candidate_id=candidate_id,
        status=status,
        applied_at=date(2024, 1, 1),
        updated_at=date(2024, 1, 1),
        **kwargs,
    )


APPLICATIONS = [
    app("a1", "c1", "j1", ApplicationStatus.INTERVIEWING, interview_round=2, score=4.2),
    app("a2", "c2", "j2"),
    app("a3", "c2", "j1", ApplicationStatus.REJECTED, reject_reason="Technical fit issue"),
    app("a4", "ghost", "j1"),
]


def test_job_mode_merges_application_fields_and_drops_dangling_rows():
    rows = project([ALICE, BOB], APPLICATIONS, ViewContext(active_job_id="j1"), "")

    assert [row.application_id for row in rows] == ["a1", "a3"]
    alice = rows[0]
    assert alice.scope == JobScoped(application_id="a1", job_id="j1")
    assert alice.status == ApplicationStatus.INTERVIEWING
    assert alice.interview_round == 2
    assert alice.interview_score == 4.2
    assert alice.job_id == "j1"
    assert rows[1].reject_reason == "Technical fit issue"


def test_job_mode_search_matches_name_or_role_case_insensitively():
    context = ViewContext(active_job_id="j1")

    assert [r.id for r in project([ALICE, BOB], APPLICATIONS, context, "SMITH")] == ["c2"]
    assert [r.id for r in project([ALICE, BOB], APPLICATIONS, context, "frontend")] == ["c1"]
    assert project([ALICE, BOB], APPLICATIONS, context, "nobody") == []


def test_pool_mode_search_front_returns_only_alice():
    rows = project([ALICE, BOB], APPLICATIONS, ViewContext(), "front")

    assert [row.name for row in rows] == ["Alice Johnson"]


def test_pool_rows_carry_no_application():
    rows = project([ALICE, BOB], APPLICATIONS, ViewContext(), "")

    assert len(rows) == 2
    for row in rows:
        assert row.application_id == ""
        assert isinstance(row.scope, PoolScoped)
        assert row.status == ApplicationStatus.TALENT_POOL
        assert row.interview_round == 0
        assert row.job_id is None
        assert row.card_id == row.id


def test_other_pages_without_job_are_empty():
    assert project([ALICE, BOB], APPLICATIONS, ViewContext(page="dashboard"), "") == []


def test_projection_is_deterministic():
    context = ViewContext(active_job_id="j1")
    first = project([ALICE, BOB], APPLICATIONS, context, "a")
    second = project([ALICE, BOB], APPLICATIONS, context, "a")

    assert first == second


def test_board_dict_keeps_empty_application_id_for_pool():
    row = project([ALICE], [], ViewContext(), "")[0]
    payload = row.to_board_dict()

    assert payload["application_id"] == ""
    assert payload["status"] == "Talent Pool"
    assert "scope" not in payload


def test_group_by_column_keeps_fixed_order_and_empty_columns():
    rows = project([ALICE, BOB], APPLICATIONS, ViewContext(active_job_id="j1"), "")
    columns = group_by_column(rows)

    assert tuple(columns) == BOARD_COLUMNS
    assert [r.id for r in columns[ApplicationStatus.INTERVIEWING]] == ["c1"]
    assert [r.id for r in columns[ApplicationStatus.REJECTED]] == ["c2"]
    assert columns[ApplicationStatus.NEW] == []


def test_job_summary_counts():
    job = Job(id="j1", title="Frontend", target_count=2, hired_count=1)
    extra = [*APPLICATIONS, app("a5", "c1", "j1", ApplicationStatus.HIRED)]

    summary = job_summary(job, extra)

    assert summary.total == 4
    assert summary.active == 2
    assert summary.in_pipeline == 3
    assert summary.hired_count == 1
    assert summary.target_count == 2


@pytest.mark.parametrize("candidate_id, titles", [("c2", ["Product", "Unknown Job"]), ("c9", [])])
def test_candidate_history_resolves_titles(candidate_id: str, titles: list[str]):
    jobs = [Job(id="j2", title="Product")]

    history = candidate_history(candidate_id, APPLICATIONS, jobs)

    assert [entry.job_title for entry in history] == titles
