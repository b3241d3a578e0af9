from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from hrpipeline.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "state.json"


def invoke(runner: CliRunner, state_path: Path, *args: str, input: str | None = None):
    return runner.invoke(app, ["--state", str(state_path), *args], input=input)


def test_board_json_lists_talent_pool_from_seed(runner: CliRunner, state_path: Path) -> None:
    result = invoke(runner, state_path, "board", "--json")

    assert result.exit_code == 0, result.output
    rows = json.loads(result.stdout)
    assert [row["id"] for row in rows] == ["c1", "c2", "c3", "c4"]
    assert all(row["application_id"] == "" for row in rows)
    assert all(row["status"] == "Talent Pool" for row in rows)
    assert not state_path.exists()


def test_job_board_groups_columns(runner: CliRunner, state_path: Path) -> None:
    result = invoke(runner, state_path, "board", "--job", "j1", "--search", "alice")

    assert result.exit_code == 0, result.output
    assert "Interviewing (1)" in result.stdout
    assert "[a1] Alice Johnson" in result.stdout
    assert "Offer (0)" in result.stdout


def test_add_evaluate_move_and_summary(runner: CliRunner, state_path: Path, tmp_path: Path) -> None:
    audit_path = tmp_path / "audit.jsonl"

    added = invoke(runner, state_path, "add", "--name", "Eve Adams", "--email", "eve@x.com", "--job", "j2")
    assert added.exit_code == 0, added.output
    assert "created" in added.stdout
    assert state_path.exists()

    cross = invoke(
        runner, state_path, "add", "--name", "Alice Johnson", "--email", "alice@example.com", "--job", "j2", "--yes"
    )
    assert cross.exit_code == 0, cross.output
    assert "reused" in cross.stdout

    evaluated = runner.invoke(
        app,
        [
            "--state",
            str(state_path),
            "--audit-log",
            str(audit_path),
            "evaluate",
            "a1",
            "--score",
            "4.5",
            "--decision",
            "Pass",
            "--interviewer",
            "Sam",
        ],
    )
    assert evaluated.exit_code == 0, evaluated.output
    assert "a1: Offer, round 2" in evaluated.stdout
    assert json.loads(audit_path.read_text(encoding="utf-8").splitlines()[0])["action"] == "evaluation"

    moved = invoke(runner, state_path, "move", "a3", "Hired")
    assert moved.exit_code == 0, moved.output

    summary = invoke(runner, state_path, "summary")
    assert "j1 Senior Frontend Engineer: 2 in pipeline, 1 active, hired 1/2" in summary.stdout
    assert "j2 Product Manager: 3 in pipeline" in summary.stdout

    saved = json.loads(state_path.read_text(encoding="utf-8"))
    assert len(saved["applications"]) == 6


def test_cross_job_conflict_can_be_declined(runner: CliRunner, state_path: Path) -> None:
    result = invoke(
        runner,
        state_path,
        "add",
        "--name",
        "Alice Johnson",
        "--email",
        "alice@example.com",
        "--job",
        "j3",
        input="n\n",
    )

    assert result.exit_code == 0, result.output
    assert "Cancelled." in result.stdout
    assert not state_path.exists()


def test_errors_exit_non_zero(runner: CliRunner, state_path: Path) -> None:
    duplicate = invoke(runner, state_path, "add", "--name", "Alice", "--email", "alice@example.com", "--job", "j1")
    assert duplicate.exit_code == 1
    assert "Candidate already in this pipeline (application a1)." in duplicate.output

    missing = invoke(runner, state_path, "add", "--name", "No Email")
    assert missing.exit_code == 1
    assert "email" in missing.output

    unknown = invoke(runner, state_path, "withdraw", "a404")
    assert unknown.exit_code == 1


def test_remove_and_history(runner: CliRunner, state_path: Path) -> None:
    history = invoke(runner, state_path, "history", "c3")
    assert "a3 Senior Frontend Engineer: Offer (applied 2023-10-10)" in history.stdout

    removed = invoke(runner, state_path, "remove", "c1")
    assert removed.exit_code == 0, removed.output
    assert "Removed c1 and 1 application(s)." in removed.stdout

    gone = invoke(runner, state_path, "history", "c1")
    assert gone.exit_code == 1


def test_evaluate_records_category_ratings(runner: CliRunner, state_path: Path) -> None:
    result = invoke(
        runner,
        state_path,
        "evaluate",
        "a1",
        "--score",
        "4",
        "--decision",
        "Hold",
        "--interviewer",
        "Sam",
        "--rating",
        "Communication=a",
        "--rating",
        "Technical=S",
    )

    assert result.exit_code == 0, result.output
    assert "a1: Talent Pool, round 2 (Good candidate, wrong timing)" in result.stdout
    saved = json.loads(state_path.read_text(encoding="utf-8"))
    application = next(a for a in saved["applications"] if a["id"] == "a1")
    assert application["reviews"][0]["ratings"] == {"Communication": "A", "Technical": "S"}


@pytest.mark.parametrize("rating", ["Communication", "Communication=Z", "=A"])
def test_evaluate_rejects_malformed_rating(runner: CliRunner, state_path: Path, rating: str) -> None:
    result = invoke(runner, state_path, "evaluate", "a1", "--score", "4", "--decision", "Pass", "--rating", rating)

    assert result.exit_code == 2
    assert not state_path.exists()


def test_evaluate_refuses_application_outside_interviewing(runner: CliRunner, state_path: Path) -> None:
    result = invoke(runner, state_path, "evaluate", "a3", "--score", "2", "--decision", "Reject")

    assert result.exit_code == 1
    assert "ILLEGAL_TRANSITION" in result.output
    assert not state_path.exists()


def test_config_with_unknown_key_is_rejected(runner: CliRunner, state_path: Path, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("intake:\n  email_case_sensitve: false\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config_path), "--state", str(state_path), "summary"])

    assert result.exit_code == 2
    assert not state_path.exists()
