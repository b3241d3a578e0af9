"""Typer CLI entrypoint for the hiring pipeline."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, get_args

import typer
import yaml
from pydantic import ValidationError

from .container import PipelineContainer, create_container
from .core import ViewContext
from .errors import PipelineError
from .extraction import MANUAL_ENTRY_MESSAGE
from .logging import bind_context, clear_context, configure_logging
from .pipeline import AuditLogger, PipelineService
from .schemas import ApplicationStatus, CandidateDraft, Decision
from .schemas.application import Rating
from .schemas.config import load_config

app = typer.Typer(help="Hiring pipeline CLI.")

DEFAULT_STATE = Path("pipeline_state.json")
RATING_GRADES = get_args(Rating)


@dataclass
class CLIState:
    container: PipelineContainer
    service: PipelineService
    state_path: Path

    def save(self) -> None:
        self.container.store_writer().write(self.state_path, self.service.store)


@app.callback()
def main_options(
    ctx: typer.Context,
    state: Path = typer.Option(DEFAULT_STATE, dir_okay=False, help="JSON state file (seeded when missing)."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Track candidates through job pipelines."""
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        try:
            settings = load_config(loaded).to_settings()
        except ValidationError as exc:
            raise typer.BadParameter(f"Invalid config: {exc}", param_hint="--config") from exc

    configure_logging(log_level)
    clear_context()
    bind_context(command=ctx.invoked_subcommand, state=str(state))

    settings["state_path"] = str(state)
    container = create_container(settings=settings)
    service = container.service()
    if audit_log:
        service.attach_audit_logger(AuditLogger(audit_log))
    ctx.obj = CLIState(container=container, service=service, state_path=state)


def _fail(exc: PipelineError) -> typer.Exit:
    typer.echo(f"Error [{exc.code.value}]: {exc.message}", err=True)
    return typer.Exit(code=1)


def _context(job: Optional[str], page: str = "candidates") -> ViewContext:
    return ViewContext(active_job_id=job, page=page)


def _parse_ratings(values: List[str]) -> dict[str, str]:
    ratings: dict[str, str] = {}
    for value in values:
        category, sep, grade = value.partition("=")
        grade = grade.strip().upper()
        if not sep or not category.strip() or grade not in RATING_GRADES:
            raise typer.BadParameter(
                f"Expected CATEGORY=GRADE with a grade in {'/'.join(RATING_GRADES)}, got {value!r}",
                param_hint="--rating",
            )
        ratings[category.strip()] = grade
    return ratings


@app.command()
def board(
    ctx: typer.Context,
    job: Optional[str] = typer.Option(None, "--job", "-j", help="Show this job's pipeline instead of the talent pool."),
    page: str = typer.Option("candidates", help="Page shown when no job is selected."),
    search: str = typer.Option("", "--search", "-s", help="Filter by name or role."),
    as_json: bool = typer.Option(False, "--json", help="Print rows as JSON."),
) -> None:
    """Print the job board or the talent pool."""
    cli: CLIState = ctx.obj
    context = _context(job, page)
    if as_json:
        rows = [row.to_board_dict() for row in cli.service.board(context, search)]
        typer.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return
    for status, rows in cli.service.columns(context, search).items():
        typer.echo(f"{status.value} ({len(rows)})")
        for row in rows:
            score = f" score={row.interview_score}" if row.interview_score is not None else ""
            typer.echo(f"  - [{row.card_id}] {row.name} | {row.role} | round {row.interview_round}{score}")


@app.command()
def add(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, help="Candidate name."),
    email: Optional[str] = typer.Option(None, help="Candidate email."),
    phone: Optional[str] = typer.Option(None),
    role: Optional[str] = typer.Option(None, help="Current or last role."),
    experience: Optional[float] = typer.Option(None, help="Years of experience."),
    education: Optional[str] = typer.Option(None),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Skill tag (repeatable)."),
    job: Optional[str] = typer.Option(None, "--job", "-j", help="Add into this job's pipeline."),
    resume: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="Resume file to extract from."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Confirm cross-job conflicts without prompting."),
) -> None:
    """Add a candidate, optionally into a job's pipeline."""
    cli: CLIState = ctx.obj
    draft = CandidateDraft()
    if resume:
        session = cli.container.upload_session()
        try:
            draft = session.extract_file(resume) or draft
        except PipelineError as exc:
            raise _fail(exc) from exc
        if session.error:
            typer.echo(MANUAL_ENTRY_MESSAGE, err=True)
        session.close()

    overrides = {
        "name": name,
        "email": email,
        "phone": phone,
        "role": role,
        "experience": experience,
        "education": education,
        "tags": tag or None,
    }
    draft = draft.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    def confirm(conflict) -> bool:
        if yes:
            return True
        return typer.confirm(
            f"Candidate {conflict.candidate_id} is active in another pipeline "
            f"({conflict.conflicting_application_id}). Add anyway?"
        )

    try:
        plan = cli.service.add_candidate(draft, job, confirm=confirm)
    except PipelineError as exc:
        raise _fail(exc) from exc

    if plan is None:
        typer.echo("Cancelled.")
        return
    cli.save()
    message = f"Candidate {plan.candidate.id}" + (" created" if plan.is_new_candidate else " reused")
    if plan.application:
        message += f"; application {plan.application.id} added to {plan.application.job_id}"
    typer.echo(message + ".")


@app.command()
def move(
    ctx: typer.Context,
    application_id: str = typer.Argument(..., help="Application id."),
    status: ApplicationStatus = typer.Argument(..., help="Destination column."),
) -> None:
    """Move an application to another pipeline column."""
    cli: CLIState = ctx.obj
    try:
        application = cli.service.store.get_application(application_id)
        updated = cli.service.change_status(application_id, status, _context(application.job_id))
    except PipelineError as exc:
        raise _fail(exc) from exc
    cli.save()
    typer.echo(f"{updated.id}: {updated.status.value}")


@app.command()
def evaluate(
    ctx: typer.Context,
    application_id: str = typer.Argument(..., help="Application id."),
    score: float = typer.Option(..., min=1.0, max=5.0, help="Overall score (1-5)."),
    decision: Decision = typer.Option(..., help="Pass, Reject or Hold."),
    interviewer: str = typer.Option("", help="Interviewer name."),
    comment: str = typer.Option("", help="Scorecard notes."),
    rating: Optional[List[str]] = typer.Option(
        None, "--rating", help="Category grade as CATEGORY=S|A|B|C|D (repeatable)."
    ),
) -> None:
    """Submit an interview scorecard."""
    cli: CLIState = ctx.obj
    ratings = _parse_ratings(rating or [])
    try:
        updated = cli.service.submit_evaluation(
            application_id,
            score,
            decision,
            interviewer=interviewer,
            comment=comment,
            ratings=ratings,
        )
    except PipelineError as exc:
        raise _fail(exc) from exc
    cli.save()
    reason = f" ({updated.reject_reason})" if updated.reject_reason else ""
    typer.echo(f"{updated.id}: {updated.status.value}, round {updated.interview_round}{reason}")


@app.command()
def withdraw(ctx: typer.Context, application_id: str = typer.Argument(...)) -> None:
    """Withdraw an application from its job pipeline."""
    cli: CLIState = ctx.obj
    try:
        application = cli.service.store.get_application(application_id)
        cli.service.delete(application_id, _context(application.job_id))
    except PipelineError as exc:
        raise _fail(exc) from exc
    cli.save()
    typer.echo(f"Withdrew {application_id}.")


@app.command()
def remove(ctx: typer.Context, candidate_id: str = typer.Argument(...)) -> None:
    """Delete a candidate and all of their applications."""
    cli: CLIState = ctx.obj
    try:
        removed = cli.service.delete(candidate_id, _context(None))
    except PipelineError as exc:
        raise _fail(exc) from exc
    cli.save()
    typer.echo(f"Removed {candidate_id} and {len(removed)} application(s).")


@app.command()
def summary(ctx: typer.Context) -> None:
    """List jobs with pipeline counts."""
    cli: CLIState = ctx.obj
    for item in cli.service.job_summaries():
        typer.echo(
            f"{item.job_id} {item.title}: {item.in_pipeline} in pipeline, "
            f"{item.active} active, hired {item.hired_count}/{item.target_count}"
        )


@app.command()
def history(ctx: typer.Context, candidate_id: str = typer.Argument(...)) -> None:
    """Show a candidate's application history."""
    cli: CLIState = ctx.obj
    try:
        entries = cli.service.candidate_history(candidate_id)
    except PipelineError as exc:
        raise _fail(exc) from exc
    if not entries:
        typer.echo("No applications.")
    for entry in entries:
        application = entry.application
        typer.echo(
            f"{application.id} {entry.job_title}: {application.status.value} "
            f"(applied {application.applied_at.isoformat()})"
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
