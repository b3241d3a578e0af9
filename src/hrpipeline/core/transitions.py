"""Status transitions for applications on the pipeline board."""

from __future__ import annotations

from datetime import date
from typing import Mapping

import pendulum

from ..errors import IllegalTransitionError
from ..schemas import Application, ApplicationStatus, Job

S = ApplicationStatus

_SIDE_EXITS = frozenset({S.REJECTED, S.TALENT_POOL})

STRICT_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    S.NEW: frozenset({S.SCREENED}) | _SIDE_EXITS,
    S.SCREENED: frozenset({S.INTERVIEWING}) | _SIDE_EXITS,
    S.INTERVIEWING: frozenset({S.OFFER}) | _SIDE_EXITS,
    S.OFFER: frozenset({S.HIRED}) | _SIDE_EXITS,
    S.TALENT_POOL: frozenset({S.NEW, S.SCREENED, S.INTERVIEWING, S.REJECTED}),
    S.HIRED: frozenset(),
    S.REJECTED: frozenset(),
}


class TransitionPolicy:
    """Decides which board moves are legal.

    Without a table every status may move to every other status, which is
    how the board behaves today.
    """

    def __init__(self, table: Mapping[ApplicationStatus, frozenset[ApplicationStatus]] | None = None) -> None:
        self._table = dict(table) if table is not None else None

    @classmethod
    def permissive(cls) -> "TransitionPolicy":
        return cls()

    @classmethod
    def strict(cls) -> "TransitionPolicy":
        return cls(STRICT_TRANSITIONS)

    @classmethod
    def from_flag(cls, enforce: bool) -> "TransitionPolicy":
        return cls.strict() if enforce else cls.permissive()

    @property
    def is_permissive(self) -> bool:
        return self._table is None

    def allows(self, source: ApplicationStatus, destination: ApplicationStatus) -> bool:
        if self._table is None or source == destination:
            return True
        return destination in self._table.get(source, frozenset())


def move_application(
    application: Application,
    destination: ApplicationStatus,
    *,
    policy: TransitionPolicy | None = None,
    today: date | None = None,
) -> Application:
    """Return ``application`` moved to ``destination``.

    Reject reasons are left untouched: a card dragged into Rejected carries
    no reason unless the interview path set one earlier.
    """

    policy = policy or TransitionPolicy.permissive()
    if not policy.allows(application.status, destination):
        raise IllegalTransitionError(
            f"Cannot move application {application.id} from "
            f"{application.status.value} to {destination.value}"
        )
    return application.model_copy(
        update={
            "status": destination,
            "updated_at": today or pendulum.today().date(),
        }
    )


def apply_hire_bookkeeping(job: Job, before: ApplicationStatus, after: ApplicationStatus) -> Job:
    """Adjust ``job.hired_count`` for an application moving ``before`` -> ``after``."""
    if before == after:
        return job
    if after == S.HIRED:
        return job.model_copy(update={"hired_count": job.hired_count + 1})
    if before == S.HIRED:
        return job.model_copy(update={"hired_count": max(job.hired_count - 1, 0)})
    return job


__all__ = [
    "STRICT_TRANSITIONS",
    "TransitionPolicy",
    "apply_hire_bookkeeping",
    "move_application",
]
