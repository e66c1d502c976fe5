from __future__ import annotations

# Allowed status changes of a queue entry.
#
#   waiting -> in-progress -> completed
#   waiting -> no-show
#
# `completed` and `no-show` are terminal.

from .errors import BadRequest, InvalidTransition
from .models import QueueStatus

ALLOWED_TRANSITIONS: dict[QueueStatus, frozenset[QueueStatus]] = {
    QueueStatus.WAITING: frozenset({QueueStatus.IN_PROGRESS, QueueStatus.NO_SHOW}),
    QueueStatus.IN_PROGRESS: frozenset({QueueStatus.COMPLETED}),
    QueueStatus.COMPLETED: frozenset(),
    QueueStatus.NO_SHOW: frozenset(),
}


def parse_status(value: str | QueueStatus) -> QueueStatus:
    try:
        return QueueStatus(value)
    except ValueError as e:
        raise BadRequest(f"unknown status {value!r}") from e


def is_terminal(status: QueueStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def check_transition(current: QueueStatus, new: QueueStatus) -> None:
    """Raise InvalidTransition unless `current -> new` is a forward move."""
    if new == current:
        raise InvalidTransition(f"entry is already {current.value}")
    if is_terminal(current):
        raise InvalidTransition(f"{current.value} is final")
    if new not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransition(f"cannot move from {current.value} to {new.value}")
