"""Failure taxonomy and the shared error envelope.

The business layer raises `QueueError` subclasses. The MQTT adapter is the
operation boundary: it turns them into `ErrorResponse` messages so nothing is
thrown past it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class QueueError(Exception):
    code = "error"

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(self.code, str(self) or self.code)


class NotFound(QueueError):
    code = "not_found"


class NotAuthorized(QueueError):
    code = "not_authorized"


class DuplicateActiveEntry(QueueError):
    code = "duplicate_active_entry"


class InvalidTransition(QueueError):
    code = "invalid_transition"


class BadRequest(QueueError):
    code = "bad_request"


@dataclass(frozen=True)
class ErrorResponse:
    code: str
    message: str

    def to_message(self, *, corr_id: str | None = None) -> dict[str, Any]:
        msg: dict[str, Any] = {"type": "error", "code": self.code, "message": self.message}
        if corr_id is not None:
            msg["corr_id"] = corr_id
        return msg
