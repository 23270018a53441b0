"""Error taxonomy for badgerelay.

Every failure the relay can report is a RelayError tagged with an ErrorKind.
The HTTP status for a kind is fixed here, so the exception handler in
main.py maps errors to responses by type and never by inspecting messages.

    CONFIG     startup only; the process refuses to start
    NOT_FOUND  no workflow runs exist for the requested branch      → 400
    UPSTREAM   transport/auth/API failure talking to the CI provider → 400
    FORBIDDEN  owner not in a non-empty allow-list                  → 400
"""

from __future__ import annotations

import enum

from badgerelay.constants import MSG_USER_NOT_ALLOWED, MSG_WORKFLOW_NOT_FOUND


class ErrorKind(str, enum.Enum):
    CONFIG = "config"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    FORBIDDEN = "forbidden"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFIG: 500,
    ErrorKind.NOT_FOUND: 400,
    ErrorKind.UPSTREAM: 400,
    ErrorKind.FORBIDDEN: 400,
}


class RelayError(Exception):
    """Base class for all errors surfaced by the relay.

    Attributes:
        kind:    ErrorKind tag (set by each subclass).
        message: Text returned verbatim to the client as the response body.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]


class ConfigError(RelayError):
    """Invalid or incomplete process configuration. Fatal at startup."""

    kind = ErrorKind.CONFIG


class NotFoundError(RelayError):
    """The upstream returned no workflow runs for the branch."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = MSG_WORKFLOW_NOT_FOUND) -> None:
        super().__init__(message)


class UpstreamError(RelayError):
    """Failure communicating with, or interpreting a response from, the CI provider."""

    kind = ErrorKind.UPSTREAM


class ForbiddenError(RelayError):
    """The requested owner is not in the configured allow-list."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = MSG_USER_NOT_ALLOWED) -> None:
        super().__init__(message)
