"""Structured failures raised by the data access layer.

Each failure carries an explicit ``kind`` so the HTTP layer can map it to a
status code without inspecting ad-hoc attributes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


_STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """A failure with a client-facing message and a kind."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    @property
    def status(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.msg!r})"


class BadRequest(ApiError):
    kind = ErrorKind.BAD_REQUEST


class NotFound(ApiError):
    kind = ErrorKind.NOT_FOUND


class InvalidFilter(BadRequest):
    """Unknown filter value.  Reported to the client as a plain bad request."""

    def __init__(self, detail: str = "") -> None:
        super().__init__("Bad request")
        self.detail = detail


class InvalidSort(BadRequest):
    """Unknown sort column or direction.  Reported as a plain bad request."""

    def __init__(self, detail: str = "") -> None:
        super().__init__("Bad request")
        self.detail = detail
