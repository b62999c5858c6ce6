"""
Fetch outcomes and the coordinator state machine.

Error taxonomy:
    ErrorKind (base)
    ├── Timeout                  (not retried)
    ├── NetworkFailure(message)  (retried)
    ├── HttpStatus(code)         (retried)
    └── ServerReportedFailure    (not retried)

FetchState is one of Idle, Loading, Success(roster), Error(kind, ...).
"""
from dataclasses import dataclass
from typing import Tuple, Union

from contacts.models.schemas import StudentRecord


# Error taxonomy
@dataclass(frozen=True)
class ErrorKind:
    """Base class for classified fetch failures."""

    retryable = False

    @property
    def reason(self) -> str:
        return "Request failed"


@dataclass(frozen=True)
class Timeout(ErrorKind):
    """The request did not complete before the client-side deadline."""

    timeout_seconds: float = 10.0

    @property
    def reason(self) -> str:
        return f"Request timed out after {self.timeout_seconds:g} seconds"


@dataclass(frozen=True)
class NetworkFailure(ErrorKind):
    """Connection-level failure: DNS, refused, reset."""

    message: str = ""

    retryable = True

    @property
    def reason(self) -> str:
        return f"Network error: {self.message}" if self.message else "Network error"


@dataclass(frozen=True)
class HttpStatus(ErrorKind):
    """The server answered with a non-success HTTP status."""

    code: int = 0

    retryable = True

    @property
    def reason(self) -> str:
        return f"Server returned HTTP {self.code}"


@dataclass(frozen=True)
class ServerReportedFailure(ErrorKind):
    """The body was malformed or the server reported an application failure."""

    message: str = ""

    @property
    def reason(self) -> str:
        return self.message or "Server reported a failure"


# Classified fetch results
@dataclass(frozen=True)
class FetchSuccess:
    records: Tuple[StudentRecord, ...]


@dataclass(frozen=True)
class FetchFailure:
    kind: ErrorKind

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    @property
    def reason(self) -> str:
        return self.kind.reason


FetchResult = Union[FetchSuccess, FetchFailure]


# State machine
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    """A fetch cycle is running; ``attempt`` is 0 for the first request."""

    attempt: int = 0


@dataclass(frozen=True)
class Success:
    roster: Tuple[StudentRecord, ...]


@dataclass(frozen=True)
class Error:
    """Visible failure with a manual retry affordance."""

    kind: ErrorKind
    reason: str
    retryable: bool
    can_retry: bool = True
    attempts: int = 1

    @classmethod
    def from_failure(cls, failure: FetchFailure, attempts: int) -> "Error":
        return cls(
            kind=failure.kind,
            reason=failure.reason,
            retryable=failure.retryable,
            attempts=attempts,
        )


FetchState = Union[Idle, Loading, Success, Error]
