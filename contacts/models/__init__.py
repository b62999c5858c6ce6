"""Data models for the student contacts client."""
from contacts.models.schemas import (
    Accommodation,
    StudentRecord,
    EnvelopeStatus,
    StudentListEnvelope,
    StudentEnvelope,
)
from contacts.models.state import (
    ErrorKind,
    Timeout,
    NetworkFailure,
    HttpStatus,
    ServerReportedFailure,
    FetchSuccess,
    FetchFailure,
    FetchResult,
    Idle,
    Loading,
    Success,
    Error,
    FetchState,
)

__all__ = [
    # Schemas
    "Accommodation",
    "StudentRecord",
    "EnvelopeStatus",
    "StudentListEnvelope",
    "StudentEnvelope",
    # Error taxonomy
    "ErrorKind",
    "Timeout",
    "NetworkFailure",
    "HttpStatus",
    "ServerReportedFailure",
    # Fetch results
    "FetchSuccess",
    "FetchFailure",
    "FetchResult",
    # State machine
    "Idle",
    "Loading",
    "Success",
    "Error",
    "FetchState",
]
