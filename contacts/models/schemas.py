"""
Pydantic schemas for backend response validation.

Every response body passes through one of the envelope models before any
record reaches the coordinator; anything that does not validate is
reported as a server failure by the client.
"""
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Accommodation(str, Enum):
    HOSTELLER = "Hosteller"
    DAY_SCHOLAR = "DayScholar"


class EnvelopeStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    FAIL = "fail"


class StudentRecord(BaseModel):
    """A single student as returned by the backend."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Union[int, str]
    name: str = Field(..., min_length=1)
    roll_number: str = Field(..., alias="rollNumber")
    department: str
    email: str
    address: str
    lab_name: str = Field(..., alias="labName")
    accommodation: Accommodation


class _Envelope(BaseModel):
    """Common `{status, data?, message?}` wrapper."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: EnvelopeStatus
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == EnvelopeStatus.SUCCESS

    @model_validator(mode="after")
    def success_requires_data(self):
        if self.status == EnvelopeStatus.SUCCESS and getattr(self, "data", None) is None:
            raise ValueError("success response is missing 'data'")
        return self


class StudentListEnvelope(_Envelope):
    """Response of `GET /students`."""

    data: Optional[List[StudentRecord]] = None


class StudentEnvelope(_Envelope):
    """Response of `GET /students/{id}`."""

    data: Optional[StudentRecord] = None
