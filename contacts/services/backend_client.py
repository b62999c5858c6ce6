"""
Backend API Client for the student contacts app.

Fetches the roster or a single student with a hard client-side deadline and
classifies every outcome. Nothing raised by the transport or the parser
escapes: callers always receive a FetchSuccess or FetchFailure.
"""

import asyncio
import json
import logging
from typing import Optional, Type, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from contacts.config.settings import get_settings
from contacts.models.schemas import StudentEnvelope, StudentListEnvelope, StudentRecord
from contacts.models.state import (
    FetchFailure,
    FetchResult,
    FetchSuccess,
    HttpStatus,
    NetworkFailure,
    ServerReportedFailure,
    Timeout,
)
from contacts.utils.exceptions import APIError, ResponseSchemaError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

Envelope = Union[StudentListEnvelope, StudentEnvelope]


class StudentAPIClient:
    """Client for the students backend with timeout and result classification."""

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        """Initialize API client.

        Args:
            base_url: Backend API URL (default from settings)
            timeout: Request timeout in seconds (default from settings)
            transport: Custom httpx transport, mainly for tests
        """
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout_seconds
        self._transport = transport

    async def _request(self, method: str, endpoint: str) -> httpx.Response:
        """Make HTTP request on a short-lived client.

        The client is closed on the way out, also when the call is cancelled,
        so an abandoned request never keeps its connection.
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{method} {url}")

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=DEFAULT_HEADERS,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, url)
                return response
            except httpx.HTTPError as e:
                logger.warning(f"Request failed: {method} {url} - {e}")
                raise

    def _parse(
        self,
        response: httpx.Response,
        envelope_cls: Type[Envelope],
        endpoint: str
    ) -> Envelope:
        """Validate the response body against its envelope schema.

        Raises:
            ResponseSchemaError: Body is not JSON or does not match the schema
            APIError: Body is valid but reports ``error`` or ``fail``
        """
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ResponseSchemaError(f"Invalid JSON in response: {e}", endpoint=endpoint)

        try:
            envelope = envelope_cls.model_validate(payload)
        except ValidationError as e:
            raise ResponseSchemaError(
                f"Unexpected response format ({e.error_count()} validation errors)",
                endpoint=endpoint,
            )

        if not envelope.is_success:
            raise APIError(
                envelope.message or f"Server reported '{envelope.status.value}'",
                status_code=response.status_code,
                envelope_status=envelope.status.value,
            )
        return envelope

    async def _fetch(self, endpoint: str, envelope_cls: Type[Envelope]) -> Union[Envelope, FetchFailure]:
        """Run one timed GET and return the parsed envelope or a classified failure."""
        try:
            # Wall-clock bound; httpx timeouts alone apply per network operation
            response = await asyncio.wait_for(
                self._request("GET", endpoint),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"GET {endpoint} timed out after {self.timeout:g}s")
            return FetchFailure(Timeout(timeout_seconds=self.timeout))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return FetchFailure(NetworkFailure(message=str(e) or type(e).__name__))

        try:
            if not 200 <= response.status_code < 300:
                logger.warning(f"GET {endpoint} returned HTTP {response.status_code}")
                return FetchFailure(HttpStatus(code=response.status_code))
            return self._parse(response, envelope_cls, endpoint)
        except (ResponseSchemaError, APIError) as e:
            logger.error(f"GET {endpoint} rejected: {e.message}")
            return FetchFailure(ServerReportedFailure(message=e.message))

    async def fetch_roster(self) -> FetchResult:
        """Fetch the full roster.

        Returns:
            FetchSuccess with records in server order, or FetchFailure
        """
        result = await self._fetch("/students", StudentListEnvelope)
        if isinstance(result, FetchFailure):
            return result
        logger.debug(f"Fetched {len(result.data)} students")
        return FetchSuccess(records=tuple(result.data))

    async def fetch_record(self, record_id: Union[int, str]) -> Optional[StudentRecord]:
        """Fetch a single student.

        Args:
            record_id: Student id

        Returns:
            The record, or None when it could not be fetched for any reason
        """
        endpoint = f"/students/{quote(str(record_id), safe='')}"
        result = await self._fetch(endpoint, StudentEnvelope)
        if isinstance(result, FetchFailure):
            logger.info(f"Student {record_id} not available: {result.reason}")
            return None
        return result.data
