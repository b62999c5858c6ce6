"""Custom exceptions for the student contacts client.

These never cross the client boundary: the fetch layer converts them into
classified results. They exist so that parsing and transport code can fail
loudly and be handled in one place.

Exception Hierarchy:
    ContactsError (base)
    ├── ResponseSchemaError
    └── APIError
"""


class ContactsError(Exception):
    """Base exception for the contacts client.

    Example:
        >>> try:
        ...     parse_roster(response)
        ... except ContactsError as e:
        ...     handle_error(e)
    """

    def __init__(self, message: str = "An error occurred in the contacts client"):
        self.message = message
        super().__init__(self.message)


class ResponseSchemaError(ContactsError):
    """Raised when a response body does not match the expected envelope.

    Attributes:
        endpoint: Endpoint whose response failed validation (optional)

    Example:
        >>> raise ResponseSchemaError("Invalid JSON", endpoint="/students")
    """

    def __init__(self, message: str = "Invalid response from server", endpoint: str = None):
        self.endpoint = endpoint
        super().__init__(message)


class APIError(ContactsError):
    """Raised when the backend answers with an application-level failure.

    Attributes:
        status_code: HTTP status code (if applicable)
        envelope_status: The envelope's ``status`` field ("error" or "fail")
    """

    def __init__(
        self,
        message: str = "API call failed",
        status_code: int = None,
        envelope_status: str = None
    ):
        self.status_code = status_code
        self.envelope_status = envelope_status
        super().__init__(message)
