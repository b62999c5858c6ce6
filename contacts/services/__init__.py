"""Services for the student contacts client."""
from contacts.services.backend_client import StudentAPIClient, DEFAULT_HEADERS
from contacts.services.coordinator import RosterCoordinator

__all__ = [
    "StudentAPIClient",
    "DEFAULT_HEADERS",
    "RosterCoordinator",
]
