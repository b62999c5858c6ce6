"""Utilities for the student contacts client."""
from contacts.utils.exceptions import (
    ContactsError,
    ResponseSchemaError,
    APIError,
)
from contacts.utils.roster import (
    sort_roster,
    matches_query,
    filter_roster,
    find_record,
)

__all__ = [
    # Exceptions
    "ContactsError",
    "ResponseSchemaError",
    "APIError",
    # Roster helpers
    "sort_roster",
    "matches_query",
    "filter_roster",
    "find_record",
]
