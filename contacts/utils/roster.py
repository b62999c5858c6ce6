"""Pure roster helpers: ordering, search and lookup."""
from typing import Iterable, Optional, Sequence, Tuple, Union

from contacts.models.schemas import StudentRecord


def sort_roster(records: Iterable[StudentRecord]) -> Tuple[StudentRecord, ...]:
    """Sort records by name, case-insensitive; ties keep server order."""
    return tuple(sorted(records, key=lambda r: r.name.casefold()))


def matches_query(record: StudentRecord, query: str) -> bool:
    """Check if query is a case-insensitive substring of name or roll number."""
    needle = query.casefold()
    return needle in record.name.casefold() or needle in record.roll_number.casefold()


def filter_roster(roster: Sequence[StudentRecord], query: str) -> Tuple[StudentRecord, ...]:
    """Filter roster by search query, preserving roster order.

    An empty query returns the whole roster.
    """
    if not query:
        return tuple(roster)
    return tuple(r for r in roster if matches_query(r, query))


def find_record(
    roster: Sequence[StudentRecord],
    record_id: Union[int, str]
) -> Optional[StudentRecord]:
    """Find a record by id.

    Ids are compared as strings so that ``7`` and ``"7"`` refer to the same
    student regardless of how the backend typed them.
    """
    key = str(record_id)
    for record in roster:
        if str(record.id) == key:
            return record
    return None
