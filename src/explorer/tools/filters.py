"""
Filter predicate for the Terminal File Explorer.

Criteria are evaluated in a fixed order (kind, minimum size, maximum size,
earliest time, latest time, search term) and evaluation stops at the first
failing criterion.
"""

from typing import Iterable, Iterator, Optional

from ..models.criteria import FilterCriteria
from ..models.entry import DirectoryEntry


def matches(entry: DirectoryEntry, criteria: Optional[FilterCriteria]) -> bool:
    """
    Check if a directory entry passes all present criteria.

    Args:
        entry: Entry to check
        criteria: Criteria to evaluate; None accepts everything

    Returns:
        True if the entry satisfies every present bound
    """
    if criteria is None:
        return True

    if criteria.kind is not None and entry.kind is not criteria.kind:
        return False

    # Size filters
    if criteria.min_size is not None and entry.size < criteria.min_size:
        return False

    if criteria.max_size is not None and entry.size > criteria.max_size:
        return False

    # Date filters
    if criteria.min_modified_at is not None and entry.modified_at < criteria.min_modified_at:
        return False

    if criteria.max_modified_at is not None and entry.modified_at > criteria.max_modified_at:
        return False

    if criteria.search_term is not None:
        if criteria.search_term.casefold() not in entry.name.casefold():
            return False

    return True


def apply_filters(entries: Iterable[DirectoryEntry],
                  criteria: Optional[FilterCriteria]) -> Iterator[DirectoryEntry]:
    """
    Yield the entries that pass the criteria, preserving their order.

    Args:
        entries: Entries to filter
        criteria: Criteria to evaluate

    Yields:
        Matching DirectoryEntry objects
    """
    for entry in entries:
        if matches(entry, criteria):
            yield entry
