"""
Command parser for the Terminal File Explorer.

This module turns a line of user input into a Command value. Filter commands
carry the criteria fields they change; applying a command to a criteria value
returns a new value and never modifies the one passed in.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..errors import CommandError
from ..models.criteria import FilterCriteria


SIZE_MULTIPLIERS = {
    '': 1,
    'k': 1024,
    'm': 1024 * 1024,
    'g': 1024 * 1024 * 1024,
}

_SIZE_PATTERN = re.compile(r'^(\d+)\s*([kmg]?)b?$', re.IGNORECASE)

DATE_FORMATS = [
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d',
    '%Y/%m/%d',
]

_DATE_ONLY_FORMATS = {'%Y-%m-%d', '%Y/%m/%d'}

RELATIVE_DATE_PATTERNS: List[Tuple[str, Callable[[int], timedelta]]] = [
    (r'^(\d+)\s*days?(\s+ago)?$', lambda n: timedelta(days=n)),
    (r'^(\d+)\s*weeks?(\s+ago)?$', lambda n: timedelta(weeks=n)),
    (r'^(\d+)\s*months?(\s+ago)?$', lambda n: timedelta(days=n * 30)),
    (r'^(\d+)\s*years?(\s+ago)?$', lambda n: timedelta(days=n * 365)),
]


class CommandAction(Enum):
    """Enumeration of session commands."""
    QUIT = "quit"
    UP = "up"
    CHANGE_DIR = "cd"
    FILTER_SIZE = "filter size"
    FILTER_TYPE = "filter type"
    FILTER_DATE = "filter date"
    SEARCH = "search"
    CLEAR_FILTER = "clear filter"
    OPEN = "open"
    NOOP = "noop"


FILTER_ACTIONS = {
    CommandAction.FILTER_SIZE,
    CommandAction.FILTER_TYPE,
    CommandAction.FILTER_DATE,
    CommandAction.SEARCH,
}


@dataclass(frozen=True)
class Command:
    """
    A parsed user command.

    Attributes:
        action: What the command does
        argument: Raw argument text (path or entry name)
        updates: Criteria fields set by a filter command
    """
    action: CommandAction
    argument: str = ""
    updates: Dict[str, Any] = field(default_factory=dict)

    def is_filter_change(self) -> bool:
        """Check if this command changes the filter criteria."""
        return self.action in FILTER_ACTIONS or self.action is CommandAction.CLEAR_FILTER

    def apply_to(self, criteria: FilterCriteria) -> FilterCriteria:
        """
        Compute the criteria that result from this command.

        Args:
            criteria: Current criteria

        Returns:
            New criteria; the input is returned unchanged for non-filter commands

        Raises:
            CommandError: If the resulting criteria are inconsistent
        """
        if self.action is CommandAction.CLEAR_FILTER:
            return FilterCriteria.cleared()

        if self.action not in FILTER_ACTIONS:
            return criteria

        try:
            return criteria.with_updates(**self.updates)
        except ValidationError as e:
            messages = '; '.join(error['msg'] for error in e.errors())
            raise CommandError(f"Invalid filter: {messages}") from e


def parse_size(text: str) -> int:
    """
    Parse a size such as ``512``, ``10K``, ``2M`` or ``1G``.

    Args:
        text: Size text; suffixes are binary multiples and case-insensitive

    Returns:
        Size in bytes

    Raises:
        CommandError: If the text is not a non-negative size
    """
    match = _SIZE_PATTERN.match(text.strip())
    if not match:
        raise CommandError(f"Invalid size: '{text}'")
    number, suffix = match.groups()
    return int(number) * SIZE_MULTIPLIERS[suffix.lower()]


def parse_size_range(value: str) -> Tuple[Optional[int], Optional[int]]:
    """
    Parse ``<min>-<max>`` or a single upper bound.

    A single value means "up to" with a minimum of 0. Either side of a range
    may be left empty to leave it unbounded.

    Returns:
        Tuple of (min_size, max_size)
    """
    value = value.strip()
    if not value:
        raise CommandError("Size filter needs a value, e.g. 'filter size 10K-1M'")

    if '-' not in value:
        return 0, parse_size(value)

    low, high = value.split('-', 1)
    min_size = parse_size(low) if low.strip() else None
    max_size = parse_size(high) if high.strip() else None
    return min_size, max_size


def parse_date(text: str, end_of_day: bool = False,
               now: Optional[datetime] = None) -> datetime:
    """
    Parse an absolute or relative date.

    Accepts ``YYYY-MM-DD``, ``YYYY-MM-DD HH:MM:SS``, ``YYYY-MM-DDTHH:MM:SS``,
    ``YYYY/MM/DD`` and relative forms such as ``7 days`` or ``2 weeks ago``.

    Args:
        text: Date text
        end_of_day: Extend a date without a time to 23:59:59
        now: Reference time for relative dates

    Returns:
        Parsed datetime

    Raises:
        CommandError: If the text is not a recognised date
    """
    value = text.strip().lower()

    for pattern, offset in RELATIVE_DATE_PATTERNS:
        match = re.match(pattern, value)
        if match:
            reference = now or datetime.now()
            return (reference - offset(int(match.group(1)))).replace(microsecond=0)

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(text.strip(), fmt)
        except ValueError:
            continue
        if end_of_day and fmt in _DATE_ONLY_FORMATS:
            parsed = parsed.replace(hour=23, minute=59, second=59)
        return parsed

    raise CommandError(f"Invalid date: '{text}'")


def parse_date_range(value: str) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Parse ``<from>..<to>``; a single value is a lower bound.

    Returns:
        Tuple of (min_modified_at, max_modified_at)
    """
    value = value.strip()
    if not value or value == '..':
        raise CommandError("Date filter needs a value, e.g. 'filter date 2024-01-01..2024-03-31'")

    if '..' not in value:
        return parse_date(value), None

    low, high = value.split('..', 1)
    min_date = parse_date(low) if low.strip() else None
    max_date = parse_date(high, end_of_day=True) if high.strip() else None
    return min_date, max_date


def parse_kind(value: str) -> str:
    """Parse a kind letter, ``f`` for files or ``d`` for directories."""
    letter = value.strip().lower()[:1]
    if letter not in ('f', 'd'):
        raise CommandError(f"Invalid type filter: '{value.strip()}' (use 'f' or 'd')")
    return letter


def _keyword_argument(line: str, keyword: str) -> Optional[str]:
    """Return the text after ``keyword`` if the line starts with it."""
    if line.lower() == keyword:
        return ""
    if line.lower().startswith(keyword + " "):
        return line[len(keyword) + 1:]
    return None


def parse_command(line: str) -> Command:
    """
    Parse one line of user input.

    Args:
        line: Raw input, without the trailing newline

    Returns:
        The parsed Command

    Raises:
        CommandError: If a filter value cannot be parsed
    """
    text = line.strip()
    lowered = text.lower()

    if not text:
        return Command(CommandAction.NOOP)
    if lowered == 'q':
        return Command(CommandAction.QUIT)
    if lowered == 'u':
        return Command(CommandAction.UP)
    if lowered == 'clear filter':
        return Command(CommandAction.CLEAR_FILTER)

    argument = _keyword_argument(text, 'cd')
    if argument is not None:
        if not argument.strip():
            raise CommandError("cd needs a path")
        return Command(CommandAction.CHANGE_DIR, argument=argument.strip())

    argument = _keyword_argument(text, 'filter size')
    if argument is not None:
        min_size, max_size = parse_size_range(argument)
        return Command(CommandAction.FILTER_SIZE, argument=argument,
                       updates={'min_size': min_size, 'max_size': max_size})

    argument = _keyword_argument(text, 'filter type')
    if argument is not None:
        return Command(CommandAction.FILTER_TYPE, argument=argument,
                       updates={'kind': parse_kind(argument)})

    argument = _keyword_argument(text, 'filter date')
    if argument is not None:
        min_date, max_date = parse_date_range(argument)
        return Command(CommandAction.FILTER_DATE, argument=argument,
                       updates={'min_modified_at': min_date, 'max_modified_at': max_date})

    argument = _keyword_argument(text, 'search')
    if argument is not None:
        return Command(CommandAction.SEARCH, argument=argument,
                       updates={'search_term': argument.strip() or None})

    return Command(CommandAction.OPEN, argument=text)
