"""
Table layout engine for the Terminal File Explorer.

This module computes column widths from the data being displayed, truncates
long names, formats timestamps, and renders the bordered listing table as
``rich.text.Text`` lines. Only directory names carry a style, so the table
degrades to plain text on consoles without colour support.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from rich.cells import cell_len, set_cell_size
from rich.text import Text

from ..models.config import ExplorerConfig
from ..models.criteria import FilterCriteria
from ..models.entry import DirectoryEntry


ELLIPSIS = "..."
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TYPE_COLUMN_WIDTH = 12
DATE_COLUMN_WIDTH = 19
DIRECTORY_STYLE = "bold blue"

TITLE = "Terminal File Explorer"
FOOTER_HINTS = [
    "[Q]uit | [U]p | [Enter] Open/Execute | [cd <path>] Change Dir",
    "filter size|type|date <value> | search <term> | clear filter",
]


def digit_count(value: int) -> int:
    """Number of decimal digits needed to print a non-negative integer."""
    return len(str(value))


def truncate_name(name: str, max_len: int) -> str:
    """
    Fit a name into ``max_len`` terminal cells.

    Widths are measured in cells, so wide characters such as CJK ideographs
    count double. Names wider than ``max_len`` keep as many leading cells as
    fit in ``max_len - 3`` followed by the ellipsis marker. Widths too narrow
    to hold the marker cut the name without one.

    Args:
        name: Text to fit
        max_len: Maximum display width of the result

    Returns:
        A string at most ``max_len`` cells wide
    """
    if max_len <= 0:
        return ""
    if cell_len(name) <= max_len:
        return name
    if max_len <= len(ELLIPSIS):
        return set_cell_size(name, max_len)
    return set_cell_size(name, max_len - len(ELLIPSIS)) + ELLIPSIS


def pad_cells(text: str, width: int) -> str:
    """Left-justify ``text`` to ``width`` cells."""
    return text + " " * max(width - cell_len(text), 0)


def format_timestamp(value: datetime) -> str:
    """Render a modification time as ``YYYY-MM-DD HH:MM:SS``."""
    return value.strftime(TIMESTAMP_FORMAT)


def max_file_size(entries: Iterable[DirectoryEntry]) -> int:
    """Largest size among regular files; directories and others are ignored."""
    return max((entry.size for entry in entries if entry.is_file()), default=0)


@dataclass(frozen=True)
class ColumnLayout:
    """
    Column widths for one listing.

    Attributes:
        name_column_width: Width of the Name column
        size_column_width: Width of the right-justified Size column
        table_width: Total width of the border rules
    """
    name_column_width: int
    size_column_width: int
    table_width: int

    @classmethod
    def compute(cls, max_observed_size: int,
                config: Optional[ExplorerConfig] = None) -> 'ColumnLayout':
        """
        Derive the layout from the largest regular file in the directory.

        Args:
            max_observed_size: Size of the largest regular file, in bytes
            config: Layout policy; defaults are used when omitted

        Returns:
            ColumnLayout for the listing
        """
        config = config or ExplorerConfig()
        size_width = max(
            config.min_size_column_width,
            digit_count(max_observed_size) + config.size_column_padding,
        )
        return cls(
            name_column_width=config.name_column_width,
            size_column_width=size_width,
            table_width=config.name_column_width + size_width + config.fixed_column_allowance,
        )

    @classmethod
    def from_entries(cls, entries: Iterable[DirectoryEntry],
                     config: Optional[ExplorerConfig] = None) -> 'ColumnLayout':
        """Derive the layout from a full set of scanned entries."""
        return cls.compute(max_file_size(entries), config)


class TableRenderer:
    """
    Renders the listing frame and rows for a given column layout.

    Every method returns ``Text`` lines; writing them is left to the caller.
    """

    def __init__(self, layout: ColumnLayout, color: bool = True):
        self.layout = layout
        self.color = color

    def rule(self, corner: str = "+", fill: str = "-") -> Text:
        """A horizontal border of exactly ``table_width`` characters."""
        width = self.layout.table_width
        return Text(corner + fill * max(width - 2, 0) + corner)

    def _boxed(self, label: str, value: str) -> Text:
        inner = self.layout.table_width - 4 - len(label)
        return Text(f"| {label}{pad_cells(truncate_name(value, inner), inner)} |")

    def header(self, path: str, criteria: Optional[FilterCriteria] = None) -> List[Text]:
        """
        Title block showing the current path and any active filter.

        Args:
            path: Directory being listed
            criteria: Active criteria, shown when any criterion is set

        Returns:
            Lines of the header block, including the column headings
        """
        lines = [self.rule(), self._boxed("", TITLE), self._boxed("Path: ", path)]
        if criteria is not None and criteria.is_active():
            lines.append(self._boxed("Filter: ", criteria.describe()))
        lines.append(self.rule())
        lines.append(self.column_headings())
        lines.append(self.rule("|", "-"))
        return lines

    def column_headings(self) -> Text:
        layout = self.layout
        return Text(
            f"{'Name':<{layout.name_column_width}} "
            f"{'Type':<{TYPE_COLUMN_WIDTH}} "
            f"{'Size':<{layout.size_column_width}} "
            f"{'Last Modified':<{DATE_COLUMN_WIDTH}}"
        )

    def row(self, entry: DirectoryEntry) -> Text:
        """
        One listing row: name, kind label, size and modification time.

        Args:
            entry: Entry to render

        Returns:
            Row text, with the name styled when the entry is a directory
        """
        layout = self.layout
        name = truncate_name(entry.name, layout.name_column_width)
        style = DIRECTORY_STYLE if self.color and entry.is_directory() else ""

        text = Text()
        text.append(pad_cells(name, layout.name_column_width), style=style)
        text.append(
            f" {entry.kind.label:<{TYPE_COLUMN_WIDTH}} "
            f"{entry.size:>{layout.size_column_width}} "
            f"{format_timestamp(entry.modified_at):<{DATE_COLUMN_WIDTH}}"
        )
        return text

    def footer(self) -> List[Text]:
        """Closing rule plus the command hints."""
        lines = [self.rule("|", "-"), self.rule()]
        lines.extend(self._boxed("", hint) for hint in FOOTER_HINTS)
        lines.append(self.rule())
        return lines
