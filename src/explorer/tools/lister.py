"""
Directory listing orchestrator for the Terminal File Explorer.

A listing scans the directory once into memory, sizes the columns from the
full set of entries, then filters and renders the same buffered entries. The
output is identical to scanning twice, without a second enumeration.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union
import logging

from rich.console import Console

from ..errors import DirectoryUnavailable
from ..models.config import ExplorerConfig
from ..models.criteria import FilterCriteria
from ..models.entry import DirectoryEntry
from .filters import apply_filters
from .layout import ColumnLayout, TableRenderer
from .metadata import MetadataReader


logger = logging.getLogger(__name__)


@dataclass
class ListingResult:
    """
    Outcome of one listing call.

    Attributes:
        path: Directory that was listed
        entries: Entries that passed the filter, in enumeration order
        scanned: Number of readable entries in the directory
        skipped: Number of entries whose metadata could not be read
        layout: Column layout used, None if the directory was unavailable
        error: Reason the directory could not be listed, if any
    """
    path: str
    entries: List[DirectoryEntry] = field(default_factory=list)
    scanned: int = 0
    skipped: int = 0
    layout: Optional[ColumnLayout] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def names(self) -> List[str]:
        """Names of the listed entries."""
        return [entry.name for entry in self.entries]


class DirectoryLister:
    """
    Renders filtered directory listings to a console.

    Directory-open failures are reported on the error console and abort only
    the current call.
    """

    def __init__(self, config: Optional[ExplorerConfig] = None,
                 console: Optional[Console] = None,
                 error_console: Optional[Console] = None):
        """
        Initialize the lister.

        Args:
            config: Explorer configuration; defaults are used when omitted
            console: Console receiving the table
            error_console: Console receiving error reports
        """
        self.config = config or ExplorerConfig()
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self.reader = MetadataReader(self.config)

    def render(self, path: Union[str, Path],
               criteria: Optional[FilterCriteria] = None) -> ListingResult:
        """
        List a directory through the filter and write the table.

        Args:
            path: Directory to list
            criteria: Criteria to apply; read only, never retained

        Returns:
            ListingResult describing what was rendered
        """
        path_str = str(path)
        skipped_before = self.reader.get_stats()['entries_skipped']

        try:
            entries = list(self.reader.scan(path))
        except DirectoryUnavailable as e:
            self.error_console.print(f"Error opening directory: {e.reason}",
                                     markup=False, highlight=False)
            return ListingResult(path=path_str, error=e.reason)

        skipped = self.reader.get_stats()['entries_skipped'] - skipped_before
        layout = ColumnLayout.from_entries(entries, self.config)
        renderer = TableRenderer(layout, color=self.config.color)

        self._write(renderer.header(path_str, criteria))

        listed = []
        for entry in apply_filters(entries, criteria):
            self._write([renderer.row(entry)])
            listed.append(entry)

        self._write(renderer.footer())

        logger.info(f"Listed {len(listed)} of {len(entries)} entries in {path_str} "
                    f"({skipped} unreadable)")

        return ListingResult(
            path=path_str,
            entries=listed,
            scanned=len(entries),
            skipped=skipped,
            layout=layout,
        )

    def _write(self, lines) -> None:
        for line in lines:
            self.console.print(line, soft_wrap=True, markup=False, highlight=False)
