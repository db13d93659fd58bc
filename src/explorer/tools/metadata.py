"""
Directory metadata reader for the Terminal File Explorer.

This module enumerates a single directory (no recursion) and produces a
DirectoryEntry per name. Entries whose metadata cannot be read, for example
a broken symbolic link, a permission error or a file removed mid-scan, are
skipped and counted but never surfaced as errors.
"""

import os
from pathlib import Path
from typing import Dict, List, Iterator, Optional, Union
import logging

from ..errors import DirectoryUnavailable
from ..models.config import ExplorerConfig
from ..models.entry import DirectoryEntry


logger = logging.getLogger(__name__)


class MetadataReader:
    """
    Reads entry metadata for every name in a directory.

    Symbolic links are classified by their target when ``follow_symlinks`` is
    enabled; a link whose target is missing then fails the lookup and is
    skipped. With ``follow_symlinks`` disabled, links are reported as
    ``EntryKind.OTHER``.
    """

    def __init__(self, config: Optional[ExplorerConfig] = None):
        """
        Initialize the metadata reader.

        Args:
            config: Explorer configuration; defaults are used when omitted
        """
        self.config = config or ExplorerConfig()
        self._stats = {
            'directories_opened': 0,
            'entries_read': 0,
            'entries_skipped': 0,
        }

    def list_names(self, path: Union[str, Path]) -> List[str]:
        """
        Enumerate the names in a directory.

        Args:
            path: Directory to enumerate

        Returns:
            Entry names in enumeration order, with "." and ".." first when
            special entries are enabled

        Raises:
            DirectoryUnavailable: If the directory cannot be opened
        """
        try:
            names = os.listdir(path)
        except OSError as e:
            logger.warning(f"Error opening directory {path}: {e}")
            raise DirectoryUnavailable(str(path), e.strerror or str(e)) from e

        self._stats['directories_opened'] += 1

        if self.config.include_special_entries:
            names = [os.curdir, os.pardir] + names
        return names

    def scan(self, path: Union[str, Path]) -> Iterator[DirectoryEntry]:
        """
        Produce entry metadata for a directory.

        The directory is opened eagerly so that an unavailable directory is
        reported here rather than on first iteration; metadata lookups happen
        lazily as the returned iterator is consumed.

        Args:
            path: Directory to scan

        Returns:
            Iterator of DirectoryEntry objects in enumeration order

        Raises:
            DirectoryUnavailable: If the directory cannot be opened
        """
        names = self.list_names(path)
        return self._read_entries(Path(path), names)

    def _read_entries(self, directory: Path, names: List[str]) -> Iterator[DirectoryEntry]:
        for name in names:
            entry = self.read_entry(directory, name)
            if entry is not None:
                yield entry

    def read_entry(self, directory: Union[str, Path], name: str) -> Optional[DirectoryEntry]:
        """
        Read metadata for one named entry.

        Args:
            directory: Directory containing the entry
            name: Bare entry name

        Returns:
            DirectoryEntry, or None if the metadata lookup failed
        """
        entry_path = os.path.join(directory, name)
        try:
            stat_result = os.stat(entry_path, follow_symlinks=self.config.follow_symlinks)
        except OSError as e:
            logger.debug(f"Skipping unreadable entry {entry_path}: {e}")
            self._stats['entries_skipped'] += 1
            return None

        # pydantic's ValidationError is a ValueError
        try:
            entry = DirectoryEntry.from_stat(name, stat_result)
        except (ValueError, OverflowError) as e:
            logger.debug(f"Skipping unrepresentable entry {entry_path!r}: {e}")
            self._stats['entries_skipped'] += 1
            return None

        self._stats['entries_read'] += 1
        return entry

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the scans performed so far.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'directories_opened': 0,
            'entries_read': 0,
            'entries_skipped': 0,
        }
