"""
Listing tools for the Terminal File Explorer.

This module contains the directory metadata reader, the filter predicate, the
table layout engine and the listing orchestrator that ties them together.
"""

from .filters import matches, apply_filters
from .layout import ColumnLayout, TableRenderer, truncate_name, format_timestamp
from .lister import DirectoryLister, ListingResult
from .metadata import MetadataReader

__all__ = [
    'matches',
    'apply_filters',
    'ColumnLayout',
    'TableRenderer',
    'truncate_name',
    'format_timestamp',
    'DirectoryLister',
    'ListingResult',
    'MetadataReader',
]
