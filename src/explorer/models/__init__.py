"""
Data models for the Terminal File Explorer.

This module contains the core data structures used throughout the system.
"""

from .entry import DirectoryEntry, EntryKind
from .criteria import FilterCriteria
from .config import ExplorerConfig

__all__ = ['DirectoryEntry', 'EntryKind', 'FilterCriteria', 'ExplorerConfig']
