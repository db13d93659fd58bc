"""
Terminal File Explorer - Core Package

An interactive terminal file browser that lists a working directory as an
aligned table, filters the listing and opens files with the platform default
application.
"""

from .errors import ExplorerError, DirectoryUnavailable, CommandError, OpenError

__version__ = "0.1.0"
__author__ = "Terminal File Explorer Team"

__all__ = ['ExplorerError', 'DirectoryUnavailable', 'CommandError', 'OpenError']
