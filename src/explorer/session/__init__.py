"""
Interactive session layer for the Terminal File Explorer.

This package provides command parsing, the command loop and the default
application opener.
"""

from .parser import (
    Command,
    CommandAction,
    parse_command,
    parse_size,
    parse_size_range,
    parse_date,
    parse_date_range,
)
from .opener import open_with_default_app
from .loop import ExplorerSession

__all__ = [
    'Command',
    'CommandAction',
    'parse_command',
    'parse_size',
    'parse_size_range',
    'parse_date',
    'parse_date_range',
    'open_with_default_app',
    'ExplorerSession',
]
