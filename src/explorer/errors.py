"""
Exception types for the Terminal File Explorer.

None of these are fatal to the process: listing failures abort a single
listing, command failures leave the session state untouched.
"""


class ExplorerError(Exception):
    """Base class for all explorer errors."""
    pass


class DirectoryUnavailable(ExplorerError):
    """Raised when a directory cannot be opened or enumerated."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class CommandError(ExplorerError):
    """Raised when a user command or filter value cannot be parsed."""
    pass


class OpenError(ExplorerError):
    """Raised when a file cannot be handed to the default application."""
    pass
