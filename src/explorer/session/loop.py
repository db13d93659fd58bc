"""
Interactive session for the Terminal File Explorer.

The session owns the current directory and the filter criteria. Each turn it
renders a listing, reads one command and dispatches it. No error ends the
session; only ``q`` or end of input does.
"""

import os
from pathlib import Path
from typing import Callable, Optional, Union
import logging

from rich.console import Console

from ..errors import CommandError, OpenError
from ..models.config import ExplorerConfig
from ..models.criteria import FilterCriteria
from ..models.entry import EntryKind
from ..tools.lister import DirectoryLister
from .opener import open_with_default_app
from .parser import Command, CommandAction, parse_command


logger = logging.getLogger(__name__)

PROMPT = "\nEnter command: "
CONTINUE_PROMPT = "Press Enter to continue..."


class ExplorerSession:
    """
    Command loop around a DirectoryLister.

    Attributes:
        current_path: Directory currently being browsed
        criteria: Filter criteria accumulated from filter commands
    """

    def __init__(self, start_path: Union[str, Path] = ".",
                 config: Optional[ExplorerConfig] = None,
                 criteria: Optional[FilterCriteria] = None,
                 console: Optional[Console] = None,
                 error_console: Optional[Console] = None,
                 input_func: Optional[Callable[[str], str]] = None,
                 opener: Callable[[Union[str, Path]], None] = open_with_default_app):
        """
        Initialize the session.

        Args:
            start_path: Initial directory
            config: Explorer configuration
            criteria: Initial filter criteria
            console: Console for listings and prompts
            error_console: Console for error reports
            input_func: Reads one line given a prompt; defaults to the console
            opener: Opens a regular file with its default application
        """
        self.config = config or ExplorerConfig()
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self.lister = DirectoryLister(self.config, self.console, self.error_console)
        self.input_func = input_func or self.console.input
        self.opener = opener
        self.current_path = Path(start_path).expanduser().resolve()
        self.criteria = criteria or FilterCriteria.cleared()

    def run(self) -> None:
        """Run until the user quits or input ends."""
        logger.info(f"Session started in {self.current_path}")
        while True:
            if self.config.clear_screen:
                self.console.clear()
            self.lister.render(self.current_path, self.criteria)

            try:
                line = self.input_func(PROMPT)
            except EOFError:
                break

            if not self.handle(line):
                break
        logger.info("Session ended")

    def handle(self, line: str) -> bool:
        """
        Dispatch one line of input.

        Args:
            line: Raw command text

        Returns:
            False when the session should end
        """
        try:
            command = parse_command(line)
            return self.dispatch(command)
        except CommandError as e:
            self.report(str(e))
            return True

    def dispatch(self, command: Command) -> bool:
        action = command.action

        if action is CommandAction.QUIT:
            return False
        if action is CommandAction.UP:
            self.go_up()
        elif action is CommandAction.CHANGE_DIR:
            self.change_directory(command.argument)
        elif action is CommandAction.OPEN:
            self.open_entry(command.argument)
        elif command.is_filter_change():
            self.criteria = command.apply_to(self.criteria)
            logger.debug(f"Criteria now: {self.criteria.describe()}")
        return True

    def go_up(self) -> None:
        """Move to the parent directory; the filesystem root is its own parent."""
        self.current_path = self.current_path.parent

    def change_directory(self, target: Union[str, Path]) -> None:
        """
        Change to ``target``, resolved against the current directory.

        Args:
            target: Absolute or relative directory path
        """
        # expanduser raises RuntimeError for unknown users, NUL bytes raise ValueError
        try:
            new_path = (self.current_path / Path(target).expanduser()).resolve()
            is_dir = new_path.is_dir()
            readable = is_dir and os.access(new_path, os.R_OK | os.X_OK)
        except (OSError, ValueError, RuntimeError) as e:
            self.report(f"Cannot change directory: {target}: {e}")
            return

        if not is_dir:
            self.report(f"Cannot change directory: {target}: No such directory")
            return
        if not readable:
            self.report(f"Cannot change directory: {target}: Permission denied")
            return
        self.current_path = new_path

    def open_entry(self, name: str) -> None:
        """
        Enter a directory or open a regular file in the current directory.

        Args:
            name: Entry name as typed by the user
        """
        target = self.current_path / name
        try:
            kind = EntryKind.from_mode(os.stat(target).st_mode)
        except OSError as e:
            self.report(f"Invalid path or file: {e.strerror or e}")
            return
        except ValueError as e:
            self.report(f"Invalid path or file: {e}")
            return

        if kind is EntryKind.DIRECTORY:
            self.change_directory(target)
        elif kind is EntryKind.FILE:
            self.console.print(f"Attempting to open: {target}", markup=False, highlight=False)
            try:
                self.opener(target)
            except OpenError as e:
                self.report(str(e))
                return
            self.acknowledge()
        else:
            self.report(f"Not a regular file or directory: {name}")

    def report(self, message: str) -> None:
        """Show an error to the user and wait for acknowledgement."""
        logger.debug(f"Reported to user: {message}")
        self.error_console.print(message, markup=False, highlight=False)
        self.acknowledge()

    def acknowledge(self) -> None:
        """Wait for Enter before the next listing clears the screen."""
        if not self.config.clear_screen:
            return
        try:
            self.input_func(CONTINUE_PROMPT)
        except EOFError:
            pass
