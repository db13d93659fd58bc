"""
Unit tests for the interactive session.

Drives ExplorerSession with scripted input against temporary directories.
"""

import io
import os
import tempfile
import shutil
from pathlib import Path
from unittest.mock import MagicMock

from rich.console import Console

from explorer.errors import OpenError
from explorer.models import EntryKind, ExplorerConfig, FilterCriteria
from explorer.session.loop import ExplorerSession, PROMPT, CONTINUE_PROMPT


class ScriptedInput:
    """Feeds prepared lines to the session, then signals end of input."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


class TestExplorerSession:
    """Test cases for the ExplorerSession class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir).resolve()

        (self.test_root / "docs").mkdir()
        (self.test_root / "docs" / "guide.md").write_text("guide")
        (self.test_root / "report.txt").write_text("x" * 2048)

        self.output = io.StringIO()
        self.errors = io.StringIO()
        self.opener = MagicMock()

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _session(self, lines, **config):
        config.setdefault('clear_screen', False)
        self.input = ScriptedInput(lines)
        return ExplorerSession(
            self.test_root,
            config=ExplorerConfig(**config),
            console=Console(file=self.output, width=120, color_system=None, highlight=False),
            error_console=Console(file=self.errors, width=120, color_system=None, highlight=False),
            input_func=self.input,
            opener=self.opener,
        )

    def test_quit(self):
        session = self._session(["q", "u"])
        session.run()

        assert self.input.lines == ["u"]
        assert session.current_path == self.test_root

    def test_end_of_input_ends_session(self):
        session = self._session([])
        session.run()

        assert self.input.prompts == [PROMPT]
        assert "Terminal File Explorer" in self.output.getvalue()

    def test_enter_directory_and_go_up(self):
        session = self._session([])

        session.handle("docs")
        assert session.current_path == self.test_root / "docs"

        session.handle("u")
        assert session.current_path == self.test_root

    def test_up_at_root_stays(self):
        session = self._session([])
        session.current_path = Path(self.test_root.anchor)

        session.handle("u")
        assert session.current_path == Path(self.test_root.anchor)

    def test_cd_relative_and_absolute(self):
        session = self._session([])

        session.handle("cd docs")
        assert session.current_path == self.test_root / "docs"

        session.handle("cd ..")
        assert session.current_path == self.test_root

        session.handle(f"cd {self.test_root / 'docs'}")
        assert session.current_path == self.test_root / "docs"

    def test_cd_missing_directory_reports(self):
        session = self._session([])

        assert session.handle("cd nowhere")
        assert session.current_path == self.test_root
        assert "Cannot change directory" in self.errors.getvalue()

    def test_cd_unknown_user_home_reports(self):
        session = self._session([])

        assert session.handle("cd ~nosuchuser_zz")
        assert session.current_path == self.test_root
        assert "Cannot change directory" in self.errors.getvalue()

    def test_nul_byte_in_path_reports(self):
        """Test that names the OS rejects outright are reported, not raised."""
        session = self._session([])

        assert session.handle("bad\x00name")
        assert "Invalid path or file" in self.errors.getvalue()

        assert session.handle("cd bad\x00dir")
        assert session.current_path == self.test_root
        assert "Cannot change directory" in self.errors.getvalue()
        self.opener.assert_not_called()

    def test_bad_paths_do_not_end_session(self):
        session = self._session(["cd ~nosuchuser_zz", "bad\x00name", "q"])

        session.run()

        assert self.input.lines == []
        assert session.current_path == self.test_root
        assert self.output.getvalue().count("Terminal File Explorer") == 3

    def test_open_file_uses_opener(self):
        session = self._session([])

        session.handle("report.txt")

        self.opener.assert_called_once_with(self.test_root / "report.txt")
        assert "Attempting to open" in self.output.getvalue()

    def test_open_failure_reported(self):
        self.opener.side_effect = OpenError("No default application launcher found (xdg-open)")
        session = self._session([])

        assert session.handle("report.txt")
        assert "xdg-open" in self.errors.getvalue()

    def test_invalid_name_reported(self):
        session = self._session([])

        assert session.handle("ghost.txt")
        assert "Invalid path or file" in self.errors.getvalue()
        self.opener.assert_not_called()

    def test_filters_accumulate_and_clear(self):
        session = self._session([])

        session.handle("filter type f")
        session.handle("filter size 1K-4K")
        session.handle("search REPORT")

        assert session.criteria.kind is EntryKind.FILE
        assert session.criteria.min_size == 1024
        assert session.criteria.max_size == 4096
        assert session.criteria.search_term == "REPORT"

        session.handle("clear filter")
        assert session.criteria == FilterCriteria.cleared()

    def test_malformed_filter_keeps_criteria(self):
        session = self._session([])
        session.handle("filter type d")

        assert session.handle("filter size huge")
        assert session.criteria.kind is EntryKind.DIRECTORY
        assert session.criteria.max_size is None
        assert "Invalid size" in self.errors.getvalue()

    def test_listing_uses_current_filter(self):
        session = self._session(["search report", "filter type f"])
        session.run()

        listings = self.output.getvalue().split("Terminal File Explorer")
        assert len(listings) == 4
        assert "docs" in listings[1]
        assert "docs" not in listings[3]
        assert "report.txt" in listings[3]

    def test_unavailable_directory_does_not_end_session(self):
        session = self._session(["u", "q"])
        session.current_path = self.test_root / "vanished"

        session.run()

        assert "Error opening directory" in self.errors.getvalue()
        assert session.current_path == self.test_root

    def test_acknowledge_when_clearing_screen(self):
        session = self._session(["ghost.txt", ""], clear_screen=True)

        session.run()

        assert CONTINUE_PROMPT in self.input.prompts

    def test_no_acknowledge_without_clearing(self):
        session = self._session(["ghost.txt"])

        session.run()

        assert CONTINUE_PROMPT not in self.input.prompts
