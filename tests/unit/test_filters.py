"""
Unit tests for the filter predicate.
"""

from datetime import datetime, timedelta

from explorer.models import DirectoryEntry, EntryKind, FilterCriteria
from explorer.tools.filters import matches, apply_filters


BASE_TIME = datetime(2024, 6, 1, 12, 0, 0)


def make_entry(name, kind=EntryKind.FILE, size=0, modified_at=BASE_TIME):
    return DirectoryEntry(name=name, kind=kind, size=size, modified_at=modified_at)


class TestMatches:
    """Test cases for the matches predicate."""

    def setup_method(self):
        self.entries = [
            make_entry("small.txt", size=512),
            make_entry("large.bin", size=2048),
            make_entry("src", kind=EntryKind.DIRECTORY),
            make_entry("link", kind=EntryKind.OTHER),
            make_entry("old.log", size=100, modified_at=BASE_TIME - timedelta(days=30)),
        ]

    def test_no_criteria_accepts_everything(self):
        assert all(matches(entry, None) for entry in self.entries)
        assert all(matches(entry, FilterCriteria()) for entry in self.entries)

    def test_cleared_filter_is_identity(self):
        """Test that clearing criteria accepts every kind, size, date and name."""
        cleared = FilterCriteria.cleared()

        for entry in self.entries:
            assert matches(entry, cleared)
        assert FilterCriteria.cleared() == cleared

    def test_kind_filter(self):
        files = FilterCriteria(kind='f')
        dirs = FilterCriteria(kind='d')

        assert [e.name for e in self.entries if matches(e, files)] == \
            ["small.txt", "large.bin", "old.log"]
        assert [e.name for e in self.entries if matches(e, dirs)] == ["src"]

    def test_kind_and_min_size(self):
        """Test that only the 2048-byte file passes kind=File and min_size=1024."""
        criteria = FilterCriteria(kind='f', min_size=1024)
        assert [e.name for e in apply_filters(self.entries, criteria)] == ["large.bin"]

    def test_size_bounds_inclusive(self):
        criteria = FilterCriteria(min_size=512, max_size=2048)
        names = [e.name for e in apply_filters(self.entries, criteria)]
        assert names == ["small.txt", "large.bin"]

    def test_directories_compare_as_zero_size(self):
        assert not matches(make_entry("src", kind=EntryKind.DIRECTORY), FilterCriteria(min_size=1))
        assert matches(make_entry("src", kind=EntryKind.DIRECTORY), FilterCriteria(max_size=0))

    def test_date_bounds_inclusive(self):
        criteria = FilterCriteria(min_modified_at=BASE_TIME, max_modified_at=BASE_TIME)
        names = [e.name for e in apply_filters(self.entries, criteria)]
        assert "old.log" not in names
        assert "small.txt" in names

    def test_min_date_after_everything_is_empty(self):
        criteria = FilterCriteria(min_modified_at=BASE_TIME + timedelta(seconds=1))
        assert list(apply_filters(self.entries, criteria)) == []

    def test_max_date(self):
        criteria = FilterCriteria(max_modified_at=BASE_TIME - timedelta(days=1))
        assert [e.name for e in apply_filters(self.entries, criteria)] == ["old.log"]

    def test_search_is_case_insensitive_substring(self):
        entries = [make_entry("Report.TXT"), make_entry("summary.txt"),
                   make_entry("REPORTS", kind=EntryKind.DIRECTORY)]
        criteria = FilterCriteria(search_term="report")

        assert [e.name for e in apply_filters(entries, criteria)] == ["Report.TXT", "REPORTS"]

    def test_all_criteria_combined(self):
        criteria = FilterCriteria(kind='f', min_size=100, max_size=600,
                                  min_modified_at=BASE_TIME - timedelta(days=60),
                                  search_term=".")
        names = [e.name for e in apply_filters(self.entries, criteria)]
        assert names == ["small.txt", "old.log"]

    def test_apply_filters_preserves_order(self):
        reversed_entries = list(reversed(self.entries))
        result = list(apply_filters(reversed_entries, FilterCriteria(kind='f')))
        assert [e.name for e in result] == ["old.log", "large.bin", "small.txt"]
