"""Tests for diff summaries."""

from minivc.diff import count_changes, summarize


class TestSummarize:
    def test_no_change(self):
        assert summarize("a\nb\n", "a\nb\n") == ""

    def test_first_version_all_added(self):
        diff = summarize("", "a\nb\n", "notes.txt")
        assert diff.startswith("--- a/notes.txt\n+++ b/notes.txt\n")
        assert count_changes(diff) == (2, 0)

    def test_modified_line(self):
        diff = summarize("a\nb\nc\n", "a\nB\nc\n", "f.txt")
        assert "-b\n" in diff
        assert "+B\n" in diff
        assert count_changes(diff) == (1, 1)

    def test_missing_trailing_newline(self):
        diff = summarize("a", "a\nb")
        assert diff.endswith("\n")
        assert count_changes(diff) == (2, 1)


class TestCountChanges:
    def test_empty(self):
        assert count_changes("") == (0, 0)

    def test_removed_line_starting_with_dashes(self):
        diff = summarize("-- comment\nx\n", "x\n")
        assert count_changes(diff) == (0, 1)
