"""Tests for change classification and commit message generation."""

import pytest

from mcp_dev_assistant.git.summary import (
    ChangeStatus,
    classify_status_line,
    generate_commit_message,
    parse_status_listing,
    summarize_changes,
)


class TestClassifyStatusLine:

    @pytest.mark.parametrize(
        "line,expected",
        [
            (" M src/app.py", ChangeStatus.MODIFIED),
            ("M  src/app.py", ChangeStatus.MODIFIED),
            ("MM src/app.py", ChangeStatus.MODIFIED),
            ("A  new.py", ChangeStatus.ADDED),
            ("AM new.py", ChangeStatus.ADDED),
            (" D gone.py", ChangeStatus.DELETED),
            ("D  gone.py", ChangeStatus.DELETED),
            ("?? scratch.txt", ChangeStatus.UNTRACKED),
            ("R  old.py -> new.py", ChangeStatus.RENAMED),
            ("UU conflict.py", ChangeStatus.UNKNOWN),
        ],
    )
    def test_status_codes(self, line, expected):
        assert classify_status_line(line) == expected


class TestParseStatusListing:

    def test_blank_lines_are_skipped(self):
        entries = parse_status_listing(" M a.txt\n\n?? b.txt\n   \n")

        assert [entry.path for entry in entries] == ["a.txt", "b.txt"]
        assert [entry.status for entry in entries] == [
            ChangeStatus.MODIFIED,
            ChangeStatus.UNTRACKED,
        ]

    def test_empty_listing(self):
        assert parse_status_listing("") == []


class TestSummarizeChanges:

    def test_counts_per_category(self):
        summary = summarize_changes(
            " M a.txt\n M b.txt\nA  c.txt\n D d.txt\n?? e.txt\nR  f.txt -> g.txt"
        )

        assert summary.modified == 2
        assert summary.added == 1
        assert summary.deleted == 1
        assert summary.untracked == 1
        assert summary.renamed == 1
        assert summary.total == 6


class TestGenerateCommitMessage:

    def test_new_and_modified(self):
        message = generate_commit_message("A  new.py\n M old.py")
        assert message.startswith("feat: add new features and update existing functionality")
        assert message.endswith("(2 files)")

    def test_single_untracked_file_has_no_count(self):
        assert generate_commit_message("?? newfile.txt") == "feat: add new files and functionality"

    def test_modified_only(self):
        message = generate_commit_message(" M a.txt\n M b.txt\n M c.txt")
        assert message == "update: modify existing functionality (3 files)"

    def test_deleted_only(self):
        assert generate_commit_message(" D a.txt") == "chore: update project files"

    def test_untracked_and_deleted_counts_as_new(self):
        message = generate_commit_message("?? a.txt\n D b.txt")
        assert message == "feat: add new files and functionality (2 files)"

    def test_unrecognised_codes_fall_back_to_chore(self):
        message = generate_commit_message("UU a.txt\nR  b.txt -> c.txt")
        assert message == "chore: update project files (2 files)"

    def test_trailing_newline_not_counted(self):
        message = generate_commit_message(" M a.txt\n")
        assert message == "update: modify existing functionality"

    def test_deterministic(self):
        listing = "A  x.py\n M y.py\n?? z.py"
        assert generate_commit_message(listing) == generate_commit_message(listing)
