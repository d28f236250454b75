"""Summaries and commit messages derived from ``git status --porcelain`` output."""

from dataclasses import dataclass
from enum import Enum


class ChangeStatus(str, Enum):
    """Status category of one porcelain status line"""
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    UNTRACKED = "untracked"
    RENAMED = "renamed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StatusEntry:
    status: ChangeStatus
    path: str
    raw: str


@dataclass(frozen=True)
class ChangeSummary:
    """Per-category counts for a status listing"""
    modified: int = 0
    added: int = 0
    deleted: int = 0
    untracked: int = 0
    renamed: int = 0
    unknown: int = 0

    @property
    def total(self) -> int:
        return (
            self.modified + self.added + self.deleted
            + self.untracked + self.renamed + self.unknown
        )


def classify_status_line(line: str) -> ChangeStatus:
    """Classify a porcelain status line by its leading status code.

    The two-character ``XY`` code is matched on its prefix only, so ``AM`` is
    an addition and ``RM`` a rename.
    """
    if line.startswith("??"):
        return ChangeStatus.UNTRACKED
    if line.startswith("A"):
        return ChangeStatus.ADDED
    if line.startswith("R"):
        return ChangeStatus.RENAMED
    if line.startswith((" M", "M")):
        return ChangeStatus.MODIFIED
    if line.startswith((" D", "D")):
        return ChangeStatus.DELETED
    return ChangeStatus.UNKNOWN


def parse_status_listing(status_output: str) -> list[StatusEntry]:
    """Parse porcelain output into entries, skipping blank lines."""
    entries = []
    for line in status_output.split("\n"):
        if not line.strip():
            continue
        entries.append(
            StatusEntry(status=classify_status_line(line), path=line[3:].strip(), raw=line)
        )
    return entries


def summarize_changes(status_output: str) -> ChangeSummary:
    """Count the entries of a status listing per category"""
    counts = {status: 0 for status in ChangeStatus}
    for entry in parse_status_listing(status_output):
        counts[entry.status] += 1
    return ChangeSummary(**{status.value: count for status, count in counts.items()})


def generate_commit_message(status_output: str) -> str:
    """Generate a conventional commit message from a status listing.

    Priority: new and modified files, new files only, modified files only,
    anything else. A ``(N files)`` suffix is appended when more than one
    file changed.
    """
    entries = parse_status_listing(status_output)
    statuses = {entry.status for entry in entries}

    has_new = bool(statuses & {ChangeStatus.ADDED, ChangeStatus.UNTRACKED})
    has_modified = ChangeStatus.MODIFIED in statuses

    if has_new and has_modified:
        message = "feat: add new features and update existing functionality"
    elif has_new:
        message = "feat: add new files and functionality"
    elif has_modified:
        message = "update: modify existing functionality"
    else:
        # deletions and anything unrecognised
        message = "chore: update project files"

    file_count = len(entries)
    if file_count > 1:
        message += f" ({file_count} files)"

    return message
