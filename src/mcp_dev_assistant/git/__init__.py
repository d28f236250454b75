"""Git backend and change summaries for the Dev Assistant server"""

from .models import AnalyzeChanges, CommitAndPush, FullWorkflow, ValidateProject
from .operations import GitBackend
from .summary import (
    ChangeStatus,
    ChangeSummary,
    StatusEntry,
    classify_status_line,
    generate_commit_message,
    parse_status_listing,
    summarize_changes,
)

__all__ = [
    "GitBackend",
    "ChangeStatus",
    "ChangeSummary",
    "StatusEntry",
    "classify_status_line",
    "generate_commit_message",
    "parse_status_listing",
    "summarize_changes",
    # Models
    "AnalyzeChanges",
    "CommitAndPush",
    "FullWorkflow",
    "ValidateProject",
]
