"""Workflow operations for the Dev Assistant server.

Three tool operations orchestrate the git backend and the Discord webhook:

- ``commit_and_push``: status, stage all, commit, push. Aborts on the first
  failing git command; nothing is rolled back.
- ``send_discord_notification``: one embed, one request.
- ``full_workflow``: ``commit_and_push`` followed by a notification.

``full_workflow`` handles the two notification paths differently. When the
commit/push fails, a failure notification is attempted on a best-effort basis
and the original error is re-raised whatever happens to that notification.
When the commit/push succeeds, the success notification is part of the
required outcome and its failure propagates to the caller.
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from .config import WorkflowConfig
from .error_handling import BackendExecutionError, NotificationDeliveryError
from .git.operations import GitBackend
from .git.summary import generate_commit_message, summarize_changes
from .notifications.discord import DiscordNotifier
from .notifications.models import (
    DANGER_COLOR,
    SUCCESS_COLOR,
    WORKFLOW_COLOR,
    DiscordEmbed,
)
from .results import OperationResult

logger = logging.getLogger(__name__)

NO_CHANGES_TO_COMMIT = "No changes to commit."
NO_CHANGES_DETECTED = "No changes detected in the project."

DIFF_PREVIEW_LIMIT = 1000
STAGED_PREVIEW_LIMIT = 500

# One lock per working tree. Git commands run in worker threads while it is
# held, so a second mutation waits instead of interleaving its steps.
_working_tree_locks: Dict[str, asyncio.Lock] = {}


def get_working_tree_lock(working_directory: Path) -> asyncio.Lock:
    """Get or create the lock serialising mutations of a working tree."""
    key = str(Path(working_directory).resolve())
    if key not in _working_tree_locks:
        _working_tree_locks[key] = asyncio.Lock()
    return _working_tree_locks[key]


def clear_working_tree_locks() -> None:
    """Drop all working tree locks (useful for testing)."""
    _working_tree_locks.clear()


class WorkflowOrchestrator:
    """Implements the workflow tools on top of a git backend and a notifier."""

    def __init__(
        self,
        config: WorkflowConfig,
        notifier: Optional[DiscordNotifier] = None,
        backend_factory: Callable[..., GitBackend] = GitBackend,
    ):
        self.config = config
        self.notifier = notifier or DiscordNotifier(
            config.discord_webhook_url, timeout=config.notification_timeout
        )
        self.backend_factory = backend_factory

    def _backend(self) -> GitBackend:
        return self.backend_factory(self.config.working_directory, remote=self.config.remote)

    async def commit_and_push(
        self, custom_message: Optional[str] = None, branch: str = "main"
    ) -> OperationResult:
        """Stage everything, commit and push to ``branch``."""
        backend = self._backend()

        async with get_working_tree_lock(self.config.working_directory):
            try:
                status = await asyncio.to_thread(backend.status_porcelain)
                if not status.strip():
                    logger.info("No changes to commit")
                    return OperationResult.success(NO_CHANGES_TO_COMMIT)

                await asyncio.to_thread(backend.add_all)

                commit_message = custom_message or generate_commit_message(status)
                await asyncio.to_thread(backend.commit, commit_message)
                logger.info(f"Committed: {commit_message}")

                push_output = await asyncio.to_thread(
                    backend.push, branch, set_upstream=True
                )
                logger.info(f"Pushed {branch} to {self.config.remote}")
            except BackendExecutionError as e:
                logger.error(f"Commit and push aborted: {e}")
                raise BackendExecutionError(
                    f"Failed to commit and push changes: {e.message}", detail=e.detail
                ) from e

        return OperationResult.success(
            "✅ **Successfully committed and pushed!**\n\n"
            f"**Commit Message:** {commit_message}\n"
            f"**Branch:** {branch}\n\n"
            f"**Git Output:**\n{push_output}"
        )

    async def send_notification(
        self, message: str, color: int = SUCCESS_COLOR
    ) -> OperationResult:
        """Send one embed to the configured Discord channel."""
        embed = DiscordEmbed(description=message, color=color)
        try:
            await self.notifier.send(embed)
        except NotificationDeliveryError as e:
            raise NotificationDeliveryError(
                f"Failed to send Discord notification: {e.message}", detail=e.detail
            ) from e

        logger.info("Discord notification sent")
        return OperationResult.success("✅ **Discord notification sent successfully!**")

    async def _notify_failure_best_effort(self, error: Exception) -> None:
        """Report a workflow failure to Discord, discarding any delivery error.

        This is the only place where a failure is intentionally dropped: the
        caller must observe the original workflow error, never this one.
        """
        try:
            await self.send_notification(
                f"❌ **Workflow Failed**: {error}", color=DANGER_COLOR
            )
        except Exception as notify_error:
            logger.error(
                f"Failed to send error notification to Discord: {notify_error}",
                exc_info=True,
            )

    async def full_workflow(
        self, custom_message: Optional[str] = None, branch: str = "main"
    ) -> OperationResult:
        """Commit and push, then announce the result on Discord."""
        try:
            commit_result = await self.commit_and_push(custom_message, branch)
        except Exception as e:
            await self._notify_failure_best_effort(e)
            raise

        # Not guarded: a failed success notification fails the workflow
        await self.send_notification(
            f"**Project Updated!**\n\n{commit_result.text}", color=WORKFLOW_COLOR
        )

        return OperationResult.success(
            "🎉 **Full workflow completed successfully!**\n\n"
            f"{commit_result.text}\n\n"
            "✅ Discord notification sent!"
        )

    async def analyze_changes(self) -> OperationResult:
        """Summarise pending changes with a diff preview."""
        backend = self._backend()
        try:
            status = await asyncio.to_thread(backend.status_porcelain)
            if not status.strip():
                return OperationResult.success(NO_CHANGES_DETECTED)

            diff = await asyncio.to_thread(backend.diff_head)
            staged_diff = await asyncio.to_thread(backend.diff_staged)
        except BackendExecutionError as e:
            raise BackendExecutionError(
                f"Failed to analyze changes: {e.message}", detail=e.detail
            ) from e

        summary = summarize_changes(status)
        status_lines = [line for line in status.split("\n") if line.strip()]

        if diff:
            diff_preview = diff[:DIFF_PREVIEW_LIMIT]
            if len(diff) > DIFF_PREVIEW_LIMIT:
                diff_preview += "\n... (truncated)"
        else:
            diff_preview = "No unstaged changes"

        lines = [
            "📊 **Project Changes Analysis**",
            "",
            "**Summary:**",
            f"- Modified files: {summary.modified}",
            f"- Added files: {summary.added}",
            f"- Deleted files: {summary.deleted}",
            f"- Untracked files: {summary.untracked}",
            f"- Renamed files: {summary.renamed}",
            "",
            "**Changed Files:**",
            *(f"  {line}" for line in status_lines),
            "",
            "**Diff Preview:**",
            diff_preview,
        ]
        if staged_diff:
            lines.extend(["", "**Staged Changes:**", staged_diff[:STAGED_PREVIEW_LIMIT]])

        return OperationResult.success("\n".join(lines))

    async def validate_project(self) -> OperationResult:
        """Check the configured working tree and report the configuration."""
        self.config.validate()
        return OperationResult.success(
            "✅ **Project configuration is valid!**\n\n"
            f"Project Path: {self.config.working_directory}\n"
            f"Discord Webhook: {'Configured' if self.config.discord_webhook_url else 'Not configured'}\n"
            f"Git Remote: {self.config.remote}"
        )
