"""Git operations used by the Dev Assistant workflows"""

import logging
from pathlib import Path
from typing import Any

from git import (
    GitCommandError,
    InvalidGitRepositoryError,
    NoSuchPathError,
    Repo,
)

from ..error_handling import BackendExecutionError, ConfigurationError

logger = logging.getLogger(__name__)


class GitBackend:
    """Runs git commands against a single working tree.

    Every command either returns its text output or raises
    :class:`BackendExecutionError`.
    """

    def __init__(self, working_directory: Path, remote: str = "origin"):
        working_directory = Path(working_directory)
        if not working_directory.exists():
            raise ConfigurationError(
                f"Project path does not exist: {working_directory}",
                detail={"path": str(working_directory)},
            )
        try:
            self.repo = Repo(working_directory)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise ConfigurationError(
                f"Not a git repository: {working_directory}",
                detail={"path": str(working_directory)},
            )
        self.working_directory = working_directory
        self.remote = remote

    def _run(self, command: str, *args: Any, **kwargs: Any):
        logger.debug(f"git {command} {' '.join(str(a) for a in args)} in {self.working_directory}")
        try:
            return getattr(self.repo.git, command)(*args, **kwargs)
        except GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise BackendExecutionError(
                f"git {command} failed: {stderr or e}",
                detail={"command": command, "status": e.status, "stderr": stderr},
            ) from e

    def status_porcelain(self) -> str:
        """Get machine-readable short status"""
        return self._run("status", "--porcelain")

    def diff_head(self) -> str:
        """Get all uncommitted changes against HEAD"""
        if not self.repo.head.is_valid():
            # no commits yet
            return self._run("diff")
        return self._run("diff", "HEAD")

    def diff_staged(self) -> str:
        """Get staged changes diff"""
        return self._run("diff", "--cached")

    def add_all(self) -> str:
        """Stage every change in the working tree, including deletions"""
        return self._run("add", "--all")

    def commit(self, message: str) -> str:
        """Commit the staged changes"""
        return self._run("commit", "-m", message)

    def push(self, branch: str, set_upstream: bool = True) -> str:
        """Push ``branch`` to the configured remote.

        Returns:
            Combined stdout and stderr of ``git push`` (git reports progress
            on stderr).
        """
        push_args = [self.remote, branch]
        if set_upstream:
            push_args.insert(0, "--set-upstream")

        _, stdout, stderr = self._run("push", *push_args, with_extended_output=True)
        return "\n".join(part for part in (stdout, stderr) if part)
