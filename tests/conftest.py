"""
Shared pytest fixtures for the Dev Assistant test suite.
"""

from pathlib import Path
from unittest.mock import AsyncMock

import git
import pytest

from fixtures.git_repos import GitRepositoryFactory
from mcp_dev_assistant.config import WorkflowConfig
from mcp_dev_assistant.core.handlers import CallToolHandler
from mcp_dev_assistant.notifications.discord import DiscordNotifier
from mcp_dev_assistant.workflows import WorkflowOrchestrator, clear_working_tree_locks

TEST_WEBHOOK_URL = "https://discord.com/api/webhooks/123/test-token"


@pytest.fixture(autouse=True)
def _reset_working_tree_locks():
    clear_working_tree_locks()
    yield
    clear_working_tree_locks()


@pytest.fixture
def git_repo_factory():
    """Provide access to GitRepositoryFactory."""
    return GitRepositoryFactory


@pytest.fixture
def remote_repo(tmp_path: Path) -> git.Repo:
    """Bare repository used as ``origin``."""
    return GitRepositoryFactory.create_remote(tmp_path / "origin.git")


@pytest.fixture
def clean_repo(tmp_path: Path, remote_repo: git.Repo) -> git.Repo:
    """Working tree with nothing to commit."""
    return GitRepositoryFactory.create_clean_repo(
        tmp_path / "clean_repo", Path(remote_repo.git_dir)
    )


@pytest.fixture
def dirty_repo(tmp_path: Path, remote_repo: git.Repo) -> git.Repo:
    """Working tree with one new file and one modified file."""
    return GitRepositoryFactory.create_dirty_repo(
        tmp_path / "dirty_repo", Path(remote_repo.git_dir)
    )


@pytest.fixture
def unreachable_remote_repo(tmp_path: Path) -> git.Repo:
    """Working tree with pending changes whose ``origin`` does not exist."""
    return GitRepositoryFactory.create_dirty_repo(
        tmp_path / "orphan_repo", tmp_path / "missing-remote.git"
    )


def make_config(target: git.Repo | Path) -> WorkflowConfig:
    """Configuration for a repository or a bare path."""
    if isinstance(target, git.Repo):
        target = Path(target.working_dir)
    return WorkflowConfig(
        working_directory=target,
        discord_webhook_url=TEST_WEBHOOK_URL,
    )


@pytest.fixture
def notifier() -> AsyncMock:
    """Notifier double that accepts every embed."""
    return AsyncMock(spec=DiscordNotifier)


@pytest.fixture
def orchestrator_factory(notifier: AsyncMock):
    """Build an orchestrator for a repository with the fake notifier."""

    def factory(target: git.Repo | Path, **kwargs) -> WorkflowOrchestrator:
        return WorkflowOrchestrator(make_config(target), notifier=notifier, **kwargs)

    return factory


@pytest.fixture
def tool_handler_factory(orchestrator_factory):
    """Build a fully wired CallToolHandler for a repository."""

    def factory(repo: git.Repo, **kwargs) -> CallToolHandler:
        return CallToolHandler(orchestrator_factory(repo, **kwargs))

    return factory
