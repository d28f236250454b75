"""Tests for server construction and the command line entry point."""

import asyncio
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner
from mcp.server import Server
from mcp.shared.memory import create_connected_server_and_client_session

from mcp_dev_assistant import main
from mcp_dev_assistant.config import WorkflowConfig
from mcp_dev_assistant.server import SERVER_NAME, create_server, serve
from mcp_dev_assistant.workflows import NO_CHANGES_TO_COMMIT

WEBHOOK = "https://discord.com/api/webhooks/1/abc"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_create_server(clean_repo):
    config = WorkflowConfig(working_directory=Path(clean_repo.working_dir), discord_webhook_url=WEBHOOK)

    server = create_server(config)

    assert isinstance(server, Server)
    assert server.name == SERVER_NAME


@pytest.mark.asyncio
async def test_serve_test_mode_with_invalid_project(tmp_path, caplog):
    config = WorkflowConfig(working_directory=tmp_path / "missing", discord_webhook_url=WEBHOOK)

    with caplog.at_level(logging.WARNING):
        await serve(config, test_mode=True)

    assert "Project path does not exist" in caplog.text


def test_cli_test_mode(clean_repo):
    runner = CliRunner()

    result = runner.invoke(
        main,
        ["--repository", clean_repo.working_dir, "--test-mode"],
        env={"DISCORD_WEBHOOK_URL": WEBHOOK, "PROJECT_PATH": None},
    )

    assert result.exit_code == 0, result.output


def test_cli_refuses_to_start_without_webhook(clean_repo):
    runner = CliRunner()

    result = runner.invoke(
        main,
        ["--repository", clean_repo.working_dir, "--test-mode"],
        env={"DISCORD_WEBHOOK_URL": "", "PROJECT_PATH": None},
    )

    assert result.exit_code == 1
    assert "DISCORD_WEBHOOK_URL environment variable is required" in result.output


def test_cli_webhook_option(clean_repo):
    runner = CliRunner()

    result = runner.invoke(
        main,
        ["-r", clean_repo.working_dir, "--webhook-url", WEBHOOK, "--test-mode"],
        env={"DISCORD_WEBHOOK_URL": None, "PROJECT_PATH": None},
    )

    assert result.exit_code == 0, result.output


def test_cli_file_logging(clean_repo, tmp_path):
    runner = CliRunner()
    log_dir = tmp_path / "state" / "logs"

    result = runner.invoke(
        main,
        ["-r", clean_repo.working_dir, "-v", "--enable-file-logging", "--test-mode"],
        env={
            "DISCORD_WEBHOOK_URL": WEBHOOK,
            "PROJECT_PATH": None,
            "MCP_SESSION_ID": "cli-test",
            "DEV_ASSISTANT_LOG_DIR": str(log_dir),
        },
    )

    assert result.exit_code == 0, result.output
    assert (log_dir / "dev_assistant-cli-test.log").exists()


def test_cli_file_logging_keeps_working_tree_clean(clean_repo, tmp_path, monkeypatch, orchestrator_factory):
    runner = CliRunner()
    repo_path = Path(clean_repo.working_dir)
    home = tmp_path / "home"
    monkeypatch.chdir(repo_path)

    result = runner.invoke(
        main,
        ["-r", str(repo_path), "-v", "--enable-file-logging", "--test-mode"],
        env={
            "DISCORD_WEBHOOK_URL": WEBHOOK,
            "PROJECT_PATH": None,
            "MCP_SESSION_ID": "clean-tree",
            # inside the repository, so it must be skipped
            "DEV_ASSISTANT_LOG_DIR": str(repo_path / "logs"),
            "HOME": str(home),
        },
    )

    assert result.exit_code == 0, result.output
    assert not (repo_path / "logs").exists()
    assert (home / ".mcp-dev-assistant" / "logs" / "dev_assistant-clean-tree.log").exists()

    commit_result = asyncio.run(orchestrator_factory(clean_repo).commit_and_push())

    assert commit_result.text == NO_CHANGES_TO_COMMIT


def test_cli_file_logging_follows_project_path(clean_repo, tmp_path):
    runner = CliRunner()
    repo_path = Path(clean_repo.working_dir)

    result = runner.invoke(
        main,
        ["-v", "--enable-file-logging", "--test-mode"],
        env={
            "DISCORD_WEBHOOK_URL": WEBHOOK,
            "PROJECT_PATH": str(repo_path),
            "MCP_SESSION_ID": "project-path",
            "DEV_ASSISTANT_LOG_DIR": str(repo_path / "logs"),
            "HOME": str(tmp_path / "home"),
        },
    )

    assert result.exit_code == 0, result.output
    assert clean_repo.git.status("--porcelain") == ""


def test_cli_webhook_option_beats_environment(clean_repo):
    runner = CliRunner()

    result = runner.invoke(
        main,
        ["-r", clean_repo.working_dir, "--webhook-url", WEBHOOK, "--test-mode"],
        # rejected at startup if it were used
        env={"DISCORD_WEBHOOK_URL": "discord.com/not-a-url", "PROJECT_PATH": None},
    )

    assert result.exit_code == 0, result.output


@pytest.mark.asyncio
async def test_client_sees_failures_flagged_as_errors(clean_repo):
    config = WorkflowConfig(working_directory=Path(clean_repo.working_dir), discord_webhook_url=WEBHOOK)

    async with create_connected_server_and_client_session(create_server(config)) as client:
        failed = await client.call_tool("deploy", {"force": True})
        succeeded = await client.call_tool("validate_project", {})

    assert failed.isError is True
    assert failed.content[0].text == "Error executing tool deploy: Unknown tool: deploy"
    assert succeeded.isError is False
    assert "Project configuration is valid" in succeeded.content[0].text
