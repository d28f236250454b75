"""Process-wide workflow configuration.

The configuration is built once at startup from the environment (optionally
seeded from ``.env`` files) and passed explicitly to the components that need
it. It is frozen; no tool may change the working directory or the webhook.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import git
from dotenv import dotenv_values, load_dotenv

from .error_handling import ConfigurationError

logger = logging.getLogger(__name__)

WEBHOOK_ENV = "DISCORD_WEBHOOK_URL"
PROJECT_PATH_ENV = "PROJECT_PATH"
REMOTE_ENV = "GIT_REMOTE"
TIMEOUT_ENV = "DISCORD_TIMEOUT"

DEFAULT_REMOTE = "origin"
DEFAULT_NOTIFICATION_TIMEOUT = 30.0

# Values shipped in sample configs that must never be treated as a real webhook
WEBHOOK_PLACEHOLDERS = [
    "",
    "enter your discord webhook url here",
    "YOUR_WEBHOOK_URL",
    "REPLACE_ME",
    "TODO",
    "CHANGEME",
]


def is_placeholder_webhook(value: Optional[str]) -> bool:
    """Check whether a webhook value is missing, blank or a known placeholder."""
    if value is None:
        return True
    stripped = value.strip()
    if not stripped:
        return True
    return stripped.lower() in {p.lower() for p in WEBHOOK_PLACEHOLDERS}


def load_environment_variables(repository_path: Path | None = None) -> list[str]:
    """Load environment variables from .env files.

    Order of precedence:
    1. System environment variables
    2. Project-specific .env file (current working directory)
    3. Repository-specific .env file (if repository path provided)

    Existing variables are never overridden, except a webhook URL that is
    empty or still set to a placeholder.

    Returns:
        The .env files that were loaded, in load order.
    """
    loaded_files: list[str] = []

    candidates = [Path.cwd() / ".env"]
    if repository_path:
        candidates.append(repository_path / ".env")

    for env_file in candidates:
        if not env_file.exists() or str(env_file) in loaded_files:
            continue
        try:
            webhook_before = os.getenv(WEBHOOK_ENV)
            load_dotenv(env_file, override=False)

            if is_placeholder_webhook(webhook_before):
                env_values = dotenv_values(env_file)
                file_webhook = env_values.get(WEBHOOK_ENV)
                if not is_placeholder_webhook(file_webhook):
                    os.environ[WEBHOOK_ENV] = file_webhook

            loaded_files.append(str(env_file))
            logger.info(f"Loaded environment variables from {env_file}")
        except OSError as e:
            logger.warning(f"Failed to load .env file {env_file}: {e}")

    if not loaded_files:
        logger.info("No .env files found, using system environment variables only")

    return loaded_files


@dataclass(frozen=True)
class WorkflowConfig:
    """Immutable configuration shared by the dispatcher and the workflows."""

    working_directory: Path
    discord_webhook_url: str
    remote: str = DEFAULT_REMOTE
    notification_timeout: float = DEFAULT_NOTIFICATION_TIMEOUT

    def __post_init__(self):
        if is_placeholder_webhook(self.discord_webhook_url):
            raise ConfigurationError(
                f"{WEBHOOK_ENV} environment variable is required",
                detail={"variable": WEBHOOK_ENV},
            )
        if not self.discord_webhook_url.startswith(("https://", "http://")):
            raise ConfigurationError(
                f"{WEBHOOK_ENV} must be an http(s) URL",
                detail={"variable": WEBHOOK_ENV},
            )
        if self.notification_timeout <= 0:
            raise ConfigurationError(
                f"Notification timeout must be positive, got {self.notification_timeout}",
                detail={"variable": TIMEOUT_ENV},
            )

    @classmethod
    def from_environment(
        cls,
        repository: Path | None = None,
        webhook_url: Optional[str] = None,
    ) -> "WorkflowConfig":
        """Build the configuration from command line values and the environment.

        Explicit ``webhook_url`` and ``repository`` values (from the command
        line) take precedence over the corresponding variables. The working
        directory falls back to the current directory.
        """
        webhook = webhook_url
        if is_placeholder_webhook(webhook):
            webhook = os.getenv(WEBHOOK_ENV)

        project_path = os.getenv(PROJECT_PATH_ENV)
        if repository is not None:
            working_directory = Path(repository)
        elif project_path:
            working_directory = Path(project_path)
        else:
            working_directory = Path.cwd()

        raw_timeout = os.getenv(TIMEOUT_ENV)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"{TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}",
                    detail={"variable": TIMEOUT_ENV},
                )
        else:
            timeout = DEFAULT_NOTIFICATION_TIMEOUT

        return cls(
            working_directory=working_directory.expanduser().resolve(),
            discord_webhook_url=(webhook or "").strip(),
            remote=os.getenv(REMOTE_ENV) or DEFAULT_REMOTE,
            notification_timeout=timeout,
        )

    def validate(self) -> None:
        """Check that the working directory is an existing git working tree.

        Raises:
            ConfigurationError: If the path is missing or not a repository.
        """
        if not self.working_directory.exists():
            raise ConfigurationError(
                f"Project path does not exist: {self.working_directory}",
                detail={"path": str(self.working_directory)},
            )
        try:
            git.Repo(self.working_directory)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError):
            raise ConfigurationError(
                f"Not a git repository: {self.working_directory}",
                detail={"path": str(self.working_directory)},
            )
