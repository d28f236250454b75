import asyncio
import logging
from pathlib import Path

import click

from .config import WorkflowConfig, load_environment_variables
from .error_handling import ConfigurationError
from .logging_config import configure_logging, resolve_log_file
from .server import serve


@click.command()
@click.option("--repository", "-r", type=Path, help="Git repository path (takes precedence over PROJECT_PATH)")
@click.option("--webhook-url", help="Discord webhook URL (takes precedence over DISCORD_WEBHOOK_URL)")
@click.option("-v", "--verbose", count=True)
@click.option(
    "--enable-file-logging",
    is_flag=True,
    help="Enable DEBUG logging to a file outside the repository (DEV_ASSISTANT_LOG_DIR)",
)
@click.option(
    "--test-mode",
    is_flag=True,
    help="Build the server and exit without attaching stdio",
)
def main(
    repository: Path | None,
    webhook_url: str | None,
    verbose: int,
    enable_file_logging: bool,
    test_mode: bool,
) -> None:
    """Dev Assistant MCP Server - commit, push and notify Discord"""
    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"

    configure_logging(log_level)
    logger = logging.getLogger(__name__)

    load_environment_variables(repository)

    try:
        config = WorkflowConfig.from_environment(repository, webhook_url=webhook_url)
    except ConfigurationError as e:
        logger.error(f"Refusing to start: {e}")
        raise click.ClickException(str(e))

    if enable_file_logging:
        # placed after the working tree is known so it is never committed
        log_file = resolve_log_file(config.working_directory)
        configure_logging(log_level, log_file=log_file)
        logger.info(f"📝 File logging enabled: {log_file}")

    asyncio.run(serve(config, test_mode=test_mode))


if __name__ == "__main__":
    main()
