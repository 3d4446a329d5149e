"""CLI entry point for automerger.

`automerger run` handles the single event a workflow run was triggered by;
`automerger serve` receives webhook deliveries and handles each one as a run.
"""

from __future__ import annotations

import os
import sys

import click

from automerger import __version__
from automerger.config import ConfigError, Settings
from automerger.events import EventError
from automerger.github import GitHubError
from automerger.logging import get_logger, sanitize_for_log, setup_logging
from automerger.runner import execute, load_event_from_env

logger = get_logger("cli")


def _load_settings(
    repository: str | None,
    required_labels: str | None,
    authors: str | None,
    merge_method: str | None,
    dry_run: bool | None,
) -> Settings:
    """Environment settings with command-line overrides applied."""
    env = dict(os.environ)
    overrides = {
        "GITHUB_REPOSITORY": repository,
        "INPUT_REQUIREDLABELS": required_labels,
        "INPUT_AUTHORS": authors,
        "INPUT_PREFERREDMERGEOPTION": merge_method,
        "INPUT_DRYRUN": None if dry_run is None else str(dry_run).lower(),
    }
    env.update({key: value for key, value in overrides.items() if value is not None})
    return Settings.from_env(env)


def policy_options(func):
    """Options shared by every command that evaluates pull requests."""
    options = [
        click.option("--repo", "repository", help="Repository in owner/repo format"),
        click.option("--required-labels", help="Labels a PR must carry (comma separated)"),
        click.option("--authors", help="Logins allowed to author a PR (comma separated)"),
        click.option(
            "--merge-method",
            type=click.Choice(["merge", "squash", "rebase"], case_sensitive=False),
            help="Preferred merge method (default: repository default)",
        ),
        click.option(
            "--dry-run/--no-dry-run",
            default=None,
            help="Evaluate and log, but never merge",
        ),
        click.option("-v", "--verbose", is_flag=True, help="Enable debug output"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(__version__)
def main() -> None:
    """automerger - merge pull requests once they satisfy the configured policy."""
    pass


@main.command()
@policy_options
def run(
    repository: str | None,
    required_labels: str | None,
    authors: str | None,
    merge_method: str | None,
    dry_run: bool | None,
    verbose: bool,
) -> None:
    """Handle the event that triggered the current workflow run."""
    setup_logging(level="DEBUG" if verbose else None)

    try:
        settings = _load_settings(repository, required_labels, authors, merge_method, dry_run)
        event = load_event_from_env(own_run_id=settings.run_id)
        execute(settings, event)
    except (ConfigError, EventError, GitHubError) as e:
        logger.error("%s: %s", type(e).__name__, sanitize_for_log(str(e)))
        sys.exit(1)


@main.command()
@policy_options
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
def serve(
    repository: str | None,
    required_labels: str | None,
    authors: str | None,
    merge_method: str | None,
    dry_run: bool | None,
    verbose: bool,
    host: str,
    port: int,
) -> None:
    """Receive GitHub webhooks and handle each delivery as a run."""
    import uvicorn  # noqa: PLC0415

    from automerger.api import create_app  # noqa: PLC0415

    setup_logging(level="DEBUG" if verbose else None)

    try:
        settings = _load_settings(repository, required_labels, authors, merge_method, dry_run)
    except ConfigError as e:
        logger.error("ConfigError: %s", e)
        sys.exit(1)

    if not settings.webhook_secret:
        logger.warning("AUTOMERGER_WEBHOOK_SECRET is not set, deliveries are not authenticated")

    uvicorn.run(
        create_app(settings),
        host=host,
        port=port,
        log_level="debug" if verbose else "info",
    )


if __name__ == "__main__":
    main()
