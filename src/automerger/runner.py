"""Runner - Wires the components for one run and dispatches one event."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from automerger.events import EventError, EventRouter, parse_event
from automerger.github import GitHubClient
from automerger.pipeline import MergeExecutor, PullRequestDriver
from automerger.policy import BranchProtectionCache, EligibilityEvaluator

if TYPE_CHECKING:
    from automerger.config import Settings
    from automerger.events import Event
    from automerger.pipeline import RunSummary

logger = logging.getLogger(__name__)


def execute(settings: Settings, event: Event, client: GitHubClient | None = None) -> RunSummary:
    """Run the pipeline for a single event.

    A fresh branch-protection cache is created for every call, so nothing
    carries over from one run to the next.

    Args:
        settings: Run configuration.
        event: The event to dispatch.
        client: GitHub client to use. Created from settings and closed afterwards if omitted.

    Returns:
        RunSummary of the dispatch.

    Raises:
        GitHubError: If a remote call fails; the run stops there.
    """
    owns_client = client is None
    if client is None:
        client = GitHubClient(
            repo=settings.repository,
            token=settings.token,
            base_url=settings.api_url,
        )

    try:
        cache = BranchProtectionCache(client)
        evaluator = EligibilityEvaluator(settings.policy, cache)
        executor = MergeExecutor(client, settings.policy)
        router = EventRouter(PullRequestDriver(client, evaluator, executor))

        summary = router.dispatch(event)
        logger.info(
            "Run for %s finished: merged=%s skipped=%s%s",
            summary.event_name,
            summary.merged,
            summary.skipped,
            " (dry run)" if settings.policy.dry_run else "",
        )
        return summary
    finally:
        if owns_client:
            client.close()


def load_event_from_env(
    environ: Mapping[str, str] | None = None,
    own_run_id: int | None = None,
) -> Event:
    """Read the triggering event the way a workflow runner provides it.

    Args:
        environ: Environment mapping. Defaults to os.environ.
        own_run_id: ID of the current run.

    Returns:
        The parsed event.

    Raises:
        EventError: If the payload is not JSON or lacks fields its event kind requires.
    """
    env = os.environ if environ is None else environ
    event_name = env.get("GITHUB_EVENT_NAME", "")
    event_path = env.get("GITHUB_EVENT_PATH")

    payload = {}
    if event_path and Path(event_path).exists():
        try:
            payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise EventError(f"Event payload at {event_path} is not valid JSON: {e}") from e
    else:
        logger.debug("No event payload found at %s", event_path)

    return parse_event(event_name, payload, own_run_id=own_run_id)
