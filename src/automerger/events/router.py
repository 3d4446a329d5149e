"""EventRouter - Decides what an incoming event means for open pull requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from automerger.events.models import (
    PASSING_CONCLUSIONS,
    BranchProtectionRuleEvent,
    CheckRunEvent,
    DeploymentStatusEvent,
    Event,
    RescanEvent,
    UnsupportedEvent,
)
from automerger.pipeline.models import RunSummary

if TYPE_CHECKING:
    from automerger.pipeline import PullRequestDriver

logger = logging.getLogger(__name__)


class EventRouter:
    """Dispatches events to a full re-scan, a per-PR run, or nothing.

    Stateless: every dispatch is decided from the event alone.
    """

    def __init__(self, driver: PullRequestDriver) -> None:
        self.driver = driver

    def dispatch(self, event: Event) -> RunSummary:
        """Handle one event.

        Args:
            event: The parsed event.

        Returns:
            RunSummary of the pull requests processed, empty when the event is ignored.
        """
        summary = RunSummary(event_name=event.name)
        logger.debug("Dispatching event %s", event)

        match event:
            case BranchProtectionRuleEvent():
                summary.outcomes = self.driver.process_all()

            case CheckRunEvent(is_own_check=True):
                summary.note = f"Skipping current check run: {event.html_url}"
                logger.debug(summary.note)

            case CheckRunEvent(action=action) if action != "completed":
                summary.note = f"Skipping check run by action: '{action}'"
                logger.debug(summary.note)

            case CheckRunEvent(conclusion=conclusion) if conclusion not in PASSING_CONCLUSIONS:
                summary.note = f"Skipping check run by conclusion: '{conclusion}'"
                logger.debug(summary.note)

            case CheckRunEvent(pull_request_numbers=numbers):
                summary.outcomes = self.driver.process_numbers(numbers)

            case DeploymentStatusEvent(state="success"):
                summary.outcomes = self.driver.process_all()

            case DeploymentStatusEvent(state=state):
                summary.note = f"Skipping deployment status by state: '{state}'"
                logger.debug(summary.note)

            case RescanEvent():
                summary.outcomes = self.driver.process_all()

            case UnsupportedEvent(name=name):
                summary.note = f"Unsupported event: '{name}'"
                logger.warning(summary.note)

            case _:
                summary.note = f"Unsupported event: {event!r}"
                logger.warning(summary.note)

        return summary
