"""PullRequestDriver - Runs pull requests through evaluation and merge."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from automerger.logging import log_group
from automerger.pipeline.models import PullRequestOutcome

if TYPE_CHECKING:
    from automerger.github import GitHubClient, PullRequestSnapshot
    from automerger.pipeline.executor import MergeExecutor
    from automerger.policy import EligibilityEvaluator

logger = logging.getLogger(__name__)


class PullRequestDriver:
    """Feeds pull requests, one at a time, to the evaluator and the executor.

    A pull request is fully handled (evaluated, and merged if approved) before
    the next one is fetched, so at most one merge call is ever in flight.
    """

    def __init__(
        self,
        client: GitHubClient,
        evaluator: EligibilityEvaluator,
        executor: MergeExecutor,
    ) -> None:
        self.client = client
        self.evaluator = evaluator
        self.executor = executor

    def process(self, pr: PullRequestSnapshot | int) -> PullRequestOutcome:
        """Evaluate one pull request and merge it if approved.

        Args:
            pr: A snapshot from a list call, or a number to fetch in full.

        Returns:
            PullRequestOutcome for the pull request.
        """
        number = pr if isinstance(pr, int) else pr.number
        with log_group(f"Processing PR #{number}", logger):
            snapshot = self.client.get_pull_request(number) if isinstance(pr, int) else pr

            verdict = self.evaluator.evaluate(snapshot)
            if not verdict.approved:
                logger.warning("Skipping PR #%d: %s", number, verdict.reason)
                return PullRequestOutcome(number=number, verdict=verdict)

            merged = self.executor.merge(snapshot)
            return PullRequestOutcome(number=number, verdict=verdict, merged=merged)

    def process_numbers(self, numbers: Iterable[int]) -> list[PullRequestOutcome]:
        """Process pull requests by number, in order."""
        return [self.process(number) for number in numbers]

    def process_all(self) -> list[PullRequestOutcome]:
        """Process every open pull request, page by page."""
        outcomes = []
        for pr in self.client.list_open_pull_requests():
            outcomes.append(self.process(pr))
        logger.info(
            "Processed %d open pull requests, %d approved",
            len(outcomes),
            sum(1 for o in outcomes if o.verdict.approved),
        )
        return outcomes
