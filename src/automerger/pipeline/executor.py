"""MergeExecutor - Issues the merge call for approved pull requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from automerger.github import GitHubClient, PullRequestSnapshot
    from automerger.policy import Policy

logger = logging.getLogger(__name__)


class MergeExecutor:
    """Merges approved pull requests, or only announces it in dry-run mode.

    There is no retry here: a failed merge propagates, and the next event that
    touches the pull request evaluates it again.
    """

    def __init__(self, client: GitHubClient, policy: Policy) -> None:
        self.client = client
        self.policy = policy

    def merge(self, pr: PullRequestSnapshot) -> bool:
        """Merge `pr` at the head SHA it was evaluated at.

        Args:
            pr: Snapshot with an approved verdict.

        Returns:
            True if the merge call was made, False in dry-run mode.

        Raises:
            MergeConflictError: If the head moved since evaluation.
            MergeError: If the merge call fails.
        """
        logger.warning("Merging PR #%d", pr.number)
        if self.policy.dry_run:
            logger.info("Dry run: PR #%d was not merged", pr.number)
            return False

        self.client.merge_pull_request(pr.number, pr.head_sha, self.policy.merge_method)
        return True
