"""Run-scoped cache of branch-protection facts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from automerger.github import GitHubClient

logger = logging.getLogger(__name__)


class BranchProtectionCache:
    """Memoizes, per branch, whether required status checks are enforced.

    Entries are never invalidated: a branch's protection is taken as stable for
    the duration of one run, and a new run starts with a new cache.
    """

    def __init__(self, client: GitHubClient) -> None:
        self.client = client
        self._facts: dict[str, bool] = {}

    def has_required_checks(self, branch: str) -> bool:
        """Whether `branch` enforces at least one required status check.

        Args:
            branch: Branch name.

        Returns:
            The cached fact, fetching the branch on the first query only.

        Raises:
            BranchError: If the branch lookup fails. Nothing is cached then.
        """
        if branch in self._facts:
            return self._facts[branch]

        protection = self.client.get_branch(branch)
        fact = protection.has_required_checks
        logger.debug(
            "Branch %s: protection enabled=%s, required checks=%s",
            branch,
            protection.enabled,
            list(protection.required_checks),
        )
        self._facts[branch] = fact
        return fact

    def __len__(self) -> int:
        return len(self._facts)
