"""EligibilityEvaluator - Ordered admission predicates for pull requests.

Each predicate takes a snapshot and returns a denial reason, or None to let
the pull request through. Evaluation stops at the first denial, so the order
of `EligibilityEvaluator.predicates` is part of the policy.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING

from automerger.policy.models import Verdict

if TYPE_CHECKING:
    from automerger.github import PullRequestSnapshot
    from automerger.policy.cache import BranchProtectionCache
    from automerger.policy.models import Policy

logger = logging.getLogger(__name__)

Predicate = Callable[["PullRequestSnapshot"], "str | None"]


def check_same_repository(pr: PullRequestSnapshot) -> str | None:
    """Forks are not merged."""
    head_repo = pr.head_repo or ""
    if pr.base_repo != head_repo:
        return f"base's repo {pr.base_repo} is different from head's repo {head_repo}"
    return None


def check_not_merged(pr: PullRequestSnapshot) -> str | None:
    if pr.merged_at:
        return "already merged"
    return None


def check_auto_merge_inactive(pr: PullRequestSnapshot) -> str | None:
    if pr.auto_merge:
        return "auto merge is already activated"
    return None


def check_not_draft(pr: PullRequestSnapshot) -> str | None:
    if pr.draft:
        return "draft"
    return None


def check_required_labels(pr: PullRequestSnapshot, required: tuple[str, ...]) -> str | None:
    """All required labels must be present, compared case-insensitively."""
    if not required:
        return None
    labels = {label.lower() for label in pr.labels}
    if not all(label in labels for label in required):
        return f"doesn't have all required labels: {', '.join(required)}"
    return None


def check_author(pr: PullRequestSnapshot, authors: tuple[str, ...]) -> str | None:
    if not authors:
        return None
    author = (pr.author or "").lower()
    if author not in authors:
        return f"the author {author} is not one of: {', '.join(authors)}"
    return None


def check_mergeable(pr: PullRequestSnapshot) -> str | None:
    """Only an explicit False denies; unknown is left to the merge call itself."""
    if pr.mergeable is False:
        return "not mergeable"
    return None


def check_required_status_checks(
    pr: PullRequestSnapshot, cache: BranchProtectionCache
) -> str | None:
    """Only branches gated by at least one required status check are merged into."""
    if not cache.has_required_checks(pr.base_ref):
        return f"the base branch '{pr.base_ref}' doesn't have required status checks"
    return None


class EligibilityEvaluator:
    """Applies the configured policy to pull request snapshots."""

    def __init__(self, policy: Policy, cache: BranchProtectionCache) -> None:
        """Initialize the evaluator.

        Args:
            policy: The run's configured policy.
            cache: Branch-protection cache, queried by the last predicate only.
        """
        self.policy = policy
        self.cache = cache
        self.predicates: list[tuple[str, Predicate]] = [
            ("same_repository", check_same_repository),
            ("not_merged", check_not_merged),
            ("auto_merge_inactive", check_auto_merge_inactive),
            ("not_draft", check_not_draft),
            ("required_labels", partial(check_required_labels, required=policy.required_labels)),
            ("author", partial(check_author, authors=policy.authors)),
            ("mergeable", check_mergeable),
            ("required_status_checks", partial(check_required_status_checks, cache=cache)),
        ]

    def evaluate(self, pr: PullRequestSnapshot) -> Verdict:
        """Return the first denial, or an approval if every predicate passes."""
        for name, predicate in self.predicates:
            reason = predicate(pr)
            if reason is not None:
                logger.debug("PR #%d denied by %s", pr.number, name)
                return Verdict.deny(name, reason)
        return Verdict.approve()
