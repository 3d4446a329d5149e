"""Data models for the GitHub client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class MergeMethod(str, Enum):
    """Merge strategies accepted by the merge endpoint."""

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


@dataclass(frozen=True)
class PullRequestSnapshot:
    """Point-in-time read of the pull request fields the policy looks at.

    Attributes:
        number: Pull request number.
        base_ref: Name of the base branch.
        base_repo: URL of the base repository.
        head_repo: URL of the head repository, None if it was deleted.
        head_sha: Commit SHA of the head.
        merged_at: Merge timestamp, None if unmerged.
        auto_merge: Whether the platform's auto-merge is activated.
        draft: Whether the pull request is a draft.
        labels: Names of the applied labels.
        author: Login of the author.
        mergeable: True/False, or None when unknown (list responses never carry it).
    """

    number: int
    base_ref: str
    base_repo: str
    head_repo: str | None
    head_sha: str
    merged_at: str | None = None
    auto_merge: bool = False
    draft: bool = False
    labels: tuple[str, ...] = ()
    author: str | None = None
    mergeable: bool | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PullRequestSnapshot:
        """Build a snapshot from a REST pull request object (list or full shape)."""
        base = data["base"]
        head = data["head"]
        head_repo = head.get("repo") or {}
        user = data.get("user") or {}
        return cls(
            number=data["number"],
            base_ref=base["ref"],
            base_repo=base["repo"]["html_url"],
            head_repo=head_repo.get("html_url"),
            head_sha=head["sha"],
            merged_at=data.get("merged_at"),
            auto_merge=bool(data.get("auto_merge")),
            draft=bool(data.get("draft", False)),
            labels=tuple(label["name"] for label in data.get("labels", [])),
            author=user.get("login"),
            mergeable=data.get("mergeable"),
        )


@dataclass(frozen=True)
class BranchProtection:
    """Protection metadata of a branch."""

    enabled: bool
    required_checks: tuple[str, ...] = ()

    @property
    def has_required_checks(self) -> bool:
        """True iff protection is enabled and at least one status check is required."""
        return self.enabled and len(self.required_checks) > 0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> BranchProtection:
        """Build from a REST branch object."""
        protection = data.get("protection") or {}
        status_checks = protection.get("required_status_checks") or {}
        checks = status_checks.get("checks")
        if checks is not None:
            names = tuple(check["context"] for check in checks)
        else:
            names = tuple(status_checks.get("contexts") or ())
        return cls(enabled=bool(protection.get("enabled")), required_checks=names)
