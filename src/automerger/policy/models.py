"""Data models for the eligibility policy."""

from __future__ import annotations

from dataclasses import dataclass

from automerger.github.models import MergeMethod


@dataclass(frozen=True)
class Policy:
    """Configured policy, immutable for the whole run.

    Attributes:
        required_labels: Labels that must all be present. Empty = no requirement.
        authors: Logins allowed to author a PR. Empty = anyone.
        merge_method: Preferred merge method, None for the repository default.
        dry_run: Evaluate and log everything but never call the merge endpoint.
    """

    required_labels: tuple[str, ...] = ()
    authors: tuple[str, ...] = ()
    merge_method: MergeMethod | None = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        # Labels and logins compare case-insensitively
        labels = dict.fromkeys(label.lower() for label in self.required_labels)
        authors = dict.fromkeys(author.lower() for author in self.authors)
        object.__setattr__(self, "required_labels", tuple(labels))
        object.__setattr__(self, "authors", tuple(authors))


@dataclass(frozen=True)
class Verdict:
    """Outcome of evaluating one pull request.

    Attributes:
        approved: Whether the PR may be merged.
        reason: Why the PR was denied, None when approved.
        predicate: Name of the predicate that denied the PR.
    """

    approved: bool
    reason: str | None = None
    predicate: str | None = None

    @classmethod
    def approve(cls) -> Verdict:
        return cls(approved=True)

    @classmethod
    def deny(cls, predicate: str, reason: str) -> Verdict:
        return cls(approved=False, reason=reason, predicate=predicate)
