"""Data models for the merge pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from automerger.policy import Verdict


@dataclass
class PullRequestOutcome:
    """What happened to one pull request during a run.

    Attributes:
        number: Pull request number.
        verdict: The eligibility verdict.
        merged: Whether the merge call was made (always False in dry-run mode).
    """

    number: int
    verdict: Verdict
    merged: bool = False


@dataclass
class RunSummary:
    """Result of dispatching one event.

    Attributes:
        event_name: Name of the event that triggered the run.
        outcomes: One entry per processed pull request, in processing order.
        note: Why nothing was processed, when the event was ignored.
    """

    event_name: str
    outcomes: list[PullRequestOutcome] = field(default_factory=list)
    note: str | None = None

    @property
    def merged(self) -> list[int]:
        return [o.number for o in self.outcomes if o.merged]

    @property
    def approved(self) -> list[int]:
        return [o.number for o in self.outcomes if o.verdict.approved]

    @property
    def skipped(self) -> list[int]:
        return [o.number for o in self.outcomes if not o.verdict.approved]
