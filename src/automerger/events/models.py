"""Event model - one variant per kind of incoming signal."""

from __future__ import annotations

from dataclasses import dataclass

# Event names that only ever mean "re-scan every open pull request"
RESCAN_TRIGGERS = ("push", "schedule", "workflow_dispatch")

PASSING_CONCLUSIONS = ("success", "skipped")


@dataclass(frozen=True)
class BranchProtectionRuleEvent:
    """A branch protection rule was created, edited or deleted."""

    name: str = "branch_protection_rule"


@dataclass(frozen=True)
class CheckRunEvent:
    """A check run changed.

    Attributes:
        check_run_id: ID of the check run.
        action: Webhook action, e.g. 'completed'.
        conclusion: Conclusion of a completed check, None otherwise.
        pull_request_numbers: Pull requests the check run is associated with.
        is_own_check: The check run belongs to the run handling this event.
        html_url: Link to the check run, for diagnostics.
    """

    check_run_id: int
    action: str
    conclusion: str | None = None
    pull_request_numbers: tuple[int, ...] = ()
    is_own_check: bool = False
    html_url: str | None = None
    name: str = "check_run"


@dataclass(frozen=True)
class DeploymentStatusEvent:
    """A deployment status was created."""

    state: str
    name: str = "deployment_status"


@dataclass(frozen=True)
class RescanEvent:
    """Push, schedule or manual dispatch."""

    name: str


@dataclass(frozen=True)
class UnsupportedEvent:
    """Any event the router does not act on."""

    name: str


Event = (
    BranchProtectionRuleEvent
    | CheckRunEvent
    | DeploymentStatusEvent
    | RescanEvent
    | UnsupportedEvent
)
