"""Turns an event name and its webhook payload into an Event."""

from __future__ import annotations

from typing import Any

from automerger.events.exceptions import EventError
from automerger.events.models import (
    RESCAN_TRIGGERS,
    BranchProtectionRuleEvent,
    CheckRunEvent,
    DeploymentStatusEvent,
    Event,
    RescanEvent,
    UnsupportedEvent,
)


def _section(payload: dict[str, Any], key: str, event_name: str) -> dict[str, Any]:
    section = payload.get(key)
    if not isinstance(section, dict):
        raise EventError(f"'{event_name}' payload has no '{key}' object")
    return section


def parse_event(
    event_name: str,
    payload: dict[str, Any],
    own_run_id: int | None = None,
) -> Event:
    """Parse an incoming event.

    Args:
        event_name: Event name, e.g. 'check_run' (X-GitHub-Event / GITHUB_EVENT_NAME).
        payload: Webhook payload.
        own_run_id: ID of the run handling the event, used to recognise its own check.

    Returns:
        The matching Event variant; UnsupportedEvent for anything unknown.

    Raises:
        EventError: If a supported event lacks required payload fields.
    """
    if event_name == "branch_protection_rule":
        return BranchProtectionRuleEvent()

    if event_name == "check_run":
        check_run = _section(payload, "check_run", event_name)
        check_run_id = check_run.get("id")
        if not isinstance(check_run_id, int):
            raise EventError("'check_run' payload has no check run id")
        return CheckRunEvent(
            check_run_id=check_run_id,
            action=payload.get("action", ""),
            conclusion=check_run.get("conclusion"),
            pull_request_numbers=tuple(
                pr["number"] for pr in check_run.get("pull_requests") or []
            ),
            is_own_check=own_run_id is not None and check_run_id == own_run_id,
            html_url=check_run.get("html_url"),
        )

    if event_name == "deployment_status":
        deployment_status = _section(payload, "deployment_status", event_name)
        return DeploymentStatusEvent(state=deployment_status.get("state", ""))

    if event_name in RESCAN_TRIGGERS:
        return RescanEvent(name=event_name)

    return UnsupportedEvent(name=event_name)
