"""Events - Incoming signal model, parsing and routing."""

from automerger.events.exceptions import EventError
from automerger.events.models import (
    BranchProtectionRuleEvent,
    CheckRunEvent,
    DeploymentStatusEvent,
    Event,
    RescanEvent,
    UnsupportedEvent,
)
from automerger.events.parser import parse_event
from automerger.events.router import EventRouter

__all__ = [
    "BranchProtectionRuleEvent",
    "CheckRunEvent",
    "DeploymentStatusEvent",
    "Event",
    "EventError",
    "EventRouter",
    "RescanEvent",
    "UnsupportedEvent",
    "parse_event",
]
