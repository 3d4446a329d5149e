"""Webhook API for automerger."""

from automerger.api.app import create_app
from automerger.api.models import APIResponse, RunSummaryResponse

__all__ = [
    "APIResponse",
    "RunSummaryResponse",
    "create_app",
]
