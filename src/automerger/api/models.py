"""Pydantic models for the webhook API."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from automerger.pipeline import RunSummary

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str = "ok"


class OutcomeResponse(BaseModel):
    """Response model for one processed pull request."""

    number: int
    approved: bool
    merged: bool
    reason: str | None = None


class RunSummaryResponse(BaseModel):
    """Response model for a dispatched webhook delivery."""

    event: str
    delivery: str | None = None
    outcomes: list[OutcomeResponse] = []
    merged: list[int] = []
    skipped: list[int] = []
    note: str | None = None


def summary_to_response(summary: RunSummary, delivery: str | None = None) -> RunSummaryResponse:
    """Convert a RunSummary to RunSummaryResponse."""
    return RunSummaryResponse(
        event=summary.event_name,
        delivery=delivery,
        outcomes=[
            OutcomeResponse(
                number=o.number,
                approved=o.verdict.approved,
                merged=o.merged,
                reason=o.verdict.reason,
            )
            for o in summary.outcomes
        ],
        merged=summary.merged,
        skipped=summary.skipped,
        note=summary.note,
    )
