"""Pipeline - Evaluate-and-merge for single pull requests and whole repositories."""

from automerger.pipeline.driver import PullRequestDriver
from automerger.pipeline.executor import MergeExecutor
from automerger.pipeline.models import PullRequestOutcome, RunSummary

__all__ = [
    "MergeExecutor",
    "PullRequestDriver",
    "PullRequestOutcome",
    "RunSummary",
]
