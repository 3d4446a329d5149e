"""GitHub client - REST operations on pull requests and branches."""

from automerger.github.client import GitHubClient
from automerger.github.exceptions import (
    BranchError,
    GitHubError,
    MergeConflictError,
    MergeError,
    PullRequestError,
)
from automerger.github.models import BranchProtection, MergeMethod, PullRequestSnapshot

__all__ = [
    "BranchError",
    "BranchProtection",
    "GitHubClient",
    "GitHubError",
    "MergeConflictError",
    "MergeError",
    "MergeMethod",
    "PullRequestError",
    "PullRequestSnapshot",
]
