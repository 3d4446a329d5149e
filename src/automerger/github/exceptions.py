"""Custom exceptions for the GitHub client."""


class GitHubError(Exception):
    """Base exception for GitHub API errors."""


class PullRequestError(GitHubError):
    """Error listing or fetching pull requests."""


class BranchError(GitHubError):
    """Error fetching branch metadata."""


class MergeError(GitHubError):
    """Error merging a pull request."""


class MergeConflictError(MergeError):
    """Head moved since evaluation, or the pull request is not mergeable."""
