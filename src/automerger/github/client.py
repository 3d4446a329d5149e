"""GitHubClient - REST operations the merge pipeline depends on."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any
from urllib.parse import quote

import httpx

from automerger.github.exceptions import (
    BranchError,
    MergeConflictError,
    MergeError,
    PullRequestError,
)
from automerger.github.models import BranchProtection, MergeMethod, PullRequestSnapshot
from automerger.logging import sanitize_for_log, truncate_output

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

# 405 = not mergeable, 409 = head SHA does not match
_MERGE_CONFLICT_CODES = (405, 409)


def _describe(response: httpx.Response) -> str:
    """Short, token-free description of a failed response."""
    body = sanitize_for_log(truncate_output(response.text, max_length=500))
    return f"{response.status_code} - {body}"


class GitHubClient:
    """Thin wrapper over the GitHub REST API for one repository.

    Every call is synchronous; callers never have more than one request in flight.
    """

    def __init__(
        self,
        repo: str,
        token: str,
        base_url: str = "https://api.github.com",
    ) -> None:
        """Initialize the client.

        Args:
            repo: GitHub repo in "owner/repo" format
            token: GitHub token with pull request write access
            base_url: GitHub API base URL (for testing/enterprise)
        """
        self.repo = repo
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GitHub API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def list_open_pull_requests(self) -> Iterator[PullRequestSnapshot]:
        """Lazily iterate over all open pull requests.

        The next page is requested only once the current one is exhausted.
        Snapshots from this endpoint never carry the mergeable flag.

        Yields:
            PullRequestSnapshot for each open pull request

        Raises:
            PullRequestError: If a page cannot be fetched or the request fails
        """
        url: str | None = f"/repos/{self.repo}/pulls"
        params: dict[str, Any] | None = {"state": "open", "per_page": PAGE_SIZE}
        page = 1
        while url is not None:
            logger.debug("Fetching open pull requests, page %d", page)
            try:
                response = self.client.get(url, params=params)
            except httpx.HTTPError as e:
                logger.error("Failed to list pull requests: %s", e)
                raise PullRequestError(f"Failed to list pull requests: {e}") from e
            if response.status_code != 200:
                logger.error("Failed to list pull requests: %s", _describe(response))
                raise PullRequestError(f"Failed to list pull requests: {_describe(response)}")

            for data in response.json():
                yield PullRequestSnapshot.from_api(data)

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None
            page += 1

    def get_pull_request(self, number: int) -> PullRequestSnapshot:
        """Fetch a single pull request, including its mergeable flag.

        Args:
            number: The PR number

        Returns:
            Full-shape PullRequestSnapshot

        Raises:
            PullRequestError: If the fetch fails or the request cannot be sent
        """
        try:
            response = self.client.get(f"/repos/{self.repo}/pulls/{number}")
        except httpx.HTTPError as e:
            logger.error("Failed to get PR #%d: %s", number, e)
            raise PullRequestError(f"Failed to get PR {number}: {e}") from e
        if response.status_code != 200:
            logger.error("Failed to get PR #%d: %s", number, _describe(response))
            raise PullRequestError(f"Failed to get PR {number}: {_describe(response)}")
        return PullRequestSnapshot.from_api(response.json())

    def get_branch(self, name: str) -> BranchProtection:
        """Fetch protection metadata of a branch.

        Args:
            name: Branch name

        Returns:
            BranchProtection of the branch

        Raises:
            BranchError: If the lookup fails or the request cannot be sent
        """
        logger.debug("Fetching branch %s", name)
        try:
            response = self.client.get(f"/repos/{self.repo}/branches/{quote(name, safe='')}")
        except httpx.HTTPError as e:
            logger.error("Failed to get branch %s: %s", name, e)
            raise BranchError(f"Failed to get branch '{name}': {e}") from e
        if response.status_code != 200:
            logger.error("Failed to get branch %s: %s", name, _describe(response))
            raise BranchError(f"Failed to get branch '{name}': {_describe(response)}")
        return BranchProtection.from_api(response.json())

    def merge_pull_request(
        self,
        number: int,
        sha: str,
        merge_method: MergeMethod | None = None,
    ) -> None:
        """Merge a pull request if its head is still at `sha`.

        Args:
            number: The PR number to merge
            sha: Head SHA the pull request must still point at
            merge_method: Merge strategy, None for the repository default

        Raises:
            MergeConflictError: If the head moved or the PR is not mergeable
            MergeError: If the merge fails for any other reason
        """
        payload: dict[str, Any] = {"sha": sha}
        if merge_method is not None:
            payload["merge_method"] = merge_method.value

        try:
            response = self.client.put(f"/repos/{self.repo}/pulls/{number}/merge", json=payload)
        except httpx.HTTPError as e:
            logger.error("Failed to merge PR #%d: %s", number, e)
            raise MergeError(f"Failed to merge PR {number}: {e}") from e

        if response.status_code in _MERGE_CONFLICT_CODES:
            logger.error("PR #%d cannot be merged at %s: %s", number, sha, _describe(response))
            raise MergeConflictError(
                f"PR {number} cannot be merged at {sha}: {_describe(response)}"
            )
        if response.status_code != 200:
            logger.error("Failed to merge PR #%d: %s", number, _describe(response))
            raise MergeError(f"Failed to merge PR {number}: {_describe(response)}")
        logger.info("Merged PR #%d", number)
