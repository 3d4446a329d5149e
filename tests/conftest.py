"""Shared pytest fixtures and configuration."""

import logging
from typing import Any

import pytest

from automerger.github import PullRequestSnapshot

REPO_URL = "https://github.com/owner/repo"


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch: pytest.MonkeyPatch):
    """Plain console output, and no handlers left behind by setup_logging."""
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.delenv("RUNNER_DEBUG", raising=False)
    monkeypatch.delenv("AUTOMERGER_LOG_LEVEL", raising=False)
    yield
    logger = logging.getLogger("automerger")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def _make_pr(number: int = 1, **overrides: Any) -> PullRequestSnapshot:
    """Snapshot of an open, same-repo pull request that passes every predicate."""
    fields: dict[str, Any] = {
        "number": number,
        "base_ref": "main",
        "base_repo": REPO_URL,
        "head_repo": REPO_URL,
        "head_sha": f"sha-{number}",
        "labels": (),
        "author": "alice",
        "mergeable": True,
    }
    fields.update(overrides)
    return PullRequestSnapshot(**fields)


def _pr_payload(number: int = 1, **overrides: Any) -> dict[str, Any]:
    """REST pull request object as returned by GitHub."""
    data: dict[str, Any] = {
        "number": number,
        "base": {"ref": "main", "repo": {"html_url": REPO_URL}},
        "head": {"sha": f"sha-{number}", "repo": {"html_url": REPO_URL}},
        "merged_at": None,
        "auto_merge": None,
        "draft": False,
        "labels": [],
        "user": {"login": "alice"},
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_pr():
    """Factory for eligible pull request snapshots."""
    return _make_pr


@pytest.fixture
def pr_payload():
    """Factory for REST pull request objects."""
    return _pr_payload
