"""Integration tests: events through routing, evaluation and merge."""

import logging
from dataclasses import replace

import pytest

from automerger.config import Settings, build_policy
from automerger.events import parse_event
from automerger.github import BranchProtection, MergeConflictError, PullRequestSnapshot
from automerger.runner import execute


class FakeGitHub:
    """In-memory stand-in for GitHubClient with call accounting."""

    def __init__(self, prs: list[PullRequestSnapshot], page_size: int = 2) -> None:
        self.prs = {pr.number: pr for pr in prs}
        self.page_size = page_size
        self.branches: dict[str, BranchProtection] = {}
        self.calls: list[tuple] = []
        self.merged: list[tuple] = []
        self.stale: set[int] = set()

    def list_open_pull_requests(self):
        numbers = sorted(self.prs)
        for start in range(0, len(numbers), self.page_size):
            self.calls.append(("list", start // self.page_size + 1))
            for number in numbers[start : start + self.page_size]:
                # List responses never carry the mergeable flag
                yield replace(self.prs[number], mergeable=None)

    def get_pull_request(self, number: int) -> PullRequestSnapshot:
        self.calls.append(("get", number))
        return self.prs[number]

    def get_branch(self, name: str) -> BranchProtection:
        self.calls.append(("branch", name))
        return self.branches.get(name, BranchProtection(enabled=False))

    def merge_pull_request(self, number: int, sha: str, merge_method=None) -> None:
        self.calls.append(("merge", number))
        if number in self.stale:
            raise MergeConflictError(f"PR {number} cannot be merged at {sha}")
        self.merged.append((number, sha, merge_method))

    def close(self) -> None:
        pass


def _settings(**policy) -> Settings:
    return Settings(token="token", repository="owner/repo", policy=build_policy(**policy))


@pytest.fixture
def protected() -> BranchProtection:
    return BranchProtection(enabled=True, required_checks=("build",))


@pytest.mark.integration
class TestBranchProtectionRuleEvent:
    """Full re-scan scenarios."""

    def test_merges_eligible_and_skips_draft(
        self, make_pr, protected: BranchProtection, caplog: pytest.LogCaptureFixture
    ) -> None:
        """3 open PRs, 1 draft: all processed, 2 merged, 1 skipped as draft."""
        github = FakeGitHub([make_pr(1), make_pr(2, draft=True), make_pr(3)])
        github.branches["main"] = protected
        event = parse_event("branch_protection_rule", {"action": "edited"})

        with caplog.at_level(logging.INFO, logger="automerger"):
            summary = execute(_settings(), event, client=github)

        assert len(summary.outcomes) == 3
        assert summary.merged == [1, 3]
        assert summary.skipped == [2]
        assert summary.outcomes[1].verdict.reason == "draft"
        assert [m[0] for m in github.merged] == [1, 3]
        assert "Skipping PR #2: draft" in caplog.text

    def test_branch_looked_up_once_per_run(self, make_pr, protected: BranchProtection) -> None:
        """PRs sharing a base branch share one branch lookup."""
        github = FakeGitHub([make_pr(n) for n in range(1, 6)])
        github.branches["main"] = protected

        execute(_settings(), parse_event("push", {}), client=github)

        assert github.calls.count(("branch", "main")) == 1
        pages = [c for c in github.calls if c[0] == "list"]
        assert pages == [("list", 1), ("list", 2), ("list", 3)]

    def test_unprotected_branch_denies_everything(self, make_pr, protected) -> None:
        """Without required checks on the base branch nothing is merged."""
        github = FakeGitHub([make_pr(1), make_pr(2, base_ref="dev"), make_pr(3, base_ref="dev")])
        github.branches["main"] = protected
        github.branches["dev"] = BranchProtection(enabled=True, required_checks=())

        summary = execute(_settings(), parse_event("schedule", {}), client=github)

        assert summary.merged == [1]
        for outcome in summary.outcomes[1:]:
            assert outcome.verdict.reason == (
                "the base branch 'dev' doesn't have required status checks"
            )

    def test_dry_run_merges_nothing(
        self, make_pr, protected, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Dry run announces merges but never calls the API."""
        github = FakeGitHub([make_pr(1), make_pr(2)])
        github.branches["main"] = protected

        with caplog.at_level(logging.INFO, logger="automerger"):
            summary = execute(
                _settings(dry_run="true"), parse_event("workflow_dispatch", {}), client=github
            )

        assert github.merged == []
        assert not any(c[0] == "merge" for c in github.calls)
        assert summary.approved == [1, 2]
        assert "Merging PR #1" in caplog.text
        assert "Merging PR #2" in caplog.text

    def test_labels_and_authors_policy(self, make_pr, protected) -> None:
        """Label and author requirements apply to every PR."""
        github = FakeGitHub(
            [
                make_pr(1, labels=("Ready",), author="Alice"),
                make_pr(2, labels=("ready", "extra"), author="mallory"),
                make_pr(3, labels=(), author="alice"),
            ]
        )
        github.branches["main"] = protected

        summary = execute(
            _settings(required_labels="ready", authors="alice", merge_method="squash"),
            parse_event("push", {}),
            client=github,
        )

        assert summary.merged == [1]
        assert github.merged[0][2].value == "squash"

    def test_stale_head_aborts_run(self, make_pr, protected) -> None:
        """A merge race is fatal for the run; later PRs are left for the next event."""
        github = FakeGitHub([make_pr(1), make_pr(2)])
        github.branches["main"] = protected
        github.stale.add(1)

        with pytest.raises(MergeConflictError):
            execute(_settings(), parse_event("push", {}), client=github)

        assert github.merged == []
        assert ("merge", 2) not in github.calls


@pytest.mark.integration
class TestCheckRunEvent:
    """Per-PR scenarios driven by check runs."""

    def _payload(self, conclusion: str, check_run_id: int = 500) -> dict:
        return {
            "action": "completed",
            "check_run": {
                "id": check_run_id,
                "conclusion": conclusion,
                "pull_requests": [{"number": 2}],
            },
        }

    def test_successful_check_run_merges_associated_pr(self, make_pr, protected) -> None:
        """Only the associated PR is fetched and merged."""
        github = FakeGitHub([make_pr(1), make_pr(2)])
        github.branches["main"] = protected
        event = parse_event("check_run", self._payload("success"))

        summary = execute(_settings(), event, client=github)

        assert summary.merged == [2]
        assert ("get", 2) in github.calls
        assert not any(c[0] == "list" for c in github.calls)

    def test_fetched_pr_with_known_unmergeable_is_skipped(self, make_pr, protected) -> None:
        """The full snapshot's mergeable flag is honoured."""
        github = FakeGitHub([make_pr(2, mergeable=False)])
        github.branches["main"] = protected
        event = parse_event("check_run", self._payload("skipped"))

        summary = execute(_settings(), event, client=github)

        assert summary.outcomes[0].verdict.reason == "not mergeable"
        assert github.merged == []

    def test_failed_check_run_touches_nothing(self, make_pr, protected) -> None:
        github = FakeGitHub([make_pr(2)])
        github.branches["main"] = protected
        event = parse_event("check_run", self._payload("failure"))

        summary = execute(_settings(), event, client=github)

        assert summary.outcomes == []
        assert github.calls == []

    def test_own_check_run_touches_nothing(self, make_pr, protected) -> None:
        github = FakeGitHub([make_pr(2)])
        github.branches["main"] = protected
        event = parse_event("check_run", self._payload("success", check_run_id=77), own_run_id=77)

        summary = execute(_settings(), event, client=github)

        assert summary.outcomes == []
        assert github.calls == []
