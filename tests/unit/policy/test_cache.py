"""Unit tests for BranchProtectionCache."""

from unittest.mock import MagicMock

import pytest

from automerger.github import BranchError, BranchProtection
from automerger.policy import BranchProtectionCache


@pytest.fixture
def client() -> MagicMock:
    """Mock GitHub client."""
    return MagicMock()


@pytest.mark.unit
class TestHasRequiredChecks:
    """Tests for has_required_checks."""

    def test_miss_fetches_branch(self, client: MagicMock) -> None:
        """First query looks the branch up."""
        client.get_branch.return_value = BranchProtection(enabled=True, required_checks=("ci",))
        cache = BranchProtectionCache(client)

        assert cache.has_required_checks("main") is True
        client.get_branch.assert_called_once_with("main")

    def test_hit_makes_no_remote_call(self, client: MagicMock) -> None:
        """Second query for the same branch is served from the cache."""
        client.get_branch.return_value = BranchProtection(enabled=True, required_checks=("ci",))
        cache = BranchProtectionCache(client)
        cache.has_required_checks("main")

        # The remote fact changes, the cached one does not
        client.get_branch.return_value = BranchProtection(enabled=False)

        assert cache.has_required_checks("main") is True
        assert client.get_branch.call_count == 1

    def test_negative_fact_is_cached(self, client: MagicMock) -> None:
        """False is cached just like True."""
        client.get_branch.return_value = BranchProtection(enabled=False)
        cache = BranchProtectionCache(client)

        assert cache.has_required_checks("dev") is False
        assert cache.has_required_checks("dev") is False
        assert client.get_branch.call_count == 1

    def test_branches_cached_separately(self, client: MagicMock) -> None:
        """Each branch gets its own entry."""
        client.get_branch.side_effect = [
            BranchProtection(enabled=True, required_checks=("ci",)),
            BranchProtection(enabled=True),
        ]
        cache = BranchProtectionCache(client)

        assert cache.has_required_checks("main") is True
        assert cache.has_required_checks("dev") is False
        assert len(cache) == 2

    def test_enabled_without_checks_is_false(self, client: MagicMock) -> None:
        """Protection alone is not enough."""
        client.get_branch.return_value = BranchProtection(enabled=True, required_checks=())
        cache = BranchProtectionCache(client)

        assert cache.has_required_checks("main") is False

    def test_error_propagates_and_is_not_cached(self, client: MagicMock) -> None:
        """A failed lookup caches nothing."""
        client.get_branch.side_effect = BranchError("boom")
        cache = BranchProtectionCache(client)

        with pytest.raises(BranchError):
            cache.has_required_checks("main")

        assert len(cache) == 0
