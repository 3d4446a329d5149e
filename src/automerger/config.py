"""Configuration loading for automerger.

Inputs follow the GitHub Actions convention (`INPUT_<NAME>` environment
variables) so the same settings work for a workflow step and for the webhook
server.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from automerger.github.models import MergeMethod
from automerger.policy.models import Policy

DEFAULT_API_URL = "https://api.github.com"

_LIST_SEPARATORS = re.compile(r"[\r\n,;]+")
_REPOSITORY_PATTERN = re.compile(r"^[\w\-\.]+/[\w\-\.]+$")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


def parse_list(text: str | None) -> tuple[str, ...]:
    """Split a comma, semicolon or newline separated list.

    Entries are trimmed and lower-cased; empty entries and duplicates are dropped.
    """
    if not text:
        return ()
    items = (item.strip().lower() for item in _LIST_SEPARATORS.split(text))
    return tuple(dict.fromkeys(item for item in items if item))


def parse_bool(text: str | None) -> bool:
    """Only the string 'true' (any case) is true."""
    return (text or "").strip().lower() == "true"


def parse_merge_method(text: str | None) -> MergeMethod | None:
    """Parse the preferred merge method, None when unset.

    Raises:
        ConfigError: If the value is not a known merge method.
    """
    value = (text or "").strip().lower()
    if not value:
        return None
    try:
        return MergeMethod(value)
    except ValueError as e:
        choices = ", ".join(m.value for m in MergeMethod)
        raise ConfigError(f"Unknown merge method '{text}', expected one of: {choices}") from e


def build_policy(
    required_labels: str | None = None,
    authors: str | None = None,
    merge_method: str | None = None,
    dry_run: str | bool | None = None,
) -> Policy:
    """Build a Policy from raw input strings."""
    return Policy(
        required_labels=parse_list(required_labels),
        authors=parse_list(authors),
        merge_method=parse_merge_method(merge_method),
        dry_run=dry_run if isinstance(dry_run, bool) else parse_bool(dry_run),
    )


@dataclass(frozen=True)
class Settings:
    """Everything one run needs, read once at startup."""

    token: str
    repository: str
    policy: Policy = field(default_factory=Policy)
    api_url: str = DEFAULT_API_URL
    run_id: int | None = None
    webhook_secret: str | None = None

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigError("GitHub token is required")
        if not _REPOSITORY_PATTERN.match(self.repository):
            raise ConfigError(f"Repository must be in 'owner/repo' format, got '{self.repository}'")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Create settings from environment variables.

        Args:
            environ: Environment mapping. Defaults to os.environ.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If required values are missing or invalid.
        """
        env = os.environ if environ is None else environ

        token = env.get("INPUT_GITHUBTOKEN") or env.get("GITHUB_TOKEN", "")
        run_id = env.get("GITHUB_RUN_ID", "").strip()
        if run_id and not run_id.isdigit():
            raise ConfigError(f"GITHUB_RUN_ID must be numeric, got '{run_id}'")

        return cls(
            token=token,
            repository=env.get("GITHUB_REPOSITORY", ""),
            policy=build_policy(
                required_labels=env.get("INPUT_REQUIREDLABELS"),
                authors=env.get("INPUT_AUTHORS"),
                merge_method=env.get("INPUT_PREFERREDMERGEOPTION"),
                dry_run=env.get("INPUT_DRYRUN"),
            ),
            api_url=env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            run_id=int(run_id) if run_id else None,
            webhook_secret=env.get("AUTOMERGER_WEBHOOK_SECRET") or None,
        )
