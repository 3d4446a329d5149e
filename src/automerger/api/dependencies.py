"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated, Protocol

from fastapi import Depends

from automerger.config import Settings

if TYPE_CHECKING:
    from automerger.events import Event
    from automerger.pipeline import RunSummary


class Runner(Protocol):
    """Interface for executing one run."""

    def __call__(self, settings: Settings, event: Event) -> RunSummary:
        """Dispatch `event` with a fresh set of components."""
        ...


# Global Settings instance (initialized by create_app)
_settings: Settings | None = None


def init_settings(settings: Settings) -> Settings:
    """Initialize the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = settings
    return _settings


def close_settings() -> None:
    """Clear the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = None


def get_settings() -> Generator[Settings, None, None]:
    """Dependency that provides the Settings instance."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_settings() first.")
    yield _settings


# Type alias for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Global Runner instance
_runner: Runner | None = None


def init_runner(runner: Runner) -> None:
    """Initialize the global Runner."""
    global _runner  # noqa: PLW0603
    _runner = runner


def close_runner() -> None:
    """Clear the global Runner."""
    global _runner  # noqa: PLW0603
    _runner = None


def get_runner() -> Generator[Runner, None, None]:
    """Dependency that provides the Runner."""
    if _runner is None:
        raise RuntimeError("Runner not initialized. Call init_runner() first.")
    yield _runner


# Type alias for dependency injection
RunnerDep = Annotated[Runner, Depends(get_runner)]
