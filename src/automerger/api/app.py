"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from automerger import __version__
from automerger.api.dependencies import (
    close_runner,
    close_settings,
    init_runner,
    init_settings,
)
from automerger.api.models import APIResponse
from automerger.api.routes import health, webhooks
from automerger.events import EventError
from automerger.github import GitHubError
from automerger.logging import sanitize_for_log
from automerger.runner import execute

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from automerger.api.dependencies import Runner
    from automerger.config import Settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings, runner: Runner = execute) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration shared by every run.
        runner: Callable executing one run per delivery.
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        yield
        close_runner()
        close_settings()

    app = FastAPI(
        title="automerger",
        description="Merges pull requests of one repository in reaction to GitHub webhooks",
        version=__version__,
        lifespan=lifespan,
    )

    init_settings(settings)
    init_runner(runner)

    @app.exception_handler(EventError)
    async def event_error_handler(_request: Request, exc: EventError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(GitHubError)
    async def github_error_handler(_request: Request, exc: GitHubError) -> JSONResponse:
        logger.error("Run failed: %s", sanitize_for_log(str(exc)))
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=APIResponse[None](data=None, error=sanitize_for_log(str(exc))).model_dump(),
        )

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(webhooks.router, prefix="/api/v1")

    return app
