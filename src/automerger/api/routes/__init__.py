"""API route modules."""

from automerger.api.routes import health, webhooks

__all__ = ["health", "webhooks"]
