"""API routes."""

from gardien.presentation.api.routes import bindings, health, session, verification

__all__ = ["bindings", "health", "session", "verification"]
