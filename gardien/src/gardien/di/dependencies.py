"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
"""

from gardien.application.services.challenge_orchestrator import (
    ChallengeOrchestrator,
)
from gardien.config.settings import Settings
from gardien.di.container import get_container


def get_orchestrator() -> ChallengeOrchestrator:
    """Get ChallengeOrchestrator dependency."""
    return get_container().orchestrator


def get_app_settings() -> Settings:
    """Get settings the container was built with."""
    return get_container().settings
