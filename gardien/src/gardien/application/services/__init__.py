"""Application services."""

from gardien.application.services.challenge_orchestrator import (
    ChallengeOrchestrator,
)

__all__ = ["ChallengeOrchestrator"]
