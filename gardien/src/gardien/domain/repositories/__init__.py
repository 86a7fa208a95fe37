"""Repository interfaces."""

from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.domain.repositories.i_challenge_store import IChallengeStore

__all__ = ["IBindingRegistry", "IChallengeStore"]
