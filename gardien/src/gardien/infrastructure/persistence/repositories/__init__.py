"""SQL repository implementations."""

from gardien.infrastructure.persistence.repositories.binding_registry import (
    SqlBindingRegistry,
)

__all__ = ["SqlBindingRegistry"]
