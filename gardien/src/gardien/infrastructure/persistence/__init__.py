"""Persistence layer."""

from gardien.infrastructure.persistence.database import Database
from gardien.infrastructure.persistence.models import Base, WalletBindingModel

__all__ = ["Database", "Base", "WalletBindingModel"]
