"""
SQLAlchemy models for Gardien persistence.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""


class WalletBindingModel(Base):
    """
    Identity <-> wallet binding.

    The primary key is the forward index and wallet_key the reverse index,
    so one INSERT updates both under one transaction.
    """

    __tablename__ = "wallet_bindings"
    __table_args__ = (UniqueConstraint("wallet_key", name="uq_wallet_bindings_wallet"),)

    identity_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    platform: Mapped[str] = mapped_column(String(20), primary_key=True)
    wallet_address: Mapped[str] = mapped_column(String(42), nullable=False)
    wallet_key: Mapped[str] = mapped_column(String(42), nullable=False)
    bound_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
