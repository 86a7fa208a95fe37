"""
Data Transfer Objects for the verification flow.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from gardien.domain.entities.session_claims import SessionClaims
from gardien.domain.exceptions import GardienException

T = TypeVar("T")


@dataclass(frozen=True)
class ChallengeDTO:
    """Challenge handed to the caller for out-of-band signing."""

    nonce: str
    message: str
    expires_at: int


@dataclass(frozen=True)
class SessionTokenDTO:
    """Session credential minted after a successful binding."""

    token: str
    claims: SessionClaims


@dataclass(frozen=True)
class UnlinkResultDTO:
    """Outcome of an unlink request."""

    unlinked: bool
    wallet_address: Optional[str] = None


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Typed result returned at the orchestrator boundary.

    Exactly one of value/error is meaningful, selected by ok.
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[GardienException] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: GardienException) -> "OperationResult[T]":
        return cls(ok=False, error=error)

    @property
    def error_code(self) -> Optional[str]:
        return self.error.code if self.error else None

    def unwrap(self) -> T:
        """Return value or raise the carried error."""
        if not self.ok:
            raise self.error
        return self.value
