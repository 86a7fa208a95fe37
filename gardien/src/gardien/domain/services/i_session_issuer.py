"""
Session issuer interface.
"""

from abc import ABC, abstractmethod

from gardien.domain.entities.session_claims import SessionClaims
from gardien.domain.value_objects.platform import Platform


class ISessionIssuer(ABC):
    """Mints and validates stateless session tokens."""

    @abstractmethod
    def issue(
        self,
        identity_id: str,
        platform: Platform,
        wallet_address: str,
    ) -> tuple[str, SessionClaims]:
        """
        Issue session token.

        Returns:
            Tuple of (encoded token, claims it carries)
        """

    @abstractmethod
    def validate(self, token: str) -> SessionClaims:
        """
        Validate token and return its claims.

        Raises:
            ExpiredTokenError: If token has expired
            InvalidTokenError: If token is malformed or tampered
        """
