"""
Validate Session use case.
"""

from gardien.domain.entities.session_claims import SessionClaims
from gardien.domain.exceptions import InvalidTokenError
from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.domain.services.i_session_issuer import ISessionIssuer


class ValidateSession:
    """
    Validate session token.

    Business rules:
    - Signature and expiry are always checked
    - With require_active_binding, the token's binding must still exist
      and point at the same wallet
    """

    def __init__(
        self,
        session_issuer: ISessionIssuer,
        binding_registry: IBindingRegistry,
    ):
        self.session_issuer = session_issuer
        self.binding_registry = binding_registry

    async def execute(
        self,
        token: str,
        require_active_binding: bool = True,
    ) -> SessionClaims:
        """
        Execute validation.

        Raises:
            ExpiredTokenError: If token has expired
            InvalidTokenError: If token is invalid or binding is gone
            StoreUnavailableError: If the registry cannot be reached
        """
        claims = self.session_issuer.validate(token)

        if require_active_binding:
            binding = await self.binding_registry.get_by_identity(
                claims.identity_id, claims.platform
            )
            if binding is None or not binding.matches_wallet(claims.wallet_address):
                raise InvalidTokenError()

        return claims
