"""
Verify Challenge use case.

Consumes a nonce, checks the signature and binds the wallet.
"""

from typing import Callable

from gardien.application.dto.verification_dto import SessionTokenDTO
from gardien.domain.entities.verification_request import now_millis
from gardien.domain.exceptions import (
    NonceExpiredOrInvalidError,
    SignatureMismatchError,
)
from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.domain.repositories.i_challenge_store import IChallengeStore
from gardien.domain.services.i_session_issuer import ISessionIssuer
from gardien.domain.services.i_signature_verifier import ISignatureVerifier
from gardien.domain.services.message_builder import MessageBuilder
from gardien.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class VerifyChallenge:
    """
    Verify signed challenge and bind wallet.

    Business rules:
    - A nonce is consumed before any other check, so it is single-use
      whatever the outcome
    - The message is re-rendered from the stored request, never from
      client input
    - Binding re-checks uniqueness atomically
    """

    def __init__(
        self,
        challenge_store: IChallengeStore,
        signature_verifier: ISignatureVerifier,
        binding_registry: IBindingRegistry,
        session_issuer: ISessionIssuer,
        message_builder: MessageBuilder,
        clock: Callable[[], int] = now_millis,
    ):
        self.challenge_store = challenge_store
        self.signature_verifier = signature_verifier
        self.binding_registry = binding_registry
        self.session_issuer = session_issuer
        self.message_builder = message_builder
        self.clock = clock

    async def execute(self, nonce: str, signature: str) -> SessionTokenDTO:
        """
        Execute verification.

        Args:
            nonce: Challenge nonce
            signature: Hex signature over the challenge message

        Returns:
            SessionTokenDTO for the bound identity

        Raises:
            NonceExpiredOrInvalidError: Unknown, used or expired nonce
            SignatureMismatchError: Signature not from the claimed wallet
            WalletAlreadyBoundError: Lost a binding race
            StoreUnavailableError: If a store cannot be reached
        """
        if not isinstance(nonce, str) or not nonce:
            raise NonceExpiredOrInvalidError()

        request = await self.challenge_store.consume(nonce)
        if request is None:
            raise NonceExpiredOrInvalidError()

        if request.is_expired(self.clock()):
            logger.warning("Rejected expired challenge")
            raise NonceExpiredOrInvalidError()

        message = self.message_builder.render(
            request.wallet_address, request.nonce, request.issued_at
        )
        recovered = self.signature_verifier.recover(message, signature)
        if recovered.lower() != request.wallet_address.lower():
            logger.warning("Rejected signature from non-matching wallet")
            raise SignatureMismatchError()

        binding = await self.binding_registry.bind(
            request.identity_id,
            request.platform,
            request.wallet_address,
        )

        token, claims = self.session_issuer.issue(
            binding.identity_id,
            binding.platform,
            binding.wallet_address,
        )

        logger.info(f"Wallet bound for {binding.platform.value} identity")

        return SessionTokenDTO(token=token, claims=claims)
