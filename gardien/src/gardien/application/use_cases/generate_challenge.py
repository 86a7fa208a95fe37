"""
Generate Challenge use case.

Issues a single-use nonce and the message the wallet must sign.
"""

from typing import Callable, Iterable, Optional

from gardien.application.dto.verification_dto import ChallengeDTO
from gardien.application.validation import (
    require_identity,
    require_platform,
    require_wallet,
)
from gardien.domain.entities.verification_request import (
    VerificationRequest,
    now_millis,
)
from gardien.domain.exceptions import StoreUnavailableError, WalletAlreadyBoundError
from gardien.domain.repositories.i_binding_registry import IBindingRegistry
from gardien.domain.repositories.i_challenge_store import IChallengeStore
from gardien.domain.services.message_builder import MessageBuilder
from gardien.infrastructure.monitoring.logger import get_logger
from gardien.infrastructure.rate_limiting.rate_limiter import RateLimiter

logger = get_logger(__name__)


class GenerateChallenge:
    """
    Generate verification challenge.

    Business rules:
    - Input is validated before the rate limiter counts the attempt
    - At most RATE_LIMIT_ATTEMPTS challenges per identity per window
    - Wallet bound to someone else is rejected before a nonce exists
    - Identity bound to a different wallet must unlink first
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        challenge_store: IChallengeStore,
        binding_registry: IBindingRegistry,
        message_builder: MessageBuilder,
        ttl_seconds: int = 600,
        supported_platforms: Optional[Iterable[str]] = None,
        clock: Callable[[], int] = now_millis,
    ):
        """
        Initialize use case with dependencies.

        Args:
            rate_limiter: Per-identity challenge limiter
            challenge_store: Storage for pending requests
            binding_registry: Existing bindings (advisory lookups)
            message_builder: Canonical message renderer
            ttl_seconds: Challenge lifetime
            supported_platforms: Enabled platform tags (None = all)
            clock: Unix millis source
        """
        self.rate_limiter = rate_limiter
        self.challenge_store = challenge_store
        self.binding_registry = binding_registry
        self.message_builder = message_builder
        self.ttl_seconds = ttl_seconds
        self.supported_platforms = (
            list(supported_platforms) if supported_platforms is not None else None
        )
        self.clock = clock

    async def execute(
        self,
        identity_id: str,
        platform: str,
        wallet_address: str,
    ) -> ChallengeDTO:
        """
        Execute challenge generation.

        Args:
            identity_id: Platform user id
            platform: Platform tag
            wallet_address: Wallet claimed by the user

        Returns:
            ChallengeDTO with nonce, message and expiry

        Raises:
            ValidationError: If input is malformed
            RateLimitExceededError: If too many attempts in window
            WalletAlreadyBoundError: If wallet or identity is bound elsewhere
            StoreUnavailableError: If a store cannot be reached
        """
        identity_id = require_identity(identity_id)
        parsed_platform = require_platform(platform, self.supported_platforms)
        wallet = require_wallet(wallet_address)

        await self.rate_limiter.enforce(identity_id, parsed_platform)

        # Advisory; bind re-checks atomically
        owner = await self.binding_registry.get_by_wallet(wallet.checksum)
        if owner is not None and not owner.is_owned_by(identity_id, parsed_platform):
            raise WalletAlreadyBoundError()

        current = await self.binding_registry.get_by_identity(
            identity_id, parsed_platform
        )
        if current is not None and not current.matches_wallet(wallet.checksum):
            raise WalletAlreadyBoundError.identity_bound()

        request = await self._store_new_request(
            identity_id, parsed_platform, wallet.checksum
        )

        logger.info(
            f"Challenge issued for {parsed_platform.value} identity, "
            f"wallet {wallet.truncated()}"
        )

        return ChallengeDTO(
            nonce=request.nonce,
            message=self.message_builder.render(
                request.wallet_address, request.nonce, request.issued_at
            ),
            expires_at=request.expires_at,
        )

    async def _store_new_request(self, identity_id, platform, wallet_address):
        """Insert request, retrying once on nonce collision."""
        for _ in range(2):
            request = VerificationRequest.issue(
                identity_id=identity_id,
                platform=platform,
                wallet_address=wallet_address,
                ttl_seconds=self.ttl_seconds,
                now_ms=self.clock(),
            )
            if await self.challenge_store.create(request, self.ttl_seconds):
                return request

        raise StoreUnavailableError("challenge_store", reason="nonce collision")
