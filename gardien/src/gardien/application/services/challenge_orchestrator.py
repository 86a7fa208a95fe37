"""
Challenge orchestrator - facade over the verification use cases.

Every domain failure is returned as an OperationResult; unexpected
exceptions propagate.
"""

import time
from typing import Optional

from gardien.application.dto.verification_dto import (
    ChallengeDTO,
    OperationResult,
    SessionTokenDTO,
    UnlinkResultDTO,
)
from gardien.application.use_cases.generate_challenge import GenerateChallenge
from gardien.application.use_cases.get_binding import GetBinding
from gardien.application.use_cases.unlink_wallet import UnlinkWallet
from gardien.application.use_cases.validate_session import ValidateSession
from gardien.application.use_cases.verify_challenge import VerifyChallenge
from gardien.domain.entities.session_claims import SessionClaims
from gardien.domain.entities.wallet_binding import WalletBinding
from gardien.domain.exceptions import GardienException, StoreUnavailableError
from gardien.infrastructure.monitoring import metrics
from gardien.infrastructure.monitoring.logger import get_logger, log_timing

logger = get_logger(__name__)


class ChallengeOrchestrator:
    """Service facade used by the HTTP layer and chat-bot integrations."""

    def __init__(
        self,
        generate_challenge: GenerateChallenge,
        verify_challenge: VerifyChallenge,
        unlink_wallet: UnlinkWallet,
        get_binding: GetBinding,
        validate_session: ValidateSession,
    ):
        self._generate_challenge = generate_challenge
        self._verify_challenge = verify_challenge
        self._unlink_wallet = unlink_wallet
        self._get_binding = get_binding
        self._validate_session = validate_session

    @staticmethod
    def _failure(operation: str, error: GardienException) -> OperationResult:
        logger.warning(f"{operation} rejected: {error.code}")
        if isinstance(error, StoreUnavailableError):
            metrics.store_unavailable_total.labels(store=error.store).inc()
        return OperationResult.failure(error)

    async def generate_challenge(
        self,
        identity_id: str,
        platform: str,
        wallet_address: str,
    ) -> OperationResult[ChallengeDTO]:
        """Issue a challenge for identity to sign with wallet_address."""
        platform_label = str(platform).lower()
        try:
            challenge = await self._generate_challenge.execute(
                identity_id, platform, wallet_address
            )
        except GardienException as e:
            metrics.verification_challenges_total.labels(
                platform=platform_label, outcome=e.code
            ).inc()
            return self._failure("generate_challenge", e)

        metrics.verification_challenges_total.labels(
            platform=platform_label, outcome="issued"
        ).inc()
        return OperationResult.success(challenge)

    async def verify_challenge(
        self,
        nonce: str,
        signature: str,
    ) -> OperationResult[SessionTokenDTO]:
        """Consume nonce, verify signature, bind wallet and mint a session."""
        started = time.perf_counter()
        try:
            session = await self._verify_challenge.execute(nonce, signature)
        except GardienException as e:
            metrics.verification_attempts_total.labels(outcome=e.code).inc()
            return self._failure("verify_challenge", e)

        metrics.verification_attempts_total.labels(outcome="verified").inc()
        log_timing(
            logger,
            "verify_challenge",
            started,
            platform=session.claims.platform.value,
        )
        return OperationResult.success(session)

    async def unlink_wallet(
        self,
        identity_id: str,
        platform: str,
    ) -> OperationResult[UnlinkResultDTO]:
        """Remove identity's binding."""
        try:
            result = await self._unlink_wallet.execute(identity_id, platform)
        except GardienException as e:
            return self._failure("unlink_wallet", e)

        if result.unlinked:
            metrics.wallet_unlinks_total.labels(platform=str(platform).lower()).inc()
        return OperationResult.success(result)

    async def get_binding(
        self,
        identity_id: str,
        platform: str,
    ) -> OperationResult[Optional[WalletBinding]]:
        """Look up identity's binding (value is None when unbound)."""
        try:
            binding = await self._get_binding.execute(identity_id, platform)
        except GardienException as e:
            return self._failure("get_binding", e)
        return OperationResult.success(binding)

    async def validate_session(
        self,
        token: str,
        require_active_binding: bool = True,
    ) -> OperationResult[SessionClaims]:
        """Validate a session token, optionally re-checking its binding."""
        try:
            claims = await self._validate_session.execute(
                token, require_active_binding=require_active_binding
            )
        except GardienException as e:
            return self._failure("validate_session", e)
        return OperationResult.success(claims)
