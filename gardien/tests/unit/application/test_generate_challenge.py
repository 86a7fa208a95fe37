"""
Unit tests for GenerateChallenge use case.

Usage:
    pytest gardien/tests/unit/application/test_generate_challenge.py
"""

from unittest.mock import AsyncMock

from helpers.builders import FakeClock
from helpers.sign_message import new_wallet

from gardien.application.use_cases import GenerateChallenge
from gardien.domain.entities.verification_request import VerificationRequest
from gardien.domain.exceptions import (
    RateLimitExceededError,
    StoreUnavailableError,
    ValidationError,
    WalletAlreadyBoundError,
)
from gardien.domain.services.message_builder import MessageBuilder
from gardien.domain.value_objects.platform import Platform
from gardien.infrastructure.cache import (
    CacheBindingRegistry,
    InMemoryCacheClient,
    RedisChallengeStore,
)
from gardien.infrastructure.rate_limiting import RateLimiter
from shared.tests import LaborantTest


class TestGenerateChallenge(LaborantTest):
    """Unit tests for challenge issuance."""

    component_name = "gardien"
    test_category = "unit"

    async def async_setup_test(self):
        self.clock = FakeClock()
        self.cache = InMemoryCacheClient(clock=self.clock.seconds)
        self.store = RedisChallengeStore(self.cache)
        self.registry = CacheBindingRegistry(self.cache)
        self.limiter = RateLimiter(self.cache, max_attempts=5, window_seconds=3600)
        self.use_case = self._create_use_case()
        self.wallet = new_wallet()

    def _create_use_case(self, **overrides) -> GenerateChallenge:
        values = {
            "rate_limiter": self.limiter,
            "challenge_store": self.store,
            "binding_registry": self.registry,
            "message_builder": MessageBuilder("CDP Platform"),
            "ttl_seconds": 600,
            "clock": self.clock.millis,
        }
        values.update(overrides)
        return GenerateChallenge(**values)

    # ================================================================
    # Success
    # ================================================================

    async def test_issues_challenge(self):
        """Test challenge carries nonce, message and expiry."""
        self.reporter.info("Testing challenge issuance", context="Test")

        challenge = await self.use_case.execute(
            "user-1", "discord", self.wallet.address.lower()
        )

        assert len(challenge.nonce) == 64
        assert challenge.expires_at == self.clock.now_ms + 600_000
        assert challenge.message == MessageBuilder("CDP Platform").render(
            self.wallet.address, challenge.nonce, self.clock.now_ms
        )
        self.reporter.info(f"Nonce {challenge.nonce[:8]}...", context="Test")

    async def test_request_stored_under_nonce(self):
        """Test stored request matches the issued challenge."""
        challenge = await self.use_case.execute("user-1", "Telegram", self.wallet.address)

        raw = await self.cache.get(f"challenge:{challenge.nonce}")
        request = VerificationRequest.from_json(raw)

        assert request.identity_id == "user-1"
        assert request.platform is Platform.TELEGRAM
        assert request.wallet_address == self.wallet.address
        assert request.expires_at == challenge.expires_at

    async def test_consecutive_challenges_differ(self):
        """Test each call yields a fresh nonce."""
        first = await self.use_case.execute("user-1", "discord", self.wallet.address)
        second = await self.use_case.execute("user-1", "discord", self.wallet.address)

        assert first.nonce != second.nonce

    async def test_identity_already_holding_same_wallet(self):
        """Test re-verifying the bound wallet is allowed."""
        await self.registry.bind("user-1", Platform.DISCORD, self.wallet.address)

        challenge = await self.use_case.execute(
            "user-1", "discord", self.wallet.address
        )

        assert challenge.nonce

    # ================================================================
    # Validation
    # ================================================================

    async def test_invalid_input_rejected_before_rate_limit(self):
        """Test malformed input never counts as an attempt."""
        self.reporter.info("Testing validation ordering", context="Test")

        bad_inputs = [
            ("", "discord", self.wallet.address),
            ("user-1", "slack", self.wallet.address),
            ("user-1", "discord", "0x1234"),
            ("x" * 129, "discord", self.wallet.address),
        ]
        for _ in range(3):
            for identity_id, platform, wallet in bad_inputs:
                try:
                    await self.use_case.execute(identity_id, platform, wallet)
                    assert False, "Should have raised ValidationError"
                except ValidationError as e:
                    assert e.code == "VALIDATION_ERROR"

        decision = await self.limiter.check("user-1", Platform.DISCORD)
        assert decision.count == 1

    async def test_disabled_platform_rejected(self):
        """Test platforms outside the enabled list are rejected."""
        use_case = self._create_use_case(supported_platforms=["discord"])

        try:
            await use_case.execute("user-1", "telegram", self.wallet.address)
            assert False, "Should have raised ValidationError"
        except ValidationError as e:
            assert e.field == "platform"

    # ================================================================
    # Rate limiting
    # ================================================================

    async def test_sixth_request_rate_limited(self):
        """Test sixth challenge in the window is rejected."""
        self.reporter.info("Testing rate limit", context="Test")

        for _ in range(5):
            await self.use_case.execute("user-1", "discord", self.wallet.address)

        try:
            await self.use_case.execute("user-1", "discord", self.wallet.address)
            assert False, "Should have raised RateLimitExceededError"
        except RateLimitExceededError as e:
            assert e.retry_after == 3600

        self.clock.advance(3600)
        challenge = await self.use_case.execute("user-1", "discord", self.wallet.address)
        assert challenge.nonce

    # ================================================================
    # Binding checks
    # ================================================================

    async def test_wallet_bound_to_other_identity(self):
        """Test wallet owned by someone else is rejected early."""
        self.reporter.info("Testing wallet owned elsewhere", context="Test")

        await self.registry.bind("user-2", Platform.DISCORD, self.wallet.address)

        try:
            await self.use_case.execute("user-1", "discord", self.wallet.address)
            assert False, "Should have raised WalletAlreadyBoundError"
        except WalletAlreadyBoundError as e:
            assert "another account" in e.message

    async def test_identity_bound_to_other_wallet(self):
        """Test identity must unlink before verifying a new wallet."""
        self.reporter.info("Testing identity already bound", context="Test")

        await self.registry.bind("user-1", Platform.DISCORD, new_wallet().address)

        try:
            await self.use_case.execute("user-1", "discord", self.wallet.address)
            assert False, "Should have raised WalletAlreadyBoundError"
        except WalletAlreadyBoundError as e:
            assert e.message == WalletAlreadyBoundError.identity_bound().message
            assert e.code == "WALLET_ALREADY_BOUND"

    # ================================================================
    # Store failures
    # ================================================================

    async def test_nonce_collision_retried_once(self):
        """Test create failure is retried, then reported as unavailable."""
        self.reporter.info("Testing nonce collision handling", context="Test")

        store = AsyncMock()
        store.create = AsyncMock(side_effect=[False, True])
        challenge = await self._create_use_case(challenge_store=store).execute(
            "user-1", "discord", self.wallet.address
        )
        assert challenge.nonce
        assert store.create.await_count == 2

        store.create = AsyncMock(return_value=False)
        try:
            await self._create_use_case(challenge_store=store).execute(
                "user-2", "discord", self.wallet.address
            )
            assert False, "Should have raised StoreUnavailableError"
        except StoreUnavailableError as e:
            assert e.code == "STORE_UNAVAILABLE"

    async def test_store_outage_propagates(self):
        """Test challenge store outage surfaces as StoreUnavailableError."""
        store = AsyncMock()
        store.create = AsyncMock(side_effect=StoreUnavailableError("redis"))

        try:
            await self._create_use_case(challenge_store=store).execute(
                "user-1", "discord", self.wallet.address
            )
            assert False, "Should have raised StoreUnavailableError"
        except StoreUnavailableError as e:
            assert e.store == "redis"


if __name__ == "__main__":
    TestGenerateChallenge.run_as_main()
