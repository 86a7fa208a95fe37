"""
Integration tests for the verification HTTP API.

Covers:
- POST /api/verification/challenge
- POST /api/verification/verify
- GET/DELETE /api/bindings/{platform}/{identity_id}
- GET /api/session/me
- Health and metrics endpoints
- Service key on the challenge, verify and binding routes

Usage:
    pytest gardien/tests/integration/api/test_verification_routes.py
"""

from unittest.mock import AsyncMock

import httpx
from helpers.builders import TEST_SERVICE_KEY, build_settings
from helpers.sign_message import new_wallet

from gardien.di.container import DIContainer, set_container
from gardien.domain.exceptions import StoreUnavailableError
from gardien.infrastructure.cache import InMemoryCacheClient
from gardien.main import create_app
from shared.tests import LaborantTest


class TestVerificationRoutes(LaborantTest):
    """Integration tests for verification API routes."""

    component_name = "gardien"
    test_category = "integration"

    async def async_setup_test(self):
        """Build app over in-process stores."""
        self.reporter.info("Setting up API client...", context="Setup")

        settings = build_settings()
        self.cache = InMemoryCacheClient()
        self.container = DIContainer(settings=settings, cache_client=self.cache)
        set_container(self.container)
        await self.container.initialize()

        app = create_app(settings)
        transport = httpx.ASGITransport(app=app)
        self.client = httpx.AsyncClient(
            transport=transport,
            base_url="http://test",
            headers={"Authorization": f"Bearer {TEST_SERVICE_KEY}"},
        )
        self.anonymous = httpx.AsyncClient(transport=transport, base_url="http://test")
        self.wallet = new_wallet()

    async def async_teardown_test(self):
        """Close client and drop container."""
        await self.client.aclose()
        await self.anonymous.aclose()
        await self.container.shutdown()
        set_container(None)

    # ================================================================
    # Helper Methods
    # ================================================================

    async def _request_challenge(self, identity_id="user-1", platform="discord", wallet=None):
        wallet = wallet or self.wallet
        return await self.client.post(
            "/api/verification/challenge",
            json={
                "identity_id": identity_id,
                "platform": platform,
                "wallet_address": wallet.address,
            },
        )

    async def _link(self, identity_id="user-1", platform="discord", wallet=None):
        wallet = wallet or self.wallet
        challenge = (await self._request_challenge(identity_id, platform, wallet)).json()
        response = await self.client.post(
            "/api/verification/verify",
            json={
                "nonce": challenge["nonce"],
                "signature": wallet.sign(challenge["message"]),
            },
        )
        assert response.status_code == 200, response.text
        return response.json()

    # ================================================================
    # Challenge
    # ================================================================

    async def test_request_challenge(self):
        """Test challenge endpoint returns nonce, message and expiry."""
        self.reporter.info("Testing POST /verification/challenge", context="Test")

        response = await self._request_challenge()

        assert response.status_code == 201
        data = response.json()
        assert len(data["nonce"]) == 64
        assert data["message"].startswith(f"Verify wallet {self.wallet.address}")
        assert f"Nonce: {data['nonce']}" in data["message"]
        assert isinstance(data["expires_at"], int)
        self.reporter.info("Challenge issued", context="Test")

    async def test_invalid_wallet_rejected(self):
        """Test malformed wallet returns 422 VALIDATION_ERROR."""
        response = await self.client.post(
            "/api/verification/challenge",
            json={
                "identity_id": "user-1",
                "platform": "discord",
                "wallet_address": "0x1234",
            },
        )

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_rate_limited(self):
        """Test sixth challenge returns 429 with Retry-After."""
        self.reporter.info("Testing rate limit response", context="Test")

        for _ in range(5):
            assert (await self._request_challenge()).status_code == 201

        response = await self._request_challenge()

        assert response.status_code == 429
        assert response.json()["error"] == "RATE_LIMIT_EXCEEDED"
        assert int(response.headers["Retry-After"]) > 0

    async def test_store_outage_returns_503(self):
        """Test store timeout returns 503 STORE_UNAVAILABLE."""
        self.reporter.info("Testing store outage response", context="Test")

        self.cache.increment = AsyncMock(
            side_effect=StoreUnavailableError("redis", reason="timeout")
        )

        response = await self._request_challenge()

        assert response.status_code == 503
        assert response.json()["error"] == "STORE_UNAVAILABLE"

    # ================================================================
    # Verify
    # ================================================================

    async def test_verify_issues_session(self):
        """Test verify returns bearer token with claims."""
        self.reporter.info("Testing POST /verification/verify", context="Test")

        session = await self._link()

        assert session["access_token"]
        assert session["token_type"] == "bearer"
        assert session["identity_id"] == "user-1"
        assert session["platform"] == "discord"
        assert session["wallet_address"] == self.wallet.address

    async def test_replayed_nonce_rejected(self):
        """Test second verify with the same nonce returns 400."""
        self.reporter.info("Testing nonce replay response", context="Test")

        challenge = (await self._request_challenge()).json()
        payload = {
            "nonce": challenge["nonce"],
            "signature": self.wallet.sign(challenge["message"]),
        }

        first = await self.client.post("/api/verification/verify", json=payload)
        second = await self.client.post("/api/verification/verify", json=payload)

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["error"] == "NONCE_EXPIRED_OR_INVALID"

    async def test_wrong_signer_rejected(self):
        """Test signature from another wallet returns 401."""
        challenge = (await self._request_challenge()).json()

        response = await self.client.post(
            "/api/verification/verify",
            json={
                "nonce": challenge["nonce"],
                "signature": new_wallet().sign(challenge["message"]),
            },
        )

        assert response.status_code == 401
        assert response.json()["error"] == "SIGNATURE_MISMATCH"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_wallet_bound_elsewhere_returns_409(self):
        """Test challenge for a wallet linked to someone else returns 409."""
        await self._link("user-1")

        response = await self._request_challenge("user-2")

        assert response.status_code == 409
        assert response.json()["error"] == "WALLET_ALREADY_BOUND"

    # ================================================================
    # Bindings & sessions
    # ================================================================

    async def test_binding_lifecycle(self):
        """Test get, session check, unlink and revocation via HTTP."""
        self.reporter.info("Testing binding lifecycle", context="Test")

        session = await self._link()
        auth = {"Authorization": f"Bearer {session['access_token']}"}

        binding = await self.client.get("/api/bindings/discord/user-1")
        assert binding.status_code == 200
        assert binding.json()["wallet_address"] == self.wallet.address

        me = await self.client.get("/api/session/me", headers=auth)
        assert me.status_code == 200
        assert me.json()["identity_id"] == "user-1"

        unlink = await self.client.delete("/api/bindings/discord/user-1")
        assert unlink.status_code == 200
        assert unlink.json() == {
            "unlinked": True,
            "wallet_address": self.wallet.address,
        }

        revoked = await self.client.get("/api/session/me", headers=auth)
        assert revoked.status_code == 401
        assert revoked.json()["error"] == "INVALID_TOKEN"

        missing = await self.client.get("/api/bindings/discord/user-1")
        assert missing.status_code == 404

    async def test_unlink_unbound_identity(self):
        """Test unlinking with no binding reports unlinked=false."""
        response = await self.client.delete("/api/bindings/telegram/user-1")

        assert response.status_code == 200
        assert response.json()["unlinked"] is False

    async def test_session_requires_bearer(self):
        """Test missing or bad bearer token returns 401."""
        missing = await self.anonymous.get("/api/session/me")
        garbage = await self.anonymous.get(
            "/api/session/me", headers={"Authorization": "Bearer nope"}
        )

        assert missing.status_code == 401
        assert garbage.status_code == 401
        assert garbage.json()["error"] == "INVALID_TOKEN"

    # ================================================================
    # Service credential
    # ================================================================

    async def test_challenge_requires_service_key(self):
        """Test challenge without or with a wrong service key returns 401."""
        self.reporter.info("Testing service key on challenge", context="Test")

        body = {
            "identity_id": "user-1",
            "platform": "discord",
            "wallet_address": self.wallet.address,
        }
        missing = await self.anonymous.post("/api/verification/challenge", json=body)
        wrong = await self.anonymous.post(
            "/api/verification/challenge",
            json=body,
            headers={"Authorization": "Bearer not-the-service-key"},
        )

        assert missing.status_code == 401
        assert missing.json()["error"] == "AUTHENTICATION_ERROR"
        assert wrong.status_code == 401
        assert wrong.json()["error"] == "AUTHENTICATION_ERROR"

    async def test_verify_requires_service_key(self):
        """Test verify without the service key is rejected before the nonce is used."""
        challenge = (await self._request_challenge()).json()
        payload = {
            "nonce": challenge["nonce"],
            "signature": self.wallet.sign(challenge["message"]),
        }

        rejected = await self.anonymous.post("/api/verification/verify", json=payload)
        accepted = await self.client.post("/api/verification/verify", json=payload)

        assert rejected.status_code == 401
        assert accepted.status_code == 200

    async def test_binding_routes_require_service_key(self):
        """Test reading or unlinking a binding needs the service key."""
        self.reporter.info("Testing service key on bindings", context="Test")

        await self._link()

        read = await self.anonymous.get("/api/bindings/discord/user-1")
        unlink = await self.anonymous.delete("/api/bindings/discord/user-1")
        wrong = await self.anonymous.delete(
            "/api/bindings/discord/user-1",
            headers={"Authorization": f"Bearer {TEST_SERVICE_KEY}x"},
        )

        assert read.status_code == 401
        assert unlink.status_code == 401
        assert wrong.status_code == 401

        still_bound = await self.client.get("/api/bindings/discord/user-1")
        assert still_bound.status_code == 200
        assert still_bound.json()["wallet_address"] == self.wallet.address

    async def test_session_token_is_not_a_service_key(self):
        """Test a user's session token cannot drive the binding routes."""
        session = await self._link()

        response = await self.anonymous.delete(
            "/api/bindings/discord/user-1",
            headers={"Authorization": f"Bearer {session['access_token']}"},
        )

        assert response.status_code == 401
        binding = await self.client.get("/api/bindings/discord/user-1")
        assert binding.status_code == 200

    # ================================================================
    # Health & metrics
    # ================================================================

    async def test_health_endpoints(self):
        """Test health probes report the in-process store."""
        self.reporter.info("Testing health endpoints", context="Test")

        live = await self.client.get("/api/health/live")
        ready = await self.client.get("/api/health/ready")
        summary = await self.client.get("/health")

        assert live.json() == {"status": "healthy"}
        assert ready.status_code == 200
        assert ready.json()["components"] == {"cache": "healthy"}
        assert summary.json()["backends"]["bindings"] == "cache"

    async def test_metrics_endpoint(self):
        """Test Prometheus exposition includes verification counters."""
        await self._request_challenge()

        response = await self.client.get("/metrics")

        assert response.status_code == 200
        assert "gardien_verification_challenges_total" in response.text

    async def test_root(self):
        """Test root endpoint."""
        response = await self.client.get("/")

        assert response.json()["service"] == "Gardien"


if __name__ == "__main__":
    TestVerificationRoutes.run_as_main()
