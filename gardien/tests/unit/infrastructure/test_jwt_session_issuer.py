"""
Unit tests for JwtSessionIssuer.

Usage:
    pytest gardien/tests/unit/infrastructure/test_jwt_session_issuer.py
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from gardien.domain.exceptions import ExpiredTokenError, InvalidTokenError
from gardien.domain.value_objects.platform import Platform
from gardien.infrastructure.auth import JwtSessionIssuer
from shared.tests import LaborantTest

SECRET = "unit-test-secret"
WALLET = "0x52908400098527886E0F7030069857D2E4169EE7"


class TestJwtSessionIssuer(LaborantTest):
    """Unit tests for session token issue/validate."""

    component_name = "gardien"
    test_category = "unit"

    def setup_test(self):
        self.now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.issuer = JwtSessionIssuer(
            SECRET, expiration_days=30, clock=lambda: self.now
        )

    # ================================================================
    # Issue
    # ================================================================

    def test_issue_and_validate(self):
        """Test issued token validates to the same claims."""
        self.reporter.info("Testing issue/validate", context="Test")

        token, claims = self.issuer.issue("user-1", Platform.DISCORD, WALLET)
        validated = self.issuer.validate(token)

        assert validated == claims
        assert claims.issued_at == self.now
        assert claims.expires_at == self.now + timedelta(days=30)
        self.reporter.info(f"Token expires {claims.expires_at}", context="Test")

    def test_payload_fields(self):
        """Test token payload carries identity, platform and wallet."""
        token, _ = self.issuer.issue("user-1", Platform.TELEGRAM, WALLET)

        payload = jwt.get_unverified_claims(token)

        assert payload["sub"] == "user-1"
        assert payload["platform"] == "telegram"
        assert payload["wallet"] == WALLET
        assert payload["type"] == "wallet_session"

    # ================================================================
    # Validate
    # ================================================================

    def test_expired_token(self):
        """Test token past expiry raises ExpiredTokenError."""
        self.reporter.info("Testing expired token", context="Test")

        token, _ = self.issuer.issue("user-1", Platform.DISCORD, WALLET)
        self.now += timedelta(days=30)

        try:
            self.issuer.validate(token)
            assert False, "Should have raised ExpiredTokenError"
        except ExpiredTokenError as e:
            assert e.code == "TOKEN_EXPIRED"

    def test_tampered_token(self):
        """Test token with altered payload is rejected."""
        self.reporter.info("Testing tampered token", context="Test")

        token, _ = self.issuer.issue("user-1", Platform.DISCORD, WALLET)
        header, payload, signature = token.split(".")
        forged = jwt.encode(
            {**jwt.get_unverified_claims(token), "sub": "user-2"},
            "other-secret",
        )
        tampered = ".".join([header, forged.split(".")[1], signature])

        for candidate in [tampered, forged, "not.a.token", ""]:
            try:
                self.issuer.validate(candidate)
                assert False, f"Should have rejected {candidate!r}"
            except InvalidTokenError as e:
                assert e.code == "INVALID_TOKEN"

    def test_wrong_token_type(self):
        """Test tokens of another type are rejected."""
        payload = {
            "sub": "user-1",
            "platform": "discord",
            "wallet": WALLET,
            "iat": int(self.now.timestamp()),
            "exp": int((self.now + timedelta(days=1)).timestamp()),
            "type": "access",
        }
        token = jwt.encode(payload, SECRET, algorithm="HS256")

        try:
            self.issuer.validate(token)
            assert False, "Should have raised InvalidTokenError"
        except InvalidTokenError:
            pass

    def test_missing_claims(self):
        """Test token without wallet claim is rejected."""
        token = jwt.encode(
            {"sub": "user-1", "type": "wallet_session"}, SECRET, algorithm="HS256"
        )

        try:
            self.issuer.validate(token)
            assert False, "Should have raised InvalidTokenError"
        except InvalidTokenError:
            pass

    def test_empty_secret_rejected(self):
        """Test issuer refuses an empty secret."""
        try:
            JwtSessionIssuer("")
            assert False, "Should have raised ValueError"
        except ValueError as e:
            assert "cannot be empty" in str(e)


if __name__ == "__main__":
    TestJwtSessionIssuer.run_as_main()
