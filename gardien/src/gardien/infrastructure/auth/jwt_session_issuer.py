"""
JWT session issuer.

Tokens are stateless and never stored server-side.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt

from gardien.domain.entities.session_claims import SessionClaims
from gardien.domain.exceptions import ExpiredTokenError, InvalidTokenError
from gardien.domain.services.i_session_issuer import ISessionIssuer
from gardien.domain.value_objects.platform import Platform

TOKEN_TYPE = "wallet_session"


class JwtSessionIssuer(ISessionIssuer):
    """Issues and validates HS256-signed wallet session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiration_days: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize issuer.

        Args:
            secret_key: Signing secret
            algorithm: JWS algorithm
            expiration_days: Token lifetime
            clock: UTC time source override (tests)
        """
        if not secret_key:
            raise ValueError("Session secret key cannot be empty")

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiration = timedelta(days=expiration_days)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(
        self,
        identity_id: str,
        platform: Platform,
        wallet_address: str,
    ) -> tuple[str, SessionClaims]:
        # JWT numeric dates have second precision
        now = self._clock().replace(microsecond=0)
        claims = SessionClaims(
            identity_id=identity_id,
            platform=platform,
            wallet_address=wallet_address,
            issued_at=now,
            expires_at=now + self.expiration,
        )

        payload = {
            "sub": identity_id,
            "platform": platform.value,
            "wallet": wallet_address,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
            "type": TOKEN_TYPE,
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return token, claims

    def validate(self, token: str) -> SessionClaims:
        if not token:
            raise InvalidTokenError()

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            raise InvalidTokenError()

        if payload.get("type") != TOKEN_TYPE:
            raise InvalidTokenError()

        try:
            claims = SessionClaims(
                identity_id=str(payload["sub"]),
                platform=Platform.parse(payload["platform"]),
                wallet_address=str(payload["wallet"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError()

        if claims.is_expired(self._clock()):
            raise ExpiredTokenError()

        return claims
